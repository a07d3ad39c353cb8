import unittest

from grindlog.models.cardio import CardioProtocol
from tests.support import ApiTestCase


class TestCardioProtocols(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()
        self.four_by_four, self.zone2 = self.seed(
            CardioProtocol(name="4x4 Norwegian", modality="bike", hr_zone_target="Zone 4-5"),
            CardioProtocol(name="Zone 2 Base", modality="rower", hr_zone_target="Zone 2"),
        )

    def test_list_and_get(self):
        names = [p["name"] for p in self.client.get("/api/cardio/protocols", headers=self.headers).json()]
        self.assertEqual(names, ["4x4 Norwegian", "Zone 2 Base"])
        self.assertError(self.client.get("/api/cardio/protocols/999", headers=self.headers), 404, "Protocol not found")

    def test_create_and_update(self):
        response = self.client.post(
            "/api/cardio/protocols",
            headers=self.headers,
            json={"name": "Tabata", "totalMinutes": 4, "hrZoneTarget": "Zone 5"},
        )
        self.assertEqual(response.status_code, 201, response.text)
        protocol = response.json()

        response = self.client.put(f"/api/cardio/protocols/{protocol['id']}", headers=self.headers, json={"isActive": False})
        self.assertFalse(response.json()["is_active"])
        self.assertEqual(response.json()["total_minutes"], 4)

    def test_log_and_weekly_summary(self):
        for heart_rate, calories in ((150, 300), (130, 200)):
            response = self.client.post(
                "/api/cardio/log",
                headers=self.headers,
                json={
                    "protocolId": self.four_by_four.id,
                    "durationMinutes": 30,
                    "avgHeartRate": heart_rate,
                    "caloriesBurned": calories,
                },
            )
            self.assertEqual(response.status_code, 201, response.text)
            self.assertEqual(response.json()["protocol_name"], "4x4 Norwegian")

        logs = self.client.get("/api/cardio/logs", headers=self.headers).json()
        self.assertEqual(len(logs), 2)
        self.assertEqual(logs[0]["modality"], "bike")

        summary = self.client.get("/api/cardio/summary/weekly", headers=self.headers).json()
        self.assertEqual(summary["total_sessions"], 2)
        self.assertEqual(summary["total_minutes"], 60)
        self.assertEqual(summary["avg_heart_rate"], 140)
        self.assertEqual(summary["total_calories"], 500)

    def test_log_unknown_protocol(self):
        response = self.client.post("/api/cardio/log", headers=self.headers, json={"protocolId": 999})
        self.assertError(response, 404, "Protocol not found")

    def test_by_day_matches_protocols(self):
        by_day = self.client.get("/api/cardio/by-day", headers=self.headers).json()
        self.assertEqual(sorted(by_day), ["1", "2", "4", "5"])
        self.assertEqual(by_day["1"]["protocol"]["name"], "4x4 Norwegian")
        self.assertEqual(by_day["2"]["protocol"]["name"], "Zone 2 Base")
        self.assertIsNone(by_day["5"]["protocol"])


if __name__ == '__main__':
    unittest.main()
