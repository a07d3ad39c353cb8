import unittest

from grindlog.models.routine import Routine
from tests.support import ApiTestCase


class TestRoutines(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()
        self.morning, self.evening = self.seed(
            Routine(name="Wake Up", type="morning", items=["water", "stretch"]),
            Routine(name="Wind Down", type="evening", items=["read"]),
        )

    def test_list_filters_by_type(self):
        routines = self.client.get("/api/routines", headers=self.headers, params={"type": "evening"}).json()
        self.assertEqual([r["name"] for r in routines], ["Wind Down"])

        everything = self.client.get("/api/routines", headers=self.headers, params={"type": "noon"}).json()
        self.assertEqual(len(everything), 2)

    def test_create_rejects_unknown_type(self):
        response = self.client.post("/api/routines", headers=self.headers, json={"name": "Nap", "type": "noon"})
        self.assertError(response, 400, "Type must be morning or evening")

    def test_create_and_update(self):
        response = self.client.post(
            "/api/routines",
            headers=self.headers,
            json={"name": "Mobility", "type": "morning", "totalDurationMinutes": 10, "items": ["hips"]},
        )
        self.assertEqual(response.status_code, 201, response.text)
        routine = response.json()
        self.assertEqual(routine["items"], ["hips"])

        response = self.client.put(f"/api/routines/{routine['id']}", headers=self.headers, json={"name": "Mobility+"})
        self.assertEqual(response.json()["name"], "Mobility+")
        self.assertEqual(response.json()["total_duration_minutes"], 10)

    def test_complete_and_streak(self):
        response = self.client.post(
            f"/api/routines/{self.morning.id}/complete",
            headers=self.headers,
            json={"itemsCompleted": ["water"], "notes": "groggy"},
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["routine_name"], "Wake Up")
        self.assertEqual(response.json()["routine_type"], "morning")

        today = self.client.get("/api/routines/completions/today", headers=self.headers).json()
        self.assertEqual(len(today), 1)
        self.assertEqual(self.client.get("/api/routines/completions/streak", headers=self.headers).json(), {"streak": 1})
        self.assertEqual(len(self.client.get("/api/routines/completions/history", headers=self.headers).json()), 1)

    def test_complete_unknown_routine(self):
        self.assertError(
            self.client.post("/api/routines/999/complete", headers=self.headers, json={}), 404, "Routine not found"
        )


if __name__ == '__main__':
    unittest.main()
