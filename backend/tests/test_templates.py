import unittest

from grindlog.models.template import WorkoutTemplate
from tests.support import ApiTestCase


class TestTemplates(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()
        self.seed(
            WorkoutTemplate(day_of_week=1, day_name="Push", exercise="Bench Press", sets_reps="4x8", order_index=1),
            WorkoutTemplate(day_of_week=1, day_name="Push", exercise="Warmup Row", section="warmup", order_index=0),
            WorkoutTemplate(day_of_week=2, day_name="Pull", exercise="Deadlift", sets_reps="3x5"),
        )

    def test_day_is_ordered(self):
        day = self.client.get("/api/templates/day/1", headers=self.headers).json()
        self.assertEqual([t["exercise"] for t in day], ["Warmup Row", "Bench Press"])

    def test_invalid_day(self):
        for day in ("7", "-1", "monday"):
            self.assertError(
                self.client.get(f"/api/templates/day/{day}", headers=self.headers), 400, "Invalid day of week (0-6)"
            )

    def test_weekly_grouping(self):
        weekly = self.client.get("/api/templates/weekly", headers=self.headers).json()
        self.assertEqual(weekly["day_names"], {"1": "Push", "2": "Pull"})
        self.assertEqual(len(weekly["weekly_plan"]["1"]), 2)

    def test_create_update_soft_delete(self):
        response = self.client.post(
            "/api/templates",
            headers=self.headers,
            json={"dayOfWeek": 4, "dayName": "Legs", "exercise": "Squat", "setsReps": "5x5"},
        )
        self.assertEqual(response.status_code, 201, response.text)
        template = response.json()

        response = self.client.put(f"/api/templates/{template['id']}", headers=self.headers, json={"intensity": "RPE 8"})
        self.assertEqual(response.json()["intensity"], "RPE 8")
        self.assertEqual(response.json()["sets_reps"], "5x5")

        response = self.client.delete(f"/api/templates/{template['id']}", headers=self.headers)
        self.assertEqual(response.json(), {"message": "Template deleted"})
        self.assertEqual(self.client.get("/api/templates/day/4", headers=self.headers).json(), [])

    def test_out_of_range_day_in_body(self):
        response = self.client.post("/api/templates", headers=self.headers, json={"dayOfWeek": 9, "exercise": "X"})
        self.assertError(response, 400, "Validation failed")

    def test_unknown_template(self):
        self.assertError(self.client.delete("/api/templates/999", headers=self.headers), 404, "Template not found")


if __name__ == '__main__':
    unittest.main()
