import unittest

from grindlog.models.exercise import Exercise
from grindlog.models.progress import BodyMeasurement
from grindlog.models.schedule import AiRecommendation
from tests.support import ApiTestCase


class TestOnboardingProfile(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, self.user = self.register()

    def test_status_starts_incomplete(self):
        status = self.client.get("/api/onboarding/status", headers=self.headers).json()
        self.assertFalse(status["onboarding_completed"])

    def test_profile_records_initial_weight(self):
        response = self.client.post(
            "/api/onboarding/profile",
            headers=self.headers,
            json={"heightCm": 180, "weight": 82.5, "fitnessGoal": "strength", "experienceLevel": "intermediate"},
        )
        self.assertEqual(response.json(), {"success": True})

        status = self.client.get("/api/onboarding/status", headers=self.headers).json()
        self.assertEqual(status["height_cm"], 180)
        self.assertEqual(status["fitness_goal"], "strength")

        db = self.session()
        try:
            measurement = db.query(BodyMeasurement).filter(BodyMeasurement.user_id == self.user["id"]).one()
            self.assertEqual(measurement.weight, 82.5)
            self.assertEqual(measurement.notes, "Initial weight from onboarding")
        finally:
            db.close()

    def test_complete(self):
        self.client.post("/api/onboarding/complete", headers=self.headers, json={"workoutsSetup": True})
        status = self.client.get("/api/onboarding/status", headers=self.headers).json()
        self.assertTrue(status["onboarding_completed"])
        self.assertTrue(status["workouts_setup"])
        self.assertFalse(status["menu_setup"])

    def test_recommendation_is_queued(self):
        response = self.client.post("/api/onboarding/ai-recommend", headers=self.headers, json={"type": "workout"})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["status"], "pending")

        db = self.session()
        try:
            recommendation = db.query(AiRecommendation).one()
            self.assertIn("user_profile", recommendation.request_data)
        finally:
            db.close()


class TestWeeklySchedule(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()
        self.squat, self.lunge, self.plank = self.seed(
            Exercise(name="Squat", is_public=True),
            Exercise(name="Lunge", is_public=True),
            Exercise(name="Plank", is_public=True),
        )

    def add(self, day, exercise):
        response = self.client.post(
            f"/api/onboarding/schedule/{day}/exercises", headers=self.headers, json={"exerciseId": exercise.id}
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_upsert_day(self):
        self.client.post("/api/onboarding/schedule", headers=self.headers, json={"dayOfWeek": 1, "name": "Legs"})
        response = self.client.post(
            "/api/onboarding/schedule", headers=self.headers, json={"dayOfWeek": 1, "name": "Rest", "isRestDay": True}
        )
        self.assertTrue(response.json()["is_rest_day"])

        days = self.client.get("/api/onboarding/schedule", headers=self.headers).json()
        self.assertEqual([(d["day_of_week"], d["name"]) for d in days], [(1, "Rest")])

    def test_adding_exercise_creates_day(self):
        first = self.add(3, self.squat)
        second = self.add(3, self.lunge)
        self.assertEqual((first["order_index"], second["order_index"]), (0, 1))
        self.assertEqual(first["exercise_name"], "Squat")
        self.assertEqual(first["sets"], 3)

        full = self.client.get("/api/onboarding/schedule/full", headers=self.headers).json()
        self.assertEqual(full[0]["name"], "Workout")
        self.assertEqual([e["exercise_name"] for e in full[0]["exercises"]], ["Squat", "Lunge"])

    def test_unknown_exercise(self):
        response = self.client.post("/api/onboarding/schedule/3/exercises", headers=self.headers, json={"exerciseId": 999})
        self.assertError(response, 404, "Exercise not found")

    def test_day_out_of_range(self):
        self.assertError(self.client.get("/api/onboarding/schedule/7/exercises", headers=self.headers), 400)

    def test_reorder(self):
        ids = [self.add(2, exercise)["id"] for exercise in (self.squat, self.lunge, self.plank)]
        response = self.client.patch(
            "/api/onboarding/schedule/2/reorder",
            headers=self.headers,
            json={"exerciseIds": [ids[2], ids[0], ids[1]]},
        )
        self.assertEqual(response.json(), {"success": True})

        names = [e["exercise_name"] for e in self.client.get("/api/onboarding/schedule/2/exercises", headers=self.headers).json()]
        self.assertEqual(names, ["Plank", "Squat", "Lunge"])

    def test_reorder_ignores_other_users_entries(self):
        entry = self.add(2, self.squat)
        other_headers, _ = self.register()
        self.client.post("/api/onboarding/schedule", headers=other_headers, json={"dayOfWeek": 2})
        self.client.patch(
            "/api/onboarding/schedule/2/reorder", headers=other_headers, json={"exerciseIds": [999, entry["id"]]}
        )
        mine = self.client.get("/api/onboarding/schedule/2/exercises", headers=self.headers).json()
        self.assertEqual(mine[0]["order_index"], 0)

    def test_reorder_missing_day(self):
        response = self.client.patch("/api/onboarding/schedule/5/reorder", headers=self.headers, json={"exerciseIds": []})
        self.assertError(response, 404, "Schedule day not found")

    def test_update_and_remove_entry(self):
        entry = self.add(1, self.squat)
        response = self.client.patch(
            f"/api/onboarding/schedule/exercises/{entry['id']}", headers=self.headers, json={"weight": 100, "reps": 5}
        )
        self.assertEqual(response.json()["weight"], 100)
        self.assertEqual(response.json()["sets"], 3)

        other_headers, _ = self.register()
        self.assertError(
            self.client.delete(f"/api/onboarding/schedule/exercises/{entry['id']}", headers=other_headers),
            404,
            "Exercise entry not found",
        )
        self.client.delete(f"/api/onboarding/schedule/exercises/{entry['id']}", headers=self.headers)
        self.assertEqual(self.client.get("/api/onboarding/schedule/1/exercises", headers=self.headers).json(), [])

    def test_clear_day(self):
        self.add(4, self.squat)
        self.assertEqual(self.client.delete("/api/onboarding/schedule/4", headers=self.headers).json(), {"success": True})
        self.assertEqual(self.client.get("/api/onboarding/schedule/full", headers=self.headers).json(), [])


if __name__ == '__main__':
    unittest.main()
