import unittest

from grindlog.models.exercise import Exercise
from grindlog.models.workout import WorkoutPlan
from tests.support import ApiTestCase


class TestWorkouts(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, self.user = self.register()
        self.squat, self.hidden = self.seed(
            Exercise(name="Squat", category="Strength", muscle_group="Legs", is_public=True),
            Exercise(name="Secret Lift", is_public=False),
        )

    def test_exercise_visibility(self):
        response = self.client.post("/api/workouts/exercises", headers=self.headers, json={"name": "Pistol Squat"})
        self.assertEqual(response.status_code, 201, response.text)

        names = [e["name"] for e in self.client.get("/api/workouts/exercises", headers=self.headers).json()]
        self.assertEqual(names, ["Pistol Squat", "Squat"])

    def test_plan_with_exercises(self):
        response = self.client.post(
            "/api/workouts/plans",
            headers=self.headers,
            json={"name": "Leg Day", "exercises": [{"exerciseId": self.squat.id, "sets": 5, "reps": 5}]},
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["exercise_count"], 1)

        plans = self.client.get("/api/workouts/plans", headers=self.headers).json()
        self.assertEqual([(p["name"], p["exercise_count"]) for p in plans], [("Leg Day", 1)])

    def test_plan_with_unknown_exercise_is_rolled_back(self):
        response = self.client.post(
            "/api/workouts/plans",
            headers=self.headers,
            json={
                "name": "Broken",
                "exercises": [{"exerciseId": self.squat.id}, {"exerciseId": self.hidden.id}],
            },
        )
        self.assertError(response, 400, f"Exercise {self.hidden.id} not found")

        db = self.session()
        try:
            self.assertEqual(db.query(WorkoutPlan).count(), 0)
        finally:
            db.close()

    def test_session_lifecycle(self):
        session = self.client.post("/api/workouts/sessions", headers=self.headers, json={"name": "Monday"}).json()
        self.assertIsNone(session["ended_at"])

        for set_number, weight in enumerate((100, 110), start=1):
            response = self.client.post(
                f"/api/workouts/sessions/{session['id']}/log",
                headers=self.headers,
                json={"exerciseId": self.squat.id, "setNumber": set_number, "reps": 5, "weight": weight},
            )
            self.assertEqual(response.status_code, 201, response.text)

        ended = self.client.patch(f"/api/workouts/sessions/{session['id']}/end", headers=self.headers).json()
        self.assertIsNotNone(ended["ended_at"])

        sessions = self.client.get("/api/workouts/sessions", headers=self.headers).json()
        self.assertEqual(sessions[0]["exercise_count"], 2)

    def test_sessions_are_private(self):
        session = self.client.post("/api/workouts/sessions", headers=self.headers, json={}).json()
        other_headers, _ = self.register()
        response = self.client.post(
            f"/api/workouts/sessions/{session['id']}/log",
            headers=other_headers,
            json={"exerciseId": self.squat.id},
        )
        self.assertError(response, 404, "Session not found")
        self.assertEqual(self.client.get("/api/workouts/sessions", headers=other_headers).json(), [])

    def test_cardio_sessions(self):
        response = self.client.post(
            "/api/workouts/cardio",
            headers=self.headers,
            json={"exerciseId": self.squat.id, "durationMinutes": 30, "distanceKm": 5.2},
        )
        self.assertEqual(response.status_code, 201, response.text)

        sessions = self.client.get("/api/workouts/cardio", headers=self.headers).json()
        self.assertEqual(sessions[0]["exercise_name"], "Squat")
        self.assertEqual(sessions[0]["distance_km"], 5.2)


if __name__ == '__main__':
    unittest.main()
