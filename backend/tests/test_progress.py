import unittest
from datetime import datetime, timedelta

from grindlog.models.exercise import Exercise
from grindlog.models.progress import ExerciseProgress
from grindlog.models.workout import ExerciseLog, WorkoutSession
from grindlog.utils.time import utcnow
from tests.support import ApiTestCase


class TestMeasurementsAndGoals(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, self.user = self.register()

    def test_measurements_newest_first(self):
        self.client.post("/api/progress/measurements", headers=self.headers, json={"weight": 82.0})
        self.client.post("/api/progress/measurements", headers=self.headers, json={"weight": 81.4, "waist": 84})
        history = self.client.get("/api/progress/measurements", headers=self.headers).json()
        self.assertEqual([m["weight"] for m in history], [81.4, 82.0])

    def test_stats_weight_change(self):
        self.client.post("/api/progress/measurements", headers=self.headers, json={"weight": 82.0})
        self.client.post("/api/progress/measurements", headers=self.headers, json={"weight": 81.4})
        stats = self.client.get("/api/progress/stats", headers=self.headers, params={"days": 7}).json()
        self.assertEqual(stats["period"], "7 days")
        self.assertEqual(stats["weight"], {"current": 81.4, "previous": 82.0, "change": -0.6})
        self.assertEqual(stats["workouts"]["count"], 0)
        self.assertEqual(stats["nutrition"]["avg_daily_calories"], 0)

    def test_goals(self):
        response = self.client.post(
            "/api/progress/goals",
            headers=self.headers,
            json={"goalType": "bodyweight", "targetValue": 78, "unit": "kg", "deadline": "2027-01-01"},
        )
        self.assertEqual(response.status_code, 201, response.text)
        goal = response.json()

        response = self.client.patch(f"/api/progress/goals/{goal['id']}", headers=self.headers, json={"achieved": True})
        self.assertTrue(response.json()["achieved"])
        self.assertEqual(response.json()["target_value"], 78)

        other_headers, _ = self.register()
        self.assertError(
            self.client.patch(f"/api/progress/goals/{goal['id']}", headers=other_headers, json={"achieved": False}),
            404,
            "Goal not found",
        )

    def test_goals_open_first(self):
        done = self.client.post("/api/progress/goals", headers=self.headers, json={"goalType": "bench"}).json()
        self.client.patch(f"/api/progress/goals/{done['id']}", headers=self.headers, json={"achieved": True})
        self.client.post("/api/progress/goals", headers=self.headers, json={"goalType": "squat"})
        goals = self.client.get("/api/progress/goals", headers=self.headers).json()
        self.assertEqual([g["goal_type"] for g in goals], ["squat", "bench"])


class TestExerciseProgress(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, self.user = self.register()
        self.bench, self.rower = self.seed(
            Exercise(name="Bench Press", category="Strength", muscle_group="Chest", is_public=True),
            Exercise(name="Rower", category="Cardio", is_cardio=True, is_public=True),
        )

    def test_session_progression_by_date(self):
        started = utcnow() - timedelta(days=1)
        session = self.seed(WorkoutSession(user_id=self.user["id"], name="Push", started_at=started))
        self.seed(
            ExerciseLog(session_id=session.id, exercise_id=self.bench.id, set_number=1, weight=80, reps=5),
            ExerciseLog(session_id=session.id, exercise_id=self.bench.id, set_number=2, weight=85, reps=3),
        )

        body = self.client.get(f"/api/progress/exercise/{self.bench.id}", headers=self.headers).json()
        self.assertEqual(len(body["logs"]), 2)
        self.assertIn("session_date", body["logs"][0])
        self.assertEqual(
            body["progression"],
            [{"date": started.date().isoformat(), "maxWeight": 85, "maxReps": 3}],
        )

    def test_log_and_history_strength(self):
        for weight in (60, 70):
            response = self.client.post(
                f"/api/progress/exercise/{self.bench.id}/log",
                headers=self.headers,
                json={"weight": weight, "sets": 3, "reps": 8},
            )
            self.assertEqual(response.status_code, 201, response.text)

        body = self.client.get(f"/api/progress/exercise/{self.bench.id}/history", headers=self.headers).json()
        self.assertEqual(body["exercise"], {"name": "Bench Press", "is_cardio": False})
        self.assertEqual([h["weight"] for h in body["history"]], [60, 70])
        self.assertEqual(body["summary"], {"max_weight": 70, "total_sets": 6, "sessions": 2})

    def test_history_cardio_summary(self):
        self.client.post(
            f"/api/progress/exercise/{self.rower.id}/log",
            headers=self.headers,
            json={"durationSeconds": 1200, "distanceMeters": 5000},
        )
        body = self.client.get(f"/api/progress/exercise/{self.rower.id}/history", headers=self.headers).json()
        self.assertEqual(body["summary"], {"total_duration": 1200, "total_distance": 5000, "sessions": 1})

    def test_history_unknown_exercise(self):
        self.assertError(
            self.client.get("/api/progress/exercise/999/history", headers=self.headers), 404, "Exercise not found"
        )

    def test_overview_latest_per_exercise(self):
        old = utcnow() - timedelta(days=3)
        self.seed(
            ExerciseProgress(user_id=self.user["id"], exercise_id=self.bench.id, weight=60, logged_at=old),
            ExerciseProgress(user_id=self.user["id"], exercise_id=self.bench.id, weight=75),
            ExerciseProgress(user_id=self.user["id"], exercise_id=self.rower.id, duration_seconds=600),
        )
        overview = {row["exercise_name"]: row for row in self.client.get("/api/progress/exercises/overview", headers=self.headers).json()}
        self.assertEqual(overview["Bench Press"]["weight"], 75)
        self.assertEqual(overview["Bench Press"]["total_entries"], 2)
        self.assertTrue(overview["Rower"]["is_cardio"])

    def test_last_weights_by_name(self):
        self.client.post(f"/api/progress/exercise/{self.bench.id}/log", headers=self.headers, json={"weight": 70, "sets": 3, "reps": 8})
        body = self.client.post(
            "/api/progress/exercises/last-weights",
            headers=self.headers,
            json={"exerciseNames": ["BENCH PRESS", "Deadlift"]},
        ).json()
        self.assertEqual(list(body), ["bench press"])
        self.assertEqual(body["bench press"]["weight"], 70)

        self.assertEqual(
            self.client.post("/api/progress/exercises/last-weights", headers=self.headers, json={"exerciseNames": []}).json(),
            {},
        )

    def test_log_by_name_reuses_or_creates(self):
        response = self.client.post(
            "/api/progress/exercises/log-by-name",
            headers=self.headers,
            json={"exerciseName": "bench press", "weight": 90, "sets": 1, "reps": 1},
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["exercise_id"], self.bench.id)

        response = self.client.post(
            "/api/progress/exercises/log-by-name",
            headers=self.headers,
            json={"exerciseName": "Zercher Squat", "weight": 100},
        )
        db = self.session()
        try:
            created = db.query(Exercise).filter(Exercise.id == response.json()["exercise_id"]).one()
            self.assertEqual(created.category, "Strength")
            self.assertEqual(created.muscle_group, "Full Body")
            self.assertEqual(created.created_by, self.user["id"])
        finally:
            db.close()

    def test_delete_and_clear(self):
        entry = self.client.post(f"/api/progress/exercise/{self.bench.id}/log", headers=self.headers, json={"weight": 60}).json()
        self.client.post(f"/api/progress/exercise/{self.bench.id}/log", headers=self.headers, json={"weight": 65})
        self.client.post(f"/api/progress/exercise/{self.rower.id}/log", headers=self.headers, json={"durationSeconds": 60})

        self.assertEqual(
            self.client.delete(f"/api/progress/exercise-log/{entry['id']}", headers=self.headers).json(),
            {"message": "Progress entry deleted"},
        )
        self.assertError(
            self.client.delete(f"/api/progress/exercise-log/{entry['id']}", headers=self.headers),
            404,
            "Progress entry not found",
        )
        self.assertEqual(
            self.client.delete(f"/api/progress/exercise/{self.bench.id}/clear", headers=self.headers).json(),
            {"message": "Deleted 1 progress entries"},
        )
        self.assertEqual(
            self.client.delete("/api/progress/exercises/clear-all", headers=self.headers).json(),
            {"message": "Deleted 1 progress entries"},
        )


if __name__ == '__main__':
    unittest.main()
