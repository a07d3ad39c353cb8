import unittest

from tests.support import ApiTestCase


class TestComplianceDashboard(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()

    def test_fresh_account(self):
        body = self.client.get("/api/dashboard/compliance", headers=self.headers).json()
        self.assertEqual(body["score"]["overall"], 0)
        self.assertEqual(body["inputs"]["workout_count"], 0)
        self.assertEqual(body["streaks"], {"workouts": 0, "supplements": 0, "routines": 0})

    def test_workout_today_starts_a_streak(self):
        self.client.post("/api/workouts/sessions", headers=self.headers, json={"name": "Push"})
        body = self.client.get("/api/dashboard/compliance", headers=self.headers).json()
        self.assertEqual(body["inputs"]["workout_count"], 1)
        self.assertEqual(body["streaks"]["workouts"], 1)
        self.assertGreater(body["score"]["workout"], 0)

    def test_requires_auth(self):
        self.assertError(self.client.get("/api/dashboard/compliance"), 401)


if __name__ == '__main__':
    unittest.main()
