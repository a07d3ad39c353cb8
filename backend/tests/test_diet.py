import unittest

from grindlog.models.diet import FoodItem
from grindlog.models.supplement import Supplement
from tests.support import ApiTestCase


class TestDiet(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()
        self.rice, self.whey = self.seed(
            FoodItem(name="White Rice", serving_size="100g", calories=130, protein=2.7, carbs=28, fat=0.3, is_public=True),
            FoodItem(name="Whey Isolate", brand="Acme", calories=110, protein=25, is_public=True),
        )

    def test_food_search(self):
        self.client.post("/api/diet/foods", headers=self.headers, json={"name": "Rice Cakes", "calories": 35})
        foods = self.client.get("/api/diet/foods", headers=self.headers, params={"search": "rice"}).json()
        self.assertEqual([f["name"] for f in foods], ["Rice Cakes", "White Rice"])

    def test_private_foods_stay_private(self):
        self.client.post("/api/diet/foods", headers=self.headers, json={"name": "Grandma's Stew"})
        other_headers, _ = self.register()
        names = [f["name"] for f in self.client.get("/api/diet/foods", headers=other_headers).json()]
        self.assertNotIn("Grandma's Stew", names)

    def test_log_and_summary(self):
        response = self.client.post(
            "/api/diet/log",
            headers=self.headers,
            json={"foodItemId": self.whey.id, "mealType": "breakfast", "calories": 110, "protein": 25},
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.client.post("/api/diet/log", headers=self.headers, json={"customName": "Banana", "calories": 90, "carbs": 23})

        logs = self.client.get("/api/diet/log", headers=self.headers).json()
        by_name = {log["food_name"] or log["custom_name"]: log for log in logs}
        self.assertEqual(by_name["Whey Isolate"]["brand"], "Acme")
        self.assertIsNone(by_name["Banana"]["food_name"])

        summary = self.client.get("/api/diet/summary", headers=self.headers).json()
        self.assertEqual(summary["meals_logged"], 2)
        self.assertEqual(summary["total_calories"], 200)
        self.assertEqual(summary["total_protein"], 25)

    def test_summary_for_empty_day(self):
        summary = self.client.get("/api/diet/summary", headers=self.headers, params={"date": "2020-01-01"}).json()
        self.assertEqual(summary["date"], "2020-01-01")
        self.assertEqual(summary["meals_logged"], 0)

    def test_quick_supplement_log(self):
        creatine = self.seed(Supplement(name="Creatine", dosage="5g", is_global=True))
        self.assertEqual([s["name"] for s in self.client.get("/api/diet/supplements", headers=self.headers).json()], ["Creatine"])

        response = self.client.post(
            "/api/diet/supplements/log", headers=self.headers, json={"supplementId": creatine.id, "dosage": "10g"}
        )
        self.assertEqual(response.status_code, 201, response.text)
        self.assertEqual(response.json()["dosage"], "10g")

        logs = self.client.get("/api/diet/supplements/log", headers=self.headers).json()
        self.assertEqual(logs[0]["supplement_name"], "Creatine")

        self.assertError(
            self.client.post("/api/diet/supplements/log", headers=self.headers, json={"supplementId": 999}),
            404,
            "Supplement not found",
        )


if __name__ == '__main__':
    unittest.main()
