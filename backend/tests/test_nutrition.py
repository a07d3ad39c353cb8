import unittest

from grindlog.models.nutrition import MealTemplate, MealTemplateItem, NutritionPlan
from tests.support import ApiTestCase

BREAKFAST = {
    "mealType": "breakfast",
    "items": [
        {"ingredient": "Oats", "amount": "80g", "proteinG": 10, "carbsG": 54, "fatG": 6, "calories": 300},
        {"ingredient": "Whey", "amount": "1 scoop", "proteinG": 24, "carbsG": 3, "fatG": 1, "calories": 120},
    ],
}


class TestTargets(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()

    def test_defaults_until_set(self):
        targets = self.client.get("/api/nutrition/targets", headers=self.headers).json()
        self.assertTrue(targets["is_default"])
        self.assertEqual(targets["daily_calories"], 3200)

    def test_upsert_keeps_missing_fields(self):
        self.client.put("/api/nutrition/targets", headers=self.headers, json={"dailyCalories": 2500, "proteinG": 180})
        response = self.client.put("/api/nutrition/targets", headers=self.headers, json={"fatG": 70})
        targets = response.json()
        self.assertFalse(targets["is_default"])
        self.assertEqual(targets["daily_calories"], 2500)
        self.assertEqual(targets["fat_g"], 70)


class TestMeals(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()

    def log_breakfast(self):
        response = self.client.post("/api/nutrition/meals", headers=self.headers, json=BREAKFAST)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_totals_come_from_items(self):
        meal = self.log_breakfast()
        self.assertEqual(meal["total_calories"], 420)
        self.assertEqual(meal["protein_g"], 34)
        self.assertEqual([item["ingredient"] for item in meal["items"]], ["Oats", "Whey"])

    def test_invalid_meal_type(self):
        response = self.client.post("/api/nutrition/meals", headers=self.headers, json={"mealType": "brunch"})
        self.assertError(response, 400)
        self.assertTrue(response.json()["error"]["message"].startswith("Invalid meal type"))

    def test_update_replaces_items(self):
        meal = self.log_breakfast()
        response = self.client.put(
            f"/api/nutrition/meals/{meal['id']}",
            headers=self.headers,
            json={"items": [{"ingredient": "Eggs", "proteinG": 18, "calories": 210}]},
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["total_calories"], 210)
        self.assertEqual(len(response.json()["items"]), 1)
        self.assertEqual(response.json()["meal_type"], "breakfast")

    def test_other_users_meal_is_not_found(self):
        meal = self.log_breakfast()
        other_headers, _ = self.register()
        self.assertError(self.client.get(f"/api/nutrition/meals/{meal['id']}", headers=other_headers), 404, "Meal not found")

    def test_delete(self):
        meal = self.log_breakfast()
        self.assertEqual(
            self.client.delete(f"/api/nutrition/meals/{meal['id']}", headers=self.headers).json(),
            {"message": "Meal deleted"},
        )
        self.assertEqual(self.client.get("/api/nutrition/meals", headers=self.headers).json(), [])

    def test_daily_summary_remaining(self):
        self.client.put(
            "/api/nutrition/targets",
            headers=self.headers,
            json={"dailyCalories": 920, "proteinG": 30, "carbsG": 300, "fatG": 80},
        )
        self.log_breakfast()

        summary = self.client.get("/api/nutrition/summary/daily", headers=self.headers).json()
        self.assertEqual(summary["consumed"]["calories"], 420)
        self.assertEqual(summary["consumed"]["meal_count"], 1)
        self.assertEqual(summary["remaining"]["calories"], 500)
        self.assertEqual(summary["remaining"]["protein"], -4)

    def test_weekly_summary(self):
        self.log_breakfast()
        self.log_breakfast()
        weekly = self.client.get("/api/nutrition/summary/weekly", headers=self.headers).json()
        self.assertEqual(len(weekly), 1)
        self.assertEqual(weekly[0]["total_calories"], 840)
        self.assertEqual(weekly[0]["meal_count"], 2)


class TestNutritionPlans(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers, _ = self.register()
        plan = NutritionPlan(name="Recovery Day", day_type="recovery", daily_calories=2600)
        plan.templates = [
            MealTemplate(
                meal_type="breakfast",
                option_name="Option A",
                order_index=0,
                items=[MealTemplateItem(ingredient="Eggs", amount="4", calories=280)],
            ),
            MealTemplate(meal_type="breakfast", option_name="Option B", order_index=1),
            MealTemplate(meal_type="dinner", option_name="Salmon", order_index=2),
        ]
        self.plan = self.seed(plan, NutritionPlan(name="Hard Day", day_type="high_intensity"))[0]

    def test_list_ordered_by_day_type(self):
        plans = self.client.get("/api/nutrition/plans", headers=self.headers).json()
        self.assertEqual([p["day_type"] for p in plans], ["high_intensity", "recovery"])

    def test_detail_groups_meals(self):
        detail = self.client.get(f"/api/nutrition/plans/{self.plan.id}", headers=self.headers).json()
        self.assertEqual([t["option_name"] for t in detail["meals"]["breakfast"]], ["Option A", "Option B"])
        self.assertEqual(detail["meals"]["breakfast"][0]["items"][0]["ingredient"], "Eggs")
        self.assertEqual(len(detail["meals"]["dinner"]), 1)

    def test_by_day_type(self):
        detail = self.client.get("/api/nutrition/plans/day-type/recovery", headers=self.headers).json()
        self.assertEqual(detail["name"], "Recovery Day")
        self.assertError(self.client.get("/api/nutrition/plans/day-type/lazy", headers=self.headers), 400)
        self.assertError(
            self.client.get("/api/nutrition/plans/day-type/moderate", headers=self.headers),
            404,
            "No plan found for this day type",
        )


if __name__ == '__main__':
    unittest.main()
