import unittest

from grindlog.models.user import User
from tests.support import ApiTestCase


class TestAuth(ApiTestCase):

    def test_register_returns_user_and_token(self):
        response = self.client.post(
            "/api/auth/register",
            json={"email": "Jane@Example.com", "password": "secret123", "username": "jane", "displayName": "Jane"},
        )
        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["email"], "jane@example.com")
        self.assertEqual(body["user"]["display_name"], "Jane")
        self.assertEqual(body["user"]["role"], "user")
        self.assertNotIn("password_hash", body["user"])

    def test_display_name_defaults_to_username(self):
        _, user = self.register("quietlifter")
        self.assertEqual(user["display_name"], "quietlifter")

    def test_duplicate_registration_conflicts(self):
        self.register("jane")
        response = self.client.post(
            "/api/auth/register",
            json={"email": "other@example.com", "password": "secret123", "username": "jane"},
        )
        self.assertError(response, 409, "User already exists")

    def test_duplicate_email_conflicts_without_new_row(self):
        self.register("jane")
        response = self.client.post(
            "/api/auth/register",
            json={"email": "JANE@example.com", "password": "secret123", "username": "jane2"},
        )
        self.assertError(response, 409, "User already exists")

        db = self.session()
        try:
            self.assertEqual(db.query(User).count(), 1)
        finally:
            db.close()

    def test_login(self):
        self.register("jane", password="secret123")
        response = self.client.post("/api/auth/login", json={"email": "jane@example.com", "password": "secret123"})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["user"]["username"], "jane")

    def test_login_wrong_password(self):
        self.register("jane", password="secret123")
        response = self.client.post("/api/auth/login", json={"email": "jane@example.com", "password": "nope"})
        self.assertError(response, 401, "Invalid credentials")

    def test_login_unknown_email(self):
        response = self.client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "x"})
        self.assertError(response, 401, "Invalid credentials")

    def test_short_password_is_rejected(self):
        response = self.client.post(
            "/api/auth/register",
            json={"email": "a@example.com", "password": "123", "username": "shorty"},
        )
        self.assertError(response, 400, "Validation failed")


class TestTokenGuard(ApiTestCase):

    def test_missing_token(self):
        self.assertError(self.client.get("/api/users/me"), 401, "No token provided")

    def test_invalid_token(self):
        response = self.client.get("/api/users/me", headers={"Authorization": "Bearer not-a-token"})
        self.assertError(response, 401, "Invalid token")

    def test_me_and_update(self):
        headers, user = self.register("jane")
        self.assertEqual(self.client.get("/api/users/me", headers=headers).json()["id"], user["id"])

        response = self.client.patch("/api/users/me", headers=headers, json={"displayName": "J"})
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["display_name"], "J")

    def test_public_profile_needs_no_token(self):
        self.register("jane")
        response = self.client.get("/api/users/jane")
        self.assertEqual(response.status_code, 200, response.text)
        self.assertNotIn("email", response.json())
        self.assertError(self.client.get("/api/users/nobody"), 404, "User not found")

    def test_admin_routes_reject_regular_users(self):
        headers, _ = self.register()
        self.assertError(self.client.get("/api/admin/stats", headers=headers), 403, "Admin access required")


if __name__ == '__main__':
    unittest.main()
