"""Shared fixtures for API tests: an app on a private in-memory SQLite database."""
import unittest
from itertools import count

from fastapi.testclient import TestClient

from grindlog.config import Settings
from grindlog.main import create_app
from grindlog.models.user import User

_user_ids = count(1)


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "secret_key": "test-secret",
        "environment": "test",
        "log_level": "WARNING",
        "timezone": "UTC",
        "auto_create_tables": True,
    }
    values.update(overrides)
    return Settings(**values)


class ApiTestCase(unittest.TestCase):
    settings_overrides = {}

    def setUp(self):
        self.app = create_app(make_settings(**self.settings_overrides))
        self.client = TestClient(self.app)
        self.database = self.app.state.database

    def tearDown(self):
        self.client.close()
        self.database.dispose()

    def session(self):
        """A raw ORM session on the app's database, for seeding and assertions."""
        return self.database.session()

    def seed(self, *rows):
        db = self.session()
        try:
            db.add_all(rows)
            db.commit()
            for row in rows:
                db.refresh(row)
                db.expunge(row)
        finally:
            db.close()
        return rows[0] if len(rows) == 1 else rows

    def register(self, username=None, password="secret123", role=None):
        """Register a user and return (auth headers, user json)."""
        username = username or f"lifter{next(_user_ids)}"
        email = f"{username}@example.com"
        response = self.client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "username": username},
        )
        self.assertEqual(response.status_code, 201, response.text)
        body = response.json()

        if role:
            db = self.session()
            try:
                db.query(User).filter(User.id == body["user"]["id"]).update({"role": role})
                db.commit()
            finally:
                db.close()
            # Role lives in the token, so sign in again
            response = self.client.post("/api/auth/login", json={"email": email, "password": password})
            self.assertEqual(response.status_code, 200, response.text)
            body = response.json()

        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    def assertError(self, response, status_code, message=None):
        self.assertEqual(response.status_code, status_code, response.text)
        error = response.json()["error"]
        self.assertEqual(error["status"], status_code)
        if message is not None:
            self.assertEqual(error["message"], message)
