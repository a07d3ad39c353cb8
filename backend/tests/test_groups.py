import unittest

from tests.support import ApiTestCase


class TestGroups(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.owner_headers, self.owner = self.register()
        self.member_headers, self.member = self.register()

    def create_group(self, name="Morning Lifters", private=False):
        response = self.client.post(
            "/api/groups", headers=self.owner_headers, json={"name": name, "isPrivate": private}
        )
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_create_makes_owner_a_member(self):
        group = self.create_group()
        self.assertEqual(group["member_count"], 1)

        mine = self.client.get("/api/groups", headers=self.owner_headers).json()
        self.assertEqual([(g["name"], g["member_role"]) for g in mine], [("Morning Lifters", "owner")])

    def test_search_hides_private_groups(self):
        self.create_group("Lifters Public")
        self.create_group("Lifters Secret", private=True)
        results = self.client.get("/api/groups/search/public", headers=self.member_headers, params={"q": "lifters"}).json()
        self.assertEqual([g["name"] for g in results], ["Lifters Public"])

    def test_private_group_access(self):
        group = self.create_group(private=True)
        self.assertError(self.client.get(f"/api/groups/{group['id']}", headers=self.member_headers), 403, "Access denied")
        self.assertError(self.client.get(f"/api/groups/{group['id']}/members", headers=self.member_headers), 403)
        self.assertError(
            self.client.post(f"/api/groups/{group['id']}/join", headers=self.member_headers),
            403,
            "This group is private",
        )

    def test_unknown_group(self):
        self.assertError(self.client.get("/api/groups/999", headers=self.member_headers), 404, "Group not found")
        self.assertError(self.client.post("/api/groups/999/join", headers=self.member_headers), 404)

    def test_join_and_leave(self):
        group = self.create_group()
        url = f"/api/groups/{group['id']}"

        self.assertEqual(self.client.post(f"{url}/join", headers=self.member_headers).json()["message"], "Joined group successfully")
        # A second join leaves a single membership
        self.client.post(f"{url}/join", headers=self.member_headers)

        detail = self.client.get(url, headers=self.member_headers).json()
        self.assertTrue(detail["is_member"])
        self.assertEqual(detail["member_role"], "member")
        self.assertEqual(detail["member_count"], 2)

        members = self.client.get(f"{url}/members", headers=self.member_headers).json()
        self.assertEqual([m["role"] for m in members], ["member", "owner"])

        self.assertEqual(self.client.post(f"{url}/leave", headers=self.member_headers).json()["message"], "Left group successfully")
        self.assertFalse(self.client.get(url, headers=self.member_headers).json()["is_member"])

    def test_sharing_requires_membership(self):
        group = self.create_group()
        response = self.client.patch(
            f"/api/groups/{group['id']}/sharing", headers=self.member_headers, json={"shareDiet": True}
        )
        self.assertError(response, 404, "Sharing settings not found")

    def test_feed_lists_shared_finished_workouts(self):
        group = self.create_group()
        self.client.post(f"/api/groups/{group['id']}/join", headers=self.member_headers)

        for headers, name in ((self.owner_headers, "Push"), (self.member_headers, "Pull")):
            session = self.client.post("/api/workouts/sessions", headers=headers, json={"name": name}).json()
            self.client.patch(f"/api/workouts/sessions/{session['id']}/end", headers=headers)
        # Unfinished sessions never show up
        self.client.post("/api/workouts/sessions", headers=self.owner_headers, json={"name": "Legs"})

        response = self.client.patch(
            f"/api/groups/{group['id']}/sharing", headers=self.member_headers, json={"shareWorkouts": False}
        )
        self.assertFalse(response.json()["share_workouts"])

        feed = self.client.get(f"/api/groups/{group['id']}/feed", headers=self.owner_headers).json()
        self.assertEqual([(item["name"], item["username"]) for item in feed], [("Push", self.owner["username"])])


if __name__ == '__main__':
    unittest.main()
