from tests.helpers import ApiTestCase


class TestHomeContentApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def get(self):
        response = self.client.get("/api/home-content", headers=self.headers)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["homeContent"]

    def test_defaults_before_anything_is_saved(self):
        content = self.get()

        self.assertIsNone(content["id"])
        self.assertEqual(content["name"], "Ada Lovelace")
        self.assertEqual(content["tagline"], "Your professional tagline here")
        self.assertEqual(content["bio"], "Tell your story here...")
        self.assertEqual(content["header_text"], "Chronos Archive")
        self.assertEqual(content["years_experience"], 0)
        self.assertEqual(content["core_expertise"], [])
        self.assertEqual(content["social_links"], {"linkedin": "", "github": "", "twitter": "", "bluesky": ""})
        self.assertEqual(content["collaborator_stats"]["academia"]["total"], 0)
        # Reading never creates a row
        self.assertIsNone(self.get()["id"])

    def test_update_creates_then_changes_one_record(self):
        response = self.client.put(
            "/api/home-content",
            json={"tagline": "Engines and numbers", "core_expertise": ["Analysis"], "social_links": {"github": "ada"}},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["message"], "Home content updated successfully")
        created = response.json()["homeContent"]
        self.assertIsNotNone(created["id"])
        self.assertEqual(created["name"], "Ada Lovelace")
        self.assertEqual(created["social_links"]["github"], "ada")

        response = self.client.put("/api/home-content", json={"years_experience": 12, "social_links": {"bluesky": "ada.bsky"}}, headers=self.headers)
        updated = response.json()["homeContent"]
        self.assertEqual(updated["id"], created["id"])
        self.assertEqual(updated["tagline"], "Engines and numbers")
        self.assertEqual(updated["years_experience"], 12)
        self.assertEqual(updated["social_links"]["github"], "ada")
        self.assertEqual(updated["social_links"]["bluesky"], "ada.bsky")

    def test_blank_required_field_rejected(self):
        response = self.client.put("/api/home-content", json={"bio": "  "}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "bio")

    def test_unknown_social_network_rejected(self):
        response = self.client.put("/api/home-content", json={"social_links": {"myspace": "ada"}}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "social_links")

    def test_collaborator_stats_are_grouped(self):
        for name, kind in [("A", "postdoc"), ("B", "senior_faculty"), ("C", "industry_tech"), ("D", "graduate")]:
            self.client.post("/api/collaborators", json={"name": name, "type": kind}, headers=self.headers)

        stats = self.get()["collaborator_stats"]
        self.assertEqual(stats["academia"]["total"], 2)
        self.assertEqual(stats["academia"]["subcategories"], {"postdoc": 1, "junior_faculty": 0, "senior_faculty": 1})
        self.assertEqual(stats["industry"]["total"], 1)
        self.assertEqual(stats["students"]["subcategories"]["graduate"], 1)
        self.assertEqual(stats["others"]["total"], 0)
