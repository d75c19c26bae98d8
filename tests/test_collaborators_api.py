from tests.helpers import ApiTestCase


class TestCollaboratorsApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.headers = self.auth_headers()

    def add(self, name, kind, **fields):
        response = self.client.post("/api/collaborators", json={"name": name, "type": kind, **fields}, headers=self.headers)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_create_returns_collaborator_and_message(self):
        body = self.add("Grace Hopper", "senior_faculty", email="Grace@Navy.mil", skills=["COBOL"], project_ids=[1])

        self.assertEqual(body["message"], "Collaborator created successfully")
        collaborator = body["collaborator"]
        self.assertEqual(collaborator["email"], "grace@navy.mil")
        self.assertEqual(collaborator["skills"], ["COBOL"])
        self.assertTrue(collaborator["is_active"])

    def test_list_shows_active_newest_first(self):
        first = self.add("Grace Hopper", "senior_faculty")["collaborator"]
        self.add("Alan Turing", "postdoc")
        self.add("Retired", "journalist", is_active=False)

        collaborators = self.client.get("/api/collaborators", headers=self.headers).json()["collaborators"]
        self.assertEqual([c["name"] for c in collaborators], ["Alan Turing", "Grace Hopper"])

        response = self.client.get(f"/api/collaborators/{first['id']}", headers=self.headers)
        self.assertEqual(response.json()["collaborator"]["name"], "Grace Hopper")

    def test_update_and_delete(self):
        collaborator = self.add("Grace Hopper", "senior_faculty", institution="Yale")["collaborator"]

        response = self.client.put(
            f"/api/collaborators/{collaborator['id']}",
            json={"role": "Advisor", "institution": None},
            headers=self.headers,
        )
        self.assertEqual(response.json()["message"], "Collaborator updated successfully")
        self.assertEqual(response.json()["collaborator"]["role"], "Advisor")
        self.assertIsNone(response.json()["collaborator"]["institution"])

        response = self.client.delete(f"/api/collaborators/{collaborator['id']}", headers=self.headers)
        self.assertEqual(response.json(), {"message": "Collaborator deleted successfully"})
        response = self.client.get(f"/api/collaborators/{collaborator['id']}", headers=self.headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Collaborator not found")

    def test_unknown_type_rejected(self):
        response = self.client.post("/api/collaborators", json={"name": "X", "type": "wizard"}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "type")

    def test_blank_name_rejected(self):
        response = self.client.post("/api/collaborators", json={"name": "  ", "type": "postdoc"}, headers=self.headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "name")

    def test_stats_count_active_by_type(self):
        self.add("A", "postdoc")
        self.add("B", "postdoc")
        self.add("C", "graduate")
        self.add("D", "graduate", is_active=False)

        response = self.client.get("/api/collaborators/stats/summary", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["stats"], [{"type": "postdoc", "count": 2}, {"type": "graduate", "count": 1}])

    def test_collaborators_are_private(self):
        collaborator = self.add("Grace Hopper", "senior_faculty")["collaborator"]
        other = self.auth_headers(email="eve@example.com")

        self.assertEqual(self.client.get("/api/collaborators", headers=other).json()["collaborators"], [])
        response = self.client.put(f"/api/collaborators/{collaborator['id']}", json={"role": "x"}, headers=other)
        self.assertEqual(response.status_code, 404)

    def test_requires_token(self):
        self.assertEqual(self.client.get("/api/collaborators").status_code, 401)
