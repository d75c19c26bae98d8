import unittest
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from cli.core.errors import InvalidCredentialsError, NotFoundError, ServerError, SessionExpiredError
from cli.core.session import CurrentUser
from cli.main import app

runner = CliRunner()


class TestAuthCommands(unittest.TestCase):

    @patch("cli.auth.commands.getpass.getpass", return_value="Secret123")
    @patch("cli.auth.commands.get_client")
    @patch("cli.auth.commands.SessionManager")
    def test_login_success(self, mock_manager_cls, mock_get_client, mock_getpass):
        manager = mock_manager_cls.return_value
        manager.state.is_authenticated = False
        manager.login.return_value = CurrentUser("42", "ada@example.com", "Ada")

        result = runner.invoke(app, ["auth", "login", "--email", "ada@example.com"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Login successful as 'ada@example.com'", result.output)
        manager.login.assert_called_once_with("ada@example.com", "Secret123")

    @patch("cli.auth.commands.getpass.getpass", return_value="wrong")
    @patch("cli.auth.commands.get_client")
    @patch("cli.auth.commands.SessionManager")
    def test_login_invalid_credentials(self, mock_manager_cls, mock_get_client, mock_getpass):
        manager = mock_manager_cls.return_value
        manager.state.is_authenticated = False
        manager.login.side_effect = InvalidCredentialsError(401, "Invalid email or password")

        result = runner.invoke(app, ["auth", "login", "--email", "ada@example.com"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Login failed", result.output)

    @patch("cli.auth.commands.get_client")
    @patch("cli.auth.commands.SessionManager")
    def test_login_refused_with_active_session(self, mock_manager_cls, mock_get_client):
        mock_manager_cls.return_value.state.is_authenticated = True

        result = runner.invoke(app, ["auth", "login", "--email", "ada@example.com"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Session already active", result.output)

    @patch("cli.auth.commands.getpass.getpass", side_effect=["Secret123", "Secret124"])
    @patch("cli.auth.commands.get_client")
    @patch("cli.auth.commands.SessionManager")
    def test_register_password_mismatch(self, mock_manager_cls, mock_get_client, mock_getpass):
        mock_manager_cls.return_value.state.is_authenticated = False

        result = runner.invoke(app, ["auth", "register", "--email", "ada@example.com", "--name", "Ada"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Passwords do not match", result.output)
        mock_manager_cls.return_value.register.assert_not_called()

    @patch("cli.auth.commands.get_client")
    @patch("cli.auth.commands.SessionManager")
    def test_logout_when_server_fails(self, mock_manager_cls, mock_get_client):
        manager = mock_manager_cls.return_value
        manager.store.access_token = "token"
        manager.logout.return_value = False

        result = runner.invoke(app, ["auth", "logout"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("Warning: Failed to logout from backend.", result.output)
        self.assertIn("Session ended.", result.output)


class TestProjectCommands(unittest.TestCase):

    @patch("cli.projects.commands.get_client")
    @patch("cli.projects.commands.api_list_projects")
    def test_list(self, mock_list, mock_get_client):
        mock_list.return_value = [
            {"id": 1, "title": "Kanban", "status": "planning", "archived": False},
            {"id": 2, "title": "Old site", "status": "completed", "archived": True},
        ]

        result = runner.invoke(app, ["projects", "list"])

        self.assertEqual(result.exit_code, 0)
        self.assertIn("[1] Kanban - planning", result.output)
        self.assertIn("[2] Old site - completed (archived)", result.output)

    def test_list_rejects_unknown_status(self):
        result = runner.invoke(app, ["projects", "list", "--status", "shipped"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Invalid status 'shipped'", result.output)

    @patch("cli.projects.commands.get_client")
    @patch("cli.projects.commands.api_list_projects", side_effect=SessionExpiredError("Session expired. Please login again."))
    def test_expired_session(self, mock_list, mock_get_client):
        result = runner.invoke(app, ["projects", "list"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Session expired. Please login again.", result.output)

    @patch("cli.projects.commands.get_client")
    @patch("cli.projects.commands.api_get_project", side_effect=NotFoundError(404, "Project not found"))
    def test_show_missing(self, mock_get, mock_get_client):
        result = runner.invoke(app, ["projects", "show", "9"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error: Project not found", result.output)

    @patch("cli.projects.commands.get_client")
    @patch("cli.projects.commands.api_create_project")
    def test_create(self, mock_create, mock_get_client):
        mock_create.return_value = {"id": 3, "title": "Blog"}

        result = runner.invoke(app, ["projects", "create", "-t", "Blog", "-d", "A blog", "--tech", "python", "--tech", "htmx"])

        self.assertEqual(result.exit_code, 0, result.output)
        payload = mock_create.call_args.args[1]
        self.assertEqual(payload["technologies"], ["python", "htmx"])
        self.assertEqual(payload["status"], "planning")

    @patch("cli.projects.commands.get_client")
    def test_board(self, mock_get_client):
        mock_get_client.return_value.get.return_value = {"projects": [
            {"id": 1, "title": "Kanban", "status": "planning", "order": 0},
            {"id": 2, "title": "Site", "status": "completed", "order": 0},
        ]}

        result = runner.invoke(app, ["projects", "board"])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Planning (1)", result.output)
        self.assertIn("In Progress (0)", result.output)
        self.assertIn("  [2] Site", result.output)

    @patch("cli.projects.commands.get_client")
    def test_move_committed(self, mock_get_client):
        client = mock_get_client.return_value
        client.get.return_value = {"projects": [{"id": 1, "title": "Kanban", "status": "planning", "order": 0}]}
        client.put.return_value = {"project": {"id": 1, "status": "in-progress"}}

        result = runner.invoke(app, ["projects", "move", "1", "in-progress"])

        self.assertEqual(result.exit_code, 0, result.output)
        client.put.assert_called_once_with("/api/projects/1", json={"status": "in-progress"})
        self.assertIn("Project status updated successfully", result.output)
        self.assertIn("In Progress (1)", result.output)

    @patch("cli.projects.commands.get_client")
    def test_move_rejected_rolls_back(self, mock_get_client):
        client = mock_get_client.return_value
        client.get.return_value = {"projects": [{"id": 1, "title": "Kanban", "status": "planning", "order": 0}]}
        client.put.side_effect = ServerError(500, "Internal server error")

        result = runner.invoke(app, ["projects", "move", "1", "in-progress"])

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Failed to update project status: Internal server error", result.output)
        self.assertIn("Planning (1)", result.output)

    @patch("cli.projects.commands.get_client")
    def test_move_unknown_project(self, mock_get_client):
        mock_get_client.return_value.get.return_value = {"projects": []}
        result = runner.invoke(app, ["projects", "move", "5", "completed"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Project 5 is not on the board.", result.output)


class TestContentCommands(unittest.TestCase):

    @patch("cli.skills.commands.get_client")
    @patch("cli.skills.commands.api_list_skills")
    def test_skills_list(self, mock_list, mock_get_client):
        mock_list.return_value = [{"id": 1, "name": "Python", "category": "Languages", "experience_level": "expert", "years_of_experience": 9}]
        result = runner.invoke(app, ["skills", "list"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Python", result.output)

    @patch("cli.profile.commands.get_client")
    @patch("cli.profile.commands.api_update_profile")
    def test_profile_update_nothing(self, mock_update, mock_get_client):
        result = runner.invoke(app, ["profile", "update"])
        self.assertEqual(result.exit_code, 1)
        mock_update.assert_not_called()

    @patch("cli.profile.commands.get_client")
    @patch("cli.profile.commands.api_get_profile")
    def test_profile_show_lists_history(self, mock_get, mock_get_client):
        mock_get.return_value = {
            "name": "Ada", "email": "ada@example.com", "bio": "",
            "experiences": [{"id": 3, "title": "Lead", "company": "Engines Inc", "start_date": "2022-03-01T00:00:00", "end_date": None, "current": True}],
            "education": [{"id": 4, "degree": "MSc", "institution": "London", "start_date": "2015-09-01T00:00:00", "end_date": "2016-07-01T00:00:00"}],
        }
        result = runner.invoke(app, ["profile", "show"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("[3] Lead at Engines Inc (2022-03 - present)", result.output)
        self.assertIn("[4] MSc, London (2015-09 - 2016-07)", result.output)

    @patch("cli.profile.commands.get_client")
    @patch("cli.profile.commands.api_add_experience")
    def test_add_current_experience_drops_end_date(self, mock_add, mock_get_client):
        mock_add.return_value = {"id": 7, "title": "Lead"}
        result = runner.invoke(app, [
            "profile", "add-experience", "Lead", "--company", "Engines Inc",
            "--start", "2022-03-01", "--end", "2023-01-01", "--current", "-a", "Shipped",
        ])
        self.assertEqual(result.exit_code, 0, result.output)
        sent = mock_add.call_args.args[1]
        self.assertEqual(sent["start_date"], "2022-03-01T00:00:00")
        self.assertIsNone(sent["end_date"])
        self.assertEqual(sent["achievements"], ["Shipped"])
        self.assertIn("added with ID 7", result.output)

    @patch("cli.profile.commands.get_client")
    @patch("cli.profile.commands.api_delete_education", side_effect=NotFoundError(404, "Education not found"))
    def test_remove_missing_education(self, mock_delete, mock_get_client):
        result = runner.invoke(app, ["profile", "remove-education", "9"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Education not found", result.output)


class TestCollaboratorAndHomeCommands(unittest.TestCase):

    @patch("cli.collaborators.commands.get_client")
    @patch("cli.collaborators.commands.api_list_collaborators")
    def test_list(self, mock_list, mock_get_client):
        mock_list.return_value = [{"id": 2, "name": "Grace Hopper", "type": "senior_faculty", "institution": "Yale"}]
        result = runner.invoke(app, ["collaborators", "list"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("[2] Grace Hopper - senior_faculty @ Yale", result.output)

    @patch("cli.collaborators.commands.get_client")
    @patch("cli.collaborators.commands.api_create_collaborator")
    def test_add(self, mock_create, mock_get_client):
        mock_create.return_value = {"id": 5, "name": "Alan Turing"}
        result = runner.invoke(app, ["collaborators", "add", "Alan Turing", "--type", "postdoc", "-s", "Logic", "-s", "Crypto"])
        self.assertEqual(result.exit_code, 0, result.output)
        sent = mock_create.call_args.args[1]
        self.assertEqual(sent["type"], "postdoc")
        self.assertEqual(sent["skills"], ["Logic", "Crypto"])

    @patch("cli.collaborators.commands.api_create_collaborator")
    def test_add_rejects_unknown_type(self, mock_create):
        result = runner.invoke(app, ["collaborators", "add", "X", "--type", "wizard"])
        self.assertEqual(result.exit_code, 1)
        mock_create.assert_not_called()

    @patch("cli.collaborators.commands.get_client")
    @patch("cli.collaborators.commands.api_collaborator_stats")
    def test_stats(self, mock_stats, mock_get_client):
        mock_stats.return_value = [{"type": "postdoc", "count": 2}]
        result = runner.invoke(app, ["collaborators", "stats"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("postdoc: 2", result.output)

    @patch("cli.home.commands.get_client")
    @patch("cli.home.commands.api_get_home_content")
    def test_home_show(self, mock_get, mock_get_client):
        mock_get.return_value = {
            "header_text": "Chronos Archive", "name": "Ada", "tagline": "Engines", "bio": "Hello",
            "years_experience": 3, "core_expertise": ["Analysis"], "social_links": {"github": "ada"},
            "collaborator_stats": {"academia": {"total": 1, "subcategories": {"postdoc": 1}}},
        }
        result = runner.invoke(app, ["home", "show"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Ada - Engines", result.output)
        self.assertIn("Github: ada", result.output)
        self.assertIn("Academia: 1", result.output)

    @patch("cli.home.commands.get_client")
    @patch("cli.home.commands.api_update_home_content")
    def test_home_update_sends_only_given_fields(self, mock_update, mock_get_client):
        result = runner.invoke(app, ["home", "update", "--tagline", "Engines", "--bluesky", "ada.bsky"])
        self.assertEqual(result.exit_code, 0, result.output)
        mock_update.assert_called_once_with(mock_get_client.return_value, {"tagline": "Engines", "social_links": {"bluesky": "ada.bsky"}})

    @patch("cli.home.commands.api_update_home_content")
    def test_home_update_nothing(self, mock_update):
        result = runner.invoke(app, ["home", "update"])
        self.assertEqual(result.exit_code, 1)
        mock_update.assert_not_called()


if __name__ == "__main__":
    unittest.main()
