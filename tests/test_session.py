import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests
from jose import jwt

from cli.core.api import ApiClient
from cli.core.auth import SessionManager
from cli.core.errors import AuthenticationError, InvalidCredentialsError, SessionExpiredError
from cli.core.session import (
    CurrentUser,
    InvalidTransitionError,
    SessionState,
    SessionStatus,
    TokenStore,
    restore_state,
)


def make_response(status_code: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode() if body is not None else b""
    return response


def make_token(user_id="42", token_type="access"):
    return jwt.encode({"id": user_id, "type": token_type, "iat": 1700000000, "exp": 9999999999}, "secret", algorithm="HS256")


class TestSessionState(unittest.TestCase):

    def test_login_flow(self):
        state = SessionState()
        state.begin_authentication()
        self.assertEqual(state.status, SessionStatus.AUTHENTICATING)
        self.assertFalse(state.is_authenticated)
        state.authenticated(CurrentUser("1", "a@b.co", "A"))
        self.assertTrue(state.is_authenticated)

    def test_refresh_only_from_authenticated(self):
        with self.assertRaises(InvalidTransitionError):
            SessionState().begin_refresh()

        state = SessionState(SessionStatus.AUTHENTICATED)
        state.begin_refresh()
        with self.assertRaises(InvalidTransitionError):
            state.begin_refresh()
        state.refreshed()
        self.assertEqual(state.status, SessionStatus.AUTHENTICATED)

    def test_reset_is_always_allowed(self):
        for status in SessionStatus:
            state = SessionState(status, CurrentUser("1", "a@b.co", "A"))
            state.reset()
            self.assertEqual(state.status, SessionStatus.UNAUTHENTICATED)
            self.assertIsNone(state.user)


class TestTokenStore(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "nested" / "session.json"

    def tearDown(self):
        self.tmp.cleanup()

    def test_survives_a_new_instance(self):
        user = CurrentUser("42", "ada@example.com", "Ada")
        TokenStore(self.path).save("a", "r", user)

        store = TokenStore(self.path)
        self.assertEqual(store.access_token, "a")
        self.assertEqual(store.refresh_token, "r")
        self.assertEqual(store.user, user)
        self.assertEqual(restore_state(store).status, SessionStatus.AUTHENTICATED)

    def test_set_access_token_keeps_refresh_token(self):
        store = TokenStore(self.path)
        store.save("a", "r", None)
        store.set_access_token("b")
        self.assertEqual((store.access_token, store.refresh_token), ("b", "r"))

    def test_corrupt_file_means_no_session(self):
        self.path.parent.mkdir(parents=True)
        self.path.write_text("{not json")
        store = TokenStore(self.path)
        self.assertIsNone(store.access_token)
        self.assertEqual(restore_state(store).status, SessionStatus.UNAUTHENTICATED)

    def test_clear(self):
        store = TokenStore(self.path)
        store.save("a", "r", None)
        store.clear()
        store.clear()
        self.assertFalse(self.path.exists())


class TestSessionManager(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = TokenStore(Path(self.tmp.name) / "session.json")
        self.http = MagicMock()
        self.manager = SessionManager(ApiClient(self.store, base_url="http://api.test", http=self.http))

    def tearDown(self):
        self.tmp.cleanup()

    def auth_body(self, user_id=42, token_user_id="42"):
        return {
            "accessToken": make_token(token_user_id),
            "refreshToken": make_token(token_user_id, "refresh"),
            "user": {"id": user_id, "email": "ada@example.com", "name": "Ada"},
            "message": "Login successful",
        }

    def test_login_takes_id_from_token_and_email_as_typed(self):
        self.http.request.return_value = make_response(200, self.auth_body())

        user = self.manager.login("Ada@Example.com", "Secret123")

        self.assertEqual(user, CurrentUser(id="42", email="Ada@Example.com", name="Ada"))
        self.assertEqual(self.manager.get_current_user(), user)
        self.assertEqual(self.manager.state.status, SessionStatus.AUTHENTICATED)
        self.assertEqual(self.store.user, user)
        sent = self.http.request.call_args
        self.assertEqual(sent.args[1], "http://api.test/api/auth/login")
        self.assertNotIn("Authorization", sent.kwargs["headers"])

    def test_failed_login_stores_nothing(self):
        self.http.request.return_value = make_response(401, {"error": "Invalid email or password"})

        with self.assertRaises(InvalidCredentialsError) as ctx:
            self.manager.login("ada@example.com", "wrong")

        self.assertEqual(ctx.exception.message, "Invalid email or password")
        self.assertIsNone(self.store.access_token)
        self.assertIsNone(self.store.refresh_token)
        self.assertEqual(self.manager.state.status, SessionStatus.UNAUTHENTICATED)
        self.assertIsNone(self.manager.get_current_user())

    def test_user_that_does_not_match_token_is_rejected(self):
        self.http.request.return_value = make_response(200, self.auth_body(user_id=7, token_user_id="42"))

        with self.assertRaises(AuthenticationError):
            self.manager.login("ada@example.com", "Secret123")

        self.assertIsNone(self.store.access_token)
        self.assertEqual(self.manager.state.status, SessionStatus.UNAUTHENTICATED)

    def test_register_signs_in(self):
        self.http.request.return_value = make_response(201, self.auth_body())

        user = self.manager.register("ada@example.com", "Secret123", " Ada ")

        self.assertEqual(user.id, "42")
        self.assertEqual(self.http.request.call_args.kwargs["json"]["name"], "Ada")
        self.assertIsNotNone(self.store.refresh_token)

    def test_logout_clears_even_when_server_is_down(self):
        self.store.save("a", "r", CurrentUser("42", "ada@example.com", "Ada"))
        self.http.request.side_effect = requests.ConnectionError("down")

        self.assertFalse(self.manager.logout())

        self.assertIsNone(self.store.access_token)
        self.assertEqual(self.manager.state.status, SessionStatus.UNAUTHENTICATED)

    def test_logout_acknowledged(self):
        self.store.save("a", "r", None)
        self.http.request.return_value = make_response(200, {"message": "Logged out successfully"})

        self.assertTrue(self.manager.logout())
        self.assertEqual(self.http.request.call_args.kwargs["headers"]["Authorization"], "Bearer a")


class TestFailedReLogin(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = TokenStore(Path(self.tmp.name) / "session.json")
        self.store.save(make_token(), make_token(token_type="refresh"), CurrentUser("42", "ada@example.com", "Ada"))
        self.http = MagicMock()

    def tearDown(self):
        self.tmp.cleanup()

    def urls(self):
        return [c.args[1] for c in self.http.request.call_args_list]

    def test_failed_login_over_a_live_session_ends_it(self):
        manager = SessionManager(ApiClient(self.store, base_url="http://api.test", http=self.http))
        self.assertEqual(manager.state.status, SessionStatus.AUTHENTICATED)
        self.http.request.return_value = make_response(401, {"error": "Invalid email or password"})

        with self.assertRaises(InvalidCredentialsError):
            manager.login("ada@example.com", "wrong")

        self.assertIsNone(self.store.access_token)
        self.assertIsNone(self.store.refresh_token)
        self.assertEqual(manager.state.status, SessionStatus.UNAUTHENTICATED)

        with self.assertRaises(SessionExpiredError):
            manager.client.get("/api/projects")

        self.assertNotIn("http://api.test/api/auth/refresh", self.urls())
        self.assertEqual(manager.state.status, SessionStatus.UNAUTHENTICATED)

    def test_401_while_unauthenticated_expires_instead_of_refreshing(self):
        client = ApiClient(self.store, state=SessionState(), base_url="http://api.test", http=self.http)
        self.http.request.return_value = make_response(401, {"error": "Access token required"})

        with self.assertRaises(SessionExpiredError):
            client.get("/api/projects")

        self.assertEqual(self.urls(), ["http://api.test/api/projects"])
        self.assertIsNone(self.store.refresh_token)
        self.assertEqual(client.state.status, SessionStatus.UNAUTHENTICATED)


if __name__ == "__main__":
    unittest.main()
