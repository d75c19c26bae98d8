# cli/core/auth.py
import logging
from typing import Optional

from jose import JWTError, jwt

from .api import ApiClient
from .errors import AuthenticationError, InvalidCredentialsError, PortfoliumError
from .session import CurrentUser

logger = logging.getLogger(__name__)


def decode_token_claims(token: str) -> dict:
    """
    Read the payload of a JWT without verifying it. The server is the one
    that verifies signatures; the client only needs the claims.
    """
    try:
        return jwt.get_unverified_claims(token)
    except JWTError as exc:
        raise AuthenticationError(401, f"Malformed access token: {exc}") from exc


class SessionManager:
    """
    Login, registration and logout on top of an ApiClient.

    The user kept in memory is built from two sources: ``id`` comes from the
    access token's ``id`` claim (the only identity claim the server signs),
    ``email`` is the value the caller typed and ``name`` comes from the
    response body. A response body whose ``user.id`` disagrees with the token
    is rejected.
    """

    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def state(self):
        return self.client.state

    @property
    def store(self):
        return self.client.store

    def _establish(self, body: dict, email: str) -> CurrentUser:
        access_token = body.get("accessToken")
        refresh_token = body.get("refreshToken")
        if not access_token:
            raise AuthenticationError(401, "Server did not return an access token")

        claims = decode_token_claims(access_token)
        token_user_id = claims.get("id")
        if token_user_id is None:
            raise AuthenticationError(401, "Access token has no user id")

        user_body = body.get("user") or {}
        if "id" in user_body and str(user_body["id"]) != str(token_user_id):
            raise AuthenticationError(401, "Access token does not belong to the returned user")

        user = CurrentUser(id=str(token_user_id), email=email, name=user_body.get("name", ""))
        self.store.save(access_token, refresh_token, user)
        self.state.authenticated(user)
        return user

    def _abandon(self) -> None:
        # A failed (re-)login ends any previous session too, so that the
        # state and the stored tokens never disagree
        self.store.clear()
        self.state.reset()

    def _authenticate(self, path: str, payload: dict, email: str) -> CurrentUser:
        self.state.begin_authentication()
        try:
            body = self.client.post(path, json=payload, authenticated=False)
        except AuthenticationError as exc:
            self._abandon()
            raise InvalidCredentialsError(exc.status_code, exc.message) from exc
        except PortfoliumError:
            self._abandon()
            raise

        try:
            return self._establish(body, email)
        except PortfoliumError:
            self._abandon()
            raise

    def login(self, email: str, password: str) -> CurrentUser:
        """
        Login with email and password. On failure no token is stored.
        """
        logger.debug("Login requested")
        return self._authenticate("/api/auth/login", {"email": email.strip(), "password": password}, email)

    def register(self, email: str, password: str, name: str) -> CurrentUser:
        return self._authenticate(
            "/api/auth/register",
            {"email": email.strip(), "password": password, "name": name.strip()},
            email,
        )

    def get_current_user(self) -> Optional[CurrentUser]:
        if self.state.user is not None:
            return self.state.user
        if self.state.is_authenticated:
            return self.store.user
        return None

    def logout(self) -> bool:
        """
        Best-effort server logout, then unconditional local cleanup.
        Returns whether the server acknowledged the logout.
        """
        acknowledged = False
        if self.store.access_token:
            try:
                self.client.post("/api/auth/logout")
                acknowledged = True
            except PortfoliumError as exc:
                logger.warning("Logout API error (continuing anyway): %s", exc)

        self.store.clear()
        self.state.reset()
        return acknowledged
