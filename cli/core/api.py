import logging
import threading
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from .config import BASE_URL, REQUEST_TIMEOUT, SESSION_FILE
from .errors import NetworkError, ServerError, SessionExpiredError, error_for_status
from .session import SessionState, SessionStatus, TokenStore, restore_state

logger = logging.getLogger(__name__)


@dataclass
class OutgoingRequest:
    method: str
    path: str
    json: Any = None
    params: Optional[dict] = None
    retried: bool = False
    headers: dict = field(default_factory=dict)


class ApiClient:
    """
    HTTP client for the PortFolium API.

    Every authenticated call carries ``Authorization: Bearer <access token>``.
    When a call comes back 401 and has not been retried yet, the client marks
    it as retried, exchanges the refresh token for a new access token and
    replays the call exactly once. If there is no refresh token, or the
    refresh fails for any reason (including network errors), both tokens are
    cleared, the session drops to unauthenticated and SessionExpiredError is
    raised.
    """

    def __init__(
        self,
        store: TokenStore,
        state: Optional[SessionState] = None,
        base_url: str = BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        http: Any = None,
    ):
        self.store = store
        self.state = state if state is not None else restore_state(store)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http if http is not None else requests.Session()
        self._refresh_lock = threading.Lock()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _send(self, request: OutgoingRequest, access_token: Optional[str]):
        headers = dict(request.headers)
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        logger.debug("%s %s (retried=%s)", request.method, request.path, request.retried)
        try:
            return self.http.request(
                request.method,
                self._url(request.path),
                json=request.json,
                params=request.params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"{request.method} {request.path} failed: {exc}") from exc

    @staticmethod
    def _body(response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    def _handle(self, response) -> Any:
        body = self._body(response)
        if 200 <= response.status_code < 300:
            return body
        raise error_for_status(response.status_code, body)

    def _expire_session(self) -> None:
        self.store.clear()
        self.state.reset()

    def _refresh_access_token(self, stale_token: Optional[str]) -> str:
        with self._refresh_lock:
            # Another request may already have refreshed while this one waited
            current = self.store.access_token
            if current and current != stale_token:
                return current

            if self.state.status is not SessionStatus.AUTHENTICATED:
                logger.info("Refresh requested while %s, ending session", self.state.status.value)
                self._expire_session()
                raise SessionExpiredError("Session expired. Please login again.")

            refresh_token = self.store.refresh_token
            if not refresh_token:
                logger.info("No refresh token available, ending session")
                self._expire_session()
                raise SessionExpiredError("Session expired. Please login again.")

            self.state.begin_refresh()
            try:
                response = self.http.request(
                    "POST",
                    self._url("/api/auth/refresh"),
                    json={"refreshToken": refresh_token},
                    timeout=self.timeout,
                )
            except requests.RequestException as exc:
                logger.warning("Token refresh failed (network): %s", exc)
                self._expire_session()
                raise SessionExpiredError("Session expired. Please login again.") from exc

            access_token = None
            if response.status_code == 200:
                access_token = self._body(response).get("accessToken")
            if not access_token:
                logger.info("Token refresh rejected with status %s", response.status_code)
                self._expire_session()
                raise SessionExpiredError("Session expired. Please login again.")

            self.store.set_access_token(access_token)
            self.state.refreshed()
            logger.debug("Access token refreshed")
            return access_token

    def authenticated_request(self, request: OutgoingRequest) -> Any:
        access_token = self.store.access_token
        response = self._send(request, access_token)

        if response.status_code == 401 and not request.retried:
            request.retried = True
            new_token = self._refresh_access_token(access_token)
            response = self._send(request, new_token)

        return self._handle(response)

    def request(self, method: str, path: str, json: Any = None, params: Optional[dict] = None, authenticated: bool = True) -> Any:
        request = OutgoingRequest(method=method, path=path, json=json, params=params)
        if not authenticated:
            return self._handle(self._send(request, None))
        return self.authenticated_request(request)

    def get(self, path: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, authenticated: bool = True) -> Any:
        return self.request("POST", path, json=json, authenticated=authenticated)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


def get_client() -> ApiClient:
    return ApiClient(TokenStore(SESSION_FILE))


# ==========================================
# Resource calls
# ==========================================

def _unwrap(body: Any, key: str) -> Any:
    """
    Pull the resource out of a {key: ...} envelope. A success response
    without it is reported as a server error.
    """
    if not isinstance(body, dict) or key not in body:
        raise ServerError(502, f"Malformed response from server: missing '{key}'")
    return body[key]


def api_list_projects(client: ApiClient, status: Optional[str] = None, archived: Optional[bool] = None) -> List[dict]:
    """
    List the projects of the authenticated user.
    """
    params = {}
    if status:
        params["status"] = status
    if archived is not None:
        params["archived"] = str(archived).lower()
    return _unwrap(client.get("/api/projects", params=params or None), "projects")


def api_get_project(client: ApiClient, project_id: int) -> dict:
    return _unwrap(client.get(f"/api/projects/{project_id}"), "project")


def api_create_project(client: ApiClient, project_data: dict) -> dict:
    return _unwrap(client.post("/api/projects", json=project_data), "project")


def api_update_project(client: ApiClient, project_id: int, update_data: dict) -> dict:
    """
    Partial update; the tracker only sends {"status": ...}.
    """
    return _unwrap(client.put(f"/api/projects/{project_id}", json=update_data), "project")


def api_update_projects_order(client: ApiClient, project_ids: List[int]) -> dict:
    return client.put("/api/projects/order", json={"projectIds": list(project_ids)})


def api_delete_project(client: ApiClient, project_id: int) -> dict:
    return client.delete(f"/api/projects/{project_id}")


def api_list_skills(client: ApiClient, category: Optional[str] = None) -> List[dict]:
    return client.get("/api/skills", params={"category": category} if category else None)


def api_create_skill(client: ApiClient, skill_data: dict) -> dict:
    return client.post("/api/skills", json=skill_data)


def api_delete_skill(client: ApiClient, skill_id: int) -> dict:
    return client.delete(f"/api/skills/{skill_id}")


def api_list_posts(client: ApiClient, published: Optional[bool] = None) -> List[dict]:
    params = {"published": str(published).lower()} if published is not None else None
    return client.get("/api/blog", params=params)


def api_update_post(client: ApiClient, post_id: int, update_data: dict) -> dict:
    return client.put(f"/api/blog/{post_id}", json=update_data)


def api_get_profile(client: ApiClient) -> dict:
    return client.get("/api/profile")


def api_update_profile(client: ApiClient, update_data: dict) -> dict:
    return client.put("/api/profile", json=update_data)


def api_add_experience(client: ApiClient, experience_data: dict) -> dict:
    return client.post("/api/profile/experience", json=experience_data)


def api_delete_experience(client: ApiClient, experience_id: int) -> dict:
    return client.delete(f"/api/profile/experience/{experience_id}")


def api_add_education(client: ApiClient, education_data: dict) -> dict:
    return client.post("/api/profile/education", json=education_data)


def api_delete_education(client: ApiClient, education_id: int) -> dict:
    return client.delete(f"/api/profile/education/{education_id}")


def api_list_collaborators(client: ApiClient) -> List[dict]:
    return _unwrap(client.get("/api/collaborators"), "collaborators")


def api_create_collaborator(client: ApiClient, collaborator_data: dict) -> dict:
    return _unwrap(client.post("/api/collaborators", json=collaborator_data), "collaborator")


def api_update_collaborator(client: ApiClient, collaborator_id: int, update_data: dict) -> dict:
    return _unwrap(client.put(f"/api/collaborators/{collaborator_id}", json=update_data), "collaborator")


def api_delete_collaborator(client: ApiClient, collaborator_id: int) -> dict:
    return client.delete(f"/api/collaborators/{collaborator_id}")


def api_collaborator_stats(client: ApiClient) -> List[dict]:
    return _unwrap(client.get("/api/collaborators/stats/summary"), "stats")


def api_get_home_content(client: ApiClient) -> dict:
    return _unwrap(client.get("/api/home-content"), "homeContent")


def api_update_home_content(client: ApiClient, update_data: dict) -> dict:
    return _unwrap(client.put("/api/home-content", json=update_data), "homeContent")
