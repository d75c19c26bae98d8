# cli/core/session.py
import json
import threading
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str
    name: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "CurrentUser":
        return cls(id=str(data["id"]), email=data["email"], name=data.get("name", ""))


class SessionStatus(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"


# Dropping to UNAUTHENTICATED is always allowed
_TRANSITIONS = {
    SessionStatus.UNAUTHENTICATED: {SessionStatus.AUTHENTICATING},
    SessionStatus.AUTHENTICATING: {SessionStatus.AUTHENTICATED},
    SessionStatus.AUTHENTICATED: {SessionStatus.AUTHENTICATING, SessionStatus.REFRESHING},
    SessionStatus.REFRESHING: {SessionStatus.AUTHENTICATED},
}


class InvalidTransitionError(RuntimeError):
    pass


class SessionState:
    """
    Client session state machine:

        UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED
        AUTHENTICATED -> REFRESHING -> AUTHENTICATED | UNAUTHENTICATED

    Only one refresh can be in progress at a time; entering REFRESHING
    from REFRESHING is rejected.
    """

    def __init__(self, status: SessionStatus = SessionStatus.UNAUTHENTICATED, user: Optional[CurrentUser] = None):
        self._lock = threading.Lock()
        self._status = status
        self._user = user

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def user(self) -> Optional[CurrentUser]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._status in (SessionStatus.AUTHENTICATED, SessionStatus.REFRESHING)

    def _move(self, new_status: SessionStatus) -> None:
        if new_status is not SessionStatus.UNAUTHENTICATED and new_status not in _TRANSITIONS[self._status]:
            raise InvalidTransitionError(f"Cannot go from {self._status.value} to {new_status.value}")
        self._status = new_status

    def begin_authentication(self) -> None:
        with self._lock:
            self._move(SessionStatus.AUTHENTICATING)

    def authenticated(self, user: Optional[CurrentUser]) -> None:
        with self._lock:
            self._move(SessionStatus.AUTHENTICATED)
            self._user = user

    def begin_refresh(self) -> None:
        with self._lock:
            self._move(SessionStatus.REFRESHING)

    def refreshed(self) -> None:
        with self._lock:
            self._move(SessionStatus.AUTHENTICATED)

    def reset(self) -> None:
        with self._lock:
            self._move(SessionStatus.UNAUTHENTICATED)
            self._user = None


class TokenStore:
    """
    Keeps the access token, the refresh token and the cached user in a JSON
    file, so that a session survives between CLI invocations.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            # An unreadable file means there is no valid session
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def save(self, access_token: str, refresh_token: Optional[str], user: Optional[CurrentUser]) -> None:
        data = {"access_token": access_token}
        if refresh_token:
            data["refresh_token"] = refresh_token
        if user is not None:
            data["user"] = user.to_dict()
        with self._lock:
            self._write(data)

    def set_access_token(self, access_token: str) -> None:
        with self._lock:
            data = self._read()
            data["access_token"] = access_token
            self._write(data)

    @property
    def access_token(self) -> Optional[str]:
        with self._lock:
            return self._read().get("access_token")

    @property
    def refresh_token(self) -> Optional[str]:
        with self._lock:
            return self._read().get("refresh_token")

    @property
    def user(self) -> Optional[CurrentUser]:
        with self._lock:
            data = self._read().get("user")
        if not data:
            return None
        try:
            return CurrentUser.from_dict(data)
        except (KeyError, TypeError):
            return None

    def clear(self) -> None:
        """
        Delete the session file, ending the local session.
        """
        with self._lock:
            if self.path.exists():
                self.path.unlink()


def restore_state(store: TokenStore) -> SessionState:
    """
    Session state for a new process: authenticated when tokens are on disk.
    """
    if store.access_token or store.refresh_token:
        return SessionState(SessionStatus.AUTHENTICATED, store.user)
    return SessionState()
