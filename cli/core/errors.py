# cli/core/errors.py
from typing import Optional


class PortfoliumError(Exception):
    """Base class for every error the client raises."""


class ApiError(PortfoliumError):
    """Non-success HTTP response. The message is the body's "error" field when present."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class AuthenticationError(ApiError):
    pass


class InvalidCredentialsError(AuthenticationError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ServerError(ApiError):
    pass


class NetworkError(PortfoliumError):
    """The request never produced an HTTP response (connection refused, timeout...)."""


class SessionExpiredError(PortfoliumError):
    """The session was dropped to unauthenticated; the user must login again."""


_BY_STATUS = {
    400: ValidationError,
    401: AuthenticationError,
    404: NotFoundError,
}


def error_for_status(status_code: int, body: Optional[dict] = None, default: Optional[str] = None) -> ApiError:
    message = None
    if isinstance(body, dict):
        message = body.get("error") or body.get("detail")
    if not message:
        message = default or f"Request failed with status {status_code}"
    if status_code in _BY_STATUS:
        cls = _BY_STATUS[status_code]
    elif status_code >= 500:
        cls = ServerError
    else:
        cls = ApiError
    return cls(status_code, str(message))
