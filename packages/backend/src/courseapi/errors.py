"""API error hierarchy.

Every failure a route reports to the client is one of these. Routes raise,
the handlers in api.error_handlers turn them into JSON responses.

Response shapes:
- ValidationError → {"errors": [...]}
- everything else → {"message": "..."}
"""

from typing import Optional

ACCESS_DENIED = "Access Denied"
COURSE_NOT_FOUND = "Sorry, there is no course with that id."


class ApiError(Exception):
    """Base exception for errors that map to a 4xx response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return None

    def to_response(self) -> dict:
        return {"message": self.message}


class ValidationError(ApiError):
    """Payload failed one or more field rules. Carries every message."""

    status_code = 400

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)

    def to_response(self) -> dict:
        return {"errors": self.errors}


class AuthenticationError(ApiError):
    """Credentials missing or wrong.

    The message is fixed: callers must not be able to tell an unknown
    email from a wrong password.
    """

    status_code = 401

    def __init__(self, realm: str = "courses"):
        super().__init__(ACCESS_DENIED)
        self.realm = realm

    @property
    def headers(self) -> Optional[dict[str, str]]:
        return {"WWW-Authenticate": f'Basic realm="{self.realm}"'}


class AuthorizationError(ApiError):
    """Authenticated user does not own the resource."""

    status_code = 403


class NotFoundError(ApiError):
    status_code = 404
