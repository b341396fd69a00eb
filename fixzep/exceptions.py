"""Exception hierarchy for the Fixzep customer client"""

from typing import Any, Optional


class FixzepError(Exception):
    """Base class for all client errors"""

    pass


class ValidationError(FixzepError, ValueError):
    """Raised before a request is sent when input is missing or invalid"""

    pass


class AuthenticationRequired(FixzepError):
    """Raised when an action needs a logged-in session and there is none"""

    pass


class ApiError(FixzepError):
    """Raised for non-2xx responses and transport failures.

    status_code is None for transport-level failures (DNS, refused
    connection, timeout) where no response was received.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class UnauthorizedError(ApiError):
    """Raised for 401 responses, after the session has been cleared"""

    pass


def get_error_message(error: Any, fallback: str = "Something went wrong") -> str:
    """Best user-facing message for an error, string or payload"""
    if not error:
        return fallback
    if isinstance(error, str):
        return error
    if isinstance(error, ApiError):
        payload = error.payload if isinstance(error.payload, dict) else {}
        return payload.get("message") or payload.get("error") or error.message or fallback
    if isinstance(error, Exception) and str(error):
        return str(error)
    return fallback
