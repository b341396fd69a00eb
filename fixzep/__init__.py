"""Fixzep customer client: cart, session and authenticated API access"""

from .exceptions import ApiError, AuthenticationRequired, FixzepError, UnauthorizedError, ValidationError
from .main import ClientContext, configure_logging, create_context

__all__ = [
    "ApiError",
    "AuthenticationRequired",
    "ClientContext",
    "FixzepError",
    "UnauthorizedError",
    "ValidationError",
    "configure_logging",
    "create_context",
]
