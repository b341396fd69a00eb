from .schemas import AuthResponse, AuthUser
from .store import SessionStore

__all__ = ["AuthResponse", "AuthUser", "SessionStore"]
