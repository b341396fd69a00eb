"""Session store - The persisted (token, user) pair"""

import logging
from typing import Any, Optional, Union

from pydantic import ValidationError as SchemaError

from ...exceptions import ValidationError
from ...storage import KeyValueStore
from .schemas import AuthResponse, AuthUser

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Authentication state container.

    token and user are always set and cleared together; a half-populated
    state is never observable, including after rehydration.
    """

    def __init__(self, storage: KeyValueStore, key: str):
        self.storage = storage
        self.key = key
        self._token: Optional[str] = None
        self._user: Optional[AuthUser] = None
        self._rehydrate()

    def _rehydrate(self) -> None:
        stored = self.storage.get(self.key)
        if not stored:
            return
        if not isinstance(stored, dict) or not stored.get("token") or stored.get("user") is None:
            logger.warning("⚠️ Ignoring incomplete stored session")
            return
        try:
            user = AuthUser.model_validate(stored["user"])
        except SchemaError as e:
            logger.warning(f"⚠️ Ignoring unreadable stored session user: {e}")
            return
        if not user.id:
            logger.warning("⚠️ Ignoring stored session user without an id")
            return
        self._token = stored["token"]
        self._user = user
        logger.debug("🔐 Session restored from storage")

    def _persist(self) -> None:
        if self._token is None:
            payload = {"token": None, "user": None}
        else:
            payload = {"token": self._token, "user": self._user.model_dump(mode="json", by_alias=True, exclude_none=True)}
        if not self.storage.set(self.key, payload):
            logger.warning(f"⚠️ Session could not be persisted under '{self.key}'")

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def user(self) -> Optional[AuthUser]:
        return self._user

    def is_authenticated(self) -> bool:
        return bool(self._token)

    def login(self, payload: Union[AuthResponse, dict]) -> AuthUser:
        """Start a session from a login/register response"""
        if isinstance(payload, dict):
            try:
                payload = AuthResponse.model_validate(payload)
            except SchemaError as e:
                raise ValidationError("Invalid authentication response") from e
        if not payload.token:
            raise ValidationError("Authentication response has no token")
        if not payload.user.id:
            raise ValidationError("Authentication response has no user id")

        self._token = payload.token
        self._user = payload.user
        self._persist()
        logger.info(f"🔐 Session started for user {payload.user.id}")
        return payload.user

    def logout(self) -> None:
        if self._token is None and self._user is None:
            return
        self._token = None
        self._user = None
        self._persist()
        logger.info("🔒 Session cleared")

    def update_user(self, **fields: Any) -> Optional[AuthUser]:
        """Merge profile fields into the current user; ignored when anonymous"""
        if self._user is None:
            return None
        merged = {**self._user.model_dump(), **fields}
        if "_id" in merged:
            merged["id"] = merged.pop("_id")
        self._user = AuthUser.model_validate(merged)
        self._persist()
        return self._user
