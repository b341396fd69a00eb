"""Tests for the session store: paired token/user state and its persistence"""
import pytest

from fixzep.config import AUTH_STORAGE_KEY
from fixzep.domain.session import AuthResponse, SessionStore
from fixzep.exceptions import ValidationError
from fixzep.storage import MemoryStore

from .conftest import AUTH_RESPONSE


class TestLoginLogout:
    def test_starts_anonymous(self, session: SessionStore):
        assert session.token is None
        assert session.user is None
        assert not session.is_authenticated()

    def test_login_sets_token_and_user_together(self, session: SessionStore):
        # Act
        user = session.login(AUTH_RESPONSE)

        # Assert
        assert session.token == "tok-123"
        assert session.user.id == "u1"
        assert user.email == "asha@example.com"
        assert session.is_authenticated()

    def test_login_accepts_model(self, session: SessionStore):
        session.login(AuthResponse.model_validate(AUTH_RESPONSE))

        assert session.user.name == "Asha"

    def test_logout_clears_both(self, session: SessionStore):
        session.login(AUTH_RESPONSE)

        session.logout()

        assert session.token is None
        assert session.user is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"token": "", "user": {"_id": "u1"}},
            {"token": "tok"},
            {"user": {"_id": "u1"}},
            {"token": "t", "user": {}},
        ],
    )
    def test_incomplete_auth_response_is_rejected(self, session: SessionStore, payload):
        with pytest.raises(ValidationError):
            session.login(payload)

        assert session.token is None
        assert session.user is None


class TestUpdateUser:
    def test_merges_fields(self, session: SessionStore):
        session.login(AUTH_RESPONSE)

        session.update_user(name="Asha K", phone="9000000000")

        assert session.user.name == "Asha K"
        assert session.user.phone == "9000000000"
        assert session.user.email == "asha@example.com"
        assert session.token == "tok-123"

    def test_ignored_when_anonymous(self, session: SessionStore):
        assert session.update_user(name="Ghost") is None
        assert session.user is None


class TestPersistence:
    def test_restart_restores_session(self, storage: MemoryStore, session: SessionStore):
        session.login(AUTH_RESPONSE)

        reloaded = SessionStore(storage, AUTH_STORAGE_KEY)

        assert reloaded.token == "tok-123"
        assert reloaded.user.id == "u1"
        assert reloaded.user.role == "customer"

    def test_restart_keeps_user_with_only_an_id(self, storage: MemoryStore, session: SessionStore):
        session.login({"token": "t", "user": {"_id": "u9"}})

        reloaded = SessionStore(storage, AUTH_STORAGE_KEY)

        assert reloaded.token == "t"
        assert reloaded.user.id == "u9"

    def test_stored_user_without_id_rehydrates_anonymous(self, storage: MemoryStore):
        storage.set(AUTH_STORAGE_KEY, {"token": "t", "user": {}})

        reloaded = SessionStore(storage, AUTH_STORAGE_KEY)

        assert reloaded.token is None
        assert reloaded.user is None

    def test_restart_after_logout_is_anonymous(self, storage: MemoryStore, session: SessionStore):
        session.login(AUTH_RESPONSE)
        session.logout()

        reloaded = SessionStore(storage, AUTH_STORAGE_KEY)

        assert not reloaded.is_authenticated()
        assert reloaded.user is None

    @pytest.mark.parametrize(
        "stored",
        [
            {"token": "tok-123", "user": None},
            {"token": None, "user": {"_id": "u1"}},
            "garbage",
        ],
    )
    def test_half_stored_session_rehydrates_anonymous(self, storage: MemoryStore, stored):
        storage.set(AUTH_STORAGE_KEY, stored)

        reloaded = SessionStore(storage, AUTH_STORAGE_KEY)

        assert reloaded.token is None
        assert reloaded.user is None
