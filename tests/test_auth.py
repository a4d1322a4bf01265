# tests/test_auth.py

from __future__ import annotations

from focusboard.auth.service import AuthService
from focusboard.storage.models import Role, User
from focusboard.storage.record_store import CURRENT_USER, USERS, RecordStore


def test_register_sets_session_and_strips_password(memory_store: RecordStore) -> None:
    auth = AuthService(memory_store)

    user = auth.register("ada@uni.edu", "secret", "Ada")

    assert isinstance(user, User)
    assert user.role == Role.USER
    assert not hasattr(user, "password")
    assert auth.get_current_user() == user
    assert "password" not in (memory_store.read_object(CURRENT_USER) or {})

    (stored,) = memory_store.read(USERS)
    assert stored == {"id": user.id, "email": "ada@uni.edu", "password": "secret", "name": "Ada", "role": "user"}


def test_register_duplicate_email_returns_none_and_keeps_record(memory_store: RecordStore) -> None:
    auth = AuthService(memory_store)
    first = auth.register("ada@uni.edu", "secret", "Ada", Role.ADMIN)
    assert first is not None
    before = memory_store.read(USERS)

    again = auth.register("ada@uni.edu", "other", "Imposter")

    assert again is None
    assert memory_store.read(USERS) == before
    assert auth.get_current_user() == first


def test_login_matches_exact_password(memory_store: RecordStore) -> None:
    auth = AuthService(memory_store)
    registered = auth.register("ada@uni.edu", "secret", "Ada")
    auth.logout()

    assert auth.login("ada@uni.edu", "Secret") is None
    assert auth.login("nobody@uni.edu", "secret") is None
    assert auth.get_current_user() is None

    user = auth.login("ada@uni.edu", "secret")
    assert user == registered
    assert auth.is_authenticated()
    assert "password" not in user.to_record()


def test_logout_clears_session_only(memory_store: RecordStore) -> None:
    auth = AuthService(memory_store)
    auth.register("ada@uni.edu", "secret", "Ada")

    auth.logout()

    assert auth.get_current_user() is None
    assert not auth.is_authenticated()
    assert len(memory_store.read(USERS)) == 1


def test_password_check_goes_through_verifier(memory_store: RecordStore) -> None:
    class ReversedVerifier:
        def __init__(self) -> None:
            self.calls: list[tuple[str, str]] = []

        def verify(self, stored: str, given: str) -> bool:
            self.calls.append((stored, given))
            return stored == given[::-1]

    verifier = ReversedVerifier()
    auth = AuthService(memory_store, verifier=verifier)
    auth.register("ada@uni.edu", "abc", "Ada")
    auth.logout()

    assert auth.login("ada@uni.edu", "cba") is not None
    assert verifier.calls == [("abc", "cba")]
