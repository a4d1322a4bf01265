# src/focusboard/auth/service.py

from __future__ import annotations

import logging

from ..core.clock import IdGenerator
from ..core.ports import PasswordVerifier
from ..storage.models import Role, User
from ..storage.record_store import CURRENT_USER, USERS, RecordStore
from .passwords import PlaintextPasswordVerifier

logger = logging.getLogger(__name__)


class AuthService:
    """
    Users and the current-session pointer, stored next to the other collections.

    Failures are reported as None:
    - register() -> None when the email is already taken
    - login()    -> None when email/password do not match
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        verifier: PasswordVerifier | None = None,
        ids: IdGenerator | None = None,
    ) -> None:
        self._store = store
        self._verifier: PasswordVerifier = verifier or PlaintextPasswordVerifier()
        self._ids = ids or IdGenerator()

    def _set_session(self, user: User) -> None:
        self._store.write_object(CURRENT_USER, user.to_record())

    def register(self, email: str, password: str, name: str, role: Role | str = Role.USER) -> User | None:
        users = self._store.read(USERS)
        if any(u.get("email") == email for u in users):
            logger.info("Registration refused: email already registered (%s)", email)
            return None

        user = User(id=self._ids.next_id(), email=email, name=name, role=Role(role))
        users.append({**user.to_record(), "password": password})
        self._store.write(USERS, users)
        self._set_session(user)
        logger.info("Registered user id=%s role=%s", user.id, user.role.value)
        return user

    def login(self, email: str, password: str) -> User | None:
        for rec in self._store.read(USERS):
            if rec.get("email") != email:
                continue
            if self._verifier.verify(str(rec.get("password", "")), password):
                user = User.from_record(rec)
                self._set_session(user)
                logger.info("Logged in user id=%s", user.id)
                return user
        logger.info("Login failed for %s", email)
        return None

    def logout(self) -> None:
        self._store.remove(CURRENT_USER)
        logger.info("Logged out")

    def get_current_user(self) -> User | None:
        rec = self._store.read_object(CURRENT_USER)
        return User.from_record(rec) if rec else None

    def is_authenticated(self) -> bool:
        return self._store.read_object(CURRENT_USER) is not None
