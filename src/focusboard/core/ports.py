# src/focusboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the storage backend and the password check swappable and
makes testing easier.
"""

from typing import Protocol


class KeyValueBackend(Protocol):
    """
    Persistent string-to-string store (the record store sits on top of it).

    `get` returns None for a missing key; `remove` on a missing key is a no-op.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...
    def clear(self) -> None: ...


class PasswordVerifier(Protocol):
    """Single place where a stored password is compared with a login attempt."""

    def verify(self, stored: str, given: str) -> bool: ...
