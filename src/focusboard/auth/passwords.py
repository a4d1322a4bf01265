# src/focusboard/auth/passwords.py

from __future__ import annotations


class PlaintextPasswordVerifier:
    """
    Exact string comparison against the stored password.

    Passwords are kept in plaintext in the `users` collection. Swap this class
    for a salted-hash verifier to change that; AuthService only calls verify().
    """

    def verify(self, stored: str, given: str) -> bool:
        return stored == given
