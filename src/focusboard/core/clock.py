# src/focusboard/core/clock.py

"""
Time helpers shared by the repositories and the auth service.

Timestamps are stored as ISO-8601 UTC strings with millisecond precision
and a trailing "Z" (e.g. 2025-01-01T09:30:00.000Z). Record ids are
millisecond epoch tokens.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(dt: datetime) -> str:
    dt = dt.astimezone(UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_timestamp(raw: str) -> datetime:
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def later_timestamp(previous: str | None, now: datetime) -> str:
    """Format `now`, bumped to 1ms after `previous` if the clock has not moved past it."""
    candidate = now.astimezone(UTC).replace(microsecond=(now.microsecond // 1000) * 1000)
    if previous:
        try:
            prev = parse_timestamp(previous)
        except ValueError:
            prev = None
        if prev is not None and candidate <= prev:
            candidate = prev + timedelta(milliseconds=1)
    return format_timestamp(candidate)


class IdGenerator:
    """
    Timestamp-derived record ids.

    Tokens are milliseconds since the epoch. Within one process the sequence
    is strictly increasing: two ids requested in the same millisecond get
    consecutive values.
    """

    def __init__(self, clock: Clock = utc_now) -> None:
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        now_ms = int(self._clock().timestamp() * 1000)
        with self._lock:
            value = max(now_ms, self._last + 1)
            self._last = value
        return str(value)

    def observe(self, tokens: Iterable[object]) -> None:
        """Never hand out a token at or below one already in storage."""
        highest = 0
        for token in tokens:
            try:
                highest = max(highest, int(str(token)))
            except ValueError:
                continue
        with self._lock:
            self._last = max(self._last, highest)
