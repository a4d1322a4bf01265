# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from focusboard.timer.pomodoro import TimerNotification


class StepClock:
    """
    Deterministic clock for repository tests.

    Every call returns the current instant and then moves it forward by `step`.
    """

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.now = start or datetime(2025, 1, 1, 9, 0, 0, tzinfo=UTC)
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        self.calls += 1
        return current


class FrozenClock:
    """Clock that never moves (exercises the same-millisecond paths)."""

    def __init__(self, instant: datetime | None = None) -> None:
        self.instant = instant or datetime(2025, 1, 1, 9, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.instant


@dataclass(slots=True)
class FakeNotifier:
    """Records timer notifications for assertions."""

    received: list[TimerNotification] = field(default_factory=list)

    def __call__(self, note: TimerNotification) -> None:
        self.received.append(note)
