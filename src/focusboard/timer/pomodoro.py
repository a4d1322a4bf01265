# src/focusboard/timer/pomodoro.py

"""
Pomodoro countdown state machine.

States are {paused, running} x {WORK, BREAK}. The machine itself has no
clock: whoever drives it calls tick() once per elapsed second while it is
running (see ticker.py).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5
MAX_WORK_MINUTES = 60
MAX_BREAK_MINUTES = 30


class TimerPhase(StrEnum):
    WORK = "work"
    BREAK = "break"

    @property
    def label(self) -> str:
        return "Focus Time" if self is TimerPhase.WORK else "Break Time"


@dataclass(slots=True, frozen=True)
class TimerNotification:
    phase: TimerPhase
    title: str
    body: str


@dataclass(slots=True, frozen=True)
class TimerSnapshot:
    """Consistent copy of the timer, taken under the ticker lock and rendered outside it."""

    phase: TimerPhase
    running: bool
    remaining: str
    progress: float
    work_minutes: int
    break_minutes: int
    completed_sessions: int


def _check_minutes(name: str, value: int, upper: int) -> int:
    minutes = int(value)
    if not 1 <= minutes <= upper:
        raise ValueError(f"{name} must be between 1 and {upper} minutes, got {value!r}")
    return minutes


class PomodoroTimer:
    def __init__(
        self,
        work_minutes: int = DEFAULT_WORK_MINUTES,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        *,
        on_notify: Callable[[TimerNotification], None] | None = None,
    ) -> None:
        self.work_minutes = _check_minutes("work_minutes", work_minutes, MAX_WORK_MINUTES)
        self.break_minutes = _check_minutes("break_minutes", break_minutes, MAX_BREAK_MINUTES)
        self.phase = TimerPhase.WORK
        self.running = False
        self.remaining_seconds = self.work_minutes * 60
        self.on_notify = on_notify
        self.completed_sessions = 0

    # ---- derived values ----

    def duration_minutes(self, phase: TimerPhase) -> int:
        return self.work_minutes if phase is TimerPhase.WORK else self.break_minutes

    @property
    def phase_seconds(self) -> int:
        return self.duration_minutes(self.phase) * 60

    def progress(self) -> float:
        """Fraction of the current phase already elapsed (0.0 .. 1.0)."""
        total = self.phase_seconds
        return (total - self.remaining_seconds) / total

    def format_remaining(self) -> str:
        mins, secs = divmod(self.remaining_seconds, 60)
        return f"{mins:02d}:{secs:02d}"

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(
            phase=self.phase,
            running=self.running,
            remaining=self.format_remaining(),
            progress=self.progress(),
            work_minutes=self.work_minutes,
            break_minutes=self.break_minutes,
            completed_sessions=self.completed_sessions,
        )

    # ---- transitions ----

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        logger.debug("Timer started phase=%s remaining=%s", self.phase.value, self.remaining_seconds)

    def pause(self) -> None:
        if not self.running:
            return
        self.running = False
        logger.debug("Timer paused phase=%s remaining=%s", self.phase.value, self.remaining_seconds)

    def toggle(self) -> None:
        if self.running:
            self.pause()
        else:
            self.start()

    def tick(self) -> bool:
        """Count one second down. Returns True if this tick finished the phase."""
        if not self.running or self.remaining_seconds <= 0:
            return False
        self.remaining_seconds -= 1
        if self.remaining_seconds == 0:
            self.session_complete()
            return True
        return False

    def session_complete(self) -> TimerNotification:
        self.running = False
        finished = self.phase
        self.phase = TimerPhase.BREAK if finished is TimerPhase.WORK else TimerPhase.WORK
        self.remaining_seconds = self.phase_seconds
        if finished is TimerPhase.WORK:
            self.completed_sessions += 1

        if self.phase is TimerPhase.BREAK:
            note = TimerNotification(
                phase=self.phase,
                title="Time for a break!",
                body=f"Take a {self.break_minutes} minute break",
            )
        else:
            note = TimerNotification(
                phase=self.phase,
                title="Back to work!",
                body=f"Start your {self.work_minutes} minute focus session",
            )
        logger.info("Pomodoro phase finished=%s next=%s", finished.value, self.phase.value)

        if self.on_notify is not None:
            try:
                self.on_notify(note)
            except Exception:
                logger.exception("Timer notification callback failed.")
        return note

    def reset(self) -> None:
        self.running = False
        self.remaining_seconds = self.phase_seconds

    def apply_settings(self, work_minutes: int, break_minutes: int) -> None:
        work = _check_minutes("work_minutes", work_minutes, MAX_WORK_MINUTES)
        brk = _check_minutes("break_minutes", break_minutes, MAX_BREAK_MINUTES)
        self.work_minutes = work
        self.break_minutes = brk
        self.running = False
        self.phase = TimerPhase.WORK
        self.remaining_seconds = work * 60
        logger.info("Timer settings applied work=%s break=%s", work, brk)
