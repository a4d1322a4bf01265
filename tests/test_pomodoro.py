# tests/test_pomodoro.py

from __future__ import annotations

import pytest

from focusboard.timer.pomodoro import PomodoroTimer, TimerPhase

from .fakes import FakeNotifier


def test_defaults() -> None:
    timer = PomodoroTimer()
    assert timer.phase == TimerPhase.WORK
    assert not timer.running
    assert timer.remaining_seconds == 25 * 60
    assert timer.format_remaining() == "25:00"
    assert timer.progress() == 0.0


def test_full_work_session_flips_to_break_once() -> None:
    notifier = FakeNotifier()
    timer = PomodoroTimer(25, 5, on_notify=notifier)
    timer.start()

    completions = [timer.tick() for _ in range(1500)]

    assert completions.count(True) == 1
    assert completions[-1] is True
    assert timer.phase == TimerPhase.BREAK
    assert not timer.running
    assert timer.remaining_seconds == 5 * 60
    assert timer.completed_sessions == 1
    assert [n.title for n in notifier.received] == ["Time for a break!"]
    assert notifier.received[0].body == "Take a 5 minute break"


def test_break_completion_returns_to_work() -> None:
    notifier = FakeNotifier()
    timer = PomodoroTimer(1, 1, on_notify=notifier)
    timer.start()
    for _ in range(60):
        timer.tick()
    timer.start()
    for _ in range(60):
        timer.tick()

    assert timer.phase == TimerPhase.WORK
    assert timer.remaining_seconds == 60
    assert notifier.received[-1].title == "Back to work!"
    assert notifier.received[-1].body == "Start your 1 minute focus session"


def test_tick_is_noop_while_paused() -> None:
    timer = PomodoroTimer()
    assert timer.tick() is False
    assert timer.remaining_seconds == 1500

    timer.start()
    timer.tick()
    timer.pause()
    timer.tick()
    assert timer.remaining_seconds == 1499


def test_start_and_pause_are_idempotent() -> None:
    timer = PomodoroTimer()
    timer.pause()
    assert not timer.running
    timer.start()
    timer.start()
    assert timer.running
    timer.toggle()
    assert not timer.running


def test_reset_in_break_uses_break_duration() -> None:
    timer = PomodoroTimer(25, 5)
    timer.session_complete()
    timer.start()
    for _ in range(30):
        timer.tick()

    timer.reset()

    assert timer.phase == TimerPhase.BREAK
    assert not timer.running
    assert timer.remaining_seconds == 5 * 60


def test_apply_settings_forces_fresh_work_phase() -> None:
    timer = PomodoroTimer(25, 5)
    timer.session_complete()
    timer.start()

    timer.apply_settings(50, 10)

    assert timer.phase == TimerPhase.WORK
    assert not timer.running
    assert timer.remaining_seconds == 50 * 60
    assert (timer.work_minutes, timer.break_minutes) == (50, 10)


@pytest.mark.parametrize("work, brk", [(0, 5), (61, 5), (25, 0), (25, 31)])
def test_apply_settings_rejects_out_of_range(work: int, brk: int) -> None:
    timer = PomodoroTimer()
    with pytest.raises(ValueError):
        timer.apply_settings(work, brk)
    assert (timer.work_minutes, timer.break_minutes) == (25, 5)


def test_remaining_never_negative() -> None:
    timer = PomodoroTimer(1, 1)
    timer.start()
    for _ in range(500):
        timer.tick()
        assert 0 <= timer.remaining_seconds <= 60


def test_progress_and_format() -> None:
    timer = PomodoroTimer(1, 1)
    timer.start()
    for _ in range(15):
        timer.tick()
    assert timer.format_remaining() == "00:45"
    assert timer.progress() == pytest.approx(0.25)


def test_failing_notifier_does_not_break_transition() -> None:
    def boom(_note) -> None:
        raise RuntimeError("display gone")

    timer = PomodoroTimer(1, 1, on_notify=boom)
    timer.start()
    for _ in range(60):
        timer.tick()
    assert timer.phase == TimerPhase.BREAK


def test_snapshot_reflects_current_phase() -> None:
    timer = PomodoroTimer(1, 1)
    timer.start()
    for _ in range(30):
        timer.tick()

    snap = timer.snapshot()

    assert snap.phase == TimerPhase.WORK
    assert snap.running
    assert snap.remaining == "00:30"
    assert snap.progress == pytest.approx(0.5)
    assert snap.completed_sessions == 0

    for _ in range(30):
        timer.tick()
    assert timer.snapshot().completed_sessions == 1
