# src/focusboard/timer/ticker.py

"""
Once-per-second driver for PomodoroTimer.

The countdown coroutine only exists while the timer runs:
- start()                      -> acquire a countdown task
- pause() / reset() / settings -> cancel it
- phase completion             -> the coroutine returns on its own
- stop()                       -> cancel it and shut the loop down

The console REPL is blocking (input()), so PomodoroTicker keeps its own
event loop in a background thread.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import threading
from typing import ContextManager

from .pomodoro import PomodoroTimer

logger = logging.getLogger(__name__)


async def run_countdown(
    timer: PomodoroTimer,
    *,
    interval_seconds: float = 1.0,
    lock: ContextManager | None = None,
) -> None:
    """
    Tick `timer` every interval_seconds until it stops running.

    Returns when the timer is paused from outside or when a tick completes
    the current phase. To stop it early, cancel the coroutine/task.
    """
    interval = max(0.001, float(interval_seconds))
    guard = lock if lock is not None else contextlib.nullcontext()

    while True:
        await asyncio.sleep(interval)
        with guard:
            if not timer.running:
                logger.debug("Countdown released: timer paused")
                return
            if timer.tick():
                logger.debug("Countdown released: phase complete")
                return


class PomodoroTicker:
    """Owns the background loop and the (at most one) live countdown task."""

    def __init__(
        self,
        timer: PomodoroTimer,
        *,
        interval_seconds: float = 1.0,
        lock: ContextManager | None = None,
    ) -> None:
        self.timer = timer
        self.lock = lock or threading.RLock()
        self._interval = float(interval_seconds)
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._task: asyncio.Task[None] | None = None

    # ---- background loop ----

    def launch(self) -> None:
        if self._thread is not None:
            return

        ready = threading.Event()

        def runner() -> None:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            self._loop = loop
            ready.set()
            try:
                loop.run_forever()
            finally:
                with contextlib.suppress(Exception):
                    loop.run_until_complete(loop.shutdown_asyncgens())
                loop.close()

        self._thread = threading.Thread(target=runner, name="pomodoro-ticker", daemon=True)
        self._thread.start()
        if not ready.wait(timeout=5.0):
            raise RuntimeError("Pomodoro ticker thread did not start")
        logger.info("Pomodoro ticker started (interval=%ss).", self._interval)

    def _run(self, coro) -> None:
        if self._loop is None:
            coro.close()
            raise RuntimeError("PomodoroTicker.launch() has not been called")
        asyncio.run_coroutine_threadsafe(coro, self._loop).result(timeout=5.0)

    async def _acquire(self) -> None:
        if self._task is not None and not self._task.done():
            return
        self._task = asyncio.get_running_loop().create_task(
            run_countdown(self.timer, interval_seconds=self._interval, lock=self.lock)
        )

    async def _release(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    @property
    def active(self) -> bool:
        """True while a countdown task is alive."""
        return self._task is not None and not self._task.done()

    # ---- timer controls (thread-safe) ----

    def start(self) -> None:
        with self.lock:
            self.timer.start()
        self._run(self._acquire())

    def pause(self) -> None:
        with self.lock:
            self.timer.pause()
        self._run(self._release())

    def toggle(self) -> None:
        with self.lock:
            running = self.timer.running
        if running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        with self.lock:
            self.timer.reset()
        self._run(self._release())

    def apply_settings(self, work_minutes: int, break_minutes: int) -> None:
        with self.lock:
            self.timer.apply_settings(work_minutes, break_minutes)
        self._run(self._release())

    # ---- teardown ----

    def stop(self) -> None:
        loop = self._loop
        if loop is None:
            return
        with contextlib.suppress(Exception):
            self._run(self._release())
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(loop.stop)

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def __enter__(self) -> PomodoroTicker:
        self.launch()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
        self.join(timeout=5.0)
