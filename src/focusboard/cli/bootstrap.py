# src/focusboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key-value backend, record store, repositories, auth and the
  Pomodoro ticker into AppState.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import get_settings
from ..core.clock import IdGenerator, utc_now
from ..core.ports import KeyValueBackend
from ..core.state import AppState
from ..auth.service import AuthService
from ..storage.backends import InMemoryKeyValueBackend, SqliteKeyValueBackend
from ..storage.record_store import NOTES, QUICK_NOTES, TASKS, USERS, RecordStore
from ..storage.repositories import NoteRepository, QuickNoteRepository, TaskRepository
from ..timer.pomodoro import DEFAULT_BREAK_MINUTES, DEFAULT_WORK_MINUTES, PomodoroTimer, TimerNotification
from ..timer.ticker import PomodoroTicker

logger = logging.getLogger(__name__)

ID_COLLECTIONS = (USERS, TASKS, NOTES, QUICK_NOTES)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.store_backend == "sqlite":
        settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def create_backend(settings) -> KeyValueBackend:
    if settings.store_backend == "memory":
        logger.info("Using in-memory store (nothing will be saved).")
        return InMemoryKeyValueBackend()
    return SqliteKeyValueBackend(settings.store_path)


def _create_timer(
    settings,
    on_notify: Callable[[TimerNotification], None] | None,
) -> PomodoroTimer:
    try:
        return PomodoroTimer(settings.work_minutes, settings.break_minutes, on_notify=on_notify)
    except (TypeError, ValueError) as e:
        logger.warning("Bad Pomodoro settings (%s); using %s/%s minutes.", e, DEFAULT_WORK_MINUTES, DEFAULT_BREAK_MINUTES)
        return PomodoroTimer(on_notify=on_notify)


def create_initial_state(
    *,
    settings=None,
    backend: KeyValueBackend | None = None,
    on_notify: Callable[[TimerNotification], None] | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if backend is None:
        _ensure_local_dirs(settings)
        backend = create_backend(settings)

    store = RecordStore(backend)
    # One generator for every collection keeps ids strictly increasing process-wide.
    ids = IdGenerator(utc_now)
    ids.observe(rec.get("id") for coll in ID_COLLECTIONS for rec in store.read(coll))

    timer = _create_timer(settings, on_notify)
    ticker = PomodoroTicker(timer, interval_seconds=settings.tick_seconds)

    return AppState(
        settings=settings,
        store=store,
        auth=AuthService(store, ids=ids),
        tasks=TaskRepository(store, ids=ids),
        notes=NoteRepository(store, ids=ids),
        quick_notes=QuickNoteRepository(store, ids=ids),
        ticker=ticker,
    )
