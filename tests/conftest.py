# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from focusboard.cli.bootstrap import create_initial_state
from focusboard.core.clock import IdGenerator
from focusboard.core.state import AppState
from focusboard.storage.backends import InMemoryKeyValueBackend, SqliteKeyValueBackend
from focusboard.storage.record_store import RecordStore

from .fakes import StepClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="focusboard-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        store_backend="sqlite",
        store_path=tmp_path / "store.sqlite3",
        work_minutes=25,
        break_minutes=5,
        tick_seconds=0.01,
    )


@pytest.fixture()
def memory_store() -> RecordStore:
    return RecordStore(InMemoryKeyValueBackend())


@pytest.fixture()
def sqlite_store(tmp_path: Path) -> RecordStore:
    return RecordStore(SqliteKeyValueBackend(tmp_path / "store.sqlite3"))


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def ids(clock: StepClock) -> IdGenerator:
    return IdGenerator(clock)


@pytest.fixture()
def state(settings: SimpleNamespace) -> Iterator[AppState]:
    """
    AppState wired like the real app, on a tmp SQLite store.

    The ticker thread is launched so /timer commands work; it is torn down
    after each test.
    """
    app = create_initial_state(settings=settings)
    app.ticker.launch()
    try:
        yield app
    finally:
        app.ticker.stop()
        app.ticker.join(timeout=5.0)
