# src/focusboard/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..auth.service import AuthService
from ..storage.models import User
from ..storage.record_store import RecordStore
from ..storage.repositories import NoteRepository, QuickNoteRepository, TaskRepository
from ..timer.ticker import PomodoroTicker
from .workspace import Workspace


@dataclass
class AppState:
    # Settings object (config.Settings or a test double with the same attributes).
    settings: Any

    store: RecordStore
    auth: AuthService
    tasks: TaskRepository
    notes: NoteRepository
    quick_notes: QuickNoteRepository
    ticker: PomodoroTicker

    # Serializes command handling. The ticker has its own lock; never hold this
    # one while calling into the ticker's loop.
    lock: threading.RLock = field(default_factory=threading.RLock)

    def current_user(self) -> User | None:
        return self.auth.get_current_user()

    def workspace(self) -> Workspace | None:
        user = self.auth.get_current_user()
        if user is None:
            return None
        return Workspace.load(user, tasks=self.tasks, notes=self.notes, quick_notes=self.quick_notes)
