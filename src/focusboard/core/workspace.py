# src/focusboard/core/workspace.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..storage.models import Note, QuickNote, Task, User
from ..storage.repositories import NoteRepository, QuickNoteRepository, TaskRepository


@dataclass(slots=True)
class Workspace:
    """Everything one user can see on the dashboard."""

    user: User
    tasks: list[Task] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    quick_notes: list[QuickNote] = field(default_factory=list)

    @classmethod
    def load(
        cls,
        user: User,
        *,
        tasks: TaskRepository,
        notes: NoteRepository,
        quick_notes: QuickNoteRepository,
    ) -> Workspace:
        # Admins see every user's records.
        owner = None if user.is_admin else user.id
        return cls(
            user=user,
            tasks=tasks.list(owner),
            notes=notes.list(owner),
            quick_notes=quick_notes.list(owner),
        )
