# src/focusboard/storage/repositories.py

"""
Typed CRUD over the task / note / quick-note collections.

Every call is a read-modify-write of one whole collection:
- list(owner_id=None)  -> all records, or only those owned by owner_id
- add(...)             -> assigns id + timestamps, appends, persists
- update(id, ...)      -> merges fields; unknown id is a silent no-op
- delete(id)           -> removes if present; idempotent
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import StrEnum
from typing import Any, Generic, TypeVar

from ..core.clock import Clock, IdGenerator, format_timestamp, later_timestamp, utc_now
from .models import Note, QuickNote, Task, TaskCategory, TaskPriority, TaskStatus
from .record_store import NOTES, QUICK_NOTES, TASKS, Record, RecordStore

logger = logging.getLogger(__name__)

E = TypeVar("E", Task, Note, QuickNote)


def _plain(value: Any) -> Any:
    if isinstance(value, StrEnum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return value


class _CollectionRepository(Generic[E]):
    collection: str
    # python attribute name -> stored record key, for fields update() may change
    updatable: dict[str, str] = {}
    # fields coerced to an enum on add/update
    coercers: dict[str, Callable[[Any], Any]] = {}

    def __init__(
        self,
        store: RecordStore,
        *,
        clock: Clock = utc_now,
        ids: IdGenerator | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._ids = ids or IdGenerator(clock)

    def _decode(self, rec: Record) -> E:
        raise NotImplementedError

    def _records(self) -> list[Record]:
        return self._store.read(self.collection)

    def _save(self, records: Iterable[Record]) -> None:
        self._store.write(self.collection, records)

    def _coerce(self, name: str, value: Any) -> Any:
        fn = self.coercers.get(name)
        return fn(value) if fn is not None and value is not None else value

    def _encode_changes(self, changes: dict[str, Any]) -> Record:
        bad = sorted(k for k in changes if k not in self.updatable)
        if bad:
            raise TypeError(f"{type(self).__name__}.update() got unsupported field(s): {', '.join(bad)}")
        return {self.updatable[k]: _plain(self._coerce(k, v)) for k, v in changes.items()}

    def _now(self) -> str:
        return format_timestamp(self._clock())

    def list(self, owner_id: str | None = None) -> list[E]:
        records = self._records()
        if owner_id is not None:
            records = [r for r in records if r.get("userId") == owner_id]
        return [self._decode(r) for r in records]

    def get(self, entity_id: str) -> E | None:
        for rec in self._records():
            if rec.get("id") == entity_id:
                return self._decode(rec)
        return None

    def _append(self, entity: E) -> E:
        records = self._records()
        records.append(entity.to_record())
        self._save(records)
        logger.debug("%s added id=%s user=%s", self.collection, entity.id, entity.user_id)
        return entity

    def _merge(self, entity_id: str, patch: Record, *, touch: str | None = None) -> bool:
        records = self._records()
        for i, rec in enumerate(records):
            if rec.get("id") != entity_id:
                continue
            merged = {**rec, **patch}
            if touch:
                merged[touch] = later_timestamp(rec.get(touch), self._clock())
            records[i] = merged
            self._save(records)
            logger.debug("%s updated id=%s fields=%s", self.collection, entity_id, sorted(patch))
            return True
        logger.debug("%s update ignored, unknown id=%s", self.collection, entity_id)
        return False

    def delete(self, entity_id: str) -> None:
        records = self._records()
        kept = [r for r in records if r.get("id") != entity_id]
        if len(kept) != len(records):
            logger.debug("%s deleted id=%s", self.collection, entity_id)
        self._save(kept)


class TaskRepository(_CollectionRepository[Task]):
    collection = TASKS
    updatable = {
        "user_id": "userId",
        "title": "title",
        "description": "description",
        "category": "category",
        "status": "status",
        "priority": "priority",
        "due_date": "dueDate",
    }
    coercers = {
        "category": TaskCategory,
        "status": TaskStatus,
        "priority": TaskPriority,
    }

    def _decode(self, rec: Record) -> Task:
        return Task.from_record(rec)

    def add(
        self,
        *,
        user_id: str,
        title: str,
        description: str = "",
        category: TaskCategory | str = TaskCategory.PERSONAL,
        status: TaskStatus | str = TaskStatus.TODO,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        due_date: str | None = None,
    ) -> Task:
        task = Task(
            id=self._ids.next_id(),
            user_id=user_id,
            title=title,
            description=description,
            category=TaskCategory(category),
            status=TaskStatus(status),
            priority=TaskPriority(priority),
            due_date=due_date or None,
            created_at=self._now(),
        )
        return self._append(task)

    def update(self, task_id: str, **changes: Any) -> None:
        """Merge `changes` into the task; no-op when task_id is unknown."""
        self._merge(task_id, self._encode_changes(changes))


class NoteRepository(_CollectionRepository[Note]):
    collection = NOTES
    updatable = {
        "user_id": "userId",
        "title": "title",
        "course": "course",
        "tags": "tags",
        "content": "content",
    }

    def _decode(self, rec: Record) -> Note:
        return Note.from_record(rec)

    def add(
        self,
        *,
        user_id: str,
        title: str,
        course: str = "",
        tags: Iterable[str] | None = None,
        content: str = "",
    ) -> Note:
        now = self._now()
        note = Note(
            id=self._ids.next_id(),
            user_id=user_id,
            title=title,
            course=course,
            content=content,
            created_at=now,
            updated_at=now,
            tags=[str(t) for t in (tags or [])],
        )
        return self._append(note)

    def update(self, note_id: str, **changes: Any) -> None:
        """Merge `changes` and refresh updatedAt; no-op when note_id is unknown."""
        self._merge(note_id, self._encode_changes(changes), touch="updatedAt")


class QuickNoteRepository(_CollectionRepository[QuickNote]):
    collection = QUICK_NOTES
    updatable = {"content": "content"}

    def _decode(self, rec: Record) -> QuickNote:
        return QuickNote.from_record(rec)

    def add(self, *, user_id: str, content: str, color: str) -> QuickNote:
        qn = QuickNote(
            id=self._ids.next_id(),
            user_id=user_id,
            content=content,
            color=color,
            created_at=self._now(),
        )
        return self._append(qn)

    def update(self, quick_note_id: str, content: str) -> None:
        self._merge(quick_note_id, {"content": content})
