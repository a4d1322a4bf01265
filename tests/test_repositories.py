# tests/test_repositories.py

from __future__ import annotations

import pytest

from focusboard.core.clock import IdGenerator, parse_timestamp
from focusboard.storage.models import Note, Task, TaskCategory, TaskPriority, TaskStatus
from focusboard.storage.record_store import NOTES, QUICK_NOTES, TASKS, RecordStore
from focusboard.storage.repositories import NoteRepository, QuickNoteRepository, TaskRepository

from .fakes import FrozenClock, StepClock


def test_add_task_scoped_by_owner(sqlite_store: RecordStore, clock: StepClock, ids: IdGenerator) -> None:
    repo = TaskRepository(sqlite_store, clock=clock, ids=ids)

    task = repo.add(
        user_id="u1",
        title="Essay",
        category="Assignments",
        priority="High",
        due_date="2025-01-01",
        status="Todo",
    )

    mine = repo.list("u1")
    assert mine == [task]
    assert task.id
    assert task.created_at.endswith("Z")
    assert task.title == "Essay"
    assert task.description == ""
    assert task.category == TaskCategory.ASSIGNMENTS
    assert task.priority == TaskPriority.HIGH
    assert task.status == TaskStatus.TODO
    assert task.due_date == "2025-01-01"

    assert repo.list("u2") == []


def test_add_persists_camel_case_layout(memory_store: RecordStore) -> None:
    repo = TaskRepository(memory_store)
    task = repo.add(user_id="u1", title="Read chapter 3", category=TaskCategory.LECTURES)

    (rec,) = memory_store.read(TASKS)
    assert rec == {
        "id": task.id,
        "userId": "u1",
        "title": "Read chapter 3",
        "description": "",
        "category": "Lectures",
        "status": "Todo",
        "priority": "Medium",
        "dueDate": None,
        "createdAt": task.created_at,
    }


def test_unscoped_list_returns_every_owner(memory_store: RecordStore) -> None:
    repo = TaskRepository(memory_store)
    a = repo.add(user_id="u1", title="A")
    b = repo.add(user_id="u2", title="B")

    assert [t.id for t in repo.list()] == [a.id, b.id]
    assert [t.id for t in repo.list("u2")] == [b.id]


def test_update_changes_only_given_field(memory_store: RecordStore) -> None:
    repo = TaskRepository(memory_store)
    task = repo.add(user_id="u1", title="Essay", description="2000 words", priority="High")
    other = repo.add(user_id="u1", title="Lab report")

    repo.update(task.id, status=TaskStatus.IN_PROGRESS)

    updated = repo.get(task.id)
    assert updated is not None
    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.title == task.title
    assert updated.description == task.description
    assert updated.priority == task.priority
    assert updated.created_at == task.created_at
    assert repo.get(other.id) == other


def test_update_unknown_id_is_silent_noop(memory_store: RecordStore) -> None:
    repo = TaskRepository(memory_store)
    task = repo.add(user_id="u1", title="Essay")
    before = memory_store.read(TASKS)

    repo.update("does-not-exist", title="Other")

    assert memory_store.read(TASKS) == before
    assert repo.list() == [task]


def test_update_rejects_unknown_or_immutable_fields(memory_store: RecordStore) -> None:
    repo = TaskRepository(memory_store)
    task = repo.add(user_id="u1", title="Essay")

    with pytest.raises(TypeError):
        repo.update(task.id, id="other")
    with pytest.raises(TypeError):
        repo.update(task.id, created_at="2020-01-01T00:00:00.000Z")
    assert repo.list() == [task]


def test_delete_is_idempotent(memory_store: RecordStore) -> None:
    repo = TaskRepository(memory_store)
    keep = repo.add(user_id="u1", title="Keep")
    drop = repo.add(user_id="u1", title="Drop")

    repo.delete(drop.id)
    repo.delete(drop.id)

    assert [t.id for t in repo.list()] == [keep.id]


def test_ids_unique_when_clock_does_not_move(memory_store: RecordStore) -> None:
    frozen = FrozenClock()
    repo = TaskRepository(memory_store, clock=frozen, ids=IdGenerator(frozen))

    created = [repo.add(user_id="u1", title=f"t{i}") for i in range(5)]

    assert len({t.id for t in created}) == 5
    assert [int(t.id) for t in created] == sorted(int(t.id) for t in created)


def test_note_add_sets_both_timestamps(memory_store: RecordStore, clock: StepClock, ids: IdGenerator) -> None:
    repo = NoteRepository(memory_store, clock=clock, ids=ids)

    note = repo.add(user_id="u1", title="Week 1", course="CS101", tags=["intro", "exam"], content="# Basics")

    assert repo.list("u1") == [note]
    assert note.created_at == note.updated_at
    assert note.tags == ["intro", "exam"]
    (rec,) = memory_store.read(NOTES)
    assert rec["tags"] == ["intro", "exam"]
    assert rec["updatedAt"] == rec["createdAt"]


def test_note_update_refreshes_updated_at(memory_store: RecordStore, clock: StepClock, ids: IdGenerator) -> None:
    repo = NoteRepository(memory_store, clock=clock, ids=ids)
    note = repo.add(user_id="u1", title="Week 1", course="CS101")

    repo.update(note.id, content="Recursion")

    updated = repo.get(note.id)
    assert isinstance(updated, Note)
    assert updated.content == "Recursion"
    assert updated.title == "Week 1"
    assert updated.course == "CS101"
    assert updated.created_at == note.created_at
    assert parse_timestamp(updated.updated_at) > parse_timestamp(note.updated_at)


def test_note_updated_at_strictly_increases_on_frozen_clock(memory_store: RecordStore) -> None:
    frozen = FrozenClock()
    repo = NoteRepository(memory_store, clock=frozen, ids=IdGenerator(frozen))
    note = repo.add(user_id="u1", title="Week 1")

    stamps = [note.updated_at]
    for i in range(3):
        repo.update(note.id, content=f"rev {i}")
        current = repo.get(note.id)
        assert current is not None
        stamps.append(current.updated_at)

    parsed = [parse_timestamp(s) for s in stamps]
    assert parsed == sorted(parsed)
    assert len(set(parsed)) == len(parsed)


def test_note_update_tags_replaces_list(memory_store: RecordStore) -> None:
    repo = NoteRepository(memory_store)
    note = repo.add(user_id="u1", title="Week 2", tags=["a"])

    repo.update(note.id, tags=["b", "c"])

    updated = repo.get(note.id)
    assert updated is not None
    assert updated.tags == ["b", "c"]


def test_quick_note_update_changes_content_only(memory_store: RecordStore) -> None:
    repo = QuickNoteRepository(memory_store)
    qn = repo.add(user_id="u1", content="buy coffee", color="#fef3c7")

    repo.update(qn.id, "buy tea")
    repo.update("missing", "ignored")

    (rec,) = memory_store.read(QUICK_NOTES)
    assert rec == {
        "id": qn.id,
        "userId": "u1",
        "content": "buy tea",
        "color": "#fef3c7",
        "createdAt": qn.created_at,
    }
    assert "updatedAt" not in rec


def test_lenient_decoding_of_stored_enums(memory_store: RecordStore) -> None:
    memory_store.write(
        TASKS,
        [{"id": "1", "userId": "u1", "title": "Old", "category": "Sports", "status": "Blocked", "priority": ""}],
    )

    (task,) = TaskRepository(memory_store).list("u1")
    assert isinstance(task, Task)
    assert task.category == TaskCategory.PERSONAL
    assert task.status == TaskStatus.TODO
    assert task.priority == TaskPriority.MEDIUM
    assert task.due_date is None


def test_id_generator_skips_past_observed_tokens() -> None:
    ids = IdGenerator(FrozenClock())
    now_ms = int(ids.next_id())

    ids.observe([str(now_ms + 500), "not-a-number", None, now_ms - 10])

    assert int(ids.next_id()) == now_ms + 501
