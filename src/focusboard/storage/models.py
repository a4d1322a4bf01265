# src/focusboard/storage/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class Role(StrEnum):
    ADMIN = "admin"
    USER = "user"

    @classmethod
    def from_db(cls, raw: str | None) -> Role:
        if not raw:
            return cls.USER
        try:
            return cls(raw)
        except ValueError:
            return cls.USER


class TaskCategory(StrEnum):
    ASSIGNMENTS = "Assignments"
    EXAMS = "Exams"
    LECTURES = "Lectures"
    PERSONAL = "Personal"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskCategory:
        if not raw:
            return cls.PERSONAL
        try:
            return cls(raw)
        except ValueError:
            return cls.PERSONAL


class TaskStatus(StrEnum):
    """Kanban column of a task. Order of declaration is the board order."""

    TODO = "Todo"
    IN_PROGRESS = "In Progress"
    DONE = "Done"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.TODO
        try:
            return cls(raw)
        except ValueError:
            return cls.TODO


class TaskPriority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskPriority:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


@dataclass(slots=True)
class User:
    """Password-stripped view of a stored user."""

    id: str
    email: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role.value}

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> User:
        return cls(
            id=str(rec.get("id") or ""),
            email=str(rec.get("email") or ""),
            name=str(rec.get("name") or ""),
            role=Role.from_db(rec.get("role")),
        )


@dataclass(slots=True)
class Task:
    id: str
    user_id: str
    title: str
    description: str
    category: TaskCategory
    status: TaskStatus
    priority: TaskPriority
    due_date: str | None
    created_at: str

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "status": self.status.value,
            "priority": self.priority.value,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Task:
        return cls(
            id=str(rec.get("id") or ""),
            user_id=str(rec.get("userId") or ""),
            title=str(rec.get("title") or ""),
            description=str(rec.get("description") or ""),
            category=TaskCategory.from_db(rec.get("category")),
            status=TaskStatus.from_db(rec.get("status")),
            priority=TaskPriority.from_db(rec.get("priority")),
            due_date=rec.get("dueDate") or None,
            created_at=str(rec.get("createdAt") or ""),
        )


@dataclass(slots=True)
class Note:
    id: str
    user_id: str
    title: str
    course: str
    content: str
    created_at: str
    updated_at: str
    tags: list[str] = field(default_factory=list)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "course": self.course,
            "tags": list(self.tags),
            "content": self.content,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> Note:
        tags = rec.get("tags")
        return cls(
            id=str(rec.get("id") or ""),
            user_id=str(rec.get("userId") or ""),
            title=str(rec.get("title") or ""),
            course=str(rec.get("course") or ""),
            content=str(rec.get("content") or ""),
            created_at=str(rec.get("createdAt") or ""),
            updated_at=str(rec.get("updatedAt") or ""),
            tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        )


@dataclass(slots=True)
class QuickNote:
    id: str
    user_id: str
    content: str
    color: str
    created_at: str

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "content": self.content,
            "color": self.color,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_record(cls, rec: dict[str, Any]) -> QuickNote:
        return cls(
            id=str(rec.get("id") or ""),
            user_id=str(rec.get("userId") or ""),
            content=str(rec.get("content") or ""),
            color=str(rec.get("color") or ""),
            created_at=str(rec.get("createdAt") or ""),
        )
