# src/focusboard/views/board.py

"""
Read-only helpers behind the dashboard, kanban and calendar screens.

Everything here takes repository output and returns plain values; nothing
writes back to storage.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from ..storage.models import Task, TaskCategory, TaskPriority, TaskStatus

UPCOMING_LIMIT = 5

_CATEGORY_COLORS = {
    TaskCategory.ASSIGNMENTS: "blue",
    TaskCategory.EXAMS: "red",
    TaskCategory.LECTURES: "purple",
    TaskCategory.PERSONAL: "green",
}

_PRIORITY_COLORS = {
    TaskPriority.HIGH: "red",
    TaskPriority.MEDIUM: "yellow",
    TaskPriority.LOW: "green",
}


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    in_progress: int
    completed: int
    overdue: int


@dataclass(slots=True, frozen=True)
class Urgency:
    text: str
    is_urgent: bool


def parse_due_date(raw: str | None) -> date | None:
    """Accept 'YYYY-MM-DD' or a full ISO timestamp; None for empty or garbage."""
    if not raw:
        return None
    text = raw.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def is_overdue(task: Task, today: date) -> bool:
    due = parse_due_date(task.due_date)
    return task.status != TaskStatus.DONE and due is not None and due < today


def task_stats(tasks: Iterable[Task], today: date) -> TaskStats:
    items = list(tasks)
    return TaskStats(
        total=len(items),
        in_progress=sum(1 for t in items if t.status == TaskStatus.IN_PROGRESS),
        completed=sum(1 for t in items if t.status == TaskStatus.DONE),
        overdue=sum(1 for t in items if is_overdue(t, today)),
    )


def upcoming_deadlines(tasks: Iterable[Task], limit: int = UPCOMING_LIMIT) -> list[Task]:
    """Open tasks with a due date, soonest first."""
    dated: list[tuple[date, Task]] = []
    for t in tasks:
        if t.status == TaskStatus.DONE:
            continue
        due = parse_due_date(t.due_date)
        if due is not None:
            dated.append((due, t))
    dated.sort(key=lambda pair: pair[0])
    return [t for _, t in dated[: max(0, int(limit))]]


def deadline_urgency(due: date, today: date) -> Urgency:
    days = (due - today).days
    if days < 0:
        return Urgency("Overdue", True)
    if days == 0:
        return Urgency("Due today", True)
    if days == 1:
        return Urgency("Due tomorrow", True)
    if days <= 7:
        return Urgency(f"{days} days left", False)
    return Urgency(f"{calendar.month_abbr[due.month]} {due.day}, {due.year}", False)


def group_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    """Kanban columns in board order (Todo, In Progress, Done)."""
    columns: dict[TaskStatus, list[Task]] = {s: [] for s in TaskStatus}
    for t in tasks:
        columns[t.status].append(t)
    return columns


def tasks_on(tasks: Iterable[Task], day: date) -> list[Task]:
    return [t for t in tasks if parse_due_date(t.due_date) == day]


def month_grid(year: int, month: int) -> list[list[date]]:
    """Weeks (Sunday first) covering the whole month, padded with neighbour days."""
    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)
    days = list(cal.itermonthdates(year, month))
    return [days[i : i + 7] for i in range(0, len(days), 7)]


def category_color(category: TaskCategory | str) -> str:
    try:
        return _CATEGORY_COLORS[TaskCategory(category)]
    except ValueError:
        return "gray"


def priority_color(priority: TaskPriority | str) -> str:
    try:
        return _PRIORITY_COLORS[TaskPriority(priority)]
    except ValueError:
        return "gray"
