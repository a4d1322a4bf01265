# src/focusboard/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import shlex
from collections.abc import Callable
from datetime import date
from enum import StrEnum
from typing import Protocol, TypeVar, cast

from ..core.state import AppState
from ..storage.models import Note, QuickNote, Role, Task, TaskCategory, TaskPriority, TaskStatus, User
from ..views.board import (
    category_color,
    deadline_urgency,
    group_by_status,
    month_grid,
    parse_due_date,
    priority_color,
    task_stats,
    tasks_on,
    upcoming_deadlines,
)
from ..views.notes import parse_tags, pick_quick_note_color, search_notes

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

NOT_LOGGED_IN = "Not logged in. Use /login <email> <password> or /register."

EnumT = TypeVar("EnumT", bound=StrEnum)
RecordT = TypeVar("RecordT", Task, Note, QuickNote)


class _Lookup(Protocol[RecordT]):
    def get(self, entity_id: str) -> RecordT | None: ...


class CommandError(Exception):
    """Bad arguments; the message is shown to the user as the reply."""


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /task, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like '/command args "quoted arg"'.
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except CommandError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _split_fields(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """['Essay', 'due=2025-01-01'] -> (['Essay'], {'due': '2025-01-01'})"""
    positional: list[str] = []
    fields: dict[str, str] = {}
    for a in args:
        key, sep, value = a.partition("=")
        if sep and key.isidentifier():
            fields[key.lower()] = value
        else:
            positional.append(a)
    return positional, fields


def _enum_value(enum_cls: type[EnumT], raw: str, aliases: dict[str, EnumT] | None = None) -> EnumT:
    token = raw.strip().lower()
    if aliases and token in aliases:
        return aliases[token]
    for member in enum_cls:
        if member.value.lower() == token:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise CommandError(f"Unknown value '{raw}'. Expected one of: {allowed}.")


_STATUS_ALIASES = {
    "todo": TaskStatus.TODO,
    "progress": TaskStatus.IN_PROGRESS,
    "in-progress": TaskStatus.IN_PROGRESS,
    "doing": TaskStatus.IN_PROGRESS,
    "done": TaskStatus.DONE,
}


def _due(raw: str) -> str | None:
    if not raw:
        return None
    if parse_due_date(raw) is None:
        raise CommandError(f"Bad due date '{raw}'. Use YYYY-MM-DD.")
    return raw


def _task_changes(fields: dict[str, str]) -> dict[str, object]:
    changes: dict[str, object] = {}
    for key, value in fields.items():
        if key == "title":
            changes["title"] = value
        elif key in ("desc", "description"):
            changes["description"] = value
        elif key in ("cat", "category"):
            changes["category"] = _enum_value(TaskCategory, value)
        elif key in ("prio", "priority"):
            changes["priority"] = _enum_value(TaskPriority, value)
        elif key == "status":
            changes["status"] = _enum_value(TaskStatus, value, _STATUS_ALIASES)
        elif key == "due":
            changes["due_date"] = _due(value)
        else:
            raise CommandError(f"Unknown task field '{key}'.")
    return changes


def _note_changes(fields: dict[str, str]) -> dict[str, object]:
    changes: dict[str, object] = {}
    for key, value in fields.items():
        if key in ("title", "course", "content"):
            changes[key] = value
        elif key == "tags":
            changes["tags"] = parse_tags(value)
        else:
            raise CommandError(f"Unknown note field '{key}'.")
    return changes


def _require_user(state: AppState) -> User:
    user = state.current_user()
    if user is None:
        raise CommandError(NOT_LOGGED_IN)
    return user


def _owned(user: User, repo: _Lookup[RecordT], entity_id: str, kind: str) -> RecordT:
    """Fetch a record the user may touch; admins may touch any."""
    entity = repo.get(entity_id)
    if entity is None or (not user.is_admin and entity.user_id != user.id):
        raise CommandError(f"No {kind} {entity_id}.")
    return entity


def _format_task(task: Task, today: date) -> str:
    line = f"[{task.id}] {task.title} ({task.category.value}, {task.priority.value})"
    due = parse_due_date(task.due_date)
    if due is not None:
        line += f" due {due.isoformat()}"
        if task.status != TaskStatus.DONE:
            line += f" - {deadline_urgency(due, today).text}"
    return line


def _timer_line(state: AppState) -> str:
    with state.ticker.lock:
        snap = state.ticker.timer.snapshot()
    mode = "running" if snap.running else "paused"
    return (
        f"{snap.phase.label} {snap.remaining} ({mode}, {snap.progress:.0%} done) | "
        f"work {snap.work_minutes} / break {snap.break_minutes} min | "
        f"sessions done: {snap.completed_sessions}"
    )


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    user = state.current_user()
    who = f"{user.name} <{user.email}> ({user.role.value})" if user else "nobody"
    backend = getattr(settings, "store_backend", "sqlite")
    where = f" at {settings.store_path}" if backend == "sqlite" else ""
    return (
        "Status:\n"
        f"  Store: {backend}{where}\n"
        f"  Logged in: {who}\n"
        f"  Timer: {_timer_line(state)}"
    )


def cmd_register(state: AppState, args: list[str]) -> str:
    """/register <email> <password> <name> [--admin]"""
    role = Role.ADMIN if "--admin" in args else Role.USER
    rest = [a for a in args if a != "--admin"]
    if len(rest) < 3:
        return "Usage: /register <email> <password> <name> [--admin]"
    email, password, name = rest[0], rest[1], " ".join(rest[2:])
    user = state.auth.register(email, password, name, role)
    if user is None:
        return f"Email {email} is already registered."
    return f"Welcome, {user.name}! Registered and logged in as {user.role.value}."


def cmd_login(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /login <email> <password>"
    user = state.auth.login(args[0], args[1])
    if user is None:
        return "Invalid email or password."
    return f"Logged in as {user.name}."


def cmd_logout(state: AppState, args: list[str]) -> str:
    state.auth.logout()
    return "Logged out."


def cmd_whoami(state: AppState, args: list[str]) -> str:
    user = _require_user(state)
    return f"{user.name} <{user.email}> id={user.id} role={user.role.value}"


def cmd_tasks(state: AppState, args: list[str]) -> str:
    """/tasks [status] -> kanban board, optionally one column"""
    ws = state.workspace()
    if ws is None:
        return NOT_LOGGED_IN
    today = date.today()
    columns = group_by_status(ws.tasks)
    if args:
        wanted = _enum_value(TaskStatus, " ".join(args), _STATUS_ALIASES)
        columns = {wanted: columns[wanted]}

    lines: list[str] = []
    for status, items in columns.items():
        lines.append(f"{status.value} ({len(items)})")
        lines.extend(f"  {_format_task(t, today)}" for t in items)
    return "\n".join(lines)


def cmd_task(state: AppState, args: list[str]) -> str:
    """
    /task add <title> [category=..] [priority=..] [due=YYYY-MM-DD] [status=..] [desc=..]
    /task show <id>
    /task edit <id> field=value ...
    /task move <id> <todo|progress|done>
    /task rm <id>
    """
    usage = (
        "Usage:\n"
        "  /task add <title> [category=..] [priority=..] [due=YYYY-MM-DD] [status=..] [desc=..]\n"
        "  /task show <id>\n"
        "  /task edit <id> field=value ...\n"
        "  /task move <id> <todo|progress|done>\n"
        "  /task rm <id>"
    )
    if not args:
        return usage
    user = _require_user(state)
    sub, rest = args[0].lower(), args[1:]
    positional, fields = _split_fields(rest)

    if sub == "add":
        changes = _task_changes(fields)
        title = " ".join(positional) or str(changes.pop("title", ""))
        changes.pop("title", None)
        if not title:
            return "Usage: /task add <title> [field=value ...]"
        task = state.tasks.add(user_id=user.id, title=title, **changes)  # type: ignore[arg-type]
        return f"Added task [{task.id}] {task.title}."

    if sub == "show":
        if len(positional) != 1:
            return "Usage: /task show <id>"
        task = _owned(user, state.tasks, positional[0], "task")
        lines = [
            f"[{task.id}] {task.title}",
            f"  Status:   {task.status.value}",
            f"  Category: {task.category.value} ({category_color(task.category)})",
            f"  Priority: {task.priority.value} ({priority_color(task.priority)})",
        ]
        due = parse_due_date(task.due_date)
        if due is not None:
            lines.append(f"  Due:      {due.isoformat()} - {deadline_urgency(due, date.today()).text}")
        if task.description:
            lines.append(f"\n{task.description}")
        return "\n".join(lines)

    if sub == "edit":
        if len(positional) != 1 or not fields:
            return "Usage: /task edit <id> field=value ..."
        changes = _task_changes(fields)
        task = _owned(user, state.tasks, positional[0], "task")
        state.tasks.update(task.id, **changes)
        return f"Task {task.id} updated."

    if sub == "move":
        if len(positional) != 2:
            return "Usage: /task move <id> <todo|progress|done>"
        status = _enum_value(TaskStatus, positional[1], _STATUS_ALIASES)
        task = _owned(user, state.tasks, positional[0], "task")
        state.tasks.update(task.id, status=status)
        return f"Task {task.id} -> {status.value}."

    if sub in ("rm", "delete", "del"):
        if len(positional) != 1:
            return "Usage: /task rm <id>"
        task = _owned(user, state.tasks, positional[0], "task")
        state.tasks.delete(task.id)
        return f"Task {task.id} deleted."

    return usage


def cmd_notes(state: AppState, args: list[str]) -> str:
    ws = state.workspace()
    if ws is None:
        return NOT_LOGGED_IN
    found = search_notes(ws.notes, " ".join(args))
    if not found:
        return "No notes found."
    lines = []
    for n in found:
        tags = f" #{' #'.join(n.tags)}" if n.tags else ""
        course = f" [{n.course}]" if n.course else ""
        lines.append(f"[{n.id}] {n.title}{course}{tags} (updated {n.updated_at})")
    return "\n".join(lines)


def cmd_note(state: AppState, args: list[str]) -> str:
    usage = (
        "Usage:\n"
        "  /note add <title> [course=..] [tags=a,b] [content=..]\n"
        "  /note show <id>\n"
        "  /note edit <id> field=value ...\n"
        "  /note tag <id> <tag> [tag ...]\n"
        "  /note rm <id>"
    )
    if not args:
        return usage
    user = _require_user(state)
    sub, rest = args[0].lower(), args[1:]
    positional, fields = _split_fields(rest)

    if sub == "add":
        changes = _note_changes(fields)
        title = " ".join(positional) or str(changes.pop("title", ""))
        changes.pop("title", None)
        if not title:
            return "Usage: /note add <title> [field=value ...]"
        note = state.notes.add(user_id=user.id, title=title, **changes)  # type: ignore[arg-type]
        return f"Added note [{note.id}] {note.title}."

    if sub == "show":
        if len(positional) != 1:
            return "Usage: /note show <id>"
        note = _owned(user, state.notes, positional[0], "note")
        header = f"{note.title}" + (f" [{note.course}]" if note.course else "")
        tags = f"\nTags: {', '.join(note.tags)}" if note.tags else ""
        return f"{header}{tags}\n\n{note.content}"

    if sub == "edit":
        if len(positional) != 1 or not fields:
            return "Usage: /note edit <id> field=value ..."
        changes = _note_changes(fields)
        note = _owned(user, state.notes, positional[0], "note")
        state.notes.update(note.id, **changes)
        return f"Note {note.id} updated."

    if sub == "tag":
        if len(positional) < 2:
            return "Usage: /note tag <id> <tag> [tag ...]"
        note = _owned(user, state.notes, positional[0], "note")
        tags = list(note.tags)
        tags.extend(t for t in parse_tags(",".join(positional[1:])) if t not in tags)
        state.notes.update(note.id, tags=tags)
        return f"Note {note.id} tags: {', '.join(tags)}."

    if sub in ("rm", "delete", "del"):
        if len(positional) != 1:
            return "Usage: /note rm <id>"
        note = _owned(user, state.notes, positional[0], "note")
        state.notes.delete(note.id)
        return f"Note {note.id} deleted."

    return usage


def cmd_quick_notes(state: AppState, args: list[str]) -> str:
    """
    /qn              -> list
    /qn add <text>   -> new sticky note with a random colour
    /qn edit <id> <text>
    /qn rm <id>
    """
    user = _require_user(state)
    if not args:
        ws = state.workspace()
        items = ws.quick_notes if ws else []
        if not items:
            return "No quick notes yet. Add one with /qn add <text>."
        return "\n".join(f"[{q.id}] {q.content} ({q.color})" for q in items)

    sub, rest = args[0].lower(), args[1:]
    if sub == "add":
        text = " ".join(rest).strip()
        if not text:
            return "Usage: /qn add <text>"
        qn = state.quick_notes.add(user_id=user.id, content=text, color=pick_quick_note_color())
        return f"Added quick note [{qn.id}]."
    if sub == "edit":
        if len(rest) < 2:
            return "Usage: /qn edit <id> <text>"
        qn = _owned(user, state.quick_notes, rest[0], "quick note")
        state.quick_notes.update(qn.id, " ".join(rest[1:]))
        return f"Quick note {qn.id} updated."
    if sub in ("rm", "delete", "del"):
        if len(rest) != 1:
            return "Usage: /qn rm <id>"
        qn = _owned(user, state.quick_notes, rest[0], "quick note")
        state.quick_notes.delete(qn.id)
        return f"Quick note {qn.id} deleted."
    return "Usage: /qn | /qn add <text> | /qn edit <id> <text> | /qn rm <id>"


def cmd_stats(state: AppState, args: list[str]) -> str:
    ws = state.workspace()
    if ws is None:
        return NOT_LOGGED_IN
    s = task_stats(ws.tasks, date.today())
    return (
        f"Total tasks: {s.total}\n"
        f"In progress: {s.in_progress}\n"
        f"Completed:   {s.completed}\n"
        f"Overdue:     {s.overdue}"
    )


def cmd_deadlines(state: AppState, args: list[str]) -> str:
    ws = state.workspace()
    if ws is None:
        return NOT_LOGGED_IN
    items = upcoming_deadlines(ws.tasks)
    if not items:
        return "No upcoming deadlines."
    today = date.today()
    return "\n".join(_format_task(t, today) for t in items)


def cmd_calendar(state: AppState, args: list[str]) -> str:
    """/calendar [YYYY-MM] [day] -> month grid with task counts, or one day's tasks"""
    ws = state.workspace()
    if ws is None:
        return NOT_LOGGED_IN

    today = date.today()
    year, month = today.year, today.month
    day: int | None = None
    for a in args:
        if "-" in a:
            try:
                y, m = a.split("-", 1)
                year, month = int(y), int(m)
            except ValueError:
                return "Usage: /calendar [YYYY-MM] [day]"
        elif a.isdigit():
            day = int(a)
        else:
            return "Usage: /calendar [YYYY-MM] [day]"
    if not 1 <= month <= 12:
        return "Month must be between 1 and 12."

    if day is not None:
        try:
            target = date(year, month, day)
        except ValueError:
            return f"No such day: {year}-{month:02d}-{day:02d}."
        items = tasks_on(ws.tasks, target)
        if not items:
            return f"No tasks due on {target.isoformat()}."
        return f"Tasks due {target.isoformat()}:\n" + "\n".join(
            f"  {_format_task(t, today)}" for t in items
        )

    lines = [f"{year}-{month:02d}", " Sun  Mon  Tue  Wed  Thu  Fri  Sat"]
    for week in month_grid(year, month):
        cells = []
        for d in week:
            if d.month != month:
                cells.append("   .")
                continue
            n = len(tasks_on(ws.tasks, d))
            mark = "*" if d == today else " "
            cells.append(f"{mark}{d.day:2d}{'+' if n else ' '}")
        lines.append(" ".join(cells))
    lines.append("(+ = tasks due, * = today; /calendar YYYY-MM <day> lists them)")
    return "\n".join(lines)


def cmd_timer(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /timer                -> status
    /timer start|pause    -> run / stop the countdown
    /timer reset          -> restart the current phase
    /timer set <W> <B>    -> work/break minutes (resets to a fresh work phase)
    """
    ticker = state.ticker
    if not args:
        return _timer_line(state)

    sub = args[0].lower()
    if sub == "start":
        ticker.start()
    elif sub == "pause":
        ticker.pause()
    elif sub == "toggle":
        ticker.toggle()
    elif sub == "reset":
        ticker.reset()
    elif sub == "set":
        if len(args) != 3:
            return "Usage: /timer set <work minutes> <break minutes>"
        try:
            ticker.apply_settings(int(args[1]), int(args[2]))
        except ValueError as e:
            return f"Cannot apply settings: {e}"
        if emit:
            with contextlib.suppress(Exception):
                emit("[TIMER] Settings applied, back to a fresh focus session.")
    else:
        return "Usage: /timer [start|pause|toggle|reset|set <W> <B>]"
    return _timer_line(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show store, session and timer status.")
registry.register("register", cmd_register, help_text="Create an account: /register <email> <password> <name> [--admin].")
registry.register("login", cmd_login, help_text="Log in: /login <email> <password>.")
registry.register("logout", cmd_logout, help_text="Log out.")
registry.register("whoami", cmd_whoami, help_text="Show the logged-in user.")
registry.register("tasks", cmd_tasks, help_text="Kanban board: /tasks [todo|progress|done].", aliases=["board"])
registry.register("task", cmd_task, help_text="Manage tasks: /task add|show|edit|move|rm.")
registry.register("notes", cmd_notes, help_text="List or search notes: /notes [query].")
registry.register("note", cmd_note, help_text="Manage notes: /note add|show|edit|tag|rm.")
registry.register("qn", cmd_quick_notes, help_text="Quick notes: /qn [add|edit|rm].", aliases=["quick"])
registry.register("stats", cmd_stats, help_text="Task statistics.")
registry.register("deadlines", cmd_deadlines, help_text="Five nearest open deadlines.")
registry.register("calendar", cmd_calendar, help_text="Month view: /calendar [YYYY-MM] [day].", aliases=["cal"])
registry.register("timer", cmd_timer, help_text="Pomodoro: /timer [start|pause|reset|set W B].")
