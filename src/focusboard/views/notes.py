# src/focusboard/views/notes.py

from __future__ import annotations

import random
from collections.abc import Iterable

from ..storage.models import Note

# Sticky-note palette for quick notes.
QUICK_NOTE_COLORS = (
    "#fef3c7",
    "#fecaca",
    "#fed7aa",
    "#d9f99d",
    "#a7f3d0",
    "#bfdbfe",
    "#ddd6fe",
    "#fbcfe8",
)


def search_notes(notes: Iterable[Note], query: str) -> list[Note]:
    """Case-insensitive match on title, course, tags or content."""
    items = list(notes)
    q = (query or "").lower()
    if not q:
        return items
    return [
        n
        for n in items
        if q in n.title.lower()
        or q in n.course.lower()
        or any(q in tag.lower() for tag in n.tags)
        or q in n.content.lower()
    ]


def pick_quick_note_color(rng: random.Random | None = None) -> str:
    return (rng or random).choice(QUICK_NOTE_COLORS)


def parse_tags(raw: str) -> list[str]:
    """'exam, week 3,,ch1' -> ['exam', 'week 3', 'ch1']"""
    return [t.strip() for t in raw.split(",") if t.strip()]
