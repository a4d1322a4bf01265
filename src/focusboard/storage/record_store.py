# src/focusboard/storage/record_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from ..core.ports import KeyValueBackend

logger = logging.getLogger(__name__)

USERS = "users"
CURRENT_USER = "currentUser"
TASKS = "tasks"
NOTES = "notes"
QUICK_NOTES = "quickNotes"

Record = dict[str, Any]


class RecordStore:
    """
    Named collections of JSON records on top of a key-value backend.

    Every write replaces the whole collection. There is no locking across
    collections: the last write wins.
    """

    def __init__(self, backend: KeyValueBackend) -> None:
        self._backend = backend

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    def _load(self, key: str) -> Any:
        raw = self._backend.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Stored value for key=%s is not valid JSON; ignoring it.", key)
            return None

    def read(self, collection: str) -> list[Record]:
        data = self._load(collection)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Collection %s is not a JSON array; reading as empty.", collection)
            return []
        records = [r for r in data if isinstance(r, dict)]
        if len(records) != len(data):
            logger.warning(
                "Collection %s has %d non-object entries; they are skipped and dropped on the next write.",
                collection,
                len(data) - len(records),
            )
        return records

    def write(self, collection: str, records: Iterable[Record]) -> None:
        payload = list(records)
        self._backend.set(collection, json.dumps(payload, ensure_ascii=False))
        logger.debug("Wrote collection=%s records=%d", collection, len(payload))

    def read_object(self, key: str) -> Record | None:
        data = self._load(key)
        return data if isinstance(data, dict) else None

    def write_object(self, key: str, obj: Record) -> None:
        self._backend.set(key, json.dumps(obj, ensure_ascii=False))

    def remove(self, key: str) -> None:
        self._backend.remove(key)
