"""In-memory log of completed time entries, newest first."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterator, Optional, Union

from .models import TimeEntry, format_total

logger = logging.getLogger(__name__)

EntryId = Union[uuid.UUID, str]


class EntryLog:
    """Ordered collection of :class:`TimeEntry`; the front is the most recent."""

    def __init__(self) -> None:
        self._entries: list[TimeEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TimeEntry]:
        return iter(list(self._entries))

    def __bool__(self) -> bool:
        return bool(self._entries)

    @property
    def entries(self) -> tuple[TimeEntry, ...]:
        return tuple(self._entries)

    def get(self, entry_id: EntryId) -> Optional[TimeEntry]:
        key = _coerce_id(entry_id)
        if key is None:
            return None
        for entry in self._entries:
            if entry.id == key:
                return entry
        return None

    def insert_front(self, entry: TimeEntry) -> None:
        self._entries.insert(0, entry)
        logger.debug("Logged %r (%s).", entry.name, entry.formatted_time)

    def delete_by_id(self, entry_id: EntryId) -> None:
        key = _coerce_id(entry_id)
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.id != key]
        if len(self._entries) != before:
            logger.debug("Deleted entry %s.", key)

    def clear(self) -> None:
        self._entries.clear()
        logger.debug("Cleared entry log.")

    def total_seconds(self) -> int:
        return sum(entry.duration_seconds for entry in self._entries)

    def formatted_total(self) -> str:
        return format_total(self.total_seconds())

    def export(self) -> list[Dict[str, Any]]:
        """Return ``{name, minutes, formatted}`` records in log order."""
        return [entry.to_export_dict() for entry in self._entries]


def _coerce_id(value: EntryId) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
