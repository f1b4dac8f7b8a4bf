"""A tracking session: one timer feeding one entry log."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .config import TrackerSettings
from .engine import RepeatingTimer, TickerFactory, TimerEngine
from .entry_log import EntryId, EntryLog
from .models import TimeEntry

logger = logging.getLogger(__name__)


class TrackerSession:
    """Owns the timer and the log for the lifetime of the process."""

    def __init__(
        self,
        engine: Optional[TimerEngine] = None,
        log: Optional[EntryLog] = None,
    ) -> None:
        self.engine = engine or TimerEngine()
        self.log = log or EntryLog()

    @classmethod
    def from_settings(
        cls,
        settings: TrackerSettings,
        *,
        ticker_factory: TickerFactory = RepeatingTimer,
    ) -> "TrackerSession":
        engine = TimerEngine(
            interval=settings.tick_interval.total_seconds(),
            ticker_factory=ticker_factory,
        )
        return cls(engine=engine)

    def start(self, activity_name: Optional[str] = None) -> None:
        self.engine.start(activity_name)

    def stop(self) -> Optional[TimeEntry]:
        entry = self.engine.stop()
        if entry is not None:
            self.log.insert_front(entry)
        return entry

    def delete_entry(self, entry_id: EntryId) -> None:
        self.log.delete_by_id(entry_id)

    def clear(self) -> None:
        self.log.clear()

    def export(self) -> list[Dict[str, Any]]:
        return self.log.export()

    def close(self) -> None:
        if self.engine.is_running:
            logger.info("Session closing with a running timer; stopping it.")
            self.stop()
