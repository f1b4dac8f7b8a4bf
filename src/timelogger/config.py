"""Configuration models and helpers for the time logger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional


@dataclass(slots=True)
class TrackerSettings:
    """Runtime configuration for a tracking session."""

    tick_interval: timedelta = timedelta(seconds=1)
    export_dir: Optional[Path] = None

    @classmethod
    def from_intervals(
        cls,
        tick_seconds: float,
        export_dir: Optional[Path] = None,
    ) -> "TrackerSettings":
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive")
        return cls(
            tick_interval=timedelta(seconds=tick_seconds),
            export_dir=Path(export_dir) if export_dir is not None else None,
        )
