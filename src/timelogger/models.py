"""Domain models for logged time."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict


_CENTS = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class TimeEntry:
    """A completed, immutable record of one timed activity."""

    name: str
    duration_seconds: int
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("entry name must not be blank")
        object.__setattr__(self, "name", self.name.strip())
        if self.duration_seconds < 0:
            raise ValueError(
                f"duration_seconds must be non-negative, got {self.duration_seconds}"
            )

    @property
    def formatted_time(self) -> str:
        return format_duration(self.duration_seconds)

    @property
    def decimal_minutes(self) -> float:
        return self.duration_seconds / 60.0

    def to_export_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "minutes": round_minutes(self.duration_seconds),
            "formatted": self.formatted_time,
        }


def format_duration(seconds: int) -> str:
    """Render a duration as ``1h 02m 03s``, ``2m 03s`` or ``3s``."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    if minutes > 0:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def format_total(seconds: int) -> str:
    """Render an aggregate as ``1h 03m`` or ``45m``; seconds are dropped."""
    hours, remainder = divmod(int(seconds), 3600)
    minutes = remainder // 60
    if hours > 0:
        return f"{hours}h {minutes:02d}m"
    return f"{minutes}m"


def format_clock(seconds: int) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def round_minutes(seconds: int) -> float:
    """Convert seconds to decimal minutes, rounded half-up to two places."""
    minutes = Decimal(int(seconds)) / Decimal(60)
    return float(minutes.quantize(_CENTS, rounding=ROUND_HALF_UP))
