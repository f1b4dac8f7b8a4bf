"""Write exported time logs to disk."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from .entry_log import EntryLog
from .paths import get_export_dir

logger = logging.getLogger(__name__)


def default_export_filename(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"timelog-{day.strftime('%Y-%m-%d')}.json"


def render_export(payload: Iterable[Mapping[str, Any]]) -> str:
    return json.dumps(list(payload), indent=2, ensure_ascii=False)


def write_export(payload: Iterable[Mapping[str, Any]], path: Path) -> Path:
    """Write ``payload`` as a JSON array; ``OSError`` propagates to the caller."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_export(payload) + "\n", encoding="utf-8")
    logger.info("Exported time log to %s", path)
    return path


def export_log(
    log: EntryLog,
    directory: Optional[Path] = None,
    filename: Optional[str] = None,
) -> Path:
    target_dir = Path(directory) if directory is not None else get_export_dir()
    return write_export(log.export(), target_dir / (filename or default_export_filename()))
