"""Helpers for locating application directories."""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs


APP_NAME = "TimeLogger"
APP_AUTHOR = "TimeLogger"


def get_export_dir() -> Path:
    """Default destination for exported time logs (the user's documents folder)."""
    dirs = PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=True)
    path = Path(dirs.user_documents_path)
    path.mkdir(parents=True, exist_ok=True)
    return path
