"""Simple reporting utilities for CLI output."""

from __future__ import annotations

from typing import Callable

from .engine import TimerState
from .entry_log import EntryLog


class SummaryPrinter:
    """Render human-readable summaries in the console."""

    def __init__(self, log: EntryLog, echo: Callable[[str], None] = print) -> None:
        self.log = log
        self._echo = echo

    def print_log(self) -> None:
        if not self.log:
            self._echo("No time logged this session.")
            return

        self._echo(f"Time log ({len(self.log)} entries, total {self.log.formatted_total()})")
        self._echo("-" * 40)
        for entry in self.log:
            self._echo(f"  {entry.name[:28]:<28} {entry.formatted_time:>10}")


def render_running(state: TimerState) -> str:
    if not state.is_running:
        return "Idle"
    return f"● {state.activity_name}  {state.elapsed_display}"
