import json
from datetime import date

import pytest
from typer.testing import CliRunner

from timelogger import cli
from timelogger.engine import TimerEngine
from timelogger.session import TrackerSession

runner = CliRunner()


class InstantTicker:
    """Advances the clock by a fixed step and ticks once as soon as it starts."""

    def __init__(self, clock, step, callback):
        self._clock = clock
        self._step = step
        self._callback = callback

    def start(self):
        self._clock.advance(self._step)
        self._callback()

    def cancel(self):
        pass


@pytest.fixture
def fake_session(monkeypatch, clock):
    def build(settings):
        engine = TimerEngine(
            clock=clock,
            ticker_factory=lambda interval, callback: InstantTicker(clock, 65, callback),
        )
        return TrackerSession(engine=engine)

    monkeypatch.setattr(cli, "_build_session", build)


def test_format_command():
    result = runner.invoke(cli.app, ["format", "1830"])
    assert result.exit_code == 0
    assert result.output.strip() == "30m 30s"


def test_session_logs_activities(fake_session):
    result = runner.invoke(cli.app, ["session"], input="Deep work\n\nEmail\n\n\n")

    assert result.exit_code == 0, result.output
    assert "Logged Deep work: 1m 05s" in result.output
    assert "Logged Email: 1m 05s" in result.output
    assert "2 entries, total 2m" in result.output


def test_session_without_activities(fake_session):
    result = runner.invoke(cli.app, ["session"], input="\n")

    assert result.exit_code == 0, result.output
    assert "No time logged this session." in result.output


def test_session_exports_log(fake_session, tmp_path):
    result = runner.invoke(
        cli.app,
        ["session", "--export-dir", str(tmp_path)],
        input="Deep work\n\n\n",
    )

    assert result.exit_code == 0, result.output
    path = tmp_path / f"timelog-{date.today():%Y-%m-%d}.json"
    assert json.loads(path.read_text(encoding="utf-8")) == [
        {"name": "Deep work", "minutes": 1.08, "formatted": "1m 05s"}
    ]


def test_session_export_failure_exits_nonzero(fake_session, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")

    result = runner.invoke(
        cli.app,
        ["session", "--export-dir", str(blocker)],
        input="Deep work\n\n\n",
    )

    assert result.exit_code == 1


def test_session_stops_timer_when_input_ends(fake_session):
    result = runner.invoke(cli.app, ["session"], input="Deep work\n")

    assert result.exit_code == 0, result.output
    assert "Logged Deep work: 1m 05s" in result.output


def test_web_passes_options_to_dashboard(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "run_dashboard", lambda **kwargs: calls.append(kwargs))

    result = runner.invoke(
        cli.app,
        ["web", "--port", "9000", "--tick-interval", "0.5", "--no-open-browser"],
    )

    assert result.exit_code == 0, result.output
    assert calls[0]["port"] == 9000
    assert calls[0]["host"] == "127.0.0.1"
    assert calls[0]["open_browser"] is False
    assert calls[0]["settings"].tick_interval.total_seconds() == 0.5
