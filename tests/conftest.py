from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from timelogger.engine import TimerEngine
from timelogger.session import TrackerSession


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)

    def __call__(self) -> datetime:
        return self.now


class ManualTicker:
    """Ticker that never fires on its own; tests drive ``engine.tick()``."""

    def __init__(self, interval: float, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True


class TickerRecorder:
    def __init__(self) -> None:
        self.tickers: list[ManualTicker] = []

    def __call__(self, interval, callback) -> ManualTicker:
        ticker = ManualTicker(interval, callback)
        self.tickers.append(ticker)
        return ticker


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 3, 14, 9, 0, 0))


@pytest.fixture
def tickers() -> TickerRecorder:
    return TickerRecorder()


@pytest.fixture
def engine(clock, tickers) -> TimerEngine:
    return TimerEngine(clock=clock, ticker_factory=tickers)


@pytest.fixture
def session(engine) -> TrackerSession:
    return TrackerSession(engine=engine)


def run_for(engine: TimerEngine, clock: FakeClock, seconds: int) -> None:
    """Advance the clock one second at a time, ticking after each step."""
    for _ in range(seconds):
        clock.advance(1)
        engine.tick()
