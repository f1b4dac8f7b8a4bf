"""Timer state machine and its once-per-second tick scheduler."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol

from .models import TimeEntry, format_clock

logger = logging.getLogger(__name__)


class InvalidActivityName(ValueError):
    """Raised when a timer is started without a usable activity name."""


class Ticker(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TickerFactory = Callable[[float, Callable[[], None]], Ticker]
StateListener = Callable[["TimerState"], None]


class RepeatingTimer:
    """Call ``callback`` every ``interval`` seconds on a daemon thread until cancelled."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self._callback = callback
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=timeout)

    @property
    def cancelled(self) -> bool:
        return self._stop_event.is_set()

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        # wait() returns True once cancelled; it doubles as the sleep.
        while not self._stop_event.wait(self.interval):
            try:
                self._callback()
            except Exception:
                logger.exception("Tick callback failed.")


@dataclass(frozen=True, slots=True)
class TimerState:
    """A consistent read of the engine at one instant."""

    is_running: bool
    activity_name: str
    started_at: Optional[datetime]
    elapsed_seconds: int

    @property
    def elapsed_display(self) -> str:
        return format_clock(self.elapsed_seconds)


class TimerEngine:
    """Single running/idle timer for one named activity.

    All state changes, including ticks delivered from the ticker thread,
    happen under one lock, and listeners are called while it is held. Once
    ``stop()`` returns no further state reaches a listener until the next
    ``start()``.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = datetime.now,
        interval: float = 1.0,
        ticker_factory: TickerFactory = RepeatingTimer,
    ) -> None:
        self._clock = clock
        self._interval = interval
        self._ticker_factory = ticker_factory
        self._lock = threading.RLock()
        self._ticker: Optional[Ticker] = None
        self._listeners: list[StateListener] = []
        self._activity_name = ""
        self._started_at: Optional[datetime] = None
        self._elapsed_seconds = 0

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._started_at is not None

    @property
    def activity_name(self) -> str:
        with self._lock:
            return self._activity_name

    @activity_name.setter
    def activity_name(self, value: str) -> None:
        with self._lock:
            self._activity_name = value or ""

    @property
    def started_at(self) -> Optional[datetime]:
        with self._lock:
            return self._started_at

    @property
    def elapsed_seconds(self) -> int:
        with self._lock:
            return self._elapsed_seconds

    @property
    def elapsed_display(self) -> str:
        return format_clock(self.elapsed_seconds)

    def snapshot(self) -> TimerState:
        with self._lock:
            return self._snapshot_locked()

    def start(self, activity_name: Optional[str] = None) -> None:
        """Start timing ``activity_name`` (or the pending input when omitted)."""
        with self._lock:
            if self._started_at is not None:
                logger.debug(
                    "Ignoring start(%r); already timing %r.",
                    activity_name,
                    self._activity_name,
                )
                return
            raw = self._activity_name if activity_name is None else activity_name
            name = raw.strip()
            if not name:
                raise InvalidActivityName("activity name must not be blank")

            self._activity_name = name
            self._started_at = self._clock()
            self._elapsed_seconds = 0
            self._ticker = self._ticker_factory(self._interval, self.tick)
            self._ticker.start()
            logger.info("Started timer for %r.", name)
            self._notify(self._snapshot_locked())

    def stop(self) -> Optional[TimeEntry]:
        """Stop the timer and return the completed entry, if it is worth keeping."""
        with self._lock:
            if self._started_at is None:
                logger.debug("Ignoring stop(); timer is idle.")
                return None
            ticker = self._ticker
            if ticker is not None:
                ticker.cancel()
                self._ticker = None

            name = self._activity_name.strip()
            elapsed = self._elapsed_seconds
            entry: Optional[TimeEntry] = None
            if name and elapsed > 0:
                entry = TimeEntry(name=name, duration_seconds=elapsed)
                logger.info("Stopped timer for %r after %ds.", name, elapsed)
            else:
                logger.info("Discarded timer for %r (elapsed=%ds).", name, elapsed)

            self._activity_name = ""
            self._elapsed_seconds = 0
            self._started_at = None
            self._notify(self._snapshot_locked())
        # Outside the lock: an in-flight tick needs it to finish.
        join = getattr(ticker, "join", None)
        if join is not None:
            join(timeout=max(self._interval, 1.0))
        return entry

    def tick(self) -> None:
        with self._lock:
            if self._started_at is None:
                return
            delta = self._clock() - self._started_at
            self._elapsed_seconds = max(0, int(delta.total_seconds()))
            state = self._snapshot_locked()
            logger.debug("Tick: %s elapsed.", state.elapsed_display)
            self._notify(state)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for state changes; returns an unsubscribe callable."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _snapshot_locked(self) -> TimerState:
        return TimerState(
            is_running=self._started_at is not None,
            activity_name=self._activity_name,
            started_at=self._started_at,
            elapsed_seconds=self._elapsed_seconds,
        )

    def _notify(self, state: TimerState) -> None:
        # Called with the lock held so listeners see states in order.
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("Timer listener %r failed.", listener)
