"""Vertical pixel positions inside the 24-row hour grid.

Row heights are always passed in by the caller; different density layouts
use different values.  The only clock-driven piece is ``NowMarkerTicker``,
which resamples the injected clock on a fixed interval.
"""

import logging
import threading
from datetime import date, datetime
from typing import Callable, Sequence

from calendar_logic import same_day

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_SECONDS = 60

Clock = Callable[[], datetime]


def hour_index(t: datetime) -> int:
    """Zero-based row index of *t*; midnight sits in the last row."""
    return 23 if t.hour == 0 else t.hour - 1


def position(t: datetime, row_height: float) -> float:
    """Offset of *t* from the top of the hour grid."""
    return hour_index(t) * row_height + (t.minute / 60) * row_height


def offset_in_row(t: datetime, row_height: float) -> float:
    return (t.minute / 60) * row_height


def event_height(start: datetime, end: datetime, row_height: float) -> float:
    """Whole-hour span times row height; minutes of *end* are ignored.

    Inverted or zero-length ranges collapse to zero.
    """
    return max(0, (end.hour - start.hour) * row_height)


def now_marker_column(now: datetime, dates: Sequence[date]) -> int | None:
    """Index of the visible column that is today, or None."""
    for i, d in enumerate(dates):
        if same_day(d, now):
            return i
    return None


def now_marker_offset(now: datetime, dates: Sequence[date], row_height: float) -> float | None:
    """Offset of the now marker, or None when today is not on screen."""
    if now_marker_column(now, dates) is None:
        return None
    return position(now, row_height)


class NowMarkerTicker:
    """Call *callback* with a fresh clock sample every *interval* seconds.

    ``start()`` fires once immediately, then reschedules itself on a daemon
    ``threading.Timer``.  ``stop()`` cancels the pending timer.
    """

    def __init__(self, clock: Clock, callback: Callable[[datetime], None],
                 interval: float = DEFAULT_REFRESH_SECONDS) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        self._clock = clock
        self._callback = callback
        self.interval = interval
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()
        self._running = False
        self._generation = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._generation += 1
            generation = self._generation
        logger.debug("Now-marker ticker started (every %ss)", self.interval)
        self._tick(generation)

    def stop(self) -> None:
        with self._lock:
            self._running = False
            self._generation += 1
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
            logger.debug("Now-marker ticker stopped")

    def _current(self, generation: int) -> bool:
        return self._running and generation == self._generation

    def _tick(self, generation: int) -> None:
        # A tick from before the last stop() must not reschedule itself.
        if not self._current(generation):
            return
        try:
            self._callback(self._clock())
        except Exception:
            logger.exception("Now-marker refresh failed")
        with self._lock:
            if not self._current(generation):
                return
            self._timer = threading.Timer(self.interval, self._tick, args=(generation,))
            self._timer.daemon = True
            self._timer.start()
