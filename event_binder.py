"""Attach caller-supplied events to the cells and hour rows of a grid.

Binding is pure: the same events and grid always give the same buckets,
in input order.  All-day events only land in date buckets, timed events
only in hour rows.  Overlapping timed events are not de-collided; they keep
their input order as ``z_index`` so later events paint on top.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Sequence

from calendar_logic import as_date
from events import Event
from grid_builder import HOUR_ROWS, DayCell, DayGrid, HourRow, hour_to_row
from time_position import event_height, offset_in_row, position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimedEvent:
    event: Event
    row: int
    top: float
    offset_in_row: float
    height: float
    z_index: int


@dataclass(frozen=True)
class BoundDayCell:
    cell: DayCell
    events: tuple[Event, ...]

    @property
    def date(self) -> date:
        return self.cell.date

    @property
    def is_current_month(self) -> bool:
        return self.cell.is_current_month


@dataclass(frozen=True)
class BoundHourRow:
    row: HourRow
    events: tuple[TimedEvent, ...]


@dataclass(frozen=True)
class BoundDay:
    """One date column: its all-day bucket plus 24 timed hour rows."""

    date: date
    all_day: tuple[Event, ...]
    hours: tuple[BoundHourRow, ...]

    def timed_events(self) -> list[TimedEvent]:
        return [te for row in self.hours for te in row.events]


@dataclass(frozen=True)
class BoundWeek:
    days: tuple[BoundDay, ...]

    @property
    def dates(self) -> list[date]:
        return [d.date for d in self.days]


def _timed_row(event: Event) -> int | None:
    start = event.start
    if not isinstance(start, datetime):
        logger.warning("Dropping timed event %r: start %r has no time of day", event.id, start)
        return None
    try:
        return hour_to_row(start.hour)
    except ValueError:
        logger.warning("Dropping timed event %r: start hour %r out of range", event.id, start.hour)
        return None


def _index_all_day(events: Iterable[Event]) -> dict[date, list[Event]]:
    buckets: dict[date, list[Event]] = defaultdict(list)
    for event in events:
        if event.all_day:
            buckets[as_date(event.start)].append(event)
    return buckets


def _index_timed(events: Sequence[Event], row_height: float) -> dict[tuple[date, int], list[TimedEvent]]:
    buckets: dict[tuple[date, int], list[TimedEvent]] = defaultdict(list)
    for z, event in enumerate(events):
        if event.all_day:
            continue
        row = _timed_row(event)
        if row is None:
            continue
        buckets[(event.start.date(), row)].append(TimedEvent(
            event=event,
            row=row,
            top=position(event.start, row_height),
            offset_in_row=offset_in_row(event.start, row_height),
            height=event_height(event.start, event.end, row_height),
            z_index=z,
        ))
    return buckets


def _bound_day(d: date, all_day: dict[date, list[Event]],
               timed: dict[tuple[date, int], list[TimedEvent]],
               hours: Sequence[HourRow] = HOUR_ROWS) -> BoundDay:
    return BoundDay(
        date=d,
        all_day=tuple(all_day.get(d, ())),
        hours=tuple(BoundHourRow(row=hr, events=tuple(timed.get((d, hr.row), ())))
                    for hr in hours),
    )


def bind_month(events: Sequence[Event], cells: Sequence[DayCell]) -> list[BoundDayCell]:
    """Give each month cell the all-day events starting on its date."""
    all_day = _index_all_day(events)
    return [BoundDayCell(cell=c, events=tuple(all_day.get(c.date, ()))) for c in cells]


def bind_week(events: Sequence[Event], dates: Sequence[date], row_height: float) -> BoundWeek:
    """Bucket events into an all-day list and 24 hour rows per date."""
    events = list(events)
    all_day = _index_all_day(events)
    timed = _index_timed(events, row_height)
    return BoundWeek(days=tuple(_bound_day(d, all_day, timed) for d in dates))


def bind_day(events: Sequence[Event], grid: DayGrid, row_height: float) -> BoundDay:
    events = list(events)
    return _bound_day(grid.date, _index_all_day(events), _index_timed(events, row_height), grid.hours)
