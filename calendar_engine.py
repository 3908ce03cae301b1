"""One-way pipeline from navigation state to an annotated grid.

navigator anchor -> grid builder -> event binder -> time positions.  The
result is a plain data model; rendering it is left to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Sequence

from calendar_logic import DAY_ABBR, day_of_year, days_in_month, is_weekend
from event_binder import (
    BoundDay,
    BoundDayCell,
    BoundWeek,
    bind_day,
    bind_month,
    bind_week,
)
from events import Event, EventColor
from grid_builder import (
    HOUR_ROWS,
    HourRow,
    day_grid,
    month_grid,
    month_week_numbers,
    week_grid,
)
from settings import default_settings, row_height_for
from time_position import (
    DEFAULT_REFRESH_SECONDS,
    NowMarkerTicker,
    now_marker_column,
    now_marker_offset,
)
from view_navigator import ViewMode, ViewNavigator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthView:
    title: str
    cells: tuple[BoundDayCell, ...]
    week_numbers: tuple[int, ...]
    days_in_month: int
    day_names: tuple[str, ...] = tuple(DAY_ABBR)

    mode = ViewMode.MONTH


@dataclass(frozen=True)
class WeekView:
    title: str
    week: BoundWeek
    hours: tuple[HourRow, ...]
    gmt_label: str
    row_height: float
    now_column: int | None
    now_offset: float | None
    weekend_columns: tuple[int, ...]

    mode = ViewMode.WEEK


@dataclass(frozen=True)
class DayView:
    title: str
    day: BoundDay
    hours: tuple[HourRow, ...]
    row_height: float
    now_offset: float | None
    day_of_year: int

    mode = ViewMode.DAY


class CalendarEngine:
    """Compute the view model for whatever mode *navigator* is in.

    ``events`` are passed in on every call; the engine keeps no store.
    """

    def __init__(self, navigator: ViewNavigator, settings: dict | None = None,
                 row_height: float | None = None) -> None:
        self.navigator = navigator
        self.settings = settings if settings is not None else default_settings()
        self.row_height = row_height if row_height is not None else row_height_for(self.settings)
        self.default_color = EventColor.resolve(self.settings.get("default_color"))

    @classmethod
    def from_settings(cls, settings: dict, clock: Callable[[], datetime] = datetime.now) -> "CalendarEngine":
        """Start a fresh navigator in the configured default view."""
        navigator = ViewNavigator(clock=clock, mode=settings.get("default_view", ViewMode.MONTH))
        return cls(navigator, settings=settings)

    def visible_dates(self) -> list[date]:
        """Dates whose columns can carry the now marker (none in Month view)."""
        state = self.navigator.state
        if state.mode is ViewMode.WEEK:
            return week_grid(state.week_anchor)
        if state.mode is ViewMode.DAY:
            return [state.day_anchor]
        return []

    def compute(self, events: Sequence[Event]) -> MonthView | WeekView | DayView:
        state = self.navigator.state
        title = self.navigator.header_title()
        logger.debug("Computing %s view at %s for %d events",
                     state.mode.value, state.active_anchor, len(events))
        if state.mode is ViewMode.MONTH:
            cells = month_grid(state.month_anchor)
            return MonthView(
                title=title,
                cells=tuple(bind_month(events, cells)),
                week_numbers=tuple(month_week_numbers(cells)),
                days_in_month=days_in_month(state.month_anchor.year, state.month_anchor.month),
            )

        now = self.navigator.clock()
        if state.mode is ViewMode.WEEK:
            dates = week_grid(state.week_anchor)
            return WeekView(
                title=title,
                week=bind_week(events, dates, self.row_height),
                hours=HOUR_ROWS,
                gmt_label=self.navigator.gmt_offset_label(),
                row_height=self.row_height,
                now_column=now_marker_column(now, dates),
                now_offset=now_marker_offset(now, dates, self.row_height),
                weekend_columns=tuple(i for i, d in enumerate(dates) if is_weekend(d)),
            )

        grid = day_grid(state.day_anchor)
        return DayView(
            title=title,
            day=bind_day(events, grid, self.row_height),
            hours=grid.hours,
            row_height=self.row_height,
            now_offset=now_marker_offset(now, [grid.date], self.row_height),
            day_of_year=day_of_year(grid.date),
        )

    def now_marker_offset(self, now: datetime | None = None) -> float | None:
        """Offset of the now marker in the active view, or None when hidden."""
        if now is None:
            now = self.navigator.clock()
        return now_marker_offset(now, self.visible_dates(), self.row_height)

    def color_of(self, event: Event) -> EventColor:
        return EventColor.resolve(event.color, self.default_color)

    def now_marker_ticker(self, callback: Callable[[float | None], None]) -> NowMarkerTicker:
        """Build a ticker that feeds *callback* the refreshed marker offset.

        The caller starts it and must ``stop()`` it on teardown.
        """
        interval = self.settings.get("now_refresh_seconds") or DEFAULT_REFRESH_SECONDS
        return NowMarkerTicker(
            self.navigator.clock,
            lambda now: callback(self.now_marker_offset(now)),
            interval=interval,
        )
