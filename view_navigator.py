"""Active view mode and per-mode anchor dates, plus the derived queries a
renderer asks about individual dates."""

import calendar
import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from enum import Enum

from calendar_logic import (
    DAY_ABBR,
    add_days,
    add_months,
    as_date,
    first_of_month,
    is_saturday,
    same_day,
    start_of_week,
)
from time_position import Clock

logger = logging.getLogger(__name__)


class ViewMode(Enum):
    MONTH = "Month"
    WEEK = "Week"
    DAY = "Day"

    @classmethod
    def parse(cls, value: "ViewMode | str") -> "ViewMode":
        """Accept a ViewMode or a case-insensitive name such as ``"week"``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for mode in cls:
                if mode.value.lower() == value.strip().lower():
                    return mode
        raise ValueError(f"unknown view mode: {value!r}")


@dataclass(frozen=True)
class ViewState:
    mode: ViewMode
    month_anchor: date
    week_anchor: date
    day_anchor: date
    selected_date: date

    @classmethod
    def for_today(cls, today: date, mode: ViewMode = ViewMode.MONTH) -> "ViewState":
        return cls(
            mode=mode,
            month_anchor=first_of_month(today),
            week_anchor=start_of_week(today),
            day_anchor=today,
            selected_date=today,
        )

    @property
    def active_anchor(self) -> date:
        if self.mode is ViewMode.MONTH:
            return self.month_anchor
        if self.mode is ViewMode.WEEK:
            return self.week_anchor
        return self.day_anchor


def header_title(state: ViewState) -> str:
    """Return the heading for the active view.

    Month: ``"March 2025"``.  Week: ``"March 2025"``, or
    ``"January - February 2025"`` when the week spans two months (the year
    is the one of the week's last day).  Day: ``"Mon, March 3, 2025"``.
    """
    if state.mode is ViewMode.MONTH:
        a = state.month_anchor
        return f"{calendar.month_name[a.month]} {a.year}"
    if state.mode is ViewMode.WEEK:
        start = state.week_anchor
        end = add_days(start, 6)
        start_month = calendar.month_name[start.month]
        end_month = calendar.month_name[end.month]
        if start_month == end_month:
            return f"{start_month} {end.year}"
        return f"{start_month} - {end_month} {end.year}"
    d = state.day_anchor
    return f"{DAY_ABBR[d.weekday()]}, {calendar.month_name[d.month]} {d.day}, {d.year}"


def gmt_offset_label(now: datetime) -> str:
    """UTC offset as shown in the week header, e.g. ``"GMT+2"``.

    Naive datetimes are taken to be in the process's local timezone.
    """
    if now.tzinfo is None:
        now = now.astimezone()
    offset = now.utcoffset() or timedelta(0)
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    if mins:
        return f"GMT{sign}{hours}:{mins:02d}"
    return f"GMT{sign}{hours}"


class ViewNavigator:
    """Long-lived navigation state for one calendar view.

    All three anchors are kept at once so switching modes returns to where
    each mode was last left.  ``previous``/``next`` only move the anchor of
    the active mode; ``today`` resets all of them together.
    """

    def __init__(self, clock: Clock = datetime.now,
                 mode: ViewMode | str = ViewMode.MONTH) -> None:
        self.clock = clock
        self.state = ViewState.for_today(self._today(), ViewMode.parse(mode))

    def _today(self) -> date:
        return as_date(self.clock())

    @property
    def mode(self) -> ViewMode:
        return self.state.mode

    @property
    def active_anchor(self) -> date:
        return self.state.active_anchor

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def set_mode(self, mode: ViewMode | str) -> ViewState:
        self.state = replace(self.state, mode=ViewMode.parse(mode))
        logger.debug("View mode -> %s", self.state.mode.value)
        return self.state

    def previous(self) -> ViewState:
        return self._step(-1)

    def next(self) -> ViewState:
        return self._step(1)

    def _step(self, direction: int) -> ViewState:
        s = self.state
        if s.mode is ViewMode.MONTH:
            self.state = replace(s, month_anchor=first_of_month(add_months(s.month_anchor, direction)))
        elif s.mode is ViewMode.WEEK:
            self.state = replace(s, week_anchor=add_days(s.week_anchor, 7 * direction))
        else:
            self.state = replace(s, day_anchor=add_days(s.day_anchor, direction))
        logger.debug("%s anchor -> %s", self.state.mode.value, self.state.active_anchor)
        return self.state

    def today(self) -> ViewState:
        self.state = ViewState.for_today(self._today(), self.state.mode)
        return self.state

    def select(self, d: date | datetime) -> ViewState:
        self.state = replace(self.state, selected_date=as_date(d))
        return self.state

    # ------------------------------------------------------------------
    # Derived queries
    # ------------------------------------------------------------------
    def is_today(self, d: date | datetime) -> bool:
        return same_day(d, self.clock())

    def is_selected(self, d: date | datetime) -> bool:
        return same_day(d, self.state.selected_date)

    @staticmethod
    def is_saturday(d: date | datetime) -> bool:
        return is_saturday(d)

    def header_title(self) -> str:
        return header_title(self.state)

    def gmt_offset_label(self) -> str:
        return gmt_offset_label(self.clock())
