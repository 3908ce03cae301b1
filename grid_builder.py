"""Expand an anchor date into month cells, week columns or day hour rows."""

from dataclasses import dataclass
from datetime import date

from calendar_logic import (
    add_days,
    first_of_month,
    iso_week_number,
    last_of_month,
)

MONTH_CELLS = 42
WEEK_LENGTH = 7


@dataclass(frozen=True)
class DayCell:
    """One cell of the month grid.

    Today / selected / Saturday are derived on demand, never stored here.
    """

    date: date
    is_current_month: bool


@dataclass(frozen=True)
class HourRow:
    """One of the 24 hour rows shared by the week and day grids."""

    row: int    # 1..24
    hour: int   # local hour bucket
    label: str


@dataclass(frozen=True)
class DayGrid:
    date: date
    hours: tuple[HourRow, ...]


def _hour_label(row: int) -> str:
    hour = row % 12 or 12
    suffix = "AM" if row < 12 or row == 24 else "PM"
    return f"{hour} {suffix}"


def hour_to_row(hour: int) -> int:
    """Map a local hour (0..23) to its 1-based row; midnight is row 24."""
    if not 0 <= hour <= 23:
        raise ValueError(f"hour out of range: {hour!r}")
    return 24 if hour == 0 else hour


def row_to_hour(row: int) -> int:
    if not 1 <= row <= 24:
        raise ValueError(f"row out of range: {row!r}")
    return 0 if row == 24 else row


# Rows are labelled 1 AM .. 12 AM; row 24 holds the hour starting at 00:00.
HOUR_ROWS: tuple[HourRow, ...] = tuple(
    HourRow(row=r, hour=row_to_hour(r), label=_hour_label(r)) for r in range(1, 25)
)
HOUR_LABELS = [h.label for h in HOUR_ROWS]


def month_grid(anchor: date) -> list[DayCell]:
    """Return exactly 42 cells (6 rows x 7 columns) for *anchor*'s month.

    Leading cells are the tail of the previous month back to a Monday,
    trailing cells the head of the next month.  Always 42 so the layout
    keeps six rows whatever the month length or starting weekday.
    """
    first = first_of_month(anchor)
    last = last_of_month(anchor)
    lead_days = first.weekday()

    cells = [DayCell(add_days(first, -i), False) for i in range(lead_days, 0, -1)]
    cells.extend(DayCell(add_days(first, i), True) for i in range(last.day))
    trailing = MONTH_CELLS - len(cells)
    cells.extend(DayCell(add_days(last, i), False) for i in range(1, trailing + 1))
    return cells


def month_rows(cells: list[DayCell]) -> list[list[DayCell]]:
    """Split the flat month grid into its week rows."""
    return [cells[i:i + WEEK_LENGTH] for i in range(0, len(cells), WEEK_LENGTH)]


def month_week_numbers(cells: list[DayCell]) -> list[int]:
    """Return the ISO week number for each row of the month grid."""
    return [iso_week_number(row[0].date) for row in month_rows(cells)]


def week_grid(week_anchor: date) -> list[date]:
    """Return the 7 consecutive dates starting at *week_anchor*."""
    return [add_days(week_anchor, i) for i in range(WEEK_LENGTH)]


def day_grid(day_anchor: date) -> DayGrid:
    return DayGrid(date=day_anchor, hours=HOUR_ROWS)
