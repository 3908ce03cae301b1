"""Pure date arithmetic — no UI dependencies.

Every helper works on local calendar fields only; nothing here converts
between timezones.  Weeks start on Monday (ISO convention).
"""

import calendar
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

DAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def as_date(d: date | datetime) -> date:
    """Drop the time-of-day part of a datetime; plain dates pass through."""
    if isinstance(d, datetime):
        return d.date()
    return d


def start_of_week(d: date | datetime) -> date:
    """Return the Monday of the week containing *d*.

    Sunday belongs to the week that started six days earlier.
    """
    d = as_date(d)
    return d - timedelta(days=d.weekday())


def same_day(a: date | datetime, b: date | datetime) -> bool:
    """True when *a* and *b* fall on the same calendar day."""
    return (a.year, a.month, a.day) == (b.year, b.month, b.day)


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def add_months(d: date, n: int) -> date:
    """Shift *d* by *n* calendar months.

    Days past the end of the target month land on its last day
    (Jan 31 + 1 month -> Feb 28/29).
    """
    return d + relativedelta(months=n)


def first_of_month(d: date | datetime) -> date:
    return date(d.year, d.month, 1)


def last_of_month(d: date | datetime) -> date:
    return date(d.year, d.month, calendar.monthrange(d.year, d.month)[1])


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def is_saturday(d: date | datetime) -> bool:
    return d.weekday() == 5


def is_weekend(d: date | datetime) -> bool:
    return d.weekday() >= 5


def iso_week_number(d: date | datetime) -> int:
    """Return the ISO 8601 week number of *d*."""
    return as_date(d).isocalendar()[1]


def day_of_year(d: date | datetime) -> int:
    """1 for January 1st, 365 or 366 for December 31st."""
    d = as_date(d)
    return (d - date(d.year, 1, 1)).days + 1
