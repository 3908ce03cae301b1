"""Event records supplied by the caller on every computation."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class EventError(ValueError):
    """Raised when a raw event mapping cannot be turned into an Event."""


class EventColor(Enum):
    """Fixed palette of event tags.  The renderer maps each tag to a style."""

    BLUE = "blue"
    EMERALD = "emerald"
    AMBER = "amber"
    ROSE = "rose"
    VIOLET = "violet"
    CYAN = "cyan"
    ORANGE = "orange"
    PINK = "pink"
    TEAL = "teal"
    INDIGO = "indigo"

    @classmethod
    def lookup(cls, value: Any) -> "EventColor | None":
        """Return the palette entry named by *value*, or None when unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                logger.debug("Unknown event color %r", value)
        return None

    @classmethod
    def resolve(cls, value: Any, default: "EventColor | None" = None) -> "EventColor":
        """Return the palette entry for *value*, or *default* when unknown."""
        return cls.lookup(value) or default or DEFAULT_COLOR


DEFAULT_COLOR = EventColor.BLUE


def _format_clock(t: datetime) -> str:
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    if t.minute:
        return f"{hour}:{t.minute:02d} {suffix}"
    return f"{hour} {suffix}"


def _parse_timestamp(value: Any, field: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as exc:
            raise EventError(f"invalid {field} timestamp: {value!r}") from exc
    raise EventError(f"{field} must be a datetime or ISO 8601 string, got {type(value).__name__}")


@dataclass(frozen=True)
class Event:
    """A user-visible calendar item.

    ``all_day`` has no default: callers state explicitly whether an event is
    bucketed by date only or by date and hour.
    """

    id: str | int
    title: str
    start: datetime
    end: datetime
    all_day: bool
    color: EventColor | None = None
    location: str | None = None
    description: str | None = None

    @property
    def resolved_color(self) -> EventColor:
        return EventColor.resolve(self.color)

    def time_range_label(self) -> str:
        """Return e.g. ``"10 AM - 11 AM"`` or ``"9:30 AM - 12 PM"``."""
        return f"{_format_clock(self.start)} - {_format_clock(self.end)}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Event":
        """Build an Event from a plain mapping (e.g. decoded JSON).

        Accepted keys: ``id``, ``title``, ``start``, ``end``, ``allDay``,
        ``color``, ``location``, ``description``.  ``allDay`` is required;
        a missing or unknown ``color`` is stored as None so the caller's
        default applies when it is resolved.
        """
        if "allDay" not in data:
            raise EventError(f"event {data.get('id')!r} is missing the 'allDay' field")
        for key in ("id", "start", "end"):
            if key not in data:
                raise EventError(f"event is missing the {key!r} field")
        start = _parse_timestamp(data["start"], "start")
        end = _parse_timestamp(data["end"], "end")
        return cls(
            id=data["id"],
            title=str(data.get("title", "")),
            start=start,
            end=end,
            all_day=bool(data["allDay"]),
            color=EventColor.lookup(data.get("color")),
            location=data.get("location"),
            description=data.get("description"),
        )
