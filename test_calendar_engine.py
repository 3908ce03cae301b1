"""End-to-end: navigator state through grid, binder and positions."""

from datetime import date, datetime

from calendar_engine import CalendarEngine, DayView, MonthView, WeekView
from conftest import make_event
from events import Event, EventColor
from view_navigator import ViewMode, ViewNavigator

ROW = 48


def _events():
    return [
        make_event(1, datetime(2025, 3, 3), all_day=True, color=EventColor.ROSE),
        make_event(2, datetime(2025, 3, 3, 10), datetime(2025, 3, 3, 11)),
        make_event(3, datetime(2025, 3, 5, 9, 30), datetime(2025, 3, 5, 12)),
    ]


def test_month_view(clock):
    engine = CalendarEngine(ViewNavigator(clock=clock))
    view = engine.compute(_events())
    assert isinstance(view, MonthView)
    assert view.title == "March 2025"
    assert len(view.cells) == 42
    assert view.week_numbers == (9, 10, 11, 12, 13, 14)
    assert view.day_names[0] == "Mon"
    assert view.days_in_month == 31
    with_events = [(c.date, [e.id for e in c.events]) for c in view.cells if c.events]
    assert with_events == [(date(2025, 3, 3), [1])]
    assert engine.now_marker_offset() is None


def test_week_view(clock):
    nav = ViewNavigator(clock=clock, mode="Week")
    engine = CalendarEngine(nav, row_height=ROW)
    view = engine.compute(_events())
    assert isinstance(view, WeekView)
    assert view.title == "March 2025"
    assert view.week.dates[0] == date(2025, 3, 3)
    assert view.now_column == 2
    assert view.now_offset == 13 * ROW + ROW / 2
    assert view.gmt_label.startswith("GMT")
    assert view.weekend_columns == (5, 6)
    monday_row10 = view.week.days[0].hours[9]
    assert [te.event.id for te in monday_row10.events] == [2]
    assert monday_row10.events[0].height == ROW
    assert [e.id for e in view.week.days[0].all_day] == [1]

    nav.next()
    later = engine.compute(_events())
    assert later.now_column is None
    assert later.now_offset is None
    assert engine.now_marker_offset() is None


def test_day_view(clock):
    nav = ViewNavigator(clock=clock, mode="Day")
    engine = CalendarEngine(nav, row_height=ROW)
    view = engine.compute(_events())
    assert isinstance(view, DayView)
    assert view.title == "Wed, March 5, 2025"
    assert view.day_of_year == 64
    placed = view.day.timed_events()
    assert [te.event.id for te in placed] == [3]
    assert placed[0].top == 8 * ROW + ROW / 2
    assert placed[0].height == 3 * ROW
    assert view.now_offset == engine.now_marker_offset()

    nav.previous()
    assert engine.compute(_events()).now_offset is None


def test_now_marker_follows_clock(clock):
    engine = CalendarEngine(ViewNavigator(clock=clock, mode="Day"), row_height=ROW)
    first = engine.now_marker_offset()
    clock.advance(minutes=30)
    assert engine.now_marker_offset() == first + ROW / 2


def test_from_settings_uses_configured_view_and_density(clock):
    settings = {
        "default_view": "Week",
        "density": "compact",
        "compact_row_height": 30,
        "now_refresh_seconds": 120,
        "default_color": "teal",
    }
    engine = CalendarEngine.from_settings(settings, clock=clock)
    assert engine.navigator.mode is ViewMode.WEEK
    assert engine.row_height == 30
    plain = make_event(9, datetime(2025, 3, 4, 8))
    assert engine.color_of(plain) is EventColor.TEAL
    assert engine.color_of(_events()[0]) is EventColor.ROSE
    ticker = engine.now_marker_ticker(lambda offset: None)
    assert ticker.interval == 120


def test_ticker_feeds_marker_offset(clock):
    offsets = []
    engine = CalendarEngine(ViewNavigator(clock=clock, mode="Week"), row_height=ROW)
    ticker = engine.now_marker_ticker(offsets.append)
    ticker.start()
    ticker.stop()
    assert offsets == [13 * ROW + ROW / 2]


def test_configured_default_color_applies_to_decoded_events(clock):
    engine = CalendarEngine.from_settings({"default_color": "teal"}, clock=clock)
    decoded = Event.from_dict({
        "id": 5, "title": "Standup",
        "start": "2025-03-05T09:00", "end": "2025-03-05T09:15", "allDay": False,
    })
    unknown = Event.from_dict({
        "id": 6, "start": "2025-03-05T10:00", "end": "2025-03-05T11:00",
        "allDay": False, "color": "bg-blue-500",
    })
    assert engine.color_of(decoded) is EventColor.TEAL
    assert engine.color_of(unknown) is EventColor.TEAL
    assert decoded.resolved_color is EventColor.BLUE


def test_leap_february_month_view(clock):
    nav = ViewNavigator(clock=clock)
    engine = CalendarEngine(nav)
    for _ in range(13):
        nav.previous()
    assert nav.active_anchor == date(2024, 2, 1)
    assert engine.compute([]).days_in_month == 29
