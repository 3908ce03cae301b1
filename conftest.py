"""Shared fixtures: a controllable clock so no test reads the wall clock."""

from datetime import datetime, timedelta

import pytest

from events import Event


class FakeClock:
    """Callable clock returning ``now``; tests move it with ``advance``."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    # Wednesday 5 March 2025, 14:30 local time
    return FakeClock(datetime(2025, 3, 5, 14, 30))


def make_event(id, start, end=None, all_day=False, **kwargs) -> Event:
    return Event(
        id=id,
        title=kwargs.pop("title", f"event {id}"),
        start=start,
        end=end if end is not None else start + timedelta(hours=1),
        all_day=all_day,
        **kwargs,
    )
