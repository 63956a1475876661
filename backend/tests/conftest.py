from datetime import date

import pytest

from schedule_layout.events import Event, EventStatus
from schedule_layout.intervals import TimeInterval

DAY = date(2025, 3, 3)


@pytest.fixture
def make_event():
    def _make(
        event_id: str,
        start: str,
        end: str,
        resource_id: str = "rep-a",
        day: date = DAY,
        status: EventStatus = EventStatus.SCHEDULED,
    ) -> Event:
        return Event(
            id=event_id,
            day=day,
            interval=TimeInterval.from_values(start, end),
            resource_id=resource_id,
            status=status,
        )

    return _make
