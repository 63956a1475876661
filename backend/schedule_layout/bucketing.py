from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable

from .events import Event


def _ordered(events: Iterable[Event]) -> list[Event]:
    return sorted(events, key=lambda event: (event.start, event.id))


def bucket(events: Iterable[Event], day: date) -> list[Event]:
    """Events on ``day`` ordered by start time, equal starts by id."""
    return _ordered(event for event in events if event.day == day)


def bucket_days(events: Iterable[Event], days: Iterable[date]) -> dict[date, list[Event]]:
    """One ordered bucket per requested day; empty days get an empty list."""
    by_day: dict[date, list[Event]] = defaultdict(list)
    for event in events:
        by_day[event.day].append(event)

    return {day: _ordered(by_day.get(day, ())) for day in days}
