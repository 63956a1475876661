from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Mapping

from .errors import InvalidEvent, ScheduleError
from .intervals import TimeInterval
from .utils import normalize_text, parse_day_value

ID_KEYS = ("id",)
DAY_KEYS = ("day", "date")
START_KEYS = ("start", "start_time", "startTime")
END_KEYS = ("end", "end_time", "endTime")
RESOURCE_KEYS = ("resource_id", "resourceId", "sales_rep_id", "salesRepId")
STATUS_KEYS = ("status",)
TITLE_KEYS = ("title",)
CLIENT_KEYS = ("client_name", "clientName")
NOTES_KEYS = ("notes",)


class EventStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Event:
    id: str
    day: date
    interval: TimeInterval
    resource_id: str
    status: EventStatus = EventStatus.SCHEDULED
    title: str = ""
    client_name: str = ""
    notes: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidEvent("Event is missing its id.")
        if not isinstance(self.day, date):
            raise InvalidEvent(f"Event {self.id} is missing its day.", event_id=self.id)
        if not self.resource_id:
            raise InvalidEvent(f"Event {self.id} has no sales representative.", event_id=self.id)
        if not isinstance(self.status, EventStatus):
            raise InvalidEvent(f"Event {self.id} has unknown status {self.status!r}.", event_id=self.id)

    @property
    def start(self) -> int:
        return self.interval.start

    @property
    def end(self) -> int:
        return self.interval.end

    @property
    def sort_key(self) -> tuple[int, int, str]:
        return (self.interval.start, self.interval.end, self.id)


@dataclass(frozen=True)
class ValidationIssue:
    event_id: str | None
    code: str
    message: str


def _pick(record: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def parse_status(value: Any, event_id: str | None = None) -> EventStatus:
    if isinstance(value, EventStatus):
        return value
    raw = normalize_text(value).lower()
    if not raw:
        return EventStatus.SCHEDULED
    try:
        return EventStatus(raw)
    except ValueError:
        raise InvalidEvent(f"Unknown event status {raw!r}.", event_id=event_id) from None


def parse_event(record: Mapping[str, Any]) -> Event:
    """Build an :class:`Event` from a store record, raising on malformed input."""
    event_id = normalize_text(_pick(record, ID_KEYS)) or None
    if event_id is None:
        raise InvalidEvent("Event is missing its id.")

    day = parse_day_value(_pick(record, DAY_KEYS))
    if day is None:
        raise InvalidEvent(f"Event {event_id} is missing its day.", event_id=event_id)

    try:
        interval = TimeInterval.from_values(_pick(record, START_KEYS), _pick(record, END_KEYS))
    except ScheduleError as exc:
        exc.event_id = event_id
        raise

    return Event(
        id=event_id,
        day=day,
        interval=interval,
        resource_id=normalize_text(_pick(record, RESOURCE_KEYS)),
        status=parse_status(_pick(record, STATUS_KEYS), event_id),
        title=normalize_text(_pick(record, TITLE_KEYS)),
        client_name=normalize_text(_pick(record, CLIENT_KEYS)),
        notes=normalize_text(_pick(record, NOTES_KEYS)),
    )


def coerce_events(items: Iterable[Event | Mapping[str, Any]]) -> tuple[list[Event], list[ValidationIssue]]:
    """Split raw input into valid events and issues; the first occurrence of an id wins."""
    events: list[Event] = []
    issues: list[ValidationIssue] = []
    seen_ids: set[str] = set()

    for item in items:
        if isinstance(item, Event):
            event = item
        else:
            try:
                event = parse_event(item)
            except ScheduleError as exc:
                issues.append(ValidationIssue(event_id=exc.event_id, code=exc.code, message=str(exc)))
                continue

        if event.id in seen_ids:
            issues.append(
                ValidationIssue(
                    event_id=event.id,
                    code=InvalidEvent.code,
                    message=f"Duplicate event id {event.id}.",
                )
            )
            continue

        seen_ids.add(event.id)
        events.append(event)

    return events, issues
