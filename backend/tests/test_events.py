from datetime import date

import pytest

from schedule_layout.errors import InvalidEvent, InvalidInterval
from schedule_layout.events import EventStatus, coerce_events, parse_event, parse_status


def _record(**overrides) -> dict:
    record = {
        "id": "evt-1",
        "date": "2025-03-03",
        "startTime": "09:00",
        "endTime": "10:00",
        "salesRepId": "rep-a",
        "status": "scheduled",
        "title": "Discovery call",
        "clientName": "Acme",
    }
    record.update(overrides)
    return record


def test_parse_event_accepts_store_field_names() -> None:
    event = parse_event(_record())

    assert event.id == "evt-1"
    assert event.day == date(2025, 3, 3)
    assert (event.start, event.end) == (540, 600)
    assert event.resource_id == "rep-a"
    assert event.status is EventStatus.SCHEDULED
    assert event.client_name == "Acme"


def test_parse_event_defaults_missing_status_to_scheduled() -> None:
    assert parse_event(_record(status="")).status is EventStatus.SCHEDULED
    assert parse_event(_record(status="Completed")).status is EventStatus.COMPLETED


def test_parse_event_failures_carry_the_event_id() -> None:
    with pytest.raises(InvalidInterval) as interval_error:
        parse_event(_record(endTime="08:00"))
    assert interval_error.value.event_id == "evt-1"

    with pytest.raises(InvalidEvent) as day_error:
        parse_event(_record(date=None))
    assert day_error.value.event_id == "evt-1"

    with pytest.raises(InvalidEvent):
        parse_event(_record(salesRepId=""))

    with pytest.raises(InvalidEvent):
        parse_event(_record(status="postponed"))

    with pytest.raises(InvalidEvent):
        parse_event(_record(id=""))


def test_coerce_events_collects_issues_and_keeps_valid_events() -> None:
    records = [
        _record(id="ok-1"),
        _record(id="bad-interval", startTime="10:00", endTime="10:00"),
        _record(id="no-day", date="not a date"),
        _record(id="ok-2", startTime="11:00", endTime="12:00"),
        _record(id="ok-1", startTime="13:00", endTime="14:00"),
    ]

    events, issues = coerce_events(records)

    assert [event.id for event in events] == ["ok-1", "ok-2"]
    assert [(issue.event_id, issue.code) for issue in issues] == [
        ("bad-interval", "invalid_interval"),
        ("no-day", "invalid_event"),
        ("ok-1", "invalid_event"),
    ]


def test_coerce_events_passes_event_objects_through(make_event) -> None:
    event = make_event("evt-9", "09:00", "09:30")

    events, issues = coerce_events([event])

    assert events == [event]
    assert issues == []


def test_parse_status_accepts_enum_members() -> None:
    assert parse_status(EventStatus.COMPLETED) is EventStatus.COMPLETED
    assert parse_event(_record(status=EventStatus.CANCELLED)).status is EventStatus.CANCELLED


def test_parse_event_coerces_null_and_numeric_fields() -> None:
    event = parse_event(_record(id=42, salesRepId=7, title=None, clientName=None))

    assert event.id == "42"
    assert event.resource_id == "7"
    assert (event.title, event.client_name) == ("", "")
