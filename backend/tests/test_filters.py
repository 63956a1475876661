from datetime import date

import pytest

from schedule_layout.errors import InvalidEvent
from schedule_layout.events import EventStatus
from schedule_layout.filters import build_view_state, extract_filter_values, filter_events
from schedule_layout.windows import DateWindow

WEEK = DateWindow(date(2025, 3, 2), date(2025, 3, 8))


def _fixture(make_event) -> list:
    return [
        make_event("a", "09:00", "10:00", "rep-a", day=date(2025, 3, 2)),
        make_event("b", "09:00", "10:00", "rep-b", day=date(2025, 3, 5)),
        make_event("c", "11:00", "12:00", "rep-c", day=date(2025, 3, 8), status=EventStatus.CANCELLED),
        make_event("d", "11:00", "12:00", "rep-a", day=date(2025, 3, 9)),
        make_event("e", "08:00", "09:00", "rep-b", day=date(2025, 3, 1)),
    ]


def test_empty_selection_returns_every_event_in_window(make_event) -> None:
    result = filter_events(_fixture(make_event), WEEK, resource_ids=set())

    assert [event.id for event in result] == ["a", "b", "c"]


def test_resource_selection_is_order_preserving(make_event) -> None:
    events = list(reversed(_fixture(make_event)))

    result = filter_events(events, WEEK, resource_ids={"rep-a", "rep-c"})

    assert [event.id for event in result] == ["c", "a"]


def test_status_selection(make_event) -> None:
    result = filter_events(_fixture(make_event), WEEK, statuses={EventStatus.CANCELLED})

    assert [event.id for event in result] == ["c"]


def test_reversed_window_yields_nothing(make_event) -> None:
    window = DateWindow(date(2025, 3, 8), date(2025, 3, 2))

    assert window.is_empty
    assert filter_events(_fixture(make_event), window) == []


def test_build_view_state_normalizes_values() -> None:
    view = build_view_state(
        window_start=date(2025, 3, 2),
        window_end=date(2025, 3, 8),
        resource_ids=[" rep-b", "rep-a", "rep-b", ""],
        statuses=["Completed", "scheduled"],
    )

    assert view.resource_ids == ("rep-a", "rep-b")
    assert view.statuses == (EventStatus.COMPLETED, EventStatus.SCHEDULED)


def test_build_view_state_rejects_unknown_status() -> None:
    with pytest.raises(InvalidEvent):
        build_view_state(window_start=date(2025, 3, 2), window_end=date(2025, 3, 8), statuses=["lost"])


def test_extract_filter_values(make_event) -> None:
    values = extract_filter_values(_fixture(make_event))

    assert values["resource_ids"] == ["rep-a", "rep-b", "rep-c"]
    assert values["statuses"] == ["cancelled", "scheduled"]


def test_build_view_state_accepts_status_members() -> None:
    view = build_view_state(
        window_start=date(2025, 3, 2),
        window_end=date(2025, 3, 8),
        statuses=[EventStatus.CANCELLED, " "],
    )

    assert view.statuses == (EventStatus.CANCELLED,)
