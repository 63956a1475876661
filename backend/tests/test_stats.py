from schedule_layout.events import EventStatus
from schedule_layout.stats import resource_counts, status_counts


def test_status_counts(make_event) -> None:
    events = [
        make_event("a", "09:00", "10:00", "rep-a"),
        make_event("b", "10:00", "11:00", "rep-b", status=EventStatus.COMPLETED),
        make_event("c", "11:00", "12:00", "rep-a", status=EventStatus.COMPLETED),
    ]

    assert status_counts(events) == {"total": 3, "scheduled": 1, "completed": 2, "cancelled": 0}
    assert resource_counts(events) == {"rep-a": 2, "rep-b": 1}


def test_counts_without_events() -> None:
    assert status_counts([]) == {"total": 0, "scheduled": 0, "completed": 0, "cancelled": 0}
    assert resource_counts([]) == {}
