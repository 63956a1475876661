import pytest

from schedule_layout.errors import InvalidInterval
from schedule_layout.intervals import TimeInterval


def test_overlap_is_strict() -> None:
    morning = TimeInterval.from_values("09:00", "10:00")

    assert morning.overlaps(TimeInterval.from_values("09:30", "10:30"))
    assert morning.overlaps(TimeInterval.from_values("08:00", "11:00"))
    assert not morning.overlaps(TimeInterval.from_values("10:00", "11:00"))
    assert not TimeInterval.from_values("10:00", "11:00").overlaps(morning)


def test_rejects_empty_and_reversed_ranges() -> None:
    with pytest.raises(InvalidInterval):
        TimeInterval(600, 600)
    with pytest.raises(InvalidInterval):
        TimeInterval.from_values("11:00", "10:00")
    with pytest.raises(InvalidInterval):
        TimeInterval(-5, 30)
    with pytest.raises(InvalidInterval):
        TimeInterval(1400, 1441)


def test_rejects_unreadable_values() -> None:
    with pytest.raises(InvalidInterval):
        TimeInterval.from_values("soon", "10:00")


def test_end_of_day_and_ordering() -> None:
    late = TimeInterval.from_values("23:00", "24:00")

    assert late.end == 1440
    assert late.duration == 60
    assert TimeInterval(540, 600) < TimeInterval(540, 630) < TimeInterval(600, 610)
    assert late.label() == "23:00-24:00"


def test_reversed_range_message_names_the_range() -> None:
    with pytest.raises(InvalidInterval, match="10:00-09:00"):
        TimeInterval.from_values("10:00", "09:00")
