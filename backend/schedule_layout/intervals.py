from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import InvalidInterval
from .utils import MINUTES_PER_DAY, format_minutes, parse_minutes


@dataclass(frozen=True, order=True)
class TimeInterval:
    """Half-open ``[start, end)`` range inside one day, in minutes since midnight."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start < MINUTES_PER_DAY:
            raise InvalidInterval(f"Start minute {self.start} lies outside the day.")
        if self.end > MINUTES_PER_DAY:
            raise InvalidInterval(f"End minute {self.end} lies outside the day.")
        if self.start >= self.end:
            raise InvalidInterval(f"Interval {self.label()} must end after it starts.")

    @classmethod
    def from_values(cls, start: Any, end: Any) -> TimeInterval:
        start_min = parse_minutes(start)
        end_min = parse_minutes(end)
        if start_min is None or end_min is None:
            raise InvalidInterval(f"Unreadable time range {start!r}-{end!r}.")
        return cls(start_min, end_min)

    @property
    def duration(self) -> int:
        return self.end - self.start

    def overlaps(self, other: TimeInterval) -> bool:
        return self.start < other.end and other.start < self.end

    def label(self) -> str:
        return f"{format_minutes(self.start)}-{format_minutes(self.end)}"
