from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, Literal

ViewName = Literal["week", "month"]

SUNDAY = 6


@dataclass(frozen=True)
class DateWindow:
    """Inclusive ``start..end`` range of calendar days."""

    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> list[date]:
        return list(self._iter_days())

    def _iter_days(self) -> Iterator[date]:
        if self.is_empty:
            return
        for offset in range((self.end - self.start).days + 1):
            yield self.start + timedelta(days=offset)


def _clamp_add(day: date, days: int) -> date:
    """``day + days`` pinned to the ``date.min..date.max`` range."""
    ordinal = min(max(day.toordinal() + days, date.min.toordinal()), date.max.toordinal())
    return date.fromordinal(ordinal)


def start_of_week(anchor: date, week_starts_on: int = SUNDAY) -> date:
    return _clamp_add(anchor, -((anchor.weekday() - week_starts_on) % 7))


def week_window(anchor: date, week_starts_on: int = SUNDAY) -> DateWindow:
    week_start = start_of_week(anchor, week_starts_on)
    return DateWindow(week_start, _clamp_add(week_start, 6))


def month_window(anchor: date) -> DateWindow:
    last_day = calendar.monthrange(anchor.year, anchor.month)[1]
    return DateWindow(anchor.replace(day=1), anchor.replace(day=last_day))


def month_grid_window(anchor: date, week_starts_on: int = SUNDAY) -> DateWindow:
    """The month padded out to whole weeks, as drawn by a month grid."""
    month = month_window(anchor)
    grid_start = start_of_week(month.start, week_starts_on)
    grid_end = _clamp_add(start_of_week(month.end, week_starts_on), 6)
    return DateWindow(grid_start, grid_end)


def shift_anchor(anchor: date, view: ViewName, step: int) -> date:
    if view == "week":
        return anchor + timedelta(days=7 * step)

    month_index = anchor.year * 12 + (anchor.month - 1) + step
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(anchor.day, last_day))
