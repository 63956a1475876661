"""Week and month pipelines over a raw event collection.

Both pipelines are pure: they validate the input, narrow it to the view and
return a fresh result together with any validation issues found on the way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import logging
from typing import Any, Iterable, Mapping

from .bucketing import bucket_days
from .events import Event, ValidationIssue, coerce_events
from .filters import ViewState, apply_view
from .layout import AxisConfig, EventGeometry, cluster_events, layout_day
from .windows import DateWindow

logger = logging.getLogger(__name__)

RawEvents = Iterable[Event | Mapping[str, Any]]


@dataclass(frozen=True)
class DayLayout:
    day: date
    events: list[Event] = field(default_factory=list)
    clusters: list[list[str]] = field(default_factory=list)
    placements: dict[str, EventGeometry] = field(default_factory=dict)


@dataclass(frozen=True)
class WeekLayout:
    window: DateWindow
    days: list[DayLayout] = field(default_factory=list)
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def placements(self) -> dict[str, EventGeometry]:
        merged: dict[str, EventGeometry] = {}
        for day in self.days:
            merged.update(day.placements)
        return merged


@dataclass(frozen=True)
class MonthLayout:
    window: DateWindow
    grid: DateWindow
    buckets: dict[date, list[Event]] = field(default_factory=dict)
    issues: list[ValidationIssue] = field(default_factory=list)

    def event_ids_by_day(self) -> dict[date, list[str]]:
        return {day: [event.id for event in events] for day, events in self.buckets.items()}


def _prepare(items: RawEvents, view: ViewState) -> tuple[list[Event], list[ValidationIssue]]:
    events, issues = coerce_events(items)
    for issue in issues:
        logger.warning("Skipping event %s: %s", issue.event_id or "<unknown>", issue.message)

    if view.window.is_empty:
        logger.debug("Empty window %s..%s, nothing to lay out", view.window.start, view.window.end)
        return [], issues

    return apply_view(events, view), issues


def build_week_layout(items: RawEvents, view: ViewState, axis: AxisConfig = AxisConfig()) -> WeekLayout:
    visible, issues = _prepare(items, view)
    buckets = bucket_days(visible, view.window.days())

    days = [
        DayLayout(
            day=day,
            events=day_events,
            clusters=[[event.id for event in cluster] for cluster in cluster_events(day_events)],
            placements=layout_day(day_events, axis),
        )
        for day, day_events in buckets.items()
    ]
    return WeekLayout(window=view.window, days=days, issues=issues)


def build_month_layout(items: RawEvents, view: ViewState, grid: DateWindow | None = None) -> MonthLayout:
    """Bucket the window's events per day; ``grid`` adds the padding days of a month grid."""
    visible, issues = _prepare(items, view)
    grid = grid or view.window
    return MonthLayout(
        window=view.window,
        grid=grid,
        buckets=bucket_days(visible, grid.days()),
        issues=issues,
    )
