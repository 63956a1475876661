from __future__ import annotations

from datetime import date, datetime, timezone
import logging
import threading
from typing import Any, Iterable, Mapping

from .config import Settings
from .data_loader import load_event_records
from .events import Event, ValidationIssue, coerce_events
from .filters import ViewState, build_view_state, extract_filter_values
from .models import (
    CalendarEvent,
    DayLayoutOut,
    EventGeometryOut,
    EventStatsResponse,
    FilterOptions,
    HealthResponse,
    MetaResponse,
    MonthDayOut,
    MonthLayoutResponse,
    ValidationIssueOut,
    WeekLayoutResponse,
)
from .stats import resource_counts, status_counts
from .utils import format_minutes, resource_color_hsl
from .views import MonthLayout, WeekLayout, build_month_layout, build_week_layout
from .windows import month_grid_window, month_window, week_window

logger = logging.getLogger(__name__)


def serialize_event(event: Event) -> CalendarEvent:
    return CalendarEvent(
        id=event.id,
        date=event.day,
        start_time=format_minutes(event.start),
        end_time=format_minutes(event.end),
        start_min=event.start,
        end_min=event.end,
        resource_id=event.resource_id,
        status=event.status.value,
        title=event.title,
        client_name=event.client_name,
        color_hsl=resource_color_hsl(event.resource_id),
    )


def _serialize_issues(issues: Iterable[ValidationIssue]) -> list[ValidationIssueOut]:
    return [ValidationIssueOut(event_id=issue.event_id, code=issue.code, message=issue.message) for issue in issues]


def serialize_week(week: WeekLayout) -> WeekLayoutResponse:
    layout = {
        event_id: EventGeometryOut(
            top=geometry.top,
            height=geometry.height,
            width_fraction=geometry.width_fraction,
            left_fraction=geometry.left_fraction,
            lane_index=geometry.lane_index,
            lane_count=geometry.lane_count,
        )
        for event_id, geometry in week.placements.items()
    }
    days = [
        DayLayoutOut(
            date=day.day,
            events=[serialize_event(event) for event in day.events],
            clusters=day.clusters,
        )
        for day in week.days
    ]
    return WeekLayoutResponse(
        window_start=week.window.start,
        window_end=week.window.end,
        layout=layout,
        days=days,
        issues=_serialize_issues(week.issues),
    )


def serialize_month(month: MonthLayout) -> MonthLayoutResponse:
    buckets = month.event_ids_by_day()
    events = {event.id: serialize_event(event) for day_events in month.buckets.values() for event in day_events}
    days = [
        MonthDayOut(date=day, in_month=month.window.contains(day), event_ids=event_ids)
        for day, event_ids in buckets.items()
    ]
    return MonthLayoutResponse(
        window_start=month.window.start,
        window_end=month.window.end,
        buckets=buckets,
        days=days,
        events=events,
        issues=_serialize_issues(month.issues),
    )


class CalendarService:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._lock = threading.Lock()

        self._events: list[Event] | None = None
        self._issues: list[ValidationIssue] = []
        self._last_reload_at: datetime | None = None
        self._fingerprint: str | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    def _build_fingerprint(self) -> str:
        path = self._settings.events_path
        if not path.exists():
            return f"{path.name}:missing"
        stat = path.stat()
        return f"{path.name}:{stat.st_size}:{stat.st_mtime_ns}"

    def _cache_expired(self, now: datetime) -> bool:
        if self._last_reload_at is None:
            return True
        return (now - self._last_reload_at).total_seconds() >= self._settings.cache_ttl_seconds

    def _needs_reload(self, now: datetime) -> bool:
        if self._events is None:
            return True

        if self._cache_expired(now):
            return True

        return self._build_fingerprint() != self._fingerprint

    def _reload_locked(self) -> None:
        records = load_event_records(self._settings.events_path)
        events, issues = coerce_events(records)
        for issue in issues:
            logger.warning("Invalid event %s in store: %s", issue.event_id or "<unknown>", issue.message)

        self._events = events
        self._issues = issues
        self._last_reload_at = datetime.now(timezone.utc)
        self._fingerprint = self._build_fingerprint()
        logger.info("Event cache reloaded: %d valid, %d invalid", len(events), len(issues))

    def _ensure_loaded(self) -> list[Event]:
        now = datetime.now(timezone.utc)
        if not self._needs_reload(now):
            return self._events if self._events is not None else []

        with self._lock:
            if self._needs_reload(now):
                self._reload_locked()

        return self._events if self._events is not None else []

    def health(self) -> HealthResponse:
        events = self._ensure_loaded()
        return HealthResponse(
            status="ok",
            last_reload_at=self._last_reload_at,
            cache_ttl_seconds=self._settings.cache_ttl_seconds,
            records=len(events),
            invalid_records=len(self._issues),
        )

    def meta(self) -> MetaResponse:
        events = self._ensure_loaded()
        days = [event.day for event in events]

        return MetaResponse(
            timezone=self._settings.timezone,
            week_starts_on=self._settings.week_starts_on,
            min_date=min(days) if days else None,
            max_date=max(days) if days else None,
            filters=FilterOptions(**extract_filter_values(events)),
        )

    def stats(self) -> EventStatsResponse:
        events = self._ensure_loaded()
        return EventStatsResponse(**status_counts(events), by_resource=resource_counts(events))

    def get_week_layout(
        self,
        anchor_date: date,
        resource_ids: list[str] | None = None,
        statuses: list[str] | None = None,
    ) -> WeekLayoutResponse:
        window = week_window(anchor_date, self._settings.week_starts_on)
        view = build_view_state(
            window_start=window.start,
            window_end=window.end,
            resource_ids=resource_ids,
            statuses=statuses,
        )
        week = build_week_layout(self._ensure_loaded(), view, self._settings.axis())
        return serialize_week(week)

    def get_month_layout(
        self,
        anchor_date: date,
        resource_ids: list[str] | None = None,
        statuses: list[str] | None = None,
    ) -> MonthLayoutResponse:
        window = month_window(anchor_date)
        view = build_view_state(
            window_start=window.start,
            window_end=window.end,
            resource_ids=resource_ids,
            statuses=statuses,
        )
        grid = month_grid_window(anchor_date, self._settings.week_starts_on)
        return serialize_month(build_month_layout(self._ensure_loaded(), view, grid))

    def layout_week(self, records: Iterable[Mapping[str, Any]], view: ViewState) -> WeekLayoutResponse:
        return serialize_week(build_week_layout(records, view, self._settings.axis()))

    def layout_month(self, records: Iterable[Mapping[str, Any]], view: ViewState) -> MonthLayoutResponse:
        return serialize_month(build_month_layout(records, view))
