from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field


class EventIn(BaseModel):
    """Loosely typed event record; malformed values are reported by the engine, not rejected here."""

    id: Any = None
    date: Any = Field(default=None, validation_alias=AliasChoices("date", "day"))
    start_time: Any = Field(default=None, validation_alias=AliasChoices("start_time", "startTime", "start"))
    end_time: Any = Field(default=None, validation_alias=AliasChoices("end_time", "endTime", "end"))
    resource_id: Any = Field(
        default=None,
        validation_alias=AliasChoices("resource_id", "resourceId", "salesRepId"),
    )
    status: Any = None
    title: Any = None
    client_name: Any = Field(default=None, validation_alias=AliasChoices("client_name", "clientName"))
    notes: Any = None


class ViewStateIn(BaseModel):
    window_start: date = Field(validation_alias=AliasChoices("window_start", "windowStart"))
    window_end: date = Field(validation_alias=AliasChoices("window_end", "windowEnd"))
    selected_resource_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("selected_resource_ids", "selectedResourceIds"),
    )
    statuses: list[str] = Field(default_factory=list)


class LayoutRequest(BaseModel):
    events: list[EventIn] = Field(default_factory=list)
    view: ViewStateIn


class ValidationIssueOut(BaseModel):
    event_id: str | None = None
    code: str
    message: str


class EventGeometryOut(BaseModel):
    top: float
    height: float
    width_fraction: float
    left_fraction: float
    lane_index: int
    lane_count: int


class CalendarEvent(BaseModel):
    id: str
    date: date
    start_time: str
    end_time: str
    start_min: int
    end_min: int
    resource_id: str
    status: str
    title: str
    client_name: str
    color_hsl: str


class DayLayoutOut(BaseModel):
    date: date
    events: list[CalendarEvent] = Field(default_factory=list)
    clusters: list[list[str]] = Field(default_factory=list)


class WeekLayoutResponse(BaseModel):
    window_start: date
    window_end: date
    layout: dict[str, EventGeometryOut] = Field(default_factory=dict)
    days: list[DayLayoutOut] = Field(default_factory=list)
    issues: list[ValidationIssueOut] = Field(default_factory=list)


class MonthDayOut(BaseModel):
    date: date
    in_month: bool
    event_ids: list[str] = Field(default_factory=list)


class MonthLayoutResponse(BaseModel):
    window_start: date
    window_end: date
    buckets: dict[date, list[str]] = Field(default_factory=dict)
    days: list[MonthDayOut] = Field(default_factory=list)
    events: dict[str, CalendarEvent] = Field(default_factory=dict)
    issues: list[ValidationIssueOut] = Field(default_factory=list)


class FilterOptions(BaseModel):
    resource_ids: list[str] = Field(default_factory=list)
    statuses: list[str] = Field(default_factory=list)


class MetaResponse(BaseModel):
    timezone: str
    week_starts_on: int
    min_date: date | None = None
    max_date: date | None = None
    filters: FilterOptions


class EventStatsResponse(BaseModel):
    total: int
    scheduled: int
    completed: int
    cancelled: int
    by_resource: dict[str, int] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    last_reload_at: datetime | None = None
    cache_ttl_seconds: int
    records: int
    invalid_records: int


class ErrorResponse(BaseModel):
    detail: str
    request_id: str | None = None
