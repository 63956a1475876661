from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from .events import Event, EventStatus, parse_status
from .windows import DateWindow


@dataclass(frozen=True)
class ViewState:
    window: DateWindow
    resource_ids: tuple[str, ...] = ()
    statuses: tuple[EventStatus, ...] = ()


def _normalize_values(values: Iterable[str] | None) -> tuple[str, ...]:
    if not values:
        return ()

    normalized = []
    for value in values:
        stripped = str(value).strip()
        if stripped:
            normalized.append(stripped)

    return tuple(sorted(set(normalized)))


def build_view_state(
    *,
    window_start: date,
    window_end: date,
    resource_ids: Iterable[str] | None = None,
    statuses: Iterable[str | EventStatus] | None = None,
) -> ViewState:
    parsed_statuses = {
        parse_status(value)
        for value in statuses or ()
        if isinstance(value, EventStatus) or str(value).strip()
    }
    return ViewState(
        window=DateWindow(window_start, window_end),
        resource_ids=_normalize_values(resource_ids),
        statuses=tuple(sorted(parsed_statuses, key=lambda status: status.value)),
    )


def filter_events(
    events: Iterable[Event],
    window: DateWindow,
    resource_ids: Iterable[str] | None = None,
    statuses: Iterable[EventStatus] | None = None,
) -> list[Event]:
    """Keep events inside ``window`` whose rep (and status) is selected.

    An empty or missing selection means "everything"; surviving events keep
    their input order.
    """
    if window.is_empty:
        return []

    allowed_resources = set(resource_ids or ())
    allowed_statuses = set(statuses or ())

    return [
        event
        for event in events
        if window.contains(event.day)
        and (not allowed_resources or event.resource_id in allowed_resources)
        and (not allowed_statuses or event.status in allowed_statuses)
    ]


def apply_view(events: Iterable[Event], view: ViewState) -> list[Event]:
    return filter_events(events, view.window, view.resource_ids, view.statuses)


def extract_filter_values(events: Iterable[Event]) -> dict[str, list[str]]:
    resources: set[str] = set()
    statuses: set[str] = set()
    for event in events:
        resources.add(event.resource_id)
        statuses.add(event.status.value)

    return {
        "resource_ids": sorted(resources, key=lambda item: item.lower()),
        "statuses": sorted(statuses),
    }
