from __future__ import annotations

from typing import Iterable

import pandas as pd

from .events import Event, EventStatus


def status_counts(events: Iterable[Event]) -> dict[str, int]:
    """Total plus one count per status, zero for statuses with no events."""
    statuses = pd.Series([event.status.value for event in events], dtype="object")
    counts = statuses.value_counts()

    result = {"total": int(len(statuses))}
    for status in EventStatus:
        result[status.value] = int(counts.get(status.value, 0))
    return result


def resource_counts(events: Iterable[Event]) -> dict[str, int]:
    resources = pd.Series([event.resource_id for event in events], dtype="object")
    if resources.empty:
        return {}
    counts = resources.value_counts()
    return {str(resource): int(count) for resource, count in sorted(counts.items())}
