from __future__ import annotations

from dataclasses import dataclass
import heapq
from typing import Iterable

from .events import Event
from .intervals import TimeInterval

DEFAULT_PIXELS_PER_MINUTE = 0.8
DEFAULT_MIN_HEIGHT = 20.0
DEFAULT_USABLE_WIDTH_FRACTION = 0.9


@dataclass(frozen=True)
class AxisConfig:
    pixels_per_minute: float = DEFAULT_PIXELS_PER_MINUTE
    origin_min: int = 0
    min_height: float = DEFAULT_MIN_HEIGHT
    usable_width_fraction: float = DEFAULT_USABLE_WIDTH_FRACTION

    def __post_init__(self) -> None:
        if self.pixels_per_minute <= 0:
            raise ValueError("pixels_per_minute must be positive.")
        if not 0 < self.usable_width_fraction <= 1:
            raise ValueError("usable_width_fraction must be in (0, 1].")


@dataclass(frozen=True)
class LaneAssignment:
    event_id: str
    lane_index: int
    lane_count: int


@dataclass(frozen=True)
class EventGeometry:
    top: float
    height: float
    width_fraction: float
    left_fraction: float
    lane_index: int
    lane_count: int


def cluster_events(events: Iterable[Event]) -> list[list[Event]]:
    """Partition one day's events into maximal overlap clusters.

    Events are swept in ``(start, end, id)`` order while tracking the largest
    end seen in the open cluster; an event starting at or after that end
    cannot touch anything before it and opens a new cluster.
    """
    clusters: list[list[Event]] = []
    current: list[Event] = []
    current_end = 0

    for event in sorted(events, key=lambda item: item.sort_key):
        if current and event.start < current_end:
            current.append(event)
            current_end = max(current_end, event.end)
            continue

        if current:
            clusters.append(current)
        current = [event]
        current_end = event.end

    if current:
        clusters.append(current)

    return clusters


def assign_lanes(cluster: Iterable[Event]) -> list[LaneAssignment]:
    """Greedy interval partitioning: each event takes the lowest lane already free."""
    ordered = sorted(cluster, key=lambda item: item.sort_key)
    if not ordered:
        return []

    active: list[tuple[int, int]] = []
    free_lanes: list[int] = []
    next_lane = 0
    lanes: list[tuple[str, int]] = []

    for event in ordered:
        while active and active[0][0] <= event.start:
            _, released_lane = heapq.heappop(active)
            heapq.heappush(free_lanes, released_lane)

        if free_lanes:
            lane = heapq.heappop(free_lanes)
        else:
            lane = next_lane
            next_lane += 1

        heapq.heappush(active, (event.end, lane))
        lanes.append((event.id, lane))

    return [LaneAssignment(event_id, lane, next_lane) for event_id, lane in lanes]


def compute_geometry(
    interval: TimeInterval,
    lane_index: int,
    lane_count: int,
    axis: AxisConfig = AxisConfig(),
) -> EventGeometry:
    if lane_count < 1 or not 0 <= lane_index < lane_count:
        raise ValueError(f"Lane {lane_index} does not fit a cluster of {lane_count} lanes.")

    width_fraction = axis.usable_width_fraction / lane_count
    return EventGeometry(
        top=(interval.start - axis.origin_min) * axis.pixels_per_minute,
        height=max(interval.duration * axis.pixels_per_minute, axis.min_height),
        width_fraction=width_fraction,
        left_fraction=width_fraction * lane_index,
        lane_index=lane_index,
        lane_count=lane_count,
    )


def offset_to_minutes(top: float, axis: AxisConfig = AxisConfig()) -> int:
    return round(top / axis.pixels_per_minute) + axis.origin_min


def layout_day(events: Iterable[Event], axis: AxisConfig = AxisConfig()) -> dict[str, EventGeometry]:
    """Geometry for every event of a single day, keyed by event id."""
    by_id = {event.id: event for event in events}
    placements: dict[str, EventGeometry] = {}

    for cluster in cluster_events(by_id.values()):
        for assignment in assign_lanes(cluster):
            placements[assignment.event_id] = compute_geometry(
                by_id[assignment.event_id].interval,
                assignment.lane_index,
                assignment.lane_count,
                axis,
            )

    return placements
