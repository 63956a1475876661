from __future__ import annotations


class ScheduleError(ValueError):
    """Base class for event validation failures."""

    code = "invalid"

    def __init__(self, message: str, event_id: str | None = None) -> None:
        super().__init__(message)
        self.event_id = event_id


class InvalidInterval(ScheduleError):
    code = "invalid_interval"


class InvalidEvent(ScheduleError):
    code = "invalid_event"


class DataSourceUnavailable(RuntimeError):
    pass
