from __future__ import annotations

from datetime import date, datetime, time as dtime
import hashlib
from typing import Any

import pandas as pd

MINUTES_PER_DAY = 24 * 60
END_OF_DAY_LABELS = {"24:00", "24:00:00"}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_time_value(value: Any) -> dtime | None:
    if _is_missing(value):
        return None

    if isinstance(value, datetime):
        return value.time().replace(second=0, microsecond=0)

    if isinstance(value, dtime):
        return value.replace(second=0, microsecond=0)

    raw = str(value).strip()
    if not raw:
        return None

    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(raw, fmt).time().replace(second=0)
        except ValueError:
            continue

    parsed = pd.to_datetime(raw, errors="coerce")
    if pd.isna(parsed):
        return None

    return parsed.to_pydatetime().time().replace(second=0, microsecond=0)


def parse_minutes(value: Any) -> int | None:
    """Minutes since midnight for an ``HH:MM`` value; ``24:00`` maps to the end of day."""
    if isinstance(value, str) and value.strip() in END_OF_DAY_LABELS:
        return MINUTES_PER_DAY

    parsed = parse_time_value(value)
    return to_minutes(parsed) if parsed is not None else None


def parse_day_value(value: Any) -> date | None:
    if _is_missing(value):
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    raw = str(value).strip()
    if not raw:
        return None

    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        pass

    parsed = pd.to_datetime(raw, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def to_minutes(value: dtime) -> int:
    return value.hour * 60 + value.minute


def format_minutes(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def hue_for_resource(resource_id: str) -> int:
    normalized = (resource_id or "").strip()
    if not normalized:
        return 210
    return int(hashlib.md5(normalized.encode("utf-8")).hexdigest(), 16) % 360


def resource_color_hsl(resource_id: str) -> str:
    hue = hue_for_resource(resource_id)
    return f"hsl({hue} 74% 44%)"


def normalize_text(value: Any) -> str:
    if _is_missing(value):
        return ""
    return str(value).strip()
