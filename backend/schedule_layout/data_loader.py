from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from .errors import DataSourceUnavailable
from .utils import format_minutes, normalize_text, parse_day_value, parse_minutes

logger = logging.getLogger(__name__)

OUTPUT_COLUMNS = [
    "id",
    "date",
    "start_time",
    "end_time",
    "resource_id",
    "status",
    "title",
    "client_name",
    "notes",
]

RENAMED_COLUMNS = {
    "startTime": "start_time",
    "endTime": "end_time",
    "salesRepId": "resource_id",
    "resourceId": "resource_id",
    "sales_rep_id": "resource_id",
    "clientName": "client_name",
    "day": "date",
}


def _empty_output() -> pd.DataFrame:
    return pd.DataFrame(columns=OUTPUT_COLUMNS)


def _normalize_time(value: Any) -> str:
    minutes = parse_minutes(value)
    if minutes is None:
        return normalize_text(value)
    return format_minutes(minutes)


def normalize_event_frame(raw_df: pd.DataFrame) -> pd.DataFrame:
    """Bring a store export to ``OUTPUT_COLUMNS``; malformed rows are kept for validation."""
    if raw_df.empty:
        return _empty_output()

    df = raw_df.copy()
    for source_col, target_col in RENAMED_COLUMNS.items():
        if source_col in df.columns and target_col not in df.columns:
            df[target_col] = df[source_col]

    for column in OUTPUT_COLUMNS:
        if column not in df.columns:
            df[column] = ""

    df["date"] = df["date"].apply(parse_day_value)
    df["start_time"] = df["start_time"].apply(_normalize_time)
    df["end_time"] = df["end_time"].apply(_normalize_time)

    for column in ("id", "resource_id", "status", "title", "client_name", "notes"):
        df[column] = df[column].apply(normalize_text)
    df["status"] = df["status"].str.lower()

    return df[OUTPUT_COLUMNS].sort_values(by=["date", "start_time", "id"], na_position="last", kind="stable")


def load_event_frame(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise DataSourceUnavailable(f"Event store not found: {path.name}")

    try:
        raw_df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except Exception as exc:
        raise DataSourceUnavailable(f"Could not read event store {path.name}: {exc}") from exc

    frame = normalize_event_frame(raw_df)
    logger.info("Loaded %d event rows from %s", len(frame), path.name)
    return frame


def load_event_records(path: Path) -> list[dict[str, Any]]:
    frame = load_event_frame(path)
    return frame.to_dict("records")
