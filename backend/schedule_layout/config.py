from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

from .layout import (
    DEFAULT_MIN_HEIGHT,
    DEFAULT_PIXELS_PER_MINUTE,
    DEFAULT_USABLE_WIDTH_FRACTION,
    AxisConfig,
)
from .windows import SUNDAY


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    events_file: str
    cache_ttl_seconds: int
    timezone: str
    allowed_origins: list[str]
    pixels_per_minute: float
    min_event_height: float
    usable_width_fraction: float
    week_starts_on: int
    log_level: str

    @property
    def events_path(self) -> Path:
        return self.data_dir / self.events_file

    def axis(self) -> AxisConfig:
        return AxisConfig(
            pixels_per_minute=self.pixels_per_minute,
            min_height=self.min_event_height,
            usable_width_fraction=self.usable_width_fraction,
        )


def _parse_origins(raw: str) -> list[str]:
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["http://localhost:3000"]


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


@lru_cache
def get_settings() -> Settings:
    default_data_dir = Path(__file__).resolve().parents[1] / "data"
    data_dir = Path(os.getenv("DATA_DIR", str(default_data_dir))).resolve()

    pixels_per_minute = _env_float("PIXELS_PER_MINUTE", DEFAULT_PIXELS_PER_MINUTE)
    usable_width_fraction = _env_float("USABLE_WIDTH_FRACTION", DEFAULT_USABLE_WIDTH_FRACTION)

    return Settings(
        data_dir=data_dir,
        events_file=os.getenv("EVENTS_FILE", "events.csv"),
        cache_ttl_seconds=max(_env_int("CACHE_TTL_SECONDS", 60), 1),
        timezone=os.getenv("TZ", "UTC"),
        allowed_origins=_parse_origins(os.getenv("ALLOWED_ORIGINS", "http://localhost:3000")),
        pixels_per_minute=pixels_per_minute if pixels_per_minute > 0 else DEFAULT_PIXELS_PER_MINUTE,
        min_event_height=max(_env_float("MIN_EVENT_HEIGHT", DEFAULT_MIN_HEIGHT), 0.0),
        usable_width_fraction=(
            usable_width_fraction if 0 < usable_width_fraction <= 1 else DEFAULT_USABLE_WIDTH_FRACTION
        ),
        week_starts_on=_env_int("WEEK_STARTS_ON", SUNDAY) % 7,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
