"""Timezone-aware time utilities."""
from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from whattimeisit.config.settings import get_settings


def get_local_zone_name() -> str:
    """Get the configured local timezone identifier."""
    return get_settings().default_timezone


def get_local_timezone() -> ZoneInfo:
    """Get the configured local timezone."""
    return ZoneInfo(get_local_zone_name())


def now_local(zone_name: str | None = None) -> datetime:
    """Get current time in ``zone_name`` or the configured local timezone."""
    tz = ZoneInfo(zone_name) if zone_name else get_local_timezone()
    return datetime.now(tz)


def format_calendar_date(dt: datetime) -> str:
    """Short numeric calendar date, e.g. ``6/1/2023``."""
    return f"{dt.month}/{dt.day}/{dt.year}"
