"""Hour grid computation shared by the HTML page and the JSON API.

Every row is anchored at the same UTC instant so that a given column holds
one absolute moment, displayed in each zone's local wall-clock time.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

HOURS_PER_ROW = 24

NIGHT = "night"
DAWN = "dawn"
DAY = "day"
DUSK = "dusk"

# (exclusive upper bound, bucket); hours past the last bound are night again.
_BUCKET_BOUNDS: tuple[tuple[int, str], ...] = (
    (7, NIGHT),
    (9, DAWN),
    (18, DAY),
    (22, DUSK),
)


@dataclass(frozen=True)
class HourCell:
    instant: datetime
    local: datetime
    label: str
    bucket: str
    is_daylight_saving: bool


@dataclass(frozen=True)
class TimezoneRow:
    zone: str
    is_daylight_saving: bool
    cells: tuple[HourCell, ...]


def anchor_instant(day: date, start_hour: int) -> datetime:
    """Return the UTC instant at ``start_hour`` on ``day``."""
    return datetime(day.year, day.month, day.day, start_hour, 0, 0, tzinfo=timezone.utc)


def classify_hour(hour: int) -> str:
    for upper, bucket in _BUCKET_BOUNDS:
        if hour < upper:
            return bucket
    return NIGHT


def format_label(local: datetime) -> str:
    """``HH`` on the hour, ``HH:mm`` for zones offset by a fraction of an hour."""
    if local.minute == 0:
        return local.strftime("%H")
    return local.strftime("%H:%M")


def is_daylight_saving(local: datetime) -> bool:
    """Whether ``local`` is ahead of its zone's standard time for the year.

    Zones such as Europe/Dublin model winter as a negative DST and summer as
    standard time, so ``dst()`` alone is not enough.
    """
    offset = local.dst()
    if offset is not None and offset > timedelta(0):
        return True
    tz = local.tzinfo
    standard = min(
        datetime(local.year, 1, 1, tzinfo=tz).utcoffset(),
        datetime(local.year, 7, 1, tzinfo=tz).utcoffset(),
    )
    return local.utcoffset() > standard


def build_row(zone: str, anchor: datetime, hours: int = HOURS_PER_ROW) -> TimezoneRow:
    """Build the row of hour cells for ``zone`` starting at ``anchor``.

    The row-level daylight flag is taken from the anchor instant only, so a
    transition inside the window is reflected per cell but not on the row.
    """
    tz = ZoneInfo(zone)
    cells = []
    for offset in range(hours):
        instant = anchor + timedelta(hours=offset)
        local = instant.astimezone(tz)
        cells.append(
            HourCell(
                instant=instant,
                local=local,
                label=format_label(local),
                bucket=classify_hour(local.hour),
                is_daylight_saving=is_daylight_saving(local),
            )
        )
    return TimezoneRow(
        zone=zone,
        is_daylight_saving=is_daylight_saving(anchor.astimezone(tz)),
        cells=tuple(cells),
    )
