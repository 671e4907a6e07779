"""Timezone registry backed by the bundled IANA database."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo, available_timezones

UTC_ZONE = "UTC"


@dataclass(frozen=True)
class TimezoneOption:
    value: str
    label: str


@lru_cache(maxsize=1)
def get_zone_registry() -> frozenset[str]:
    """Return every zone identifier the application accepts.

    Loaded once per process from ``zoneinfo`` (which reads the ``tzdata``
    package when the host has no system database) and never mutated.
    """
    return frozenset(available_timezones() | {UTC_ZONE})


def is_valid_zone(name: object) -> bool:
    return isinstance(name, str) and name in get_zone_registry()


@lru_cache(maxsize=1)
def iter_zones() -> tuple[str, ...]:
    """All registry entries in display order."""
    return tuple(sorted(get_zone_registry()))


def build_timezone_options(reference: datetime | None = None) -> list[TimezoneOption]:
    """Return labelled options for every zone, abbreviated at ``reference``."""
    now = reference or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    options: list[TimezoneOption] = []
    for zone_name in iter_zones():
        abbreviation = now.astimezone(ZoneInfo(zone_name)).tzname()
        label = f"{zone_name} ({abbreviation})" if abbreviation else zone_name
        options.append(TimezoneOption(value=zone_name, label=label))
    return options
