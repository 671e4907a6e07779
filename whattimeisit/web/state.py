"""Navigation state derived from the page's query string.

The page keeps no server-side state: every render resolves a fresh
``NavigationState`` from the URL, and adding or removing a timezone produces
a new state whose query string is the next URL to visit.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Iterable, Mapping, Sequence, Tuple, Union
from urllib.parse import urlencode

from whattimeisit.config.timezones import UTC_ZONE, is_valid_zone
from whattimeisit.utils.time_utils import get_local_zone_name, now_local

DATE_PARAM = "date"
START_HOUR_PARAM = "startHour"
TIMEZONES_PARAM = "timezones"

EARLIEST_DATE = date.min + timedelta(days=2)
LATEST_DATE = date.max - timedelta(days=2)

QueryPairs = Sequence[Tuple[str, str]]
QueryInput = Union[Mapping[str, Union[str, Sequence[str]]], Iterable[Tuple[str, str]]]


@dataclass(frozen=True)
class NavigationState:
    date: date
    start_hour: int
    timezones: tuple[str, ...]
    # Every query parameter other than ``timezones``, verbatim and in order.
    params: tuple[tuple[str, str], ...] = ()

    def to_query(self) -> list[tuple[str, str]]:
        query = [(key, value) for key, value in self.params if key != TIMEZONES_PARAM]
        query.extend((TIMEZONES_PARAM, zone) for zone in self.timezones)
        return query

    def url(self, path: str = "/") -> str:
        query = urlencode(self.to_query())
        return f"{path}?{query}" if query else path


def normalise_query(raw: QueryInput) -> list[tuple[str, str]]:
    """Flatten a mapping (scalar or list values) or a pair sequence into pairs."""
    if isinstance(raw, Mapping):
        pairs: list[tuple[str, str]] = []
        for key, value in raw.items():
            if value is None:
                continue
            if isinstance(value, str):
                pairs.append((key, value))
            else:
                pairs.extend((key, str(item)) for item in value)
        return pairs
    return [(str(key), str(value)) for key, value in raw]


def _first(pairs: QueryPairs, key: str) -> str | None:
    for name, value in pairs:
        if name == key:
            return value
    return None


def _parse_iso_date(text: str) -> date | None:
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_date(value: str | None, today: date) -> date:
    if not value:
        return today
    parsed = _parse_iso_date(value.strip())
    # A 24 hour window shown in any zone must stay within datetime's range.
    if parsed is None or not EARLIEST_DATE <= parsed <= LATEST_DATE:
        return today
    return parsed


def parse_start_hour(value: str | None, current_hour: int) -> int:
    if value is None:
        return current_hour
    try:
        hour = int(value.strip())
    except ValueError:
        return current_hour
    if not 0 <= hour < 24:
        return current_hour
    return hour


def filter_timezones(candidates: Iterable[str]) -> tuple[str, ...]:
    return tuple(zone for zone in candidates if is_valid_zone(zone))


def default_timezones(local_zone: str) -> tuple[str, ...]:
    return (local_zone, UTC_ZONE)


def resolve_state(
    raw: QueryInput,
    *,
    local_zone: str | None = None,
    now: datetime | None = None,
) -> NavigationState:
    """Resolve query parameters into a validated navigation state.

    Malformed values never raise: bad dates and hours fall back to ``now`` in
    the local zone and unknown zones are dropped.
    """
    zone_name = local_zone or get_local_zone_name()
    current = now or now_local(zone_name)
    pairs = normalise_query(raw)

    timezones = filter_timezones(value for key, value in pairs if key == TIMEZONES_PARAM)
    if not timezones:
        timezones = default_timezones(zone_name)

    return NavigationState(
        date=parse_date(_first(pairs, DATE_PARAM), current.date()),
        start_hour=parse_start_hour(_first(pairs, START_HOUR_PARAM), current.hour),
        timezones=timezones,
        params=tuple((key, value) for key, value in pairs if key != TIMEZONES_PARAM),
    )


def add_timezone(state: NavigationState, zone: str) -> NavigationState:
    """Append ``zone`` when it is a known, not yet selected zone; otherwise no-op."""
    if not is_valid_zone(zone) or zone in state.timezones:
        return state
    return replace(state, timezones=state.timezones + (zone,))


def remove_timezone(state: NavigationState, zone: str) -> NavigationState:
    if zone not in state.timezones:
        return state
    return replace(state, timezones=tuple(z for z in state.timezones if z != zone))
