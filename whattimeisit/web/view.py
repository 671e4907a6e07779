"""Render-pass model combining navigation state with the computed grid."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from whattimeisit.grid.builder import TimezoneRow, anchor_instant, build_row
from whattimeisit.utils.time_utils import format_calendar_date

from .state import NavigationState, QueryInput, remove_timezone, resolve_state


@dataclass(frozen=True)
class GridView:
    state: NavigationState
    anchor: datetime
    rows: list[TimezoneRow]
    remove_urls: dict[str, str]

    @property
    def date_label(self) -> str:
        return format_calendar_date(self.state.date)


def build_view(raw: QueryInput, *, local_zone: str | None = None, now: datetime | None = None) -> GridView:
    state = resolve_state(raw, local_zone=local_zone, now=now)
    anchor = anchor_instant(state.date, state.start_hour)
    rows = [build_row(zone, anchor) for zone in state.timezones]
    remove_urls = {zone: remove_timezone(state, zone).url() for zone in state.timezones}
    return GridView(state=state, anchor=anchor, rows=rows, remove_urls=remove_urls)
