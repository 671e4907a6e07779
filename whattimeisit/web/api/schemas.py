"""Pydantic models shared across API routes."""
from __future__ import annotations

from datetime import date, datetime
from typing import List

from pydantic import BaseModel

from whattimeisit.grid.builder import HourCell, TimezoneRow


class HourCellResponse(BaseModel):
    instant: datetime
    local: datetime
    label: str
    bucket: str
    is_daylight_saving: bool

    @classmethod
    def from_cell(cls, cell: HourCell) -> "HourCellResponse":
        return cls(
            instant=cell.instant,
            local=cell.local,
            label=cell.label,
            bucket=cell.bucket,
            is_daylight_saving=cell.is_daylight_saving,
        )


class TimezoneRowResponse(BaseModel):
    zone: str
    is_daylight_saving: bool
    remove_url: str
    cells: List[HourCellResponse]


class GridResponse(BaseModel):
    date: date
    start_hour: int
    anchor: datetime
    timezones: List[str]
    rows: List[TimezoneRowResponse]

    @classmethod
    def build(
        cls,
        *,
        day: date,
        start_hour: int,
        anchor: datetime,
        rows: List[TimezoneRow],
        remove_urls: dict[str, str],
    ) -> "GridResponse":
        return cls(
            date=day,
            start_hour=start_hour,
            anchor=anchor,
            timezones=[row.zone for row in rows],
            rows=[
                TimezoneRowResponse(
                    zone=row.zone,
                    is_daylight_saving=row.is_daylight_saving,
                    remove_url=remove_urls[row.zone],
                    cells=[HourCellResponse.from_cell(cell) for cell in row.cells],
                )
                for row in rows
            ],
        )


class TimezoneOptionResponse(BaseModel):
    value: str
    label: str


class TimezoneOptionsResponse(BaseModel):
    timezones: List[TimezoneOptionResponse]
    default_timezone: str
