"""Metadata endpoints for UI configuration options."""
from __future__ import annotations

from fastapi import APIRouter

from whattimeisit.config.settings import get_settings
from whattimeisit.config.timezones import build_timezone_options

from . import schemas

router = APIRouter(prefix="/api/meta", tags=["meta"])


@router.get("/timezones", response_model=schemas.TimezoneOptionsResponse)
def get_timezone_options() -> schemas.TimezoneOptionsResponse:
    settings = get_settings()
    tz_options = [
        schemas.TimezoneOptionResponse(value=option.value, label=option.label)
        for option in build_timezone_options()
    ]
    return schemas.TimezoneOptionsResponse(
        timezones=tz_options,
        default_timezone=settings.default_timezone,
    )
