"""Health and status endpoints."""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter

from whattimeisit.config.settings import get_settings
from whattimeisit.config.timezones import UTC_ZONE, get_zone_registry

router = APIRouter(tags=["status"])


@router.get("/health")
def healthcheck() -> dict:
    settings = get_settings()
    registry = get_zone_registry()

    status = "ok"
    status_details = []
    if registry == {UTC_ZONE}:
        status = "degraded"
        status_details.append("Timezone database missing; only UTC is available")

    return {
        "status": status,
        "status_details": status_details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "default_timezone": settings.default_timezone,
        "zone_count": len(registry),
    }
