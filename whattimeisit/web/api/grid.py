"""JSON rendition of the timezone grid."""
from __future__ import annotations

from fastapi import APIRouter, Request

from whattimeisit.web.view import build_view

from . import schemas

router = APIRouter(prefix="/api", tags=["grid"])


@router.get("/grid", response_model=schemas.GridResponse)
def get_grid(request: Request) -> schemas.GridResponse:
    view = build_view(request.query_params.multi_items())
    return schemas.GridResponse.build(
        day=view.state.date,
        start_hour=view.state.start_hour,
        anchor=view.anchor,
        rows=view.rows,
        remove_urls=view.remove_urls,
    )
