"""FastAPI application entry point."""
from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from whattimeisit.config.settings import get_settings
from whattimeisit.config.timezones import get_zone_registry, iter_zones
from whattimeisit.utils.logging import setup_logging
from .api import (
    grid as grid_routes,
    meta as meta_routes,
    status as status_routes,
)
from .state import add_timezone, normalise_query, resolve_state
from .view import build_view

ADD_ZONE_PARAM = "timezone"

settings = get_settings()
setup_logging(level=settings.log_level)
logger = logging.getLogger("whattimeisit.web")

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(status_routes.router)
app.include_router(grid_routes.router)
app.include_router(meta_routes.router)


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    view = build_view(request.query_params.multi_items())
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.app_name,
            "source_url": settings.source_url,
            "view": view,
            "zones": iter_zones(),
            "hidden_params": [(key, value) for key, value in view.state.to_query() if key != ADD_ZONE_PARAM],
            "add_param": ADD_ZONE_PARAM,
        },
    )


@app.get("/add")
async def add(request: Request) -> RedirectResponse:
    """Handle the add-timezone form and redirect to the resulting page URL.

    An unknown or already selected zone leads back to the unchanged page.
    """
    pairs = normalise_query(request.query_params.multi_items())
    # The select comes last in the form, so its value wins over any stray copy.
    proposed = next((value for key, value in reversed(pairs) if key == ADD_ZONE_PARAM), "")
    current = [(key, value) for key, value in pairs if key != ADD_ZONE_PARAM]

    state = resolve_state(current)
    updated = add_timezone(state, proposed)
    if updated is state:
        target = f"/?{urlencode(current)}" if current else "/"
    else:
        logger.debug("Adding timezone %s", proposed)
        target = updated.url()
    return RedirectResponse(url=target, status_code=303)


@app.on_event("startup")
async def on_startup() -> None:
    logger.info(
        "Loaded %d timezones; local timezone is %s",
        len(get_zone_registry()),
        settings.default_timezone,
    )
