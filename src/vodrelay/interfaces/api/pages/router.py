"""Templated page endpoints (index, player, search deep link)."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Request
from starlette.responses import HTMLResponse, PlainTextResponse, Response

from vodrelay.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["pages"])


def _render(request: Request, page: str) -> Response:
    state = cast(AppState, request.app.state)
    try:
        content = state.page_renderer.render(page)
    except OSError:
        log.exception("page_render_failed", page=page)
        return PlainTextResponse("Failed to read static page", status_code=500)
    return HTMLResponse(content)


@router.get("/")
@router.get("/index.html")
async def index(request: Request) -> Response:
    return _render(request, "index.html")


@router.get("/player.html")
async def player(request: Request) -> Response:
    return _render(request, "player.html")


@router.get("/s={keyword}")
async def search_page(request: Request, keyword: str) -> Response:
    # The keyword is read client-side.
    return _render(request, "index.html")
