"""Proxy relay endpoint: ``GET /proxy/<url-encoded target>``."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Request
from starlette.background import BackgroundTask
from starlette.responses import PlainTextResponse, Response, StreamingResponse

from vodrelay.domain.entities import FetchError, UnsafeUrlError
from vodrelay.infrastructure.relay import decode_target
from vodrelay.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["proxy"])

_PREFIX = b"/proxy"


def _raw_tail(request: Request, target: str) -> str:
    """Return the still-encoded path after ``/proxy``.

    Falls back to the decoded route parameter when the server does not
    expose ``raw_path``.
    """
    raw_path: bytes | None = request.scope.get("raw_path")
    if not raw_path:
        return target
    raw_path = raw_path.split(b"?", 1)[0]
    if not raw_path.startswith(_PREFIX):
        return target
    return raw_path[len(_PREFIX) :].decode("latin-1")


@router.get("/proxy/{target:path}")
async def proxy(request: Request, target: str) -> Response:
    state = cast(AppState, request.app.state)
    url = decode_target(_raw_tail(request, target), request.url.query)

    try:
        stream = await state.proxy_relay.open(url)
    except UnsafeUrlError:
        return PlainTextResponse("Invalid URL", status_code=400)
    except FetchError as e:
        log.error(
            "proxy_request_failed",
            url=e.url,
            attempts=e.attempts,
            error=str(e),
        )
        return PlainTextResponse(f"Request failed: {e}", status_code=500)

    response = StreamingResponse(
        stream.body,
        status_code=stream.status_code,
        background=BackgroundTask(stream.aclose),
    )
    response.raw_headers.extend(stream.headers)
    return response
