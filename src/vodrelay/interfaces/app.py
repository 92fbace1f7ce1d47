"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

import structlog
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse, Response

from vodrelay.infrastructure.config import AppConfig
from vodrelay.infrastructure.web import CachedStaticFiles
from vodrelay.interfaces.api.middleware import SecurityHeadersMiddleware
from vodrelay.interfaces.app_state import AppState
from vodrelay.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, registry, relay) are created in lifespan().
    """
    app = FastAPI(
        title="vodrelay",
        description="Video catalog aggregator and streaming proxy relay",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.web.cors_origin],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Authorization"],
    )

    from vodrelay.interfaces.api.catalog.router import router as catalog_router
    from vodrelay.interfaces.api.pages.router import router as pages_router
    from vodrelay.interfaces.api.proxy.router import router as proxy_router

    app.include_router(pages_router)
    app.include_router(proxy_router)
    app.include_router(catalog_router)

    @app.get("/api/healthz")
    async def healthz() -> dict[str, str | int]:
        """Liveness probe, returns 200 as long as the process is running."""
        sources = getattr(app.state, "sources", None)
        return {
            "status": "ok",
            "sources": len(sources) if sources is not None else 0,
        }

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        if exc.status_code == 404:
            return PlainTextResponse("Page not found", status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
        log.exception(
            "unhandled_error",
            method=request.method,
            path=request.url.path,
            exc_info=exc,
        )
        return PlainTextResponse("Internal server error", status_code=500)

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query),
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    # Static root last: it answers every path no route above matched.
    static_dir = config.web.static_dir
    if static_dir.is_dir():
        app.mount(
            "/",
            CachedStaticFiles(
                directory=static_dir,
                max_age=config.web.cache_max_age_seconds,
            ),
            name="static",
        )
    else:
        log.warning("static_dir_missing", static_dir=str(static_dir))

    return app
