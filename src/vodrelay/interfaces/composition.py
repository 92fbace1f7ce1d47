"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from vodrelay.infrastructure.catalog import HttpxCatalogClient, SourceRegistry
from vodrelay.infrastructure.common.fetcher import RetryingFetcher
from vodrelay.infrastructure.relay import ProxyRelay, UrlSafetyGate
from vodrelay.infrastructure.web import PageRenderer
from vodrelay.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_page_renderer(state: AppState) -> PageRenderer:
    web = state.config.web
    return PageRenderer(
        static_dir=web.static_dir,
        password=web.password.get_secret_value(),
        admin_password=web.admin_password.get_secret_value(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP Client (shared connection pool)
        2. Fetcher (timeout + user agent + retry loop over the client)
        3. Source Registry (static)
        4. Catalog Client (uses fetcher)
        5. Proxy Relay (uses fetcher + safety gate)
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) HTTP client; redirects and retries are decided per call by the fetcher
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=config.http_follow_redirects,
    )
    log.info(
        "http_client_initialized",
        timeout_seconds=config.http_timeout_seconds,
        max_retries=config.http_max_retries,
    )

    # 2) Fetcher
    state.fetcher = RetryingFetcher(
        state.http_client,
        timeout=config.http_timeout_seconds,
        user_agent=config.http_user_agent,
        max_retries=config.http_max_retries,
    )

    # 3) Source registry
    state.sources = SourceRegistry()
    log.info("source_registry_loaded", count=len(state.sources))

    # 4) Catalog client
    state.catalog_client = HttpxCatalogClient(
        fetcher=state.fetcher,
        follow_redirects=config.http_follow_redirects,
    )

    # 5) Proxy relay
    state.proxy_relay = ProxyRelay(
        fetcher=state.fetcher,
        gate=UrlSafetyGate(
            blocked_hosts=config.relay.blocked_hosts,
            blocked_prefixes=config.relay.blocked_host_prefixes,
        ),
        filtered_headers=config.relay.filtered_headers,
        max_retries=config.http_max_retries,
        max_redirects=config.relay.max_redirects,
    )
    log.info(
        "proxy_relay_initialized",
        blocked_hosts=len(config.relay.blocked_hosts),
        blocked_prefixes=len(config.relay.blocked_host_prefixes),
        max_redirects=config.relay.max_redirects,
    )

    # 6) Pages
    state.page_renderer = build_page_renderer(state)
    if config.web.password.get_secret_value():
        log.info("user_password_configured")
    if config.web.admin_password.get_secret_value():
        log.info("admin_password_configured")

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        log.info("app_shutdown_complete")
