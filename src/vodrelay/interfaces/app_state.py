"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

import httpx
from starlette.datastructures import State

from vodrelay.domain.ports import CatalogClientPort, SourceRegistryPort
from vodrelay.infrastructure.common.fetcher import RetryingFetcher
from vodrelay.infrastructure.config import AppConfig
from vodrelay.infrastructure.relay import ProxyRelay
from vodrelay.infrastructure.web import PageRenderer


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    fetcher: RetryingFetcher

    # Domain Ports
    sources: SourceRegistryPort
    catalog_client: CatalogClientPort

    # Proxy relay (gate + streamed fetch)
    proxy_relay: ProxyRelay

    # Templated pages
    page_renderer: PageRenderer
