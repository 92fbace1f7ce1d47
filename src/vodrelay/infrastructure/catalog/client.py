"""Catalog client: httpx implementation of the ``ac=videolist`` protocol."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from vodrelay.domain.entities import (
    CanonicalMovie,
    CatalogExternalError,
    CatalogPage,
    FetchError,
    SourceEntry,
)
from vodrelay.infrastructure.catalog.normalizer import normalize_movie
from vodrelay.infrastructure.common.converters import to_int
from vodrelay.infrastructure.common.fetcher import RetryingFetcher

log = structlog.get_logger(__name__)


class HttpxCatalogClient:
    """Queries one registry entry per call.

    Implements ``CatalogClientPort`` from domain.ports.catalog_client.
    Aggregator calls are never retried; a transport failure or an upstream
    status >= 400 raises :class:`CatalogExternalError`.
    """

    def __init__(
        self,
        *,
        fetcher: RetryingFetcher,
        follow_redirects: bool = True,
    ) -> None:
        self._fetcher = fetcher
        self._follow_redirects = follow_redirects

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _url(source: SourceEntry, **params: Any) -> httpx.URL:
        return httpx.URL(source.api, params={"ac": "videolist", **params})

    async def _get(
        self, source: SourceEntry, **params: Any
    ) -> dict[str, Any] | None:
        """GET the query URL and return the decoded JSON object.

        Returns None when the body is not a JSON object.
        """
        url = self._url(source, **params)
        try:
            resp = await self._fetcher.fetch(
                url, max_retries=0, follow_redirects=self._follow_redirects
            )
        except FetchError as e:
            raise CatalogExternalError(
                f"{source.key}: request failed: {e}"
            ) from e

        if resp.status_code >= 400:
            raise CatalogExternalError(
                f"{source.key}: upstream returned HTTP {resp.status_code}"
            )

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            log.warning("catalog_invalid_json", source=source.key, url=str(url))
            return None

        if not isinstance(data, dict):
            log.warning(
                "catalog_unexpected_payload",
                source=source.key,
                payload_type=type(data).__name__,
            )
            return None
        return data

    @staticmethod
    def _records(data: dict[str, Any] | None) -> list[dict[str, Any]] | None:
        """Return the ``list`` array, or None when the payload carries none."""
        if data is None:
            return None
        records = data.get("list")
        if not isinstance(records, list):
            return None
        return [r for r in records if isinstance(r, dict)]

    # ------------------------------------------------------------------
    # Public API (CatalogClientPort)
    # ------------------------------------------------------------------

    async def search(self, source: SourceEntry, query: str) -> list[CanonicalMovie]:
        records = self._records(await self._get(source, wd=query))
        if not records:
            return []
        return [normalize_movie(r, source, with_credits=True) for r in records]

    async def list_page(
        self,
        source: SourceEntry,
        page: int,
        *,
        category: str | None = None,
    ) -> CatalogPage:
        params: dict[str, Any] = {}
        if category is not None:
            params["t"] = category
        params["pg"] = page

        data = await self._get(source, **params)
        records = self._records(data)
        if data is None or records is None:
            return CatalogPage(has_list=False)

        return CatalogPage(
            movies=[normalize_movie(r, source) for r in records],
            page_count=to_int(data.get("pagecount")),
            total=to_int(data.get("total")),
        )

    async def detail(
        self, source: SourceEntry, movie_id: str
    ) -> CanonicalMovie | None:
        records = self._records(await self._get(source, ids=movie_id))
        if not records:
            return None
        return normalize_movie(
            records[0],
            source,
            with_credits=True,
            with_description=True,
            with_episodes=True,
        )
