"""Catalog search use case (single source and aggregated fan-out)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import structlog

from vodrelay.domain.entities import (
    CanonicalMovie,
    CatalogBadRequest,
    CatalogExternalError,
    SourceEntry,
)
from vodrelay.domain.ports import CatalogClientPort, SourceRegistryPort

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SearchOutcome:
    """Search result plus the fan-out metadata the API reports."""

    movies: list[CanonicalMovie]
    aggregated: bool = False
    sources_queried: int = 1


def dedupe_movies(movies: list[CanonicalMovie]) -> list[CanonicalMovie]:
    """Keep the first record per (title, year), preserving order."""
    seen: set[tuple[str, str]] = set()
    unique: list[CanonicalMovie] = []
    for movie in movies:
        key = movie.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(movie)
    return unique


class CatalogSearchUseCase:
    """Searches one source, or every visible source concurrently.

    Flow (aggregated):
        1. Resolve visible registry entries
        2. Query all of them in parallel; a failing source yields []
        3. Flatten in registry order, dedup on (title, year)
        4. Truncate to the result cap
    """

    def __init__(
        self,
        *,
        sources: SourceRegistryPort,
        client: CatalogClientPort,
        default_source: str = "heimuer",
        result_cap: int = 1000,
    ) -> None:
        self._sources = sources
        self._client = client
        self._default_source = default_source
        self._result_cap = result_cap

    async def execute(
        self,
        query: str | None,
        *,
        source_key: str | None = None,
        include_adult: bool = False,
        aggregated: bool = False,
    ) -> SearchOutcome:
        """Run the search.

        Raises:
            CatalogBadRequest: Missing query.
            CatalogSourceNotFound: Unknown source key (single-source mode).
            CatalogExternalError: The single source failed.
        """
        if not query:
            raise CatalogBadRequest("Search query is required")

        if aggregated:
            return await self._aggregate(query, include_adult=include_adult)

        source = self._sources.get(
            source_key or self._default_source, include_adult=include_adult
        )
        try:
            movies = await self._client.search(source, query)
        except CatalogExternalError:
            log.warning("search_source_failed", source=source.key, exc_info=True)
            raise
        return SearchOutcome(movies=movies)

    async def _aggregate(self, query: str, *, include_adult: bool) -> SearchOutcome:
        entries = self._sources.entries(include_adult=include_adult)

        async def _search_one(source: SourceEntry) -> list[CanonicalMovie]:
            try:
                return await self._client.search(source, query)
            except Exception:  # noqa: BLE001
                log.warning(
                    "aggregate_source_failed",
                    source=source.key,
                    query=query,
                    exc_info=True,
                )
                return []

        results_per_source = await asyncio.gather(
            *(_search_one(source) for source in entries)
        )

        flat: list[CanonicalMovie] = []
        for results in results_per_source:
            flat.extend(results)
        unique = dedupe_movies(flat)

        log.info(
            "aggregate_search_done",
            query=query,
            sources=len(entries),
            raw=len(flat),
            unique=len(unique),
        )
        return SearchOutcome(
            movies=unique[: self._result_cap],
            aggregated=True,
            sources_queried=len(entries),
        )
