"""Recommendations use case: sample listing pages, shuffle, cap."""

from __future__ import annotations

import asyncio
import random

import structlog

from vodrelay.domain.entities import CanonicalMovie, SourceEntry
from vodrelay.domain.ports import CatalogClientPort, SourceRegistryPort

log = structlog.get_logger(__name__)


class RecommendationsUseCase:
    """Collects the first listing pages of a few sources.

    Sources are queried concurrently, pages within one source sequentially.
    A failing source is logged and contributes whatever pages it already
    returned.
    """

    def __init__(
        self,
        *,
        sources: SourceRegistryPort,
        client: CatalogClientPort,
        max_sources: int = 5,
        pages_per_source: int = 2,
        result_cap: int = 100,
        rng: random.Random | None = None,
    ) -> None:
        self._sources = sources
        self._client = client
        self._max_sources = max_sources
        self._pages_per_source = pages_per_source
        self._result_cap = result_cap
        self._rng = rng or random.Random()

    async def execute(self, *, include_adult: bool = False) -> list[CanonicalMovie]:
        entries = self._sources.entries(include_adult=include_adult)[
            : self._max_sources
        ]

        per_source = await asyncio.gather(*(self._collect(e) for e in entries))

        movies: list[CanonicalMovie] = []
        for chunk in per_source:
            movies.extend(chunk)

        # Not cryptographically secure; display order only.
        self._rng.shuffle(movies)
        return movies[: self._result_cap]

    async def _collect(self, source: SourceEntry) -> list[CanonicalMovie]:
        collected: list[CanonicalMovie] = []
        for page in range(1, self._pages_per_source + 1):
            try:
                result = await self._client.list_page(source, page)
            except Exception:  # noqa: BLE001
                log.warning(
                    "recommendation_source_failed",
                    source=source.key,
                    page=page,
                    exc_info=True,
                )
                break
            collected.extend(result.movies)
        return collected
