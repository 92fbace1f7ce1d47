"""Port for querying one upstream catalog source."""

from __future__ import annotations

from typing import Protocol

from vodrelay.domain.entities.catalog import CanonicalMovie, CatalogPage, SourceEntry


class CatalogClientPort(Protocol):
    """Async interface for the three upstream catalog queries.

    Implementations return normalized records and raise on upstream
    failure; callers decide whether a failure is fatal or isolated.
    """

    async def search(self, source: SourceEntry, query: str) -> list[CanonicalMovie]: ...

    async def list_page(
        self,
        source: SourceEntry,
        page: int,
        *,
        category: str | None = None,
    ) -> CatalogPage: ...

    async def detail(
        self, source: SourceEntry, movie_id: str
    ) -> CanonicalMovie | None: ...
