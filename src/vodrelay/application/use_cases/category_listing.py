"""Category listing use case."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

from vodrelay.domain.entities import CanonicalMovie, CatalogInvalidCategory
from vodrelay.domain.ports import CatalogClientPort, SourceRegistryPort


@dataclass(frozen=True)
class CategoryListing:
    movies: list[CanonicalMovie]
    current_page: int
    total_pages: int
    total_items: int


class CategoryListingUseCase:
    """One upstream listing page filtered by category code."""

    def __init__(
        self,
        *,
        sources: SourceRegistryPort,
        client: CatalogClientPort,
        valid_types: Collection[str],
        default_source: str = "heimuer",
    ) -> None:
        self._sources = sources
        self._client = client
        self._valid_types = valid_types
        self._default_source = default_source

    async def execute(
        self,
        category: str,
        *,
        page: int = 1,
        source_key: str | None = None,
    ) -> CategoryListing:
        """List *category* on *page*.

        Raises:
            CatalogInvalidCategory: *category* is not in the allow-list.
            CatalogSourceNotFound: Unknown source key.
            CatalogExternalError: The upstream failed.
        """
        if category not in self._valid_types:
            raise CatalogInvalidCategory("Invalid category type")

        source = self._sources.get(source_key or self._default_source)
        result = await self._client.list_page(source, page, category=category)

        if not result.has_list:
            return CategoryListing(
                movies=[], current_page=page, total_pages=0, total_items=0
            )

        # Zero counts from upstream fall back like missing ones.
        return CategoryListing(
            movies=result.movies,
            current_page=page,
            total_pages=result.page_count or 1,
            total_items=result.total or len(result.movies),
        )
