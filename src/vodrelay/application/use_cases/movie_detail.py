"""Movie detail use case."""

from __future__ import annotations

import structlog

from vodrelay.domain.entities import CanonicalMovie, CatalogNotFound
from vodrelay.domain.ports import CatalogClientPort, SourceRegistryPort

log = structlog.get_logger(__name__)


class MovieDetailUseCase:
    """Looks up one record, with episodes, on one non-adult source."""

    def __init__(
        self,
        *,
        sources: SourceRegistryPort,
        client: CatalogClientPort,
        default_source: str = "heimuer",
    ) -> None:
        self._sources = sources
        self._client = client
        self._default_source = default_source

    async def execute(
        self, movie_id: str, *, source_key: str | None = None
    ) -> CanonicalMovie:
        """Fetch the record.

        Raises:
            CatalogSourceNotFound: Unknown source key.
            CatalogNotFound: The upstream has no record with this id.
            CatalogExternalError: The upstream failed.
        """
        source = self._sources.get(source_key or self._default_source)
        movie = await self._client.detail(source, movie_id)
        if movie is None:
            log.info("movie_not_found", source=source.key, movie_id=movie_id)
            raise CatalogNotFound("Movie not found")
        return movie
