"""Use case for listing the visible catalog sources."""

from __future__ import annotations

from vodrelay.domain.ports import SourceRegistryPort


class SourceListingUseCase:
    def __init__(self, *, sources: SourceRegistryPort) -> None:
        self._sources = sources

    def execute(self, *, include_adult: bool = False) -> list[dict]:
        return [
            {"key": entry.key, "name": entry.name, "adult": entry.adult}
            for entry in self._sources.entries(include_adult=include_adult)
        ]
