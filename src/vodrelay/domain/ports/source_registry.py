"""Port for the static source registry."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from vodrelay.domain.entities.catalog import SourceEntry


@runtime_checkable
class SourceRegistryPort(Protocol):
    """Read-only access to the configured upstream catalog sources."""

    def entries(self, *, include_adult: bool = False) -> list[SourceEntry]: ...
    def get(self, key: str, *, include_adult: bool = False) -> SourceEntry: ...
    def __len__(self) -> int: ...
