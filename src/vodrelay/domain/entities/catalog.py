"""Domain entities for the video catalog aggregator.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceEntry:
    """One upstream catalog API from the static source registry."""

    key: str  # Registry-scoped identifier, e.g. "heimuer"
    api: str  # Query endpoint, e.g. "https://json.heimuer.xyz/api.php/provide/vod"
    name: str  # Display name
    adult: bool = False
    detail: str | None = None  # Optional detail-page base URL


@dataclass(frozen=True)
class Episode:
    """A single playable episode extracted from an upstream play-URL blob."""

    index: int  # 1-based, contiguous in emission order
    title: str
    url: str


@dataclass(frozen=True)
class CanonicalMovie:
    """Normalized catalog item, independent of the upstream that produced it."""

    id: str
    title: str
    source: str
    source_name: str
    poster: str = ""
    year: str = ""
    area: str = ""
    type_name: str = ""
    remarks: str = ""
    adult: bool = False

    # Detail-only fields (absent in listings)
    description: str | None = None
    director: str | None = None
    actor: str | None = None
    episodes: tuple[Episode, ...] | None = None

    @property
    def dedup_key(self) -> tuple[str, str]:
        """Key used to collapse the same title across sources."""
        return (self.title, self.year)


@dataclass(frozen=True)
class CatalogPage:
    """One listing page as returned by an upstream source."""

    movies: list[CanonicalMovie] = field(default_factory=list)
    page_count: int | None = None
    total: int | None = None
    has_list: bool = True  # False when the upstream payload carried no list


@dataclass(frozen=True)
class Category:
    """Entry of the static category catalog."""

    id: int
    name: str
    type: str
    category_type: str
    color: str
    is_highlighted: bool = False


class CatalogError(Exception):
    """Base error for catalog domain/usecases."""


class CatalogBadRequest(CatalogError):
    """Malformed or disallowed request parameters."""


class CatalogSourceNotFound(CatalogBadRequest):
    """Source key does not resolve in the registry."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown source: {key!r}")
        self.key = key


class CatalogInvalidCategory(CatalogBadRequest):
    """Category code outside the listing allow-list."""


class CatalogNotFound(CatalogError):
    """No upstream record matches the requested id."""


class CatalogExternalError(CatalogError):
    """Network / parsing / upstream errors outside a fan-out."""


class UnsafeUrlError(CatalogBadRequest):
    """Target URL rejected by the URL safety gate."""

    def __init__(self, url: str) -> None:
        super().__init__(f"URL not allowed: {url!r}")
        self.url = url


class FetchError(Exception):
    """Outbound fetch failed on every attempt.

    Carries the last underlying error so callers can report the reason.
    """

    def __init__(self, url: str, cause: BaseException, attempts: int) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.url = url
        self.cause = cause
        self.attempts = attempts
