from .catalog import (
    CanonicalMovie,
    CatalogBadRequest,
    CatalogError,
    CatalogExternalError,
    CatalogInvalidCategory,
    CatalogNotFound,
    CatalogPage,
    CatalogSourceNotFound,
    Category,
    Episode,
    FetchError,
    SourceEntry,
    UnsafeUrlError,
)

__all__ = [
    "CanonicalMovie",
    "CatalogBadRequest",
    "CatalogError",
    "CatalogExternalError",
    "CatalogInvalidCategory",
    "CatalogNotFound",
    "CatalogPage",
    "CatalogSourceNotFound",
    "Category",
    "Episode",
    "FetchError",
    "SourceEntry",
    "UnsafeUrlError",
]
