"""Catalog infrastructure - source registry, upstream client, normalizer."""

from __future__ import annotations

from .categories import CATEGORIES, VALID_LISTING_TYPES
from .client import HttpxCatalogClient
from .episodes import parse_episodes
from .normalizer import normalize_movie
from .registry import DEFAULT_SOURCES, SourceRegistry

__all__ = [
    "CATEGORIES",
    "DEFAULT_SOURCES",
    "HttpxCatalogClient",
    "SourceRegistry",
    "VALID_LISTING_TYPES",
    "normalize_movie",
    "parse_episodes",
]
