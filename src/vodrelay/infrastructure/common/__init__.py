"""Common infrastructure utilities."""

from __future__ import annotations

from .converters import parse_duration_seconds, split_csv, to_int
from .fetcher import RetryingFetcher

__all__ = [
    "RetryingFetcher",
    "parse_duration_seconds",
    "split_csv",
    "to_int",
]
