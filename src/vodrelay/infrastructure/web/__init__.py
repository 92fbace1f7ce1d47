"""Web infrastructure - page templating and static files."""

from __future__ import annotations

from .pages import CachedStaticFiles, PageRenderer, sha256_hex

__all__ = ["CachedStaticFiles", "PageRenderer", "sha256_hex"]
