"""Templated HTML pages and cache-aware static file serving."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path

from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

PASSWORD_MARKER = "{{PASSWORD}}"
ADMIN_PASSWORD_MARKER = "{{ADMINPASSWORD}}"


def sha256_hex(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class PageRenderer:
    """Reads a page from the static root and injects password hashes.

    Only the first occurrence of each marker is replaced, and only when the
    matching password is set; otherwise the marker stays in the page.
    """

    def __init__(
        self,
        *,
        static_dir: Path,
        password: str = "",
        admin_password: str = "",
    ) -> None:
        self._static_dir = static_dir
        self._password_hash = sha256_hex(password) if password else None
        self._admin_hash = sha256_hex(admin_password) if admin_password else None

    def render(self, page: str) -> str:
        """Return the rendered content of *page* (a file name in the root).

        Raises:
            OSError: The page cannot be read.
        """
        content = (self._static_dir / page).read_text(encoding="utf-8")
        if self._password_hash is not None:
            content = content.replace(PASSWORD_MARKER, self._password_hash, 1)
        if self._admin_hash is not None:
            content = content.replace(ADMIN_PASSWORD_MARKER, self._admin_hash, 1)
        return content


class CachedStaticFiles(StaticFiles):
    """``StaticFiles`` that stamps ``Cache-Control: public, max-age=N``."""

    def __init__(self, *, max_age: int, **kwargs) -> None:
        super().__init__(**kwargs)
        self._cache_control = f"public, max-age={max_age}"

    def file_response(
        self,
        full_path: str | os.PathLike[str],
        stat_result: os.stat_result,
        scope: Scope,
        status_code: int = 200,
    ) -> Response:
        response = super().file_response(full_path, stat_result, scope, status_code)
        response.headers["Cache-Control"] = self._cache_control
        return response
