"""Shared fixtures for integration tests.

These tests run the real application (lifespan, fetcher, catalog client,
proxy relay) with outbound HTTP mocked via respx.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
import respx

from vodrelay.infrastructure.config import AppConfig


@pytest.fixture()
def respx_mock() -> Iterator[respx.MockRouter]:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def static_dir(tmp_path: Path) -> Path:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text(
        '<script>window.__PW="{{PASSWORD}}";</script>', encoding="utf-8"
    )
    (public / "player.html").write_text("<html>player</html>", encoding="utf-8")
    return public


@pytest.fixture()
def app_config(static_dir: Path) -> AppConfig:
    """Config with retries disabled so failure paths stay fast."""
    return AppConfig.model_validate(
        {
            "http": {"timeout_seconds": 2.0, "max_retries": 0},
            "web": {"static_dir": str(static_dir)},
        }
    )
