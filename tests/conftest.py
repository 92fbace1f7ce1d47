"""Shared test fixtures for the vodrelay test suite."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest

from vodrelay.domain.entities import CanonicalMovie, SourceEntry
from vodrelay.infrastructure.catalog import SourceRegistry

# Variables read by the config layer; the host environment must not leak in.
_CONFIG_ENV_VARS = (
    "PASSWORD",
    "ADMINPASSWORD",
    "CORS_ORIGIN",
    "REQUEST_TIMEOUT",
    "MAX_RETRIES",
    "USER_AGENT",
    "BLOCKED_HOSTS",
    "BLOCKED_IP_PREFIXES",
    "FILTERED_HEADERS",
    "CACHE_MAX_AGE",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.upper().startswith("VODRELAY_"):
            monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def source_a() -> SourceEntry:
    return SourceEntry(
        key="alpha", api="https://alpha.example.com/api.php/provide/vod", name="Alpha"
    )


@pytest.fixture()
def source_b() -> SourceEntry:
    return SourceEntry(
        key="beta", api="https://beta.example.com/api.php/provide/vod", name="Beta"
    )


@pytest.fixture()
def adult_source() -> SourceEntry:
    return SourceEntry(
        key="grown",
        api="https://grown.example.com/api.php/provide/vod",
        name="Grown",
        adult=True,
    )


@pytest.fixture()
def registry(
    source_a: SourceEntry, source_b: SourceEntry, adult_source: SourceEntry
) -> SourceRegistry:
    """Small registry: two regular sources plus one adult source."""
    return SourceRegistry([source_a, source_b, adult_source])


@pytest.fixture()
def vod_record() -> dict[str, Any]:
    """One upstream list item as returned by ``ac=videolist``."""
    return {
        "vod_id": 4242,
        "vod_name": "流浪地球",
        "vod_pic": "https://img.example.com/4242.jpg",
        "vod_year": "2019",
        "vod_area": "大陆",
        "type_name": "科幻片",
        "vod_remarks": "HD",
        "vod_content": "太阳即将毁灭。",
        "vod_director": "郭帆",
        "vod_actor": "吴京,屈楚萧",
        "vod_play_url": (
            "正片$https://cdn.example.com/4242/index.m3u8"
            "$$$正片$https://other.example.com/4242.mp4"
        ),
    }


@pytest.fixture()
def make_movie() -> Callable[..., CanonicalMovie]:
    """Factory for minimal canonical records."""

    def _make(
        title: str,
        year: str = "2020",
        *,
        source: str = "alpha",
        movie_id: str = "1",
    ) -> CanonicalMovie:
        return CanonicalMovie(
            id=movie_id,
            title=title,
            source=source,
            source_name=source.capitalize(),
            year=year,
        )

    return _make
