"""Tests for HttpxCatalogClient (ac=videolist protocol)."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
import respx

from vodrelay.domain.entities import CatalogExternalError, SourceEntry
from vodrelay.infrastructure.catalog.client import HttpxCatalogClient
from vodrelay.infrastructure.common.fetcher import RetryingFetcher

_API = "https://alpha.example.com/api.php/provide/vod"


@pytest.fixture()
async def client() -> HttpxCatalogClient:
    async with httpx.AsyncClient() as http:
        fetcher = RetryingFetcher(http, timeout=1.0, user_agent="UA/1.0", max_retries=3)
        yield HttpxCatalogClient(fetcher=fetcher)


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


class TestSearch:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_builds_query_and_normalizes(
        self,
        client: HttpxCatalogClient,
        source_a: SourceEntry,
        vod_record: dict[str, Any],
    ) -> None:
        route = respx.get(_API, params={"ac": "videolist", "wd": "流浪 地球"}).respond(
            200, json={"list": [vod_record]}
        )

        movies = await client.search(source_a, "流浪 地球")

        assert route.called
        assert len(movies) == 1
        assert movies[0].title == "流浪地球"
        assert movies[0].director == "郭帆"
        assert movies[0].episodes is None

    @respx.mock
    @pytest.mark.asyncio()
    async def test_results_carry_credits_but_no_synopsis(
        self,
        client: HttpxCatalogClient,
        source_a: SourceEntry,
        vod_record: dict[str, Any],
    ) -> None:
        respx.get(_API).respond(200, json={"list": [vod_record]})

        movies = await client.search(source_a, "流浪地球")

        assert movies[0].actor == "吴京,屈楚萧"
        assert movies[0].description is None

    @respx.mock
    @pytest.mark.asyncio()
    async def test_missing_list_is_empty(
        self, client: HttpxCatalogClient, source_a: SourceEntry
    ) -> None:
        respx.get(_API).respond(200, json={"code": 0, "msg": "no data"})
        assert await client.search(source_a, "x") == []

    @respx.mock
    @pytest.mark.asyncio()
    async def test_invalid_json_is_empty(
        self, client: HttpxCatalogClient, source_a: SourceEntry
    ) -> None:
        respx.get(_API).respond(200, text="<html>maintenance</html>")
        assert await client.search(source_a, "x") == []

    @respx.mock
    @pytest.mark.asyncio()
    async def test_http_error_raises(
        self, client: HttpxCatalogClient, source_a: SourceEntry
    ) -> None:
        respx.get(_API).respond(502)
        with pytest.raises(CatalogExternalError, match="502"):
            await client.search(source_a, "x")

    @respx.mock
    @pytest.mark.asyncio()
    async def test_network_error_is_not_retried(
        self, client: HttpxCatalogClient, source_a: SourceEntry
    ) -> None:
        route = respx.get(_API).mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(CatalogExternalError):
            await client.search(source_a, "x")
        assert route.call_count == 1


# ---------------------------------------------------------------------------
# list_page
# ---------------------------------------------------------------------------


class TestListPage:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_page_with_counts(
        self,
        client: HttpxCatalogClient,
        source_a: SourceEntry,
        vod_record: dict[str, Any],
    ) -> None:
        respx.get(_API, params={"ac": "videolist", "pg": "2"}).respond(
            200, json={"list": [vod_record], "pagecount": "17", "total": 340}
        )

        page = await client.list_page(source_a, 2)

        assert page.has_list is True
        assert page.page_count == 17
        assert page.total == 340
        assert [m.id for m in page.movies] == ["4242"]
        assert page.movies[0].description is None

    @respx.mock
    @pytest.mark.asyncio()
    async def test_category_param(
        self, client: HttpxCatalogClient, source_a: SourceEntry
    ) -> None:
        route = respx.get(
            _API, params={"ac": "videolist", "t": "2", "pg": "1"}
        ).respond(200, json={"list": []})

        page = await client.list_page(source_a, 1, category="2")

        assert route.called
        assert page.has_list is True
        assert page.movies == []
        assert page.page_count is None

    @respx.mock
    @pytest.mark.asyncio()
    async def test_no_list(
        self, client: HttpxCatalogClient, source_a: SourceEntry
    ) -> None:
        respx.get(_API).respond(200, json=["not", "an", "object"])
        page = await client.list_page(source_a, 1)
        assert page.has_list is False
        assert page.movies == []

    @respx.mock
    @pytest.mark.asyncio()
    async def test_non_json_body_has_no_list(
        self, client: HttpxCatalogClient, source_a: SourceEntry
    ) -> None:
        respx.get(_API).respond(200, text="<html>maintenance</html>")
        page = await client.list_page(source_a, 1)
        assert page.has_list is False
        assert page.page_count is None
        assert page.total is None


# ---------------------------------------------------------------------------
# detail
# ---------------------------------------------------------------------------


class TestDetail:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_first_record_with_episodes(
        self,
        client: HttpxCatalogClient,
        source_a: SourceEntry,
        vod_record: dict[str, Any],
    ) -> None:
        respx.get(_API, params={"ac": "videolist", "ids": "4242"}).respond(
            200, json={"list": [vod_record, {"vod_id": 9, "vod_name": "other"}]}
        )

        movie = await client.detail(source_a, "4242")

        assert movie is not None
        assert movie.id == "4242"
        assert movie.description == "太阳即将毁灭。"
        assert movie.episodes is not None
        assert movie.episodes[0].index == 1

    @respx.mock
    @pytest.mark.asyncio()
    async def test_empty_list_is_none(
        self, client: HttpxCatalogClient, source_a: SourceEntry
    ) -> None:
        respx.get(_API).respond(200, json={"list": []})
        assert await client.detail(source_a, "1") is None
