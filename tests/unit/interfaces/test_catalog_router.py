"""Tests for the catalog aggregator router."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from vodrelay.domain.entities import (
    CanonicalMovie,
    CatalogExternalError,
    CatalogPage,
    Episode,
    SourceEntry,
)
from vodrelay.infrastructure.catalog import SourceRegistry
from vodrelay.infrastructure.config import AppConfig
from vodrelay.interfaces.api.catalog.router import router


def _make_app(registry: SourceRegistry, catalog_client: AsyncMock) -> FastAPI:
    """Create a minimal FastAPI app with the catalog router."""
    app = FastAPI()
    app.include_router(router)
    app.state.config = AppConfig.model_validate(
        {"catalog": {"default_source": "alpha"}}
    )
    app.state.sources = registry
    app.state.catalog_client = catalog_client
    return app


@pytest.fixture()
def catalog_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture()
def client(registry: SourceRegistry, catalog_client: AsyncMock) -> TestClient:
    return TestClient(_make_app(registry, catalog_client))


# ---------------------------------------------------------------------------
# /api/search
# ---------------------------------------------------------------------------


class TestSearch:
    def test_missing_query(self, client: TestClient) -> None:
        resp = client.get("/api/search")
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Search query is required"}

    def test_invalid_source(self, client: TestClient) -> None:
        resp = client.get("/api/search", params={"q": "x", "source": "bogus"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Invalid source"}

    def test_single_source(
        self,
        client: TestClient,
        catalog_client: AsyncMock,
        make_movie: Callable[..., CanonicalMovie],
    ) -> None:
        catalog_client.search.return_value = [make_movie("Dune", "2021")]

        resp = client.get("/api/search", params={"q": "dune"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert "aggregated" not in body
        assert body["data"] == [
            {
                "id": "1",
                "title": "Dune",
                "poster": "",
                "year": "2021",
                "area": "",
                "type": "",
                "remarks": "",
                "source": "alpha",
                "sourceName": "Alpha",
                "adult": False,
            }
        ]

    def test_aggregated(
        self,
        client: TestClient,
        catalog_client: AsyncMock,
        make_movie: Callable[..., CanonicalMovie],
    ) -> None:
        catalog_client.search.return_value = [make_movie("Dune")]

        resp = client.get("/api/search", params={"q": "dune", "aggregated": "true"})

        body = resp.json()
        assert body["aggregated"] is True
        assert body["sources"] == 2
        assert len(body["data"]) == 1

    def test_aggregated_with_adult(
        self, client: TestClient, catalog_client: AsyncMock
    ) -> None:
        catalog_client.search.return_value = []
        resp = client.get(
            "/api/search",
            params={"q": "x", "aggregated": "true", "includeAdult": "true"},
        )
        assert resp.json()["sources"] == 3

    def test_flag_must_be_literal_true(
        self, client: TestClient, catalog_client: AsyncMock
    ) -> None:
        catalog_client.search.return_value = []
        resp = client.get("/api/search", params={"q": "x", "aggregated": "1"})
        assert "aggregated" not in resp.json()
        assert catalog_client.search.await_count == 1

    def test_upstream_failure(
        self, client: TestClient, catalog_client: AsyncMock
    ) -> None:
        catalog_client.search.side_effect = CatalogExternalError("HTTP 502")
        resp = client.get("/api/search", params={"q": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": "Search failed"}


# ---------------------------------------------------------------------------
# /api/movie/{id}
# ---------------------------------------------------------------------------


class TestMovieDetail:
    def test_detail_with_episodes(
        self, client: TestClient, catalog_client: AsyncMock, source_b: SourceEntry
    ) -> None:
        catalog_client.detail.return_value = CanonicalMovie(
            id="9",
            title="Show",
            source="beta",
            source_name="Beta",
            description="",
            director="Someone",
            actor="",
            episodes=(Episode(1, "第1集", "https://cdn.example.com/1.m3u8"),),
        )

        resp = client.get("/api/movie/9", params={"source": "beta"})

        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["director"] == "Someone"
        assert data["description"] == ""
        assert data["episodes"] == [
            {"episode": 1, "title": "第1集", "url": "https://cdn.example.com/1.m3u8"}
        ]
        catalog_client.detail.assert_awaited_once_with(source_b, "9")

    def test_not_found(self, client: TestClient, catalog_client: AsyncMock) -> None:
        catalog_client.detail.return_value = None
        resp = client.get("/api/movie/404")
        assert resp.status_code == 404
        assert resp.json()["error"] == "Movie not found"

    def test_adult_source_rejected(self, client: TestClient) -> None:
        resp = client.get("/api/movie/1", params={"source": "grown"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid source"

    def test_upstream_failure(
        self, client: TestClient, catalog_client: AsyncMock
    ) -> None:
        catalog_client.detail.side_effect = CatalogExternalError("timeout")
        resp = client.get("/api/movie/1")
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to fetch movie details"


# ---------------------------------------------------------------------------
# /api/sources and /api/categories
# ---------------------------------------------------------------------------


class TestSources:
    def test_default_hides_adult(self, client: TestClient) -> None:
        data = client.get("/api/sources").json()["data"]
        assert [s["key"] for s in data] == ["alpha", "beta"]

    def test_include_adult(self, client: TestClient) -> None:
        data = client.get("/api/sources", params={"includeAdult": "true"}).json()
        assert data["data"][-1] == {"key": "grown", "name": "Grown", "adult": True}


class TestCategories:
    def test_static_catalog(self, client: TestClient) -> None:
        data = client.get("/api/categories").json()["data"]
        assert len(data) == 18
        assert data[0] == {
            "id": 1,
            "name": "电影",
            "type": "1",
            "categoryType": "content",
            "color": "#FF6B6B",
        }
        highlighted = [c["id"] for c in data if c.get("isHighlighted")]
        assert highlighted == [14]


# ---------------------------------------------------------------------------
# /api/category/{type}
# ---------------------------------------------------------------------------


class TestCategoryListing:
    def test_invalid_type(self, client: TestClient) -> None:
        resp = client.get("/api/category/hot")
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid category type"

    def test_invalid_source(self, client: TestClient) -> None:
        resp = client.get("/api/category/1", params={"source": "bogus"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid source"

    def test_pagination(
        self,
        client: TestClient,
        catalog_client: AsyncMock,
        source_a: SourceEntry,
        make_movie: Callable[..., CanonicalMovie],
    ) -> None:
        catalog_client.list_page.return_value = CatalogPage(
            movies=[make_movie("A")], page_count=7, total=140
        )

        resp = client.get("/api/category/2", params={"page": "3"})

        body = resp.json()
        assert body["pagination"] == {
            "currentPage": 3,
            "totalPages": 7,
            "totalItems": 140,
        }
        catalog_client.list_page.assert_awaited_once_with(source_a, 3, category="2")

    @pytest.mark.parametrize("page", ["abc", "0", ""])
    def test_bad_page_defaults_to_one(
        self, client: TestClient, catalog_client: AsyncMock, page: str
    ) -> None:
        catalog_client.list_page.return_value = CatalogPage(has_list=False)

        body = client.get("/api/category/1", params={"page": page}).json()

        assert body["data"] == []
        assert body["pagination"] == {
            "currentPage": 1,
            "totalPages": 0,
            "totalItems": 0,
        }

    def test_upstream_failure(
        self, client: TestClient, catalog_client: AsyncMock
    ) -> None:
        catalog_client.list_page.side_effect = CatalogExternalError("HTTP 500")
        resp = client.get("/api/category/1")
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to fetch category movies"


# ---------------------------------------------------------------------------
# /api/recommendations
# ---------------------------------------------------------------------------


class TestRecommendations:
    def test_returns_movies(
        self,
        client: TestClient,
        catalog_client: AsyncMock,
        make_movie: Callable[..., CanonicalMovie],
    ) -> None:
        catalog_client.list_page.return_value = CatalogPage(movies=[make_movie("A")])

        body = client.get("/api/recommendations").json()

        assert body["success"] is True
        # two visible sources x two pages
        assert len(body["data"]) == 4

    def test_failing_sources_still_succeed(
        self, client: TestClient, catalog_client: AsyncMock
    ) -> None:
        catalog_client.list_page.side_effect = CatalogExternalError("down")
        resp = client.get("/api/recommendations")
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "data": []}

    @patch("vodrelay.interfaces.api.catalog.router.RecommendationsUseCase")
    def test_unexpected_failure(
        self, mock_uc_cls: MagicMock, client: TestClient
    ) -> None:
        mock_instance = AsyncMock()
        mock_instance.execute.side_effect = RuntimeError("boom")
        mock_uc_cls.return_value = mock_instance

        resp = client.get("/api/recommendations")

        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "error": "Failed to fetch recommendations",
        }
