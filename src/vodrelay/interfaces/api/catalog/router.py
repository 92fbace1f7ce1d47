"""Catalog aggregator API endpoints."""

from __future__ import annotations

from typing import cast

import structlog
from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from vodrelay.application.use_cases import (
    CatalogSearchUseCase,
    CategoryListingUseCase,
    MovieDetailUseCase,
    RecommendationsUseCase,
    SourceListingUseCase,
)
from vodrelay.domain.entities import (
    CatalogBadRequest,
    CatalogInvalidCategory,
    CatalogNotFound,
    CatalogSourceNotFound,
)
from vodrelay.infrastructure.catalog import CATEGORIES, VALID_LISTING_TYPES
from vodrelay.infrastructure.common.converters import to_int
from vodrelay.interfaces.api.catalog.presenter import (
    category_to_dict,
    failure,
    movie_to_dict,
    success,
)
from vodrelay.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["catalog"])


def _flag(value: str | None) -> bool:
    """Query flags are true only for the literal ``"true"``."""
    return value == "true"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=failure(message))


@router.get("/recommendations")
async def recommendations(
    request: Request,
    include_adult: str | None = Query(None, alias="includeAdult"),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    catalog = state.config.catalog
    uc = RecommendationsUseCase(
        sources=state.sources,
        client=state.catalog_client,
        max_sources=catalog.recommendation_sources,
        pages_per_source=catalog.recommendation_pages,
        result_cap=catalog.recommendation_cap,
    )
    try:
        movies = await uc.execute(include_adult=_flag(include_adult))
    except Exception:
        log.exception("recommendations_failed")
        return _error(500, "Failed to fetch recommendations")
    return JSONResponse(success([movie_to_dict(m) for m in movies]))


@router.get("/search")
async def search(
    request: Request,
    q: str | None = Query(None, description="Search query"),
    source: str | None = Query(None, description="Source key (single-source mode)"),
    include_adult: str | None = Query(None, alias="includeAdult"),
    aggregated: str | None = Query(None),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    uc = CatalogSearchUseCase(
        sources=state.sources,
        client=state.catalog_client,
        default_source=state.config.catalog.default_source,
        result_cap=state.config.catalog.search_result_cap,
    )

    try:
        outcome = await uc.execute(
            q,
            source_key=source,
            include_adult=_flag(include_adult),
            aggregated=_flag(aggregated),
        )
    except CatalogSourceNotFound:
        return _error(400, "Invalid source")
    except CatalogBadRequest as e:
        return _error(400, str(e))
    except Exception:
        log.exception("search_failed", q=q, source=source)
        return _error(500, "Search failed")

    data = [movie_to_dict(m) for m in outcome.movies]
    if outcome.aggregated:
        return JSONResponse(
            success(data, sources=outcome.sources_queried, aggregated=True)
        )
    return JSONResponse(success(data))


@router.get("/movie/{movie_id}")
async def movie_detail(
    request: Request,
    movie_id: str,
    source: str | None = Query(None),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    uc = MovieDetailUseCase(
        sources=state.sources,
        client=state.catalog_client,
        default_source=state.config.catalog.default_source,
    )

    try:
        movie = await uc.execute(movie_id, source_key=source)
    except CatalogSourceNotFound:
        return _error(400, "Invalid source")
    except CatalogNotFound:
        return _error(404, "Movie not found")
    except Exception:
        log.exception("movie_detail_failed", movie_id=movie_id, source=source)
        return _error(500, "Failed to fetch movie details")
    return JSONResponse(success(movie_to_dict(movie)))


@router.get("/sources")
async def sources(
    request: Request,
    include_adult: str | None = Query(None, alias="includeAdult"),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    uc = SourceListingUseCase(sources=state.sources)
    try:
        data = uc.execute(include_adult=_flag(include_adult))
    except Exception:
        log.exception("sources_failed")
        return _error(500, "Failed to fetch sources")
    return JSONResponse(success(data))


@router.get("/categories")
async def categories() -> JSONResponse:
    return JSONResponse(success([category_to_dict(c) for c in CATEGORIES]))


@router.get("/category/{category_type}")
async def category_listing(
    request: Request,
    category_type: str,
    page: str | None = Query(None),
    source: str | None = Query(None),
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    current_page = to_int(page) or 1
    uc = CategoryListingUseCase(
        sources=state.sources,
        client=state.catalog_client,
        valid_types=VALID_LISTING_TYPES,
        default_source=state.config.catalog.default_source,
    )

    try:
        listing = await uc.execute(
            category_type, page=current_page, source_key=source
        )
    except CatalogInvalidCategory:
        return _error(400, "Invalid category type")
    except CatalogSourceNotFound:
        return _error(400, "Invalid source")
    except Exception:
        log.exception(
            "category_listing_failed",
            category=category_type,
            page=current_page,
            source=source,
        )
        return _error(500, "Failed to fetch category movies")

    return JSONResponse(
        success(
            [movie_to_dict(m) for m in listing.movies],
            pagination={
                "currentPage": listing.current_page,
                "totalPages": listing.total_pages,
                "totalItems": listing.total_items,
            },
        )
    )
