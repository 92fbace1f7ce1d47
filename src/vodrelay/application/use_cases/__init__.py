from .catalog_search import CatalogSearchUseCase, SearchOutcome
from .category_listing import CategoryListing, CategoryListingUseCase
from .movie_detail import MovieDetailUseCase
from .recommendations import RecommendationsUseCase
from .source_listing import SourceListingUseCase

__all__ = [
    "CatalogSearchUseCase",
    "CategoryListing",
    "CategoryListingUseCase",
    "MovieDetailUseCase",
    "RecommendationsUseCase",
    "SearchOutcome",
    "SourceListingUseCase",
]
