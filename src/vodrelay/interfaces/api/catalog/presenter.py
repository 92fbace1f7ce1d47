"""JSON presenter for catalog entities.

Field names follow the wire format existing front-ends consume
(``sourceName``, ``type``, ``episode``); optional values that are absent
are left out of the object.
"""

from __future__ import annotations

from typing import Any

from vodrelay.domain.entities import CanonicalMovie, Category, Episode


def episode_to_dict(episode: Episode) -> dict[str, Any]:
    return {"episode": episode.index, "title": episode.title, "url": episode.url}


def movie_to_dict(movie: CanonicalMovie) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": movie.id,
        "title": movie.title,
        "poster": movie.poster,
        "year": movie.year,
        "area": movie.area,
        "type": movie.type_name,
        "remarks": movie.remarks,
    }
    if movie.description is not None:
        out["description"] = movie.description
    if movie.director is not None:
        out["director"] = movie.director
    if movie.actor is not None:
        out["actor"] = movie.actor
    out["source"] = movie.source
    out["sourceName"] = movie.source_name
    out["adult"] = movie.adult
    if movie.episodes is not None:
        out["episodes"] = [episode_to_dict(e) for e in movie.episodes]
    return out


def category_to_dict(category: Category) -> dict[str, Any]:
    out: dict[str, Any] = {
        "id": category.id,
        "name": category.name,
        "type": category.type,
        "categoryType": category.category_type,
        "color": category.color,
    }
    if category.is_highlighted:
        out["isHighlighted"] = True
    return out


def success(data: Any, **extra: Any) -> dict[str, Any]:
    return {"success": True, "data": data, **extra}


def failure(error: str) -> dict[str, Any]:
    return {"success": False, "error": error}
