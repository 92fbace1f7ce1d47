"""Maps an upstream ``vod_*`` record onto :class:`CanonicalMovie`."""

from __future__ import annotations

from typing import Any

from vodrelay.domain.entities import CanonicalMovie, SourceEntry
from vodrelay.infrastructure.catalog.episodes import parse_episodes


def _text(value: Any) -> str:
    """Coerce an upstream scalar to str; missing values become ``""``."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _optional_text(value: Any) -> str | None:
    text = _text(value)
    return text or None


def normalize_movie(
    raw: dict[str, Any],
    source: SourceEntry,
    *,
    with_credits: bool = False,
    with_description: bool = False,
    with_episodes: bool = False,
) -> CanonicalMovie:
    """Build a canonical record from one upstream list item.

    Unknown or malformed fields degrade to empty values; this never raises
    on odd upstream data.

    Args:
        raw: One element of the upstream ``list`` array.
        source: Registry entry the record came from.
        with_credits: Include director and actor.
        with_description: Include the synopsis (``vod_content``).
        with_episodes: Parse ``vod_play_url`` into episodes.
    """
    description = director = actor = None
    if with_description:
        description = _optional_text(raw.get("vod_content"))
    if with_credits:
        director = _optional_text(raw.get("vod_director"))
        actor = _optional_text(raw.get("vod_actor"))

    episodes = None
    if with_episodes:
        play_url = raw.get("vod_play_url")
        episodes = tuple(
            parse_episodes(play_url if isinstance(play_url, str) else None)
        )

    return CanonicalMovie(
        id=_text(raw.get("vod_id")),
        title=_text(raw.get("vod_name")),
        source=source.key,
        source_name=source.name,
        poster=_text(raw.get("vod_pic")),
        year=_text(raw.get("vod_year")),
        area=_text(raw.get("vod_area")),
        type_name=_text(raw.get("type_name")),
        remarks=_text(raw.get("vod_remarks")),
        adult=source.adult,
        description=description,
        director=director,
        actor=actor,
        episodes=episodes,
    )
