"""Parser for the delimiter-encoded ``vod_play_url`` blob.

Layout of the blob::

    <group> $$$ <group> $$$ ...            play sources, only the first is used
    <episode> # <episode> # ...            episodes of one group
    [<title> $] <url>                      one episode

A segment without ``$`` is a bare URL. Segments whose URL does not start
with ``http://`` or ``https://`` are skipped; the survivors are numbered
1..n by final position.
"""

from __future__ import annotations

from vodrelay.domain.entities import Episode

GROUP_SEPARATOR = "$$$"
EPISODE_SEPARATOR = "#"
TITLE_SEPARATOR = "$"

_URL_PREFIXES = ("http://", "https://")

# Scanner states
_TITLE = 0
_URL = 1
_TAIL = 2  # past the url; anything up to the next "#" is ignored


def _split_segments(group: str) -> list[tuple[str | None, str]]:
    """Scan one play-source group into ``(title, url)`` pairs.

    ``title`` is None when the segment carried no ``$``.
    """
    segments: list[tuple[str | None, str]] = []
    state = _TITLE
    head: list[str] = []
    url: list[str] = []

    def flush() -> None:
        if state == _TITLE:
            segments.append((None, "".join(head)))
        else:
            segments.append(("".join(head), "".join(url)))

    for ch in group:
        if ch == EPISODE_SEPARATOR:
            flush()
            state = _TITLE
            head.clear()
            url.clear()
        elif ch == TITLE_SEPARATOR:
            if state == _TITLE:
                state = _URL
            elif state == _URL:
                state = _TAIL
        elif state == _TITLE:
            head.append(ch)
        elif state == _URL:
            url.append(ch)

    flush()
    return segments


def parse_episodes(blob: str | None) -> list[Episode]:
    """Return the playable episodes of the first play source in *blob*."""
    if not blob:
        return []

    group = blob.split(GROUP_SEPARATOR, 1)[0]
    episodes: list[Episode] = []
    for title, raw_url in _split_segments(group):
        url = raw_url.strip()
        if not url.startswith(_URL_PREFIXES):
            continue
        index = len(episodes) + 1
        label = (title or "").strip() or f"Episode {index}"
        episodes.append(Episode(index=index, title=label, url=url))
    return episodes
