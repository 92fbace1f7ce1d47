"""Static registry of upstream catalog APIs."""

from __future__ import annotations

from collections.abc import Iterable

from vodrelay.domain.entities import CatalogSourceNotFound, SourceEntry

_API_PATH = "/api.php/provide/vod"

DEFAULT_SOURCES: tuple[SourceEntry, ...] = (
    SourceEntry(
        key="dyttzy",
        api=f"http://caiji.dyttzyapi.com{_API_PATH}",
        name="电影天堂资源",
        detail="http://caiji.dyttzyapi.com",
    ),
    SourceEntry(key="ruyi", api=f"https://cj.rycjapi.com{_API_PATH}", name="如意资源"),
    SourceEntry(key="bfzy", api=f"https://bfzyapi.com{_API_PATH}", name="暴风资源"),
    SourceEntry(key="tyyszy", api=f"https://tyyszy.com{_API_PATH}", name="天涯资源"),
    SourceEntry(
        key="ffzy",
        api=f"http://ffzy5.tv{_API_PATH}",
        name="非凡影视",
        detail="http://ffzy5.tv",
    ),
    SourceEntry(
        key="heimuer",
        api=f"https://json.heimuer.xyz{_API_PATH}",
        name="黑木耳",
        detail="https://heimuer.tv",
    ),
    SourceEntry(key="zy360", api=f"https://360zy.com{_API_PATH}", name="360资源"),
    SourceEntry(
        key="iqiyi", api=f"https://www.iqiyizyapi.com{_API_PATH}", name="iqiyi资源"
    ),
    SourceEntry(key="wolong", api=f"https://wolongzyw.com{_API_PATH}", name="卧龙资源"),
    SourceEntry(key="hwba", api=f"https://cjhwba.com{_API_PATH}", name="华为吧资源"),
    SourceEntry(
        key="jisu",
        api=f"https://jszyapi.com{_API_PATH}",
        name="极速资源",
        detail="https://jszyapi.com",
    ),
    SourceEntry(key="dbzy", api=f"https://dbzy.tv{_API_PATH}", name="豆瓣资源"),
    SourceEntry(key="mozhua", api=f"https://mozhuazy.com{_API_PATH}", name="魔爪资源"),
    SourceEntry(key="mdzy", api=f"https://www.mdzyapi.com{_API_PATH}", name="魔都资源"),
    SourceEntry(key="zuid", api=f"https://api.zuidapi.com{_API_PATH}", name="最大资源"),
    SourceEntry(
        key="yinghua", api=f"https://m3u8.apiyhzy.com{_API_PATH}", name="樱花资源"
    ),
    SourceEntry(
        key="baidu", api=f"https://api.apibdzy.com{_API_PATH}", name="百度云资源"
    ),
    SourceEntry(
        key="wujin", api=f"https://api.wujinapi.me{_API_PATH}", name="无尽资源"
    ),
    SourceEntry(key="wwzy", api=f"https://wwzy.tv{_API_PATH}", name="旺旺短剧"),
    SourceEntry(key="ikun", api=f"https://ikunzyapi.com{_API_PATH}", name="iKun资源"),
    # Only visible when adult content is requested.
    SourceEntry(
        key="testSource",
        api=f"https://www.example.com{_API_PATH}",
        name="空内容测试源",
        adult=True,
    ),
)


class SourceRegistry:
    """Immutable, ordered lookup of :class:`SourceEntry` by key.

    Entries flagged ``adult`` are hidden unless explicitly requested.
    Order is preserved; fan-out results are merged in this order.
    """

    def __init__(self, entries: Iterable[SourceEntry] = DEFAULT_SOURCES) -> None:
        self._entries = tuple(entries)
        self._by_key: dict[str, SourceEntry] = {}
        for entry in self._entries:
            if entry.key in self._by_key:
                raise ValueError(f"Duplicate source key: {entry.key!r}")
            self._by_key[entry.key] = entry

    def entries(self, *, include_adult: bool = False) -> list[SourceEntry]:
        return [e for e in self._entries if include_adult or not e.adult]

    def get(self, key: str, *, include_adult: bool = False) -> SourceEntry:
        """Resolve *key*.

        Raises:
            CatalogSourceNotFound: Unknown key, or an adult entry while
                *include_adult* is False.
        """
        entry = self._by_key.get(key)
        if entry is None or (entry.adult and not include_adult):
            raise CatalogSourceNotFound(key)
        return entry

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key
