"""Static category catalog served by ``/api/categories``."""

from __future__ import annotations

from vodrelay.domain.entities import Category

# Upstream type codes accepted by the category listing endpoint.
VALID_LISTING_TYPES: frozenset[str] = frozenset({"1", "2", "3", "4", "6"})

CATEGORIES: tuple[Category, ...] = (
    Category(1, "电影", "1", "content", "#FF6B6B"),
    Category(2, "电视剧", "2", "content", "#4ECDC4"),
    Category(10, "热门", "hot", "trending", "#FF6B6B"),
    Category(11, "最新", "latest", "trending", "#45B7D1"),
    Category(12, "经典", "classic", "trending", "#96CEB4"),
    Category(13, "豆瓣高分", "douban_high", "rating", "#FFEAA7"),
    Category(14, "冷门佳片", "hidden_gems", "rating", "#DDA0DD", is_highlighted=True),
    Category(20, "华语", "chinese", "region", "#FF7675"),
    Category(21, "欧美", "western", "region", "#74B9FF"),
    Category(22, "韩国", "korean", "region", "#FD79A8"),
    Category(23, "日本", "japanese", "region", "#FDCB6E"),
    Category(30, "动作", "action", "genre", "#E17055"),
    Category(31, "喜剧", "comedy", "genre", "#00B894"),
    Category(32, "爱情", "romance", "genre", "#E84393"),
    Category(33, "科幻", "scifi", "genre", "#0984E3"),
    Category(34, "悬疑", "mystery", "genre", "#6C5CE7"),
    Category(35, "恐怖", "horror", "genre", "#2D3436"),
    Category(36, "治愈", "healing", "genre", "#00CEC9"),
)
