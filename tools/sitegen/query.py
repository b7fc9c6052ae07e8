"""
Listing helpers over posts.json: the filter/sort/"load more" logic the home
page runs, kept here as plain functions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .config import POSTS_PER_PAGE, SiteConfig
from .posts import Post
from .utils import date_sort_key

ALL_CATEGORIES = "all"


@dataclass
class Page:
    posts: List[Post]
    has_more: bool


def newest_first(posts: Iterable[Post]) -> List[Post]:
    return sorted(posts, key=lambda p: date_sort_key(p.created_at), reverse=True)


def filter_posts(
    posts: Iterable[Post],
    category: str = ALL_CATEGORIES,
    search: str = "",
    tags: Sequence[str] = (),
) -> List[Post]:
    result = list(posts)

    if category and category.lower() != ALL_CATEGORIES:
        wanted = category.lower()
        result = [p for p in result if p.category.lower() == wanted]

    if search:
        needle = search.lower()
        result = [
            p for p in result
            if needle in p.title.lower()
            or needle in p.excerpt.lower()
            or needle in p.content.lower()
        ]

    if tags:
        result = [p for p in result if any(t in p.tags for t in tags)]

    return newest_first(result)


def paginate(posts: Sequence[Post], page: int, per_page: int = POSTS_PER_PAGE) -> Page:
    """Cumulative paging: page N shows the first N * per_page posts."""
    page = max(page, 1)
    end = page * per_page
    return Page(posts=list(posts[:end]), has_more=len(posts) > end)


def posts_by_series(posts: Iterable[Post], name: str) -> List[Post]:
    members = [p for p in posts if p.series == name]
    return sorted(members, key=lambda p: date_sort_key(p.created_at))


def list_posts(
    posts: Iterable[Post],
    config: SiteConfig,
    category: str = ALL_CATEGORIES,
    search: str = "",
    tags: Sequence[str] = (),
    page: int = 1,
) -> Page:
    """The home page listing: filter, newest first, then `config.posts_per_page` paging."""
    matched = filter_posts(posts, category=category, search=search, tags=tags)
    return paginate(matched, page, per_page=config.posts_per_page)
