from __future__ import annotations

from typing import Any, Dict, Iterable, List

from .config import UNCATEGORIZED
from .posts import Post
from .utils import date_sort_key


def _by_count(counts: Dict[str, int]) -> List[tuple]:
    # sorted() is stable, so ties keep first-seen order
    return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)


def build_categories(posts: Iterable[Post]) -> List[Dict[str, Any]]:
    counts: Dict[str, int] = {}
    for post in posts:
        category = post.category or UNCATEGORIZED
        counts[category] = counts.get(category, 0) + 1
    return [{"category": c, "count": n} for c, n in _by_count(counts)]


def build_tags(posts: Iterable[Post]) -> List[Dict[str, Any]]:
    counts: Dict[str, int] = {}
    for post in posts:
        for tag in post.tags:
            counts[tag] = counts.get(tag, 0) + 1
    return [{"tag": t, "count": n} for t, n in _by_count(counts)]


def build_series(posts: Iterable[Post]) -> List[Dict[str, Any]]:
    """
    One entry per series name, in first-seen order.

    Members are listed newest first and `latestDate` is the newest member's
    `createdAt`.
    """
    groups: Dict[str, List[Post]] = {}
    for post in posts:
        if post.series:
            groups.setdefault(post.series, []).append(post)

    series: List[Dict[str, Any]] = []
    for name, members in groups.items():
        members = sorted(
            members, key=lambda p: date_sort_key(p.created_at), reverse=True
        )
        series.append({
            "name": name,
            "count": len(members),
            "latestDate": members[0].created_at,
            "posts": [
                {"title": p.title, "slug": p.slug, "date": p.created_at}
                for p in members
            ],
        })
    return series
