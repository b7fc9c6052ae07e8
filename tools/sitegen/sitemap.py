from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional
from xml.sax.saxutils import escape

from .config import RECENT_DAYS, SiteConfig
from .feeds import post_url
from .posts import Post
from .utils import as_utc, parse_date

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


@dataclass
class SitemapEntry:
    loc: str
    changefreq: str
    priority: str
    lastmod: Optional[str] = None


def static_entries(config: SiteConfig) -> List[SitemapEntry]:
    return [
        SitemapEntry(config.base_url, "daily", "1.0"),
        SitemapEntry(f"{config.base_url}/series", "weekly", "0.7"),
    ]


def is_recent(post: Post, now: datetime, days: int = RECENT_DAYS) -> bool:
    when = parse_date(post.effective_date)
    return when is not None and when > now - timedelta(days=days)


def post_entries(
    posts: Iterable[Post], config: SiteConfig, now: datetime
) -> List[SitemapEntry]:
    return [
        SitemapEntry(
            loc=post_url(post, config),
            changefreq="weekly",
            priority="0.9" if is_recent(post, now) else "0.8",
            lastmod=post.effective_date or None,
        )
        for post in posts
    ]


def _url(entry: SitemapEntry) -> str:
    lines = [
        "  <url>",
        f"    <loc>{escape(entry.loc)}</loc>",
        f"    <changefreq>{entry.changefreq}</changefreq>",
        f"    <priority>{entry.priority}</priority>",
    ]
    if entry.lastmod:
        lines.append(f"    <lastmod>{escape(entry.lastmod)}</lastmod>")
    lines.append("  </url>")
    return "\n".join(lines)


def render_sitemap(
    posts: Iterable[Post],
    config: SiteConfig,
    now: Optional[datetime] = None,
) -> str:
    now = as_utc(now or datetime.now(timezone.utc))
    entries = static_entries(config) + post_entries(posts, config, now)
    return "\n".join(
        ['<?xml version="1.0" encoding="UTF-8"?>', f'<urlset xmlns="{SITEMAP_NS}">']
        + [_url(e) for e in entries]
        + ["</urlset>"]
    ) + "\n"
