from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, List, Optional
from xml.sax.saxutils import escape

from .config import FEED_FALLBACK_CATEGORY, SiteConfig
from .posts import Post
from .utils import as_utc, date_sort_key, parse_date


def cdata(text: str) -> str:
    # "]]>" cannot appear inside a CDATA section; split it across two
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def rfc822(dt: datetime) -> str:
    return format_datetime(as_utc(dt), usegmt=True)


def post_url(post: Post, config: SiteConfig) -> str:
    category = post.category or FEED_FALLBACK_CATEGORY
    return f"{config.base_url}/{category.lower()}/{post.slug}"


def recent_posts(posts: Iterable[Post], limit: int) -> List[Post]:
    ordered = sorted(posts, key=lambda p: date_sort_key(p.created_at), reverse=True)
    return ordered[:limit]


def _item(post: Post, config: SiteConfig) -> str:
    url = escape(post_url(post, config))
    category = post.category or FEED_FALLBACK_CATEGORY
    lines = [
        "    <item>",
        f"      <title>{cdata(post.title)}</title>",
        f"      <link>{url}</link>",
        f"      <guid>{url}</guid>",
        f"      <description>{cdata(post.excerpt)}</description>",
    ]
    published = parse_date(post.created_at)
    if published:
        lines.append(f"      <pubDate>{rfc822(published)}</pubDate>")
    lines.append(f"      <category>{escape(category)}</category>")
    lines.extend(f"      <category>{cdata(tag)}</category>" for tag in post.tags)
    lines.append("    </item>")
    return "\n".join(lines)


def render_rss(
    posts: Iterable[Post],
    config: SiteConfig,
    now: Optional[datetime] = None,
) -> str:
    """RSS 2.0 feed with the `config.rss_limit` newest posts, newest first."""
    now = as_utc(now or datetime.now(timezone.utc))
    items = [_item(p, config) for p in recent_posts(posts, config.rss_limit)]
    head = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0">',
        "  <channel>",
        f"    <title>{escape(config.site_title)}</title>",
        f"    <link>{escape(config.base_url)}</link>",
        f"    <description>{escape(config.site_description)}</description>",
        f"    <language>{escape(config.language)}</language>",
        f"    <lastBuildDate>{rfc822(now)}</lastBuildDate>",
        f"    <generator>{escape(config.generator)}</generator>",
    ]
    tail = ["  </channel>", "</rss>"]
    return "\n".join(head + items + tail) + "\n"
