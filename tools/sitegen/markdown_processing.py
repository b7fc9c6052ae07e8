from __future__ import annotations

from typing import Optional

from .config import (
    BOLD,
    CONTENT_DIR_NAME,
    EXCERPT_LIMIT,
    HEADING_LINE,
    INLINE_CODE,
    ITALIC,
    MD_IMAGE,
    MD_LINK,
    NEWLINES,
    URI_SCHEME,
)


def strip_markdown(md: str) -> str:
    md = HEADING_LINE.sub("", md)
    md = BOLD.sub(r"\1", md)
    md = ITALIC.sub(r"\1", md)
    md = INLINE_CODE.sub(r"\1", md)
    md = MD_LINK.sub(r"\1", md)
    md = NEWLINES.sub(" ", md)
    return md.strip()


def extract_excerpt(content: str, limit: int = EXCERPT_LIMIT) -> str:
    """Plain-text preview of a post body, at most `limit` chars plus '...'."""
    text = strip_markdown(content)
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def extract_first_image(content: str) -> Optional[str]:
    m = MD_IMAGE.search(content)
    if not m:
        return None
    src = m.group(1).strip()
    return src or None


def is_absolute_url(url: str) -> bool:
    if not url:
        return False
    return bool(URI_SCHEME.match(url)) or url.startswith(("data:", "//"))


def resolve_featured_image(
    src: Optional[str], category_dir: str, folder: str
) -> Optional[str]:
    """
    Site path for a post's first image.

    Absolute URLs and site-rooted paths stay as they are; anything else is
    relative to the post folder, i.e. `/contents/<category>/<folder>/<src>`.
    """
    if not src:
        return None
    if is_absolute_url(src) or src.startswith("/"):
        return src
    while src.startswith("./"):
        src = src[2:]
    return f"/{CONTENT_DIR_NAME}/{category_dir}/{folder}/{src}"
