from __future__ import annotations

import json
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import INDEX_FILE, SiteConfig
from .errors import (
    ContentRootError,
    FrontMatterError,
    MissingRequiredFieldError,
    PersistedDataError,
)
from .frontmatter import parse_frontmatter
from .markdown_processing import (
    extract_excerpt,
    extract_first_image,
    resolve_featured_image,
)

REQUIRED_FIELDS = ("title", "date")


@dataclass
class Post:
    """One published post, in the shape written to posts.json."""
    title: str
    slug: str  # folder name, unique within a category
    content: str
    excerpt: str
    category: str
    tags: List[str] = field(default_factory=list)
    series: Optional[str] = None
    featured_image: Optional[str] = None
    published: bool = True
    seo_title: str = ""
    seo_description: str = ""
    seo_keywords: str = ""
    created_at: str = ""
    updated_at: Optional[str] = None

    @property
    def effective_date(self) -> str:
        return self.updated_at or self.created_at

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "slug": self.slug,
            "content": self.content,
            "excerpt": self.excerpt,
            "category": self.category,
            "tags": list(self.tags),
        }
        if self.series:
            data["series"] = self.series
        data["featuredImage"] = self.featured_image
        data["published"] = self.published
        data["seoTitle"] = self.seo_title
        data["seoDescription"] = self.seo_description
        data["seoKeywords"] = self.seo_keywords
        data["createdAt"] = self.created_at
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Post":
        if not isinstance(data, dict):
            raise PersistedDataError(f"post entry must be an object, got {data!r}")
        for key in ("title", "slug"):
            if not isinstance(data.get(key), str) or not data[key]:
                raise PersistedDataError(f"post entry has no usable {key}: {data.get(key)!r}")
        tags = data.get("tags") or []
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise PersistedDataError(f"post {data['slug']!r}: tags must be a list of strings")
        for key in ("content", "excerpt", "category", "series", "featuredImage",
                    "seoTitle", "seoDescription", "seoKeywords", "createdAt", "updatedAt"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise PersistedDataError(f"post {data['slug']!r}: {key} must be a string")

        return cls(
            title=data["title"],
            slug=data["slug"],
            content=data.get("content") or "",
            excerpt=data.get("excerpt") or "",
            category=data.get("category") or "",
            tags=list(tags),
            series=data.get("series") or None,
            featured_image=data.get("featuredImage") or None,
            published=bool(data.get("published", True)),
            seo_title=data.get("seoTitle") or "",
            seo_description=data.get("seoDescription") or "",
            seo_keywords=data.get("seoKeywords") or "",
            created_at=data.get("createdAt") or "",
            updated_at=data.get("updatedAt") or None,
        )


@dataclass
class IngestFailure:
    source: str
    reason: str


@dataclass
class IngestReport:
    succeeded: List[Post] = field(default_factory=list)
    failed: List[IngestFailure] = field(default_factory=list)

    @property
    def posts(self) -> List[Post]:
        return self.succeeded

    @property
    def ok(self) -> bool:
        return not self.failed


def _scalar(fm: Dict[str, Any], key: str) -> Optional[str]:
    v = fm.get(key)
    if isinstance(v, str) and v:
        return v
    return None


def _as_list(v) -> List[str]:
    if isinstance(v, list):
        return [str(x) for x in v if str(x)]
    if isinstance(v, str) and v:
        s = v.strip()
        if s.startswith("[") and s.endswith("]"):
            s = s[1:-1]
        parts = (p.strip().strip('"').strip("'") for p in s.split(","))
        return [p for p in parts if p]
    return []


def build_post(
    text: str,
    category_dir: str,
    folder: str,
    config: SiteConfig,
) -> Post:
    fm, body = parse_frontmatter(text)
    for key in REQUIRED_FIELDS:
        if not _scalar(fm, key):
            raise MissingRequiredFieldError(key)

    title = fm["title"]
    excerpt = extract_excerpt(body)
    tags = _as_list(fm.get("tags"))
    featured = resolve_featured_image(
        extract_first_image(body), category_dir, folder
    )

    return Post(
        title=title,
        slug=folder,
        content=body,
        excerpt=excerpt,
        category=_scalar(fm, "category") or category_dir,
        tags=tags,
        series=_scalar(fm, "series"),
        featured_image=featured,
        published=True,
        seo_title=f"{title} | {config.seo_title_suffix}",
        seo_description=_scalar(fm, "description") or excerpt,
        seo_keywords=", ".join(tags),
        created_at=fm["date"],
        updated_at=_scalar(fm, "update"),
    )


def _sorted_dirs(path: pathlib.Path) -> List[pathlib.Path]:
    return sorted((p for p in path.iterdir() if p.is_dir()), key=lambda p: p.name)


def import_markdown_files(
    content_dir: pathlib.Path,
    config: SiteConfig,
) -> IngestReport:
    """
    Read every `<category>/<folder>/index.md` under `content_dir`.

    One bad folder never stops the run: its error lands in `report.failed`
    and the walk moves on. Only an unreadable content root raises.
    """
    try:
        categories = _sorted_dirs(content_dir)
    except OSError as e:
        raise ContentRootError(f"cannot read content directory {content_dir}: {e}") from e

    report = IngestReport()
    for category_path in categories:
        try:
            folders = _sorted_dirs(category_path)
        except OSError as e:
            report.failed.append(IngestFailure(str(category_path), str(e)))
            continue

        for folder_path in folders:
            md = folder_path / INDEX_FILE
            try:
                text = md.read_text(encoding="utf-8")
                post = build_post(text, category_path.name, folder_path.name, config)
            except (OSError, UnicodeDecodeError, FrontMatterError) as e:
                report.failed.append(IngestFailure(str(md), str(e)))
                continue
            report.succeeded.append(post)

    return report


def read_posts_json(path: pathlib.Path) -> List[Post]:
    """
    Load the persisted post collection written by the data step.

    A missing file raises the OSError as is; unparseable or mis-shaped
    data raises PersistedDataError.
    """
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PersistedDataError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise PersistedDataError(f"{path} must contain a JSON array of posts")
    try:
        return [Post.from_dict(item) for item in data]
    except PersistedDataError as e:
        raise PersistedDataError(f"{path}: {e}") from e
