#!/usr/bin/env python3
from __future__ import annotations

import os
import pathlib
import re
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError
from .utils import read_yaml

# ---------- Paths

# This assumes config.py sits in tools/sitegen/ under the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
CONTENT_DIR_NAME = "contents"
PUBLIC_DIR_NAME = "public"
DATA_DIR_NAME = "data"
SITE_CONFIG_NAME = "site.yml"
INDEX_FILE = "index.md"

# ---------- Config

DEFAULT_SITE_URL = "https://investment.advenoh.pe.kr"
SITE_URL_ENV = "SITE_URL"
EXCERPT_LIMIT = 150
RECENT_DAYS = 30
POSTS_PER_PAGE = 9
UNCATEGORIZED = "uncategorized"
FEED_FALLBACK_CATEGORY = "etc"

# Some shared regexes

FRONTMATTER = re.compile(r"\A---\n(?:(.*?)\n)?---[ \t]*(?:\n|\Z)(.*)\Z", re.DOTALL)
MD_IMAGE = re.compile(r"!\[.*?\]\((.*?)\)")
URI_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
HEADING_LINE = re.compile(r"^#+ .+$", re.MULTILINE)
BOLD = re.compile(r"\*\*(.+?)\*\*")
ITALIC = re.compile(r"\*(.+?)\*")
INLINE_CODE = re.compile(r"`(.+?)`")
MD_LINK = re.compile(r"\[(.+?)\]\(.+?\)")
NEWLINES = re.compile(r"\n+")


def content_dir(root: pathlib.Path) -> pathlib.Path:
    return root / CONTENT_DIR_NAME


def public_dir(root: pathlib.Path) -> pathlib.Path:
    return root / PUBLIC_DIR_NAME


def data_dir(root: pathlib.Path) -> pathlib.Path:
    return public_dir(root) / DATA_DIR_NAME


@dataclass(frozen=True)
class SiteConfig:
    """Site-wide settings handed to the ingestor and every emitter."""
    base_url: str = DEFAULT_SITE_URL
    site_title: str = "투자 인사이트 블로그"
    site_description: str = "국내외 주식, ETF, 채권, 펀드에 대한 전문적인 투자 정보와 분석"
    language: str = "ko"
    generator: str = "Investment Insights Blog"
    seo_title_suffix: str = "투자 인사이트"
    rss_limit: int = 20
    posts_per_page: int = POSTS_PER_PAGE

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))


_INT_FIELDS = ("rss_limit", "posts_per_page")


def _check_type(path: pathlib.Path, key: str, value: Any) -> Any:
    if key in _INT_FIELDS:
        # bool is an int subclass; `rss_limit: yes` is still a mistake
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ConfigError(f"{path}: {key} must be a positive integer, got {value!r}")
    elif not isinstance(value, str):
        raise ConfigError(f"{path}: {key} must be a string, got {value!r}")
    return value


def load_config(
    root: pathlib.Path,
    environ: Optional[Mapping[str, str]] = None,
) -> SiteConfig:
    """
    Build the SiteConfig for a project root.

    Precedence (lowest first):
    - SiteConfig defaults
    - `site.yml` at the root, keys named like the SiteConfig fields
    - the SITE_URL environment variable for `base_url`
    """
    environ = os.environ if environ is None else environ
    known = {f.name for f in fields(SiteConfig)}

    values: Dict[str, Any] = {}
    path = root / SITE_CONFIG_NAME
    for k, v in read_yaml(path).items():
        if k in known and v is not None:
            values[k] = _check_type(path, k, v)

    site_url = (environ.get(SITE_URL_ENV) or "").strip()
    if site_url:
        values["base_url"] = site_url

    return SiteConfig(**values)
