#!/usr/bin/env python3
"""
Static data + SEO generator for the investment blog.

- contents/<category>/<folder>/index.md -> public/data/posts.json
  plus categories.json, series.json, tags.json derived from the posts
- public/data/posts.json -> public/rss.xml (20 newest posts)
- public/data/posts.json -> public/sitemap.xml
- public/robots.txt

Every run rebuilds the outputs from scratch. The base URL comes from
SITE_URL, else site.yml, else DEFAULT_SITE_URL.
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from datetime import datetime
from typing import List, Optional

from .config import ROOT, SiteConfig, content_dir, data_dir, load_config, public_dir
from .errors import SitegenError
from .feeds import render_rss
from .indexes import build_categories, build_series, build_tags
from .posts import IngestReport, import_markdown_files, read_posts_json
from .robots import render_robots
from .sitemap import render_sitemap
from .utils import write_json, write_text

POSTS_JSON = "posts.json"


def generate_static_data(root: pathlib.Path, config: SiteConfig) -> IngestReport:
    report = import_markdown_files(content_dir(root), config)
    for post in report.succeeded:
        print(f"✓ imported {post.category}/{post.slug}: {post.title}")
    for failure in report.failed:
        print(f"! failed to import {failure.source}: {failure.reason}")

    posts = report.succeeded
    categories = build_categories(posts)
    series = build_series(posts)
    tags = build_tags(posts)

    out = data_dir(root)
    write_json(out / POSTS_JSON, [p.to_dict() for p in posts])
    write_json(out / "categories.json", categories)
    write_json(out / "series.json", series)
    write_json(out / "tags.json", tags)

    print(
        f"✓ data: {len(posts)} posts ({len(report.failed)} failed), "
        f"{len(categories)} categories, {len(series)} series, {len(tags)} tags"
    )
    return report


def generate_rss_feed(
    root: pathlib.Path, config: SiteConfig, now: Optional[datetime] = None
) -> pathlib.Path:
    posts = read_posts_json(data_dir(root) / POSTS_JSON)
    out = public_dir(root) / "rss.xml"
    write_text(out, render_rss(posts, config, now=now))
    print(f"✓ rss: {min(len(posts), config.rss_limit)} items -> {out}")
    return out


def generate_sitemap(
    root: pathlib.Path, config: SiteConfig, now: Optional[datetime] = None
) -> pathlib.Path:
    posts = read_posts_json(data_dir(root) / POSTS_JSON)
    out = public_dir(root) / "sitemap.xml"
    write_text(out, render_sitemap(posts, config, now=now))
    print(f"✓ sitemap: {len(posts) + 2} urls -> {out}")
    return out


def generate_robots(root: pathlib.Path, config: SiteConfig) -> pathlib.Path:
    out = public_dir(root) / "robots.txt"
    write_text(out, render_robots(config))
    print(f"✓ robots -> {out}")
    return out


COMMANDS = ("data", "rss", "sitemap", "robots", "all")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate blog data files, RSS feed, sitemap and robots.txt"
    )
    parser.add_argument(
        "command", nargs="?", default="all", choices=COMMANDS,
        help="what to generate (default: all)",
    )
    parser.add_argument(
        "--root", type=pathlib.Path, default=ROOT,
        help="project root containing contents/ and public/",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    root = args.root.resolve()

    try:
        config = load_config(root)
        if args.command in ("data", "all"):
            generate_static_data(root, config)
        if args.command in ("rss", "all"):
            generate_rss_feed(root, config)
        if args.command in ("sitemap", "all"):
            generate_sitemap(root, config)
        if args.command in ("robots", "all"):
            generate_robots(root, config)
    except (SitegenError, OSError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
