"""
Pytest configuration and shared fixtures
"""

import sys
from pathlib import Path

import pytest

# Add tools/ to the path so `sitegen` imports without installing
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT / "tools"))

from sitegen.config import SiteConfig  # noqa: E402
from sitegen.posts import Post  # noqa: E402


def write_post(root, category, folder, text):
    """Write contents/<category>/<folder>/index.md under root and return its path."""
    path = root / "contents" / category / folder / "index.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def make_post(slug, created_at, **kwargs):
    """Build a Post with sensible defaults for emitter/index tests."""
    defaults = dict(
        title=f"Post {slug}",
        slug=slug,
        content="body",
        excerpt=f"excerpt {slug}",
        category="stocks",
        created_at=created_at,
    )
    defaults.update(kwargs)
    return Post(**defaults)


@pytest.fixture
def config():
    return SiteConfig(base_url="https://blog.example.com/")


@pytest.fixture
def tech_review_md():
    return (
        "---\n"
        'title: "Tech Review"\n'
        'date: "2024-03-01"\n'
        "tags:\n"
        "  - ai\n"
        "  - semiconductors\n"
        "---\n"
        "\n"
        "# Overview\n"
        "\n"
        "AI **chips** are driving the *market* this year.\n"
        "\n"
        "![chart](./chart.png)\n"
    )


@pytest.fixture
def site_root(tmp_path, tech_review_md):
    """A small project tree with two categories and one broken post."""
    write_post(tmp_path, "stocks", "2024-tech-review", tech_review_md)
    write_post(
        tmp_path, "stocks", "dividend-basics",
        "---\n"
        "title: Dividend Basics\n"
        "date: 2024-01-15\n"
        "series: Income Investing\n"
        "tags:\n"
        "  - dividend\n"
        "---\n"
        "Dividends explained.\n",
    )
    write_post(
        tmp_path, "etf", "bond-etf-guide",
        "---\n"
        "title: Bond ETF Guide\n"
        "date: 2024-02-10\n"
        "update: 2024-04-01\n"
        "category: ETF\n"
        "series: Income Investing\n"
        "tags:\n"
        "  - dividend\n"
        "  - bonds\n"
        "---\n"
        "![cover](https://cdn.example.com/cover.png)\n"
        "Bond ETFs for income.\n",
    )
    write_post(tmp_path, "etf", "broken-post", "no front matter here\n")
    # stray files are skipped at both levels
    (tmp_path / "contents" / "README.md").write_text("ignored", encoding="utf-8")
    (tmp_path / "contents" / "etf" / "notes.txt").write_text("ignored", encoding="utf-8")
    return tmp_path
