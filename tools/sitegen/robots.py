from __future__ import annotations

from .config import SiteConfig

DISALLOWED = ("/admin/", "/api/", "/_next/")
CRAWL_DELAY = 1


def render_robots(config: SiteConfig) -> str:
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED]
    lines += [
        f"Crawl-delay: {CRAWL_DELAY}",
        "",
        f"Sitemap: {config.base_url}/sitemap.xml",
        "",
        "# Host",
        f"Host: {config.base_url}",
        "",
        "# Investment Insights Blog",
        "# Professional financial blog about stocks, ETFs, bonds, and funds",
    ]
    return "\n".join(lines) + "\n"
