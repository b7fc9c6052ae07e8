#!/usr/bin/env python3
"""Run the blog generator: `python tools/generate_all.py [data|rss|sitemap|robots|all]`."""

import sys

from sitegen.main import main

if __name__ == "__main__":
    sys.exit(main())
