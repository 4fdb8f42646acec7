#!/usr/bin/env python3
"""Build dist/feed.xml from the Markdown posts in src/content/blog/.

Usage:  python scripts/build-feed.py [--site URL]
"""

from abigstick.build import main

if __name__ == "__main__":
    raise SystemExit(main())
