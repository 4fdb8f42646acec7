#!/usr/bin/env python3
"""Check that every link in dist/feed.xml resolves to a built post page.

Usage:  python scripts/check-feed.py [--live]
"""

from abigstick.check_feed import main

if __name__ == "__main__":
    raise SystemExit(main())
