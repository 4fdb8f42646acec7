"""Build the RSS feed from the blog's Markdown posts.

Reads every post under src/content/blog/, orders them newest first and
writes dist/feed.xml. A post with a malformed file name or missing
metadata fails the build; nothing is written in that case.

Usage:  abigstick-build-feed [--root .] [--site URL]
"""

import argparse
import logging
import os
import tempfile
from pathlib import Path

from . import config
from .feed import FeedError, build_feed, render_rss
from .posts import PostError, load_posts

log = logging.getLogger("feed")


def atomic_write(path: Path, data: str, encoding: str = "utf-8") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(path.parent), suffix=".tmp")
    try:
        with open(fd, "w", encoding=encoding, newline="\n") as f:
            f.write(data)
        Path(tmp).replace(path)
    finally:
        if os.path.exists(tmp):
            os.unlink(tmp)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build RSS feed")
    parser.add_argument("--root", default=".", help="Repository root directory")
    parser.add_argument("--content", default=config.CONTENT_DIR, help="Post directory, relative to root")
    parser.add_argument("--output", default=config.OUTPUT_PATH, help="Feed path, relative to root")
    parser.add_argument("--site", default=None, help=f"Absolute site URL (default {config.SITE_URL})")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s: %(message)s")

    root = Path(args.root).resolve()
    content_dir = root / args.content
    if not content_dir.is_dir():
        log.error("No post directory at %s", content_dir)
        return 1

    try:
        posts = load_posts(content_dir)
        document = build_feed(posts, config.feed_meta(args.site))
    except (PostError, FeedError) as e:
        log.error("Feed build failed: %s", e)
        return 1

    out = root / args.output
    atomic_write(out, render_rss(document))
    log.info("Generated RSS feed with %d items → %s", len(document.items), out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
