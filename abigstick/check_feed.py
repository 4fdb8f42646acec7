"""Check that every link in the built feed resolves to a post page."""

from __future__ import annotations

import argparse
import re
import sys
import xml.etree.ElementTree as ET
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests
from bs4 import BeautifulSoup

from . import config

LINK_PATH_RE = re.compile(r"^/\d{4}/\d{2}/\d{2}/[^/]+$")


def feed_items(feed_xml: str) -> list[tuple[str, str]]:
    """Return (title, link) for each item in an RSS document."""
    channel = ET.fromstring(feed_xml).find("channel")
    if channel is None:
        raise ValueError("feed has no <channel> element")
    return [
        (item.findtext("title", default=""), item.findtext("link", default=""))
        for item in channel.findall("item")
    ]


def page_heading(path: Path) -> str:
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
    h1 = soup.find("h1")
    if h1:
        return h1.get_text(" ", strip=True)
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return ""


def check_item(title: str, link: str, dist: Path) -> list[str]:
    path = urlparse(link).path
    if not LINK_PATH_RE.match(path):
        return [f'link does not follow /YYYY/MM/DD/slug: "{link}"']

    # Pages are built as files without a trailing slash.
    page = dist / (unquote(path).lstrip("/") + ".html")
    if not page.is_file():
        return [f'no built page for "{link}" (expected {page})']

    if title and title not in page_heading(page):
        return [f'page for "{link}" does not mention title "{title}"']
    return []


def check_live(link: str, timeout: float = 30) -> list[str]:
    try:
        response = requests.head(link, timeout=timeout, allow_redirects=True)
    except requests.RequestException as e:
        return [f'request for "{link}" failed: {e}']
    if response.status_code >= 400:
        return [f'"{link}" returned HTTP {response.status_code}']
    return []


def check_feed(feed_xml: str, dist: Path, live: bool = False) -> list[str]:
    errors: list[str] = []
    for title, link in feed_items(feed_xml):
        errors.extend(check_item(title, link, dist))
        if live:
            errors.extend(check_live(link))
    return errors


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Check feed links against the built site")
    parser.add_argument("--root", default=".", help="Repository root directory")
    parser.add_argument("--feed", default=config.OUTPUT_PATH, help="Feed path, relative to root")
    parser.add_argument("--dist", default=config.DIST_DIR, help="Built site directory, relative to root")
    parser.add_argument("--live", action="store_true", help="Also request every link from the live site")
    args = parser.parse_args(argv)

    root = Path(args.root).resolve()
    feed_file = root / args.feed
    if not feed_file.exists():
        print(f"Feed not found at {feed_file} — run abigstick-build-feed first.", file=sys.stderr)
        return 1

    feed_xml = feed_file.read_text(encoding="utf-8")
    try:
        errors = check_feed(feed_xml, root / args.dist, live=args.live)
    except (ET.ParseError, ValueError) as e:
        print(f"Feed at {feed_file} is not valid RSS: {e}", file=sys.stderr)
        return 1

    if errors:
        print("Feed link checks failed:")
        for msg in errors:
            print(f" - {msg}")
        return 1

    print(f"Feed link checks passed for {len(feed_items(feed_xml))} items.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
