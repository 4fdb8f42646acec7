"""Load blog posts from Markdown files with front matter."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

log = logging.getLogger(__name__)

FRONT_MATTER_RE = re.compile(r"^---[ \t]*\n(.*?)\n---[ \t]*(?:\n|$)", re.DOTALL)
POST_SUFFIXES = (".md", ".mdx")

# Tried after ISO 8601.
DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%B %d, %Y",
    "%b %d, %Y",
)


class PostError(ValueError):
    """A post file is missing required metadata or cannot be parsed."""


@dataclass(frozen=True)
class PostRecord:
    identifier: str
    title: str
    description: str
    publish_date: datetime


def parse_front_matter(text: str) -> tuple[dict, str]:
    """Split front matter from the Markdown body."""
    m = FRONT_MATTER_RE.match(text)
    meta = {}
    body = text
    if m:
        for line in m.group(1).splitlines():
            if ":" in line and not line.startswith((" ", "\t", "#")):
                key, _, val = line.partition(":")
                val = val.strip()
                if len(val) >= 2 and val[0] == val[-1] and val[0] in "\"'":
                    val = val[1:-1]
                meta[key.strip()] = val
        body = text[m.end():]
    return meta, body


def parse_date(value: str) -> datetime | None:
    if not value:
        return None
    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None


def post_from_file(path: Path) -> PostRecord:
    meta, _ = parse_front_matter(path.read_text(encoding="utf-8"))

    title = meta.get("title", "").strip()
    if not title:
        raise PostError(f"{path.name}: missing 'title' in front matter")

    raw_date = meta.get("date", "")
    if not raw_date:
        raise PostError(f"{path.name}: missing 'date' in front matter")
    publish_date = parse_date(raw_date)
    if publish_date is None:
        raise PostError(f"{path.name}: unparseable date {raw_date!r}")

    return PostRecord(
        identifier=path.stem,
        title=title,
        description=meta.get("description", ""),
        publish_date=publish_date,
    )


def load_posts(content_dir: Path) -> list[PostRecord]:
    """Read every post under ``content_dir``, sorted by file name."""
    files = sorted(
        p for p in content_dir.iterdir()
        if p.is_file() and p.suffix in POST_SUFFIXES and p.name.lower() != "readme.md"
    )
    posts = []
    for path in files:
        log.debug("Loading %s", path.name)
        posts.append(post_from_file(path))
    return posts
