"""Build the site's RSS feed from a collection of post records.

Everything here is a pure function of its inputs: loading posts from disk
lives in ``abigstick.posts`` and writing the result lives in
``abigstick.build``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable
from urllib.parse import quote, urlparse
from xml.sax.saxutils import escape as xml_escape

from .posts import PostRecord

log = logging.getLogger(__name__)

FEED_PATH = "/feed.xml"
CONTENT_TYPE = "application/rss+xml; charset=utf-8"

DATE_PREFIX_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}-")
# Not allowed anywhere in an XML 1.0 document, escaped or not.
INVALID_XML_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")
ATTR_ENTITIES = {'"': "&quot;"}


class FeedError(ValueError):
    """The feed cannot be built from the given input."""


class MalformedIdentifierError(FeedError):
    pass


class MissingMetadataError(FeedError):
    pass


@dataclass(frozen=True)
class FeedMeta:
    title: str
    description: str
    site_root: str


@dataclass(frozen=True)
class FeedItem:
    title: str
    description: str
    publication_date: datetime
    canonical_path: str
    link: str


@dataclass(frozen=True)
class FeedDocument:
    meta: FeedMeta
    items: tuple[FeedItem, ...]


def extract_slug(identifier: str) -> str:
    """Strip the ``YYYY-MM-DD-`` prefix from a post identifier."""
    m = DATE_PREFIX_RE.match(identifier or "")
    if not m:
        raise MalformedIdentifierError(
            f"Post identifier {identifier!r} does not start with a YYYY-MM-DD- date prefix"
        )
    slug = identifier[m.end():]
    if not slug.strip():
        raise MalformedIdentifierError(f"Post identifier {identifier!r} has no slug after its date prefix")
    return slug


def canonical_path(publish_date: datetime, slug: str) -> str:
    """Return ``/YYYY/MM/DD/slug`` with the date segments taken from ``publish_date``."""
    return (
        f"/{publish_date.year:04d}/{publish_date.month:02d}/{publish_date.day:02d}/"
        f"{quote(slug, safe='-_.~')}"
    )


def _as_utc(value: datetime) -> datetime:
    # Front matter dates carry no zone; treat them as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _site_root(url: str) -> str:
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise FeedError(f"Site root must be an absolute http(s) URL, got {url!r}")
    return url.rstrip("/")


def _check_text(value: str, what: str) -> str:
    m = INVALID_XML_CHARS_RE.search(value)
    if m:
        raise FeedError(f"{what} contains character {m.group()!r}, which XML does not allow")
    return value


def _check_date(post: PostRecord) -> None:
    if not isinstance(post.publish_date, datetime):
        raise MissingMetadataError(f"Post {post.identifier!r} has no publish date")


def _build_item(post: PostRecord, root: str) -> FeedItem:
    if not post.title or not post.title.strip():
        raise MissingMetadataError(f"Post {post.identifier!r} has no title")

    path = canonical_path(post.publish_date, extract_slug(post.identifier))
    return FeedItem(
        title=_check_text(post.title, f"Title of {post.identifier!r}"),
        description=_check_text(post.description or "", f"Description of {post.identifier!r}"),
        publication_date=post.publish_date,
        canonical_path=path,
        link=root + path,
    )


def build_feed(posts: Iterable[PostRecord], meta: FeedMeta) -> FeedDocument:
    """Order posts newest first and turn each into a feed item.

    Posts sharing a publish date keep their input order. Any post with a
    malformed identifier, a missing title or date, or text XML cannot carry
    fails the whole build.
    """
    root = _site_root(meta.site_root)
    _check_text(meta.title, "Feed title")
    _check_text(meta.description, "Feed description")

    posts = list(posts)
    for post in posts:
        _check_date(post)
    ordered = sorted(posts, key=lambda p: _as_utc(p.publish_date), reverse=True)
    items = tuple(_build_item(post, root) for post in ordered)
    log.debug("Built feed with %d items", len(items))
    return FeedDocument(meta=meta, items=items)


def render_rss(document: FeedDocument) -> str:
    """Serialize a feed document as RSS 2.0."""
    root = _site_root(document.meta.site_root)

    items_xml = []
    for item in document.items:
        link = xml_escape(item.link)
        pub_date = format_datetime(_as_utc(item.publication_date), usegmt=True)
        items_xml.append(
            f"""    <item>
      <title>{xml_escape(item.title)}</title>
      <link>{link}</link>
      <guid isPermaLink="true">{link}</guid>
      <description>{xml_escape(item.description)}</description>
      <pubDate>{pub_date}</pubDate>
    </item>"""
        )

    channel_items = "\n".join(items_xml)
    if channel_items:
        channel_items += "\n"

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>{xml_escape(document.meta.title)}</title>
    <description>{xml_escape(document.meta.description)}</description>
    <link>{xml_escape(root)}/</link>
    <atom:link href="{xml_escape(root + FEED_PATH, ATTR_ENTITIES)}" rel="self" type="application/rss+xml"/>
{channel_items}  </channel>
</rss>
"""


def feed_response(posts: Iterable[PostRecord], meta: FeedMeta) -> tuple[str, str]:
    """Return the rendered feed body and its content type."""
    return render_rss(build_feed(posts, meta)), CONTENT_TYPE
