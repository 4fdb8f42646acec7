"""Site-wide settings for the feed build.

Values can be overridden from the environment so CI can point a preview
build at a different host without editing the file.
"""

import os

from .feed import FeedMeta

SITE_URL = os.environ.get("ABIGSTICK_SITE_URL", "http://www.abigstick.com")
FEED_TITLE = "A Big Stick"
FEED_DESCRIPTION = (
    'Speak softly and carry a big stick: "The exercise of intelligent '
    "forethought and of decisive action sufficiently far in advance of any "
    'likely crisis."'
)

CONTENT_DIR = "src/content/blog"
DIST_DIR = "dist"
OUTPUT_PATH = "dist/feed.xml"


def feed_meta(site_url: str | None = None) -> FeedMeta:
    return FeedMeta(
        title=FEED_TITLE,
        description=FEED_DESCRIPTION,
        site_root=site_url or SITE_URL,
    )
