from datetime import datetime

import pytest

from abigstick.feed import FeedMeta
from abigstick.posts import PostRecord

SITE = "http://www.abigstick.com"


@pytest.fixture
def meta():
    return FeedMeta(title="A Big Stick", description="Speak softly", site_root=SITE)


def make_post(identifier, when, title=None, description="A post"):
    return PostRecord(
        identifier=identifier,
        title=title if title is not None else identifier[11:].replace("-", " ").title(),
        description=description,
        publish_date=when if isinstance(when, datetime) else datetime.fromisoformat(when),
    )


def write_post(directory, name, body="Some words.\n", **front):
    directory.mkdir(parents=True, exist_ok=True)
    header = "".join(f"{k}: {v}\n" for k, v in front.items())
    path = directory / name
    path.write_text(f"---\n{header}---\n\n{body}", encoding="utf-8")
    return path
