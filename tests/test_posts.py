from datetime import datetime, timezone

import pytest

from abigstick.posts import PostError, load_posts, parse_date, parse_front_matter, post_from_file
from tests.conftest import write_post


def test_parse_front_matter_splits_body():
    meta, body = parse_front_matter(
        '---\ntitle: "Speak softly: carry a stick"\ndescription: \'Quoted\'\ndate: 2019-09-12\n---\n\n# Hello\n'
    )
    assert meta == {"title": "Speak softly: carry a stick", "description": "Quoted", "date": "2019-09-12"}
    assert body == "\n# Hello\n"


def test_parse_front_matter_without_header():
    meta, body = parse_front_matter("# Just markdown\n")
    assert meta == {}
    assert body == "# Just markdown\n"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2019-09-12", datetime(2019, 9, 12)),
        ("2019-09-12T08:30", datetime(2019, 9, 12, 8, 30)),
        ("2019-09-12T08:30:00Z", datetime(2019, 9, 12, 8, 30, tzinfo=timezone.utc)),
        ("2019/09/12", datetime(2019, 9, 12)),
        ("September 12, 2019", datetime(2019, 9, 12)),
        ("Sep 12, 2019", datetime(2019, 9, 12)),
    ],
)
def test_parse_date_formats(value, expected):
    assert parse_date(value) == expected


@pytest.mark.parametrize("value", ["", "someday", "2019-13-45"])
def test_parse_date_rejects_garbage(value):
    assert parse_date(value) is None


def test_post_from_file(tmp_path):
    path = write_post(
        tmp_path, "2019-09-12-slacking-around.md",
        title="Slacking Around", description="Chat ops", date="2019-09-12",
    )
    post = post_from_file(path)
    assert post.identifier == "2019-09-12-slacking-around"
    assert post.title == "Slacking Around"
    assert post.description == "Chat ops"
    assert post.publish_date == datetime(2019, 9, 12)


def test_description_is_optional(tmp_path):
    path = write_post(tmp_path, "2019-09-12-terse.md", title="Terse", date="2019-09-12")
    assert post_from_file(path).description == ""


def test_missing_title_is_an_error(tmp_path):
    path = write_post(tmp_path, "2019-09-12-nameless.md", date="2019-09-12")
    with pytest.raises(PostError, match="title"):
        post_from_file(path)


@pytest.mark.parametrize("front", [{}, {"date": "whenever"}])
def test_missing_or_bad_date_is_an_error(tmp_path, front):
    path = write_post(tmp_path, "2019-09-12-undated.md", title="Undated", **front)
    with pytest.raises(PostError, match="date"):
        post_from_file(path)


def test_load_posts_reads_markdown_only(tmp_path):
    write_post(tmp_path, "2020-01-02-second.mdx", title="Second", date="2020-01-02")
    write_post(tmp_path, "2019-09-12-first.md", title="First", date="2019-09-12")
    (tmp_path / "README.md").write_text("# About these posts\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a post", encoding="utf-8")
    (tmp_path / "images").mkdir()

    posts = load_posts(tmp_path)
    assert [p.identifier for p in posts] == ["2019-09-12-first", "2020-01-02-second"]
