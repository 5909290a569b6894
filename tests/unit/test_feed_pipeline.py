"""Unit tests for the feed pipeline stages.

Tests for content scanning, post normalization, filtering and sorting.
"""

from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from blog_feed.exceptions import ContentDirectoryError, ValidationError
from blog_feed.models.schemas import Post, PostAttributes, RawContentFile
from blog_feed.services.content_scanner import scan_content_dir
from blog_feed.services.feed_pipeline import (
    collect_posts,
    filter_and_sort,
    load_published_posts,
    sort_newest_first,
)
from blog_feed.services.post_normalizer import (
    normalize_post,
    parse_published_at,
    resolve_slug,
    slugify,
)


def make_post(slug: str, published_at: datetime) -> Post:
    return Post(
        title=slug.title(),
        published_at=published_at,
        description="",
        link=f"https://example.com/blog/{slug}",
        slug=slug,
    )


class TestContentScanner:
    """Tests for enumerating content files."""

    def test_filters_by_extension(self, content_dir):
        """Test that only files with the content extension are read."""
        (content_dir / "a.md").write_text("A", encoding="utf-8")
        (content_dir / "b.txt").write_text("B", encoding="utf-8")
        (content_dir / "c.md").write_text("C", encoding="utf-8")

        files = scan_content_dir(content_dir)

        assert [f.filename for f in files] == ["a.md", "c.md"]
        assert files[0].text == "A"

    def test_ignores_subdirectories(self, content_dir):
        """Test that the scan is not recursive and skips directories."""
        (content_dir / "nested.md").mkdir()
        (content_dir / "nested.md" / "inner.md").write_text("x", encoding="utf-8")

        assert scan_content_dir(content_dir) == []

    def test_custom_extension(self, content_dir):
        """Test scanning for a different extension."""
        (content_dir / "a.md").write_text("A", encoding="utf-8")
        (content_dir / "b.markdown").write_text("B", encoding="utf-8")

        files = scan_content_dir(content_dir, ".markdown")

        assert [f.filename for f in files] == ["b.markdown"]

    def test_skips_undecodable_file(self, content_dir):
        """Test that a file that is not UTF-8 is skipped."""
        (content_dir / "bad.md").write_bytes(b"\xff\xfe\xfa")
        (content_dir / "good.md").write_text("ok", encoding="utf-8")

        files = scan_content_dir(content_dir)

        assert [f.filename for f in files] == ["good.md"]

    def test_missing_directory(self, tmp_path):
        """Test that a missing directory raises ContentDirectoryError."""
        with pytest.raises(ContentDirectoryError) as exc_info:
            scan_content_dir(tmp_path / "missing")

        assert isinstance(exc_info.value, OSError)

    def test_path_is_a_file(self, tmp_path):
        """Test that a file path raises ContentDirectoryError."""
        path = tmp_path / "file.md"
        path.write_text("x", encoding="utf-8")

        with pytest.raises(ContentDirectoryError):
            scan_content_dir(path)


class TestSlugResolution:
    """Tests for slug resolution."""

    def test_explicit_slug_wins(self):
        """Test that the slug attribute takes precedence over the filename."""
        attributes = PostAttributes(title="T", date="2024-01-01", slug="custom-slug")

        assert resolve_slug("hello-world.md", attributes) == "custom-slug"

    def test_filename_without_extension(self):
        """Test that hello-world.md resolves to hello-world."""
        attributes = PostAttributes(title="T", date="2024-01-01")

        assert resolve_slug("hello-world.md", attributes) == "hello-world"

    def test_filename_used_verbatim(self):
        """Test that filenames are not sanitized by default."""
        attributes = PostAttributes(title="T", date="2024-01-01")

        assert resolve_slug("My Post.md", attributes) == "My Post"

    def test_sanitize_option(self):
        """Test that sanitize slugifies the filename."""
        attributes = PostAttributes(title="T", date="2024-01-01")

        assert resolve_slug("My Post!.md", attributes, sanitize=True) == "my-post"

    def test_empty_slug(self):
        """Test that a bare extension cannot produce a slug."""
        attributes = PostAttributes(title="T", date="2024-01-01")

        with pytest.raises(ValidationError):
            resolve_slug(".md", attributes)

    def test_slugify(self):
        """Test slugify collapses separators."""
        assert slugify("  Hello,  World_again ") == "hello-world-again"


class TestPublishedAt:
    """Tests for date parsing."""

    def test_date_is_midnight_utc(self):
        """Test that a plain date becomes midnight UTC."""
        assert parse_published_at(date(2024, 6, 1)) == datetime(2024, 6, 1, tzinfo=timezone.utc)

    def test_iso_string(self):
        """Test ISO 8601 strings, including a Z suffix."""
        result = parse_published_at("2024-01-15T10:30:00Z")

        assert result == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_iso_date_string(self):
        """Test a date-only ISO string."""
        assert parse_published_at("2024-01-01") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self):
        """Test that offsets are normalized to UTC."""
        result = parse_published_at("2024-01-01T02:00:00+02:00")

        assert result == datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(0)

    def test_rfc2822_string(self):
        """Test RFC 2822 strings."""
        result = parse_published_at("Mon, 01 Jan 2024 12:00:00 GMT")

        assert result == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_naive_datetime_is_utc(self):
        """Test that naive datetimes are taken as UTC."""
        result = parse_published_at(datetime(2024, 1, 1, 8, 0))

        assert result.tzinfo == timezone.utc
        assert result.hour == 8

    @pytest.mark.parametrize("value", ["not a date", "", 12345, ["2024-01-01"]])
    def test_invalid(self, value):
        """Test that unparseable values are validation errors."""
        with pytest.raises(ValidationError):
            parse_published_at(value)


class TestNormalizePost:
    """Tests for building Post records."""

    def test_builds_post(self):
        """Test link, slug and date on a normalized post."""
        raw = RawContentFile(path=Path("/content/hello-world.md"), text="")
        attributes = PostAttributes(
            title="Hello", date=date(2024, 1, 1), description="Desc", tags=["a"]
        )

        post = normalize_post(raw, attributes, "https://example.com/blog/")

        assert post.slug == "hello-world"
        assert post.link == "https://example.com/blog/hello-world"
        assert post.published_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert post.description == "Desc"
        assert post.tags == ["a"]

    def test_invalid_date_carries_path(self):
        """Test that validation errors point at the offending file."""
        raw = RawContentFile(path=Path("/content/bad.md"), text="")
        attributes = PostAttributes(title="Bad", date="yesterday")

        with pytest.raises(ValidationError) as exc_info:
            normalize_post(raw, attributes, "https://example.com/blog")

        assert exc_info.value.path == Path("/content/bad.md")
        assert "bad.md" in str(exc_info.value)


class TestFilterAndSort:
    """Tests for the filter and sort stage."""

    def test_drops_drafts(self):
        """Test that draft entries never survive."""
        published = make_post("published", datetime(2024, 1, 1, tzinfo=timezone.utc))
        draft = make_post("draft", datetime(2025, 1, 1, tzinfo=timezone.utc))

        assert filter_and_sort([(published, False), (draft, True)]) == [published]

    def test_sorts_newest_first(self):
        """Test descending order by publication date."""
        old = make_post("old", datetime(2023, 1, 1, tzinfo=timezone.utc))
        new = make_post("new", datetime(2024, 6, 1, tzinfo=timezone.utc))
        mid = make_post("mid", datetime(2024, 1, 1, tzinfo=timezone.utc))

        result = filter_and_sort([(old, False), (new, False), (mid, False)])

        assert [p.slug for p in result] == ["new", "mid", "old"]

    def test_ties_keep_input_order(self):
        """Test that equal timestamps keep scan order."""
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        first, second, third = (make_post(s, when) for s in ("first", "second", "third"))

        result = filter_and_sort([(first, False), (second, False), (third, False)])

        assert result == [first, second, third]

    def test_empty(self):
        """Test that no input yields no posts."""
        assert filter_and_sort([]) == []

    def test_sort_newest_first_keeps_draft_flags(self):
        """Test the shared ordering on (post, draft) pairs."""
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        early = make_post("early", datetime(2023, 1, 1, tzinfo=timezone.utc))
        tie_a, tie_b = make_post("tie-a", when), make_post("tie-b", when)

        result = sort_newest_first([(early, False), (tie_a, True), (tie_b, False)])

        assert [(p.slug, draft) for p, draft in result] == [
            ("tie-a", True),
            ("tie-b", False),
            ("early", False),
        ]


class TestCollectPosts:
    """Tests for the scan-parse-normalize run over a directory."""

    def test_skips_bad_files(self, config, content_dir, write_post, caplog):
        """Test that malformed files are skipped and logged, not fatal."""
        write_post("good.md", title="Good", date="2024-01-01")
        write_post("no-date.md", title="No date")
        write_post("bad-date.md", title="Bad date", date="someday")
        (content_dir / "unterminated.md").write_text("---\ntitle: Oops\n", encoding="utf-8")

        with caplog.at_level("WARNING"):
            entries = collect_posts(config)

        assert [post.slug for post, _ in entries] == ["good"]
        assert "unterminated.md" in caplog.text
        assert "bad-date.md" in caplog.text
        assert "no-date.md" in caplog.text

    def test_carries_draft_flag(self, config, write_post):
        """Test that draft flags travel beside each post."""
        write_post("a.md", title="A", date="2024-01-01", draft=True)
        write_post("b.md", title="B", date="2024-01-02")

        entries = collect_posts(config)

        assert [(post.slug, draft) for post, draft in entries] == [("a", True), ("b", False)]

    def test_links_use_blog_url(self, config, write_post):
        """Test that links are built from the configured blog path."""
        write_post("hello-world.md", title="Hello", date="2024-01-01")

        (post, _), = collect_posts(config)

        assert post.link == "https://example.com/blog/hello-world"

    def test_sanitize_slugs_config(self, config, write_post):
        """Test that the sanitize_slugs setting reaches slug resolution."""
        config.sanitize_slugs = True
        write_post("Hello World.md", title="Hello", date="2024-01-01")

        (post, _), = collect_posts(config)

        assert post.slug == "hello-world"

    def test_scenario_two_published_one_draft(self, config, write_post):
        """Test two published posts and an older draft."""
        write_post("january.md", title="January", date="2024-01-01")
        write_post("june.md", title="June", date="2024-06-01")
        write_post("old-draft.md", title="Old draft", date="2023-01-01", draft=True)

        posts = load_published_posts(config)

        assert [p.slug for p in posts] == ["june", "january"]

    def test_missing_directory_propagates(self, config, tmp_path):
        """Test that an unreadable directory aborts the run."""
        config.content_dir = str(tmp_path / "does-not-exist")

        with pytest.raises(ContentDirectoryError):
            collect_posts(config)
