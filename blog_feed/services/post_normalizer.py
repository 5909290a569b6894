"""Post normalizer service.

This module turns a raw content file and its parsed attributes into a Post:
it resolves the slug, parses the publication date into UTC and builds the
public link.
"""

import re
from datetime import date, datetime, time, timezone
from email.utils import parsedate_to_datetime
from typing import Any

from blog_feed.exceptions import ValidationError
from blog_feed.models.schemas import Post, PostAttributes, RawContentFile


_NON_WORD_RE = re.compile(r"[^\w]+", re.UNICODE)


def slugify(text: str) -> str:
    """Lower-case text and collapse runs of non-word characters to '-'."""
    text = _NON_WORD_RE.sub("-", text.lower())
    return text.strip("-_").replace("_", "-")


def resolve_slug(
    filename: str,
    attributes: PostAttributes,
    extension: str = ".md",
    sanitize: bool = False,
) -> str:
    """Resolve the slug of a post.

    An explicit slug attribute wins. Otherwise the filename with its
    extension stripped is used verbatim, or slugified when sanitize is set.

    Raises:
        ValidationError: If the resolved slug is empty
    """
    if attributes.slug:
        return attributes.slug

    slug = filename
    if extension and slug.endswith(extension):
        slug = slug[: -len(extension)]
    if sanitize:
        slug = slugify(slug)

    if not slug:
        raise ValidationError(f"cannot derive a slug from filename {filename!r}")
    return slug


def parse_published_at(value: Any) -> datetime:
    """Parse a front-matter date into a timezone-aware UTC datetime.

    Accepts datetime (naive values are taken as UTC), date (midnight UTC),
    ISO 8601 strings and RFC 2822 strings.

    Raises:
        ValidationError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        return _to_utc(value)

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    if isinstance(value, str):
        date_str = value.strip()

        # Try ISO format
        try:
            return _to_utc(datetime.fromisoformat(date_str.replace("Z", "+00:00")))
        except ValueError:
            pass

        # Try RFC 2822 format
        try:
            return _to_utc(parsedate_to_datetime(date_str))
        except (ValueError, TypeError):
            pass

    raise ValidationError(f"invalid date: {value!r}")


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def build_link(blog_url: str, slug: str) -> str:
    return f"{blog_url.rstrip('/')}/{slug}"


def normalize_post(
    raw: RawContentFile,
    attributes: PostAttributes,
    blog_url: str,
    extension: str = ".md",
    sanitize_slugs: bool = False,
) -> Post:
    """Build a Post from a content file and its attributes.

    Args:
        raw: The content file the attributes came from
        attributes: Parsed front-matter attributes
        blog_url: Base URL that post slugs are appended to
        extension: Content extension stripped from filenames
        sanitize_slugs: Slugify filenames used as slugs

    Returns:
        Normalized Post

    Raises:
        ValidationError: If the date or slug cannot be resolved
    """
    try:
        slug = resolve_slug(raw.filename, attributes, extension, sanitize_slugs)
        published_at = parse_published_at(attributes.date)
    except ValidationError as e:
        e.path = raw.path
        raise

    return Post(
        title=attributes.title,
        published_at=published_at,
        description=attributes.description,
        link=build_link(blog_url, slug),
        slug=slug,
        tags=list(attributes.tags),
    )
