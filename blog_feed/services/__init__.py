"""Services for blog_feed."""

from .content_scanner import scan_content_dir
from .feed_pipeline import (
    build_feed,
    collect_posts,
    filter_and_sort,
    load_published_posts,
    sort_newest_first,
)
from .front_matter import parse_attributes, parse_front_matter
from .post_normalizer import normalize_post, parse_published_at, resolve_slug
from .rss_serializer import format_rfc1123, render_feed

__all__ = [
    "scan_content_dir",
    "build_feed",
    "collect_posts",
    "filter_and_sort",
    "load_published_posts",
    "sort_newest_first",
    "parse_attributes",
    "parse_front_matter",
    "normalize_post",
    "parse_published_at",
    "resolve_slug",
    "format_rfc1123",
    "render_feed",
]
