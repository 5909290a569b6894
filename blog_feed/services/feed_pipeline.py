"""Feed pipeline.

This module wires the services together: scan the content directory, parse
and normalize every file, drop drafts, sort newest first and render the RSS
document. Files that fail to parse or validate are skipped and logged; an
unreadable content directory aborts the run.
"""

import logging
from typing import Iterable, List, Tuple

from blog_feed.config import ServerConfig
from blog_feed.exceptions import ContentFileError
from blog_feed.models.schemas import Post
from blog_feed.services.content_scanner import scan_content_dir
from blog_feed.services.front_matter import parse_attributes, parse_front_matter
from blog_feed.services.post_normalizer import normalize_post
from blog_feed.services.rss_serializer import render_feed


logger = logging.getLogger(__name__)


def sort_newest_first(entries: Iterable[Tuple[Post, bool]]) -> List[Tuple[Post, bool]]:
    """Order (post, draft) pairs by publication date, newest first.

    Posts with equal timestamps keep their input order.
    """
    return sorted(entries, key=lambda entry: entry[0].published_at, reverse=True)


def filter_and_sort(entries: Iterable[Tuple[Post, bool]]) -> List[Post]:
    """Drop drafts and order posts by publication date, newest first.

    Args:
        entries: (post, draft) pairs

    Returns:
        Published posts in descending date order
    """
    published = [(post, draft) for post, draft in entries if not draft]
    return [post for post, _ in sort_newest_first(published)]


def collect_posts(config: ServerConfig) -> List[Tuple[Post, bool]]:
    """Scan, parse and normalize every content file.

    Args:
        config: Server configuration

    Returns:
        (post, draft) pairs in scan order

    Raises:
        ContentDirectoryError: If the content directory cannot be read
    """
    raw_files = scan_content_dir(config.content_path, config.content_extension)

    entries = []
    for raw in raw_files:
        try:
            metadata, _body = parse_front_matter(raw.text)
            attributes = parse_attributes(metadata)
            post = normalize_post(
                raw,
                attributes,
                config.blog_url,
                extension=config.content_extension,
                sanitize_slugs=config.sanitize_slugs,
            )
        except ContentFileError as e:
            e.path = raw.path
            logger.warning(f"Skipping content file: {e}")
            continue

        entries.append((post, attributes.draft))

    return entries


def load_published_posts(config: ServerConfig) -> List[Post]:
    """Return the posts that belong in the feed, newest first."""
    return filter_and_sort(collect_posts(config))


def build_feed(config: ServerConfig) -> str:
    """Run the full pipeline and return the RSS document."""
    posts = load_published_posts(config)
    logger.info(f"Generated feed with {len(posts)} items from {config.content_path}")
    return render_feed(config.channel(), posts)
