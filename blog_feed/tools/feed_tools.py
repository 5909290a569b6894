"""Blog feed MCP tools.

This module provides MCP tools for inspecting the blog's posts and
generating its RSS feed.

NOTE: Never use Optional parameters in MCP tools - they break MCP clients.
Use empty string "" for optional strings and 0 for optional integers.
"""

import logging
from typing import Any, Dict

from mcp.server.fastmcp import Context

from blog_feed.config import get_config
from blog_feed.exceptions import ContentDirectoryError
from blog_feed.models.schemas import Post
from blog_feed.services.feed_pipeline import collect_posts, filter_and_sort, sort_newest_first
from blog_feed.services.rss_serializer import render_feed


logger = logging.getLogger(__name__)


def _post_to_dict(post: Post, draft: bool = False) -> Dict[str, Any]:
    return {
        "title": post.title,
        "slug": post.slug,
        "link": post.link,
        "published_at": post.published_at.isoformat(),
        "description": post.description,
        "tags": post.tags,
        "draft": draft,
    }


async def generate_feed(ctx: Context = None) -> Dict[str, Any]:
    """Generate the blog's RSS 2.0 feed from the content directory.

    Re-reads every content file, skips drafts and files with invalid
    front-matter, and renders the remaining posts newest first.

    Args:
        ctx: MCP Context object (injected automatically)

    Returns:
        Dictionary with:
        - success: bool
        - item_count: number of <item> elements in the feed
        - feed_url: public URL the feed is served from
        - xml: the feed document
        - error: string if the content directory cannot be read
    """
    config = get_config()
    logger.info(f"generate_feed called: content_dir={config.content_dir}")

    try:
        posts = filter_and_sort(collect_posts(config))
    except ContentDirectoryError as e:
        return {
            "success": False,
            "error": str(e),
        }

    return {
        "success": True,
        "item_count": len(posts),
        "feed_url": config.feed_url,
        "xml": render_feed(config.channel(), posts),
    }


async def list_posts(
    include_drafts: bool = False,
    tag: str = "",
    ctx: Context = None,
) -> Dict[str, Any]:
    """List blog posts, newest first.

    Args:
        include_drafts: Include posts marked as draft (default: False)
        tag: Only posts carrying this tag, case-insensitive (empty string for all posts)
        ctx: MCP Context object (injected automatically)

    Returns:
        Dictionary with:
        - success: bool
        - count: number of posts returned
        - posts: list of post objects with title, slug, link, published_at,
          description, tags, draft
        - error: string if the content directory cannot be read
    """
    config = get_config()
    logger.info(f"list_posts called: include_drafts={include_drafts}, tag={tag}")

    try:
        entries = collect_posts(config)
    except ContentDirectoryError as e:
        return {
            "success": False,
            "error": str(e),
        }

    if not include_drafts:
        entries = [(post, draft) for post, draft in entries if not draft]

    if tag:
        wanted = tag.strip().lower()
        entries = [
            (post, draft) for post, draft in entries
            if wanted in (t.lower() for t in post.tags)
        ]

    entries = sort_newest_first(entries)

    return {
        "success": True,
        "count": len(entries),
        "posts": [_post_to_dict(post, draft) for post, draft in entries],
    }


async def get_post(slug: str, ctx: Context = None) -> Dict[str, Any]:
    """Look up a single published post by its slug.

    Args:
        slug: Resolved slug of the post (as it appears at the end of its link)
        ctx: MCP Context object (injected automatically)

    Returns:
        Dictionary with:
        - success: bool
        - post: post object with title, slug, link, published_at, description, tags
        - error: string if the post is not found or the content directory cannot be read
    """
    config = get_config()
    logger.info(f"get_post called: slug={slug}")

    try:
        entries = collect_posts(config)
    except ContentDirectoryError as e:
        return {
            "success": False,
            "error": str(e),
        }

    for post, draft in entries:
        if post.slug == slug and not draft:
            return {
                "success": True,
                "post": _post_to_dict(post),
            }

    return {
        "success": False,
        "error": f"Post '{slug}' not found",
    }


# List of feed tools for registration
feed_tools = [
    generate_feed,
    list_posts,
    get_post,
]
