"""MCP tools for blog_feed."""

from .feed_tools import feed_tools, generate_feed, get_post, list_posts

__all__ = ["feed_tools", "generate_feed", "get_post", "list_posts"]
