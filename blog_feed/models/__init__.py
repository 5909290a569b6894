"""Data models for blog_feed."""

from .schemas import FeedChannel, Post, PostAttributes, RawContentFile

__all__ = [
    "FeedChannel",
    "Post",
    "PostAttributes",
    "RawContentFile",
]
