"""Data models for blog_feed.

This module defines the records that flow through the feed pipeline:
raw content files, their parsed attributes, normalized posts and the
channel metadata of the generated feed.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Union


@dataclass
class RawContentFile:
    """A content file as read from disk."""

    path: Path
    text: str

    @property
    def filename(self) -> str:
        return self.path.name


@dataclass
class PostAttributes:
    """Recognized front-matter attributes of a post."""

    title: str
    date: Union[date, datetime, str]
    description: str = ""
    draft: bool = False
    slug: Optional[str] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class Post:
    """A normalized, publishable post."""

    title: str
    published_at: datetime
    description: str
    link: str
    slug: str
    tags: List[str] = field(default_factory=list)


@dataclass
class FeedChannel:
    """Channel-level metadata of the RSS document."""

    title: str
    link: str
    description: str
    self_link: str
    language: str = "en-us"
