"""Exceptions raised by the blog_feed pipeline."""

from pathlib import Path
from typing import Optional


class BlogFeedError(Exception):
    """Base class for blog_feed errors."""


class ContentDirectoryError(BlogFeedError, OSError):
    """The content directory does not exist or cannot be listed.

    Terminal for a single feed generation; no partial feed is produced.
    """


class ContentFileError(BlogFeedError, ValueError):
    """A single content file could not be turned into a post."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None:
            return f"{self.path}: {message}"
        return message


class ParseError(ContentFileError):
    """The front-matter block of a content file is malformed."""


class ValidationError(ContentFileError):
    """A required post attribute is missing or cannot be interpreted."""
