"""Front-matter parser service.

This module splits a content file into its YAML front-matter block and body,
and coerces the recognized keys into PostAttributes.
"""

from typing import Any, Dict, List, Tuple

import yaml
from frontmatter.default_handlers import YAMLHandler

from blog_feed.exceptions import ParseError, ValidationError
from blog_feed.models.schemas import PostAttributes


_handler = YAMLHandler()

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "no", "n", "off", ""}


def parse_front_matter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split raw file text into front-matter attributes and body.

    Args:
        text: Full file contents

    Returns:
        Tuple of (attributes mapping, body text). Files without a leading
        "---" delimiter have no attributes.

    Raises:
        ParseError: If the block is unterminated, not valid YAML, or not a mapping
    """
    text = text.lstrip("\ufeff")

    if not _handler.detect(text):
        return {}, text

    try:
        fm, body = _handler.split(text)
    except ValueError:
        raise ParseError("unterminated front-matter block")

    try:
        metadata = _handler.load(fm)
    except (yaml.YAMLError, ValueError) as e:
        # SafeLoader raises ValueError for impossible timestamps such as 2024-02-30
        raise ParseError(f"invalid front-matter: {e}")

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise ParseError(f"front-matter must be a mapping, got {type(metadata).__name__}")

    return metadata, body.strip()


def parse_attributes(metadata: Dict[str, Any]) -> PostAttributes:
    """Coerce a front-matter mapping into PostAttributes.

    Unrecognized keys are ignored.

    Raises:
        ValidationError: If title or date is missing, or a value has the wrong shape
    """
    title = metadata.get("title")
    if title is None or not str(title).strip():
        raise ValidationError("missing required attribute 'title'")

    date_value = metadata.get("date")
    if date_value is None or (isinstance(date_value, str) and not date_value.strip()):
        raise ValidationError("missing required attribute 'date'")

    slug = metadata.get("slug")
    slug = str(slug).strip() if slug is not None else None

    description = metadata.get("description")

    return PostAttributes(
        title=str(title).strip(),
        date=date_value,
        description=str(description) if description is not None else "",
        draft=_parse_bool(metadata.get("draft", False)),
        slug=slug or None,
        tags=_parse_tags(metadata.get("tags")),
    )


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValidationError(f"invalid value for 'draft': {value!r}")


def _parse_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ValidationError(f"invalid value for 'tags': {value!r}")
    return [str(item).strip() for item in items if item is not None and str(item).strip()]
