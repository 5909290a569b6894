"""RSS serializer service.

This module renders normalized posts into an RSS 2.0 document with an
atom:link self reference.
"""

import re
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, Union

from lxml import etree

from blog_feed.models.schemas import FeedChannel, Post


ATOM_NS = "http://www.w3.org/2005/Atom"
RSS_MEDIA_TYPE = "application/rss+xml"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS_RE = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def format_rfc1123(value: datetime) -> str:
    """Format a datetime as an RFC 1123 date in GMT."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _clean(text: str) -> str:
    return _INVALID_XML_CHARS_RE.sub("", text or "")


def _free_text(text: str) -> Union[str, etree.CDATA]:
    """Wrap author-written text in CDATA.

    A CDATA section cannot contain "]]>", so such text is left to regular
    escaping.
    """
    text = _clean(text)
    if "]]>" in text:
        return text
    return etree.CDATA(text)


def _sub(parent: etree._Element, tag: str, text=None, **attrib) -> etree._Element:
    element = etree.SubElement(parent, tag, **attrib)
    if text is not None:
        element.text = text
    return element


def render_feed(channel: FeedChannel, posts: Iterable[Post]) -> str:
    """Render the RSS document.

    Args:
        channel: Channel metadata
        posts: Posts in the order they should appear

    Returns:
        The XML document, starting with the XML declaration
    """
    rss = etree.Element("rss", version="2.0", nsmap={"atom": ATOM_NS})
    channel_el = _sub(rss, "channel")

    _sub(channel_el, "title", _clean(channel.title))
    _sub(channel_el, "link", _clean(channel.link))
    _sub(channel_el, "description", _clean(channel.description))
    _sub(channel_el, "language", _clean(channel.language))
    _sub(
        channel_el,
        f"{{{ATOM_NS}}}link",
        href=_clean(channel.self_link),
        rel="self",
        type=RSS_MEDIA_TYPE,
    )

    for post in posts:
        item = _sub(channel_el, "item")
        _sub(item, "title", _free_text(post.title))
        _sub(item, "link", _clean(post.link))
        _sub(item, "guid", _clean(post.link))
        _sub(item, "description", _free_text(post.description))
        _sub(item, "pubDate", format_rfc1123(post.published_at))

    body = etree.tostring(rss, encoding="unicode", pretty_print=True)
    return XML_DECLARATION + body
