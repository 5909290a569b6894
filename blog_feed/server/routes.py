"""HTTP routes for blog_feed.

The RSS endpoint re-runs the whole pipeline on every request.
"""

import logging
from typing import Awaitable, Callable

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from blog_feed.config import ServerConfig
from blog_feed.services.feed_pipeline import build_feed


logger = logging.getLogger(__name__)

FEED_CONTENT_TYPE = "text/xml"


def make_rss_handler(config: ServerConfig) -> Callable[[Request], Awaitable[Response]]:
    """Create the request handler serving the RSS document.

    Args:
        config: Server configuration

    Returns:
        Starlette endpoint returning the feed with content-type text/xml
    """

    async def rss_feed(request: Request) -> Response:
        try:
            body = build_feed(config)
        except Exception:
            logger.exception(f"Feed generation failed for {request.url.path}")
            return PlainTextResponse("Feed generation failed", status_code=500)

        return Response(
            content=body,
            status_code=200,
            headers={"content-type": FEED_CONTENT_TYPE},
        )

    return rss_feed
