"""Logging setup for blog_feed.

Logs go to stderr so that the STDIO transport keeps stdout for the protocol.
"""

import logging
import sys
from typing import Optional

from blog_feed.config import ServerConfig


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger("blog_feed")


def setup_logging(config: Optional[ServerConfig] = None) -> logging.Logger:
    """Configure the blog_feed logger hierarchy.

    Safe to call more than once; the handler is only installed the first time.
    """
    level = getattr(logging, (config.log_level if config else "INFO"), logging.INFO)
    logger.setLevel(level)

    if not any(getattr(h, "_blog_feed", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._blog_feed = True
        logger.addHandler(handler)

    return logger
