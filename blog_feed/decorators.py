"""Decorators applied to MCP tools at registration time.

tool_logger logs each call and its duration; exception_handler turns an
uncaught exception into an error result instead of a protocol failure.
"""

import functools
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional


logger = logging.getLogger(__name__)

ToolFunc = Callable[..., Awaitable[Dict[str, Any]]]


def tool_logger(func: ToolFunc, config: Optional[Dict[str, Any]] = None) -> ToolFunc:
    """Log tool invocations with their duration."""
    server_name = (config or {}).get("name", "blog_feed")

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        arguments = {k: v for k, v in kwargs.items() if k != "ctx"}
        logger.info(f"[{server_name}] tool {func.__name__} called with {arguments}")
        start = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(f"[{server_name}] tool {func.__name__} finished in {elapsed_ms:.1f}ms")

    return wrapper


def exception_handler(func: ToolFunc) -> ToolFunc:
    """Convert uncaught tool exceptions into {"success": False, "error": ...}."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Tool {func.__name__} failed: {e}", exc_info=True)
            return {
                "success": False,
                "error": str(e),
                "error_type": type(e).__name__,
            }

    return wrapper
