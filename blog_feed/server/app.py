"""blog_feed - MCP Server with Decorators

This module implements the core MCP server using FastMCP with multi-transport support
(STDIO, SSE, and Streamable HTTP). It registers the feed tools with their decorators
and mounts the RSS endpoint as a custom HTTP route.
"""

import asyncio
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

import click
from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from blog_feed.config import ServerConfig, get_config
from blog_feed.decorators import exception_handler, tool_logger
from blog_feed.exceptions import ContentDirectoryError
from blog_feed.logging_config import setup_logging, logger
from blog_feed.server.routes import make_rss_handler
from blog_feed.services.feed_pipeline import build_feed
from blog_feed.tools.feed_tools import feed_tools


def create_mcp_server(config: Optional[ServerConfig] = None) -> FastMCP:
    """Create and configure the MCP server with decorators.

    Args:
        config: Optional server configuration

    Returns:
        Configured FastMCP server instance
    """
    if config is None:
        config = get_config()

    setup_logging(config)
    logger.info(f"Server config: {config.name} at log level {config.log_level}")
    logger.info(f"Serving content from {config.content_path}")

    # Configure DNS rebinding protection (disabled by default for development)
    dns_protection = os.getenv("MCP_DNS_REBINDING_PROTECTION", "false").lower() == "true"
    allowed_hosts_env = os.getenv("MCP_ALLOWED_HOSTS", "")
    allowed_hosts = [h.strip() for h in allowed_hosts_env.split(",") if h.strip()] if allowed_hosts_env else []

    logger.info(f"DNS rebinding protection: {'enabled' if dns_protection else 'disabled'}")
    if dns_protection and allowed_hosts:
        logger.info(f"Allowed hosts: {allowed_hosts}")

    mcp_server = FastMCP(
        config.name or "blog_feed",
        transport_security=TransportSecuritySettings(
            enable_dns_rebinding_protection=dns_protection,
            allowed_hosts=allowed_hosts
        )
    )

    register_tools(mcp_server, config)
    register_routes(mcp_server, config)

    logger.info("Server initialization complete")
    return mcp_server


def register_tools(mcp_server: FastMCP, config: ServerConfig) -> None:
    """Register all MCP tools with the server using decorators.

    Registers decorated functions directly with MCP to preserve function signatures
    for proper parameter introspection.
    """
    for tool_func in feed_tools:
        # Apply decorator chain: exception_handler → tool_logger
        decorated_func = exception_handler(tool_logger(tool_func, config.__dict__))

        tool_name = tool_func.__name__
        mcp_server.tool(
            name=tool_name
        )(decorated_func)

        logger.info(f"Registered feed tool: {tool_name}")

    logger.info(f"Server '{mcp_server.name}' initialized with decorators")


def register_routes(mcp_server: FastMCP, config: ServerConfig) -> None:
    """Mount the RSS endpoint on the server's HTTP transports."""
    mcp_server.custom_route(config.feed_path, methods=["GET"], name="rss_feed")(
        make_rss_handler(config)
    )
    logger.info(f"Registered RSS route: GET {config.feed_path}")


# Create a server instance that can be imported by the MCP CLI
server = create_mcp_server()


@click.command()
@click.option(
    "--port",
    default=3001,
    help="Port to listen on for SSE or Streamable HTTP transport"
)
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind to (use 0.0.0.0 for Docker)"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default="stdio",
    help="Transport type (stdio, sse, or streamable-http)"
)
def main(port: int, host: str, transport: str) -> int:
    """Run the blog_feed server with specified transport."""
    async def run_server():
        """Inner async function to run the server."""
        if transport == "stdio":
            logger.info("Starting server with STDIO transport")
            await server.run_stdio_async()
        elif transport == "sse":
            logger.info(f"Starting server with SSE transport on {host}:{port}")
            server.settings.host = host
            server.settings.port = port
            await server.run_sse_async()
        elif transport == "streamable-http":
            logger.info(f"Starting server with Streamable HTTP transport on {host}:{port}")
            server.settings.host = host
            server.settings.port = port
            server.settings.streamable_http_path = "/mcp"
            await server.run_streamable_http_async()
        else:
            raise ValueError(f"Unknown transport: {transport}")

    try:
        asyncio.run(run_server())
        return 0
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        return 1


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=Path("rss.xml"),
    show_default=True,
    help="File to write the RSS document to"
)
@click.option(
    "--content-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Content directory (overrides BLOG_FEED_CONTENT_DIR)"
)
def build(output: Path, content_dir: Optional[Path]) -> None:
    """Write the RSS feed to a file for static hosting."""
    config = get_config()
    if content_dir is not None:
        config = replace(config, content_dir=str(content_dir))
    setup_logging(config)

    try:
        document = build_feed(config)
    except ContentDirectoryError as e:
        logger.error(f"Feed build failed: {e}")
        raise click.ClickException(str(e))

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    click.echo(f"Wrote RSS feed to {output}")


def main_stdio() -> int:
    """Entry point for STDIO transport (convenience wrapper)."""
    return main.callback(port=3001, host="127.0.0.1", transport="stdio")

def main_http() -> int:
    """Entry point for Streamable HTTP transport (convenience wrapper)."""
    return main.callback(port=3001, host="127.0.0.1", transport="streamable-http")

def main_sse() -> int:
    """Entry point for SSE transport (convenience wrapper)."""
    return main.callback(port=3001, host="127.0.0.1", transport="sse")


if __name__ == "__main__":
    sys.exit(main())
