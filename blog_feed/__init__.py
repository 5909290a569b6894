"""blog_feed - RSS feed generation for a markdown blog, served over HTTP and MCP."""

__version__ = "0.1.0"
