"""Shared fixtures for blog_feed tests."""

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from blog_feed.config import ServerConfig


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """An empty content directory."""
    directory = tmp_path / "content"
    directory.mkdir()
    return directory


@pytest.fixture
def write_post(content_dir: Path) -> Callable[..., Path]:
    """Write a markdown post with front-matter into the content directory."""

    def _write(filename: str, body: str = "Body text.", **attributes) -> Path:
        lines = ["---"]
        for key, value in attributes.items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            elif isinstance(value, list):
                value = "[" + ", ".join(value) + "]"
            lines.append(f"{key}: {value}")
        lines.append("---")
        lines.append(textwrap.dedent(body))
        path = content_dir / filename
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config(content_dir: Path) -> ServerConfig:
    """Configuration pointing at the temporary content directory."""
    return ServerConfig(
        content_dir=str(content_dir),
        site_url="https://example.com",
        site_title="Example Blog",
        site_description="Notes & experiments",
    )
