"""Configuration for blog_feed.

Settings are resolved in three layers: built-in defaults, an optional YAML
file named by BLOG_FEED_CONFIG, and BLOG_FEED_* environment variables.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from blog_feed.models.schemas import FeedChannel


ENV_PREFIX = "BLOG_FEED_"
CONFIG_FILE_ENV = "BLOG_FEED_CONFIG"

_TRUE_VALUES = {"1", "true", "yes", "y", "on"}


@dataclass
class ServerConfig:
    """Server and feed settings."""

    name: str = "blog_feed"
    log_level: str = "INFO"
    content_dir: str = "src/content"
    content_extension: str = ".md"
    site_url: str = "https://www.oussemasahbeni.com"
    site_title: str = "Oussema Sahbeni"
    site_description: str = "Full Stack Developer | Spring Boot And Angular"
    language: str = "en-us"
    blog_path: str = "/blog"
    feed_path: str = "/api/rss.xml"
    sanitize_slugs: bool = False

    @property
    def content_path(self) -> Path:
        return Path(self.content_dir).expanduser()

    @property
    def blog_url(self) -> str:
        return _join_url(self.site_url, self.blog_path)

    @property
    def feed_url(self) -> str:
        return _join_url(self.site_url, self.feed_path)

    def channel(self) -> FeedChannel:
        """Build the channel metadata for the RSS document."""
        return FeedChannel(
            title=self.site_title,
            link=self.site_url,
            description=self.site_description,
            self_link=self.feed_url,
            language=self.language,
        )


def _join_url(base: str, path: str) -> str:
    return base.rstrip("/") + "/" + path.lstrip("/")


def _coerce(value: Any, default: Any) -> Any:
    """Coerce a raw setting to the type of its default."""
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE_VALUES
    return str(value)


def _load_file(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(config_file: Optional[str] = None) -> ServerConfig:
    """Load configuration from defaults, an optional YAML file and the environment.

    Args:
        config_file: Path to a YAML config file (defaults to $BLOG_FEED_CONFIG)

    Returns:
        Populated ServerConfig
    """
    config = ServerConfig()
    defaults = {f.name: getattr(config, f.name) for f in fields(ServerConfig)}

    config_file = config_file or os.environ.get(CONFIG_FILE_ENV)
    if config_file:
        for key, value in _load_file(Path(config_file)).items():
            if key in defaults and value is not None:
                setattr(config, key, _coerce(value, defaults[key]))

    for key, default in defaults.items():
        env_value = os.environ.get(ENV_PREFIX + key.upper())
        if env_value is not None:
            setattr(config, key, _coerce(env_value, default))

    config.log_level = config.log_level.upper()
    return config


_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the process-wide configuration, loading it on first use."""
    global _config

    if _config is None:
        _config = load_config()
    return _config
