"""Configuration package."""

from repo_publisher.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
