"""Process-wide configuration."""

from topicscope.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
