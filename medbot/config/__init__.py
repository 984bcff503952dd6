"""Configuration: env loading, settings and static constants."""

from medbot.config.env import configure_logging, get_settings, load_env

__all__ = ["configure_logging", "get_settings", "load_env"]
