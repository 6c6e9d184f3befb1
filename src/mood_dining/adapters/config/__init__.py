"""Configuration adapters."""

from mood_dining.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
