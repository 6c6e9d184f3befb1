"""Mood-driven restaurant search around nearby transit stations."""

__version__ = "0.1.0"
