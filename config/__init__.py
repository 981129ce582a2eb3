"""Configuration helpers for the RoPaSci project."""

from .settings import Settings, get_settings, reset_settings, settings

__all__ = ["Settings", "settings", "get_settings", "reset_settings"]
