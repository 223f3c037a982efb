"""Environment-driven application settings."""

from trendscore.settings.app import AppSettings, get_settings


__all__ = ["AppSettings", "get_settings"]
