"""Configuration module."""
from google_sheets_utils.config.settings import DEFAULT_SCOPE, Settings, get_settings

__all__ = [
    "DEFAULT_SCOPE",
    "Settings",
    "get_settings",
]
