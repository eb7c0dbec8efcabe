"""Utility modules."""

from srtedit.utils.config import Settings, get_settings
from srtedit.utils.logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
]
