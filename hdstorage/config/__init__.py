"""
Configuration management for hdstorage.
"""

from hdstorage.config.logging import configure_logging
from hdstorage.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "configure_logging"]
