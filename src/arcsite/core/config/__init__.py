"""
Configuration Management Package

Provides Pydantic-based configuration models and management for arcsite.
"""

from arcsite.core.config.models import AppConfig, BuildConfig, SiteConfig, WatchConfig
from arcsite.core.config.manager import ConfigManager

__all__ = [
    "AppConfig",
    "BuildConfig",
    "SiteConfig",
    "WatchConfig",
    "ConfigManager",
]
