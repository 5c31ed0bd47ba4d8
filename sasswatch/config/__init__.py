"""
Configuration

Usage:
    from sasswatch.config import Settings

    settings = Settings()
    options = settings.sass
"""

from sasswatch.config.groups import SassOptions, WatcherConfig
from sasswatch.config.settings import Settings, resolve_options

__all__ = ["SassOptions", "Settings", "WatcherConfig", "resolve_options"]
