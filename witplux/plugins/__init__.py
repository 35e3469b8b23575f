"""
Plugin Layer - Content source implementations.

This module contains the plugin interface and the source implementations
that provide listings, show details and stream links.
"""

from witplux.plugins.base import BasePlugin, PluginMetadata, PluginSettings
from witplux.plugins.common import (
    HTMLParser,
    QualityExtractor,
    URLHelper,
    TextCleaner,
)

__all__ = [
    # Base Plugin Architecture
    "BasePlugin",
    "PluginMetadata",
    "PluginSettings",
    # Plugin Development Utilities
    "HTMLParser",
    "QualityExtractor",
    "URLHelper",
    "TextCleaner",
]
