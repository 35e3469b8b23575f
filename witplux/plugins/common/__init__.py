"""
Common utilities for plugin development.

This package contains shared utilities and helper functions
used across provider plugins.
"""

from .utils import (
    HTMLParser,
    QualityExtractor,
    URLHelper,
    TextCleaner,
    get_attr,
    first_success,
    dedupe_by,
)
from .hls import PlaylistVariant, is_m3u8_url, is_master_playlist, parse_master_playlist

__all__ = [
    "HTMLParser",
    "QualityExtractor",
    "URLHelper",
    "TextCleaner",
    "get_attr",
    "first_success",
    "dedupe_by",
    "PlaylistVariant",
    "is_m3u8_url",
    "is_master_playlist",
    "parse_master_playlist",
]
