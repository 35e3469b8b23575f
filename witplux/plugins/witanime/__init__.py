"""
WitAnime Plugin - Anime source plugin for witanime

This plugin provides access to Arabic-subtitled anime from witanime,
including main-page sections, search, episode lists and stream links.
"""

from .plugin import WitAnimePlugin, plugin_metadata, SUPPORTED_KINDS
from .config import WitAnimeConfig, get_default_config, validate_config
from .parser import WitAnimeParser
from .episodes import EpisodeResolver
from .extractor import LinkExtractor

__all__ = [
    "WitAnimePlugin",
    "plugin_metadata",
    "SUPPORTED_KINDS",
    "WitAnimeConfig",
    "get_default_config",
    "validate_config",
    "WitAnimeParser",
    "EpisodeResolver",
    "LinkExtractor",
]
