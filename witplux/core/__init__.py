"""
Core Layer - Data models, configuration and error types.

This module contains the data models, configuration handling, plugin
registry and exception hierarchy shared by the WitPlux plugins and CLI.
"""

from witplux.core.config_manager import ConfigManager
from witplux.core.config_schemas import AppSettings, LoggingSettings, SourceConfig
from witplux.core.exceptions import (
    WitPluxError,
    ConfigurationError,
    LoadError,
    NetworkError,
    PluginError,
    SearchError,
)
from witplux.core.models import (
    CatalogEntry,
    ContentKind,
    Episode,
    MainPageSection,
    MediaType,
    PagedListing,
    Quality,
    ShowDetail,
    StreamLink,
    SubtitleFile,
)

__all__ = [
    # Data Models
    "CatalogEntry",
    "ContentKind",
    "Episode",
    "MainPageSection",
    "MediaType",
    "PagedListing",
    "Quality",
    "ShowDetail",
    "StreamLink",
    "SubtitleFile",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    "LoggingSettings",
    "SourceConfig",
    # Exceptions
    "WitPluxError",
    "ConfigurationError",
    "LoadError",
    "NetworkError",
    "PluginError",
    "SearchError",
]
