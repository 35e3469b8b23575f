"""
WitPlux - Scraper and stream link extractor for the witanime site.

A command-line tool and library for browsing witanime listings, loading
show details with their episode lists and resolving playable links, with a
clean interface built on Typer and Rich.
"""

__version__ = "0.1.0"
__author__ = "WitPlux Team"

# Package metadata
__title__ = "witplux"
__description__ = "Scraper and stream link extractor for the witanime site"
__license__ = "MIT"

# Version info tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split(".")))

# Export main components for easy importing
from witplux.core.models import CatalogEntry, Episode, ShowDetail, StreamLink, Quality
from witplux.plugins.witanime import WitAnimePlugin

__all__ = [
    "__version__",
    "__author__",
    "CatalogEntry",
    "Episode",
    "ShowDetail",
    "StreamLink",
    "Quality",
    "WitAnimePlugin",
]
