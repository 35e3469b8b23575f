"""
WitAnime Plugin - Main plugin implementation for witanime

This module implements the WitAnime plugin class: main-page sections,
search, show detail loading with episode resolution and stream link
extraction for the Arabic anime site witanime.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote_plus

from witplux.plugins.base import BasePlugin, LinkCallback, PluginMetadata, SubtitleCallback
from witplux.plugins.common import URLHelper, dedupe_by
from witplux.core.models import CatalogEntry, ContentKind, MainPageSection, PagedListing, ShowDetail
from witplux.core.exceptions import LoadError, PluginError, SearchError

from .config import DEFAULT_MAIN_URL, WitAnimeConfig, validate_config
from .parser import WitAnimeParser
from .episodes import EpisodeResolver
from .extractor import LinkExtractor


logger = logging.getLogger(__name__)


SUPPORTED_KINDS = [ContentKind.SERIES, ContentKind.MOVIE, ContentKind.SHORT_FORM]

plugin_metadata = PluginMetadata(
    name="WitAnime",
    version="1.0.0",
    author="WitPlux Team",
    description="Arabic anime source plugin for witanime with listings, episodes and stream links",
    website=DEFAULT_MAIN_URL,
    lang="ar",
    icon_url=f"{DEFAULT_MAIN_URL}/wp-content/uploads/2023/08/cropped-Logo-WITU-32x32.png",
    supported_kinds=SUPPORTED_KINDS,
    has_main_page=True,
    has_download_support=True,
)


class WitAnimePlugin(BasePlugin):
    """
    WitAnime plugin for accessing anime content from witanime.

    Provides main-page browsing, search, detail pages with resolved episode
    lists and link extraction across the site's players and file hosts.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize WitAnime plugin.

        Args:
            config: Plugin configuration dictionary (missing keys use defaults)

        Raises:
            PluginError: If the configuration is invalid
        """
        try:
            settings = validate_config(config or {})
        except ValueError as e:
            raise PluginError(str(e), plugin_name=plugin_metadata.name)

        super().__init__(settings)

        self.episode_resolver = EpisodeResolver(self, settings)
        self.extractor = LinkExtractor(self, settings)

    @property
    def config(self) -> WitAnimeConfig:
        return self.settings

    @property
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata."""
        return plugin_metadata

    @property
    def base_url(self) -> str:
        """Get the configured site origin."""
        return self.config.main_url

    @property
    def main_page(self) -> List[MainPageSection]:
        return self.config.main_sections

    def _parser(self, html: str) -> WitAnimeParser:
        return WitAnimeParser(html, self.base_url)

    async def get_main_page(self, page: int, section: MainPageSection) -> PagedListing:
        """
        Get one page of a main-page section.

        On the homepage section the "latest episode" cards come first,
        followed by the listing cards; first seen wins.

        Args:
            page: 1-based page number
            section: Section to browse

        Returns:
            Entries of the page and whether a following page exists
        """
        url = section.page_url(page)
        logger.debug(f"Fetching main page section '{section.label}' page {page}: {url}")

        html = await self.fetch_text(url)
        parser = self._parser(html)

        entries = []
        if URLHelper.is_origin(section.url, self.base_url):
            entries.extend(parser.parse_episode_cards())
        entries.extend(parser.parse_listing())
        entries = dedupe_by(entries, lambda entry: entry.url)
        logger.info(f"Section '{section.label}' page {page}: {len(entries)} entries")

        # An empty page past the end can still carry a pager.
        return PagedListing(
            section=section.label,
            entries=entries,
            has_next=bool(entries) and parser.has_next_page(),
        )

    async def search(self, query: str) -> List[CatalogEntry]:
        """
        Search witanime by title.

        Args:
            query: Search query string

        Returns:
            Matching catalog entries in page order

        Raises:
            SearchError: If the query is empty
            NetworkError: If the results page cannot be fetched
        """
        if not query or not query.strip():
            raise SearchError("Search query cannot be empty", query=query, source=self.metadata.name)

        clean_query = query.strip()
        search_url = f"{self.base_url}/?s={quote_plus(clean_query)}"
        logger.debug(f"Searching WitAnime with query: '{clean_query}'")

        html = await self.fetch_text(search_url)
        results = self._parser(html).parse_listing()

        logger.info(f"Found {len(results)} results for '{clean_query}'")
        return results

    async def load(self, url: str) -> ShowDetail:
        """
        Load a show's detail page.

        Movies carry their own page as data_url; other kinds get their
        resolved episode list.

        Raises:
            LoadError: If the page has no title
            NetworkError: If the page cannot be fetched
        """
        html = await self.fetch_text(url)
        details = self._parser(html).parse_anime_details(url)

        if not details['title']:
            raise LoadError("Page does not look like a show page (no title)", url=url, plugin_name=self.metadata.name)

        detail = ShowDetail(
            title=details['title'],
            url=url,
            kind=details['kind'],
            poster_url=details['poster_url'],
            year=details['year'],
            plot=details['plot'],
            tags=details['tags'],
        )

        if detail.is_movie:
            detail.data_url = url
        else:
            detail.episodes = await self.episode_resolver.resolve(html, url)

        logger.info(f"Loaded '{detail.title}' ({detail.kind.value}, {len(detail.episodes)} episodes)")
        return detail

    async def load_links(
        self,
        data: str,
        subtitle_callback: Optional[SubtitleCallback],
        callback: LinkCallback
    ) -> bool:
        """
        Resolve playable links of an episode or movie page.

        Args:
            data: Episode URL, or a movie's data_url
            subtitle_callback: Receives subtitle tracks, if given
            callback: Receives each link as soon as it is found

        Returns:
            True if at least one link was emitted
        """
        return await self.extractor.extract(data, callback, subtitle_callback)


# Export plugin class and metadata
__all__ = ["WitAnimePlugin", "plugin_metadata", "SUPPORTED_KINDS"]
