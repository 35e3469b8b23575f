"""
WitAnime Episodes - Episode list resolution for witanime show pages.

The site has exposed its episode list in several ways over time, so the
resolver tries each in turn and keeps the first one that yields anything:
openEpisode() calls in inline scripts, an episode list container, a
secondary '<slug>-episodes' page and finally probing guessed episode URLs.
"""

import asyncio
import logging
from typing import List, Optional
from urllib.parse import quote

from witplux.core.exceptions import NetworkError
from witplux.core.models import Episode
from witplux.plugins.common import URLHelper, dedupe_by
from .config import WitAnimeConfig
from .parser import WitAnimeParser, episode_name


logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "مشاهدة"
EPISODE_WORD = "الحلقة"

EPISODE_URL_TEMPLATES = (
    "{origin}/episode/{slug}-" + EPISODE_WORD + "-{number}/",
    "{origin}/episode/{slug}-" + quote(EPISODE_WORD).lower() + "-{number}/",
    "{origin}/episode/{slug}-episode-{number}/",
)


def finalize_episodes(episodes: List[Episode]) -> List[Episode]:
    """De-duplicate by number keeping the first seen, then sort ascending."""
    unique = dedupe_by(episodes, lambda episode: episode.number)
    return sorted(unique, key=lambda episode: episode.number)


class EpisodeResolver:
    """Resolves the episode list of a show page."""

    def __init__(self, client, config: WitAnimeConfig):
        """
        Initialize the resolver.

        Args:
            client: Object providing async fetch_text(url, referer) and probe(url, referer)
            config: Plugin configuration
        """
        self.client = client
        self.config = config

    @property
    def origin(self) -> str:
        return self.config.main_url

    async def resolve(self, document_html: str, show_url: str) -> List[Episode]:
        """
        Resolve the episode list of a show.

        Args:
            document_html: HTML of the show page
            show_url: URL of the show page

        Returns:
            Episodes sorted by number; never empty
        """
        parser = WitAnimeParser(document_html, self.origin)

        for strategy in (parser.parse_script_episodes, parser.parse_container_episodes):
            try:
                episodes = strategy()
            except Exception as e:
                logger.warning(f"Episode strategy {strategy.__name__} failed for {show_url}: {e}")
                continue
            if episodes:
                logger.info(f"Found {len(episodes)} episodes via {strategy.__name__}")
                return finalize_episodes(episodes)

        try:
            episodes = await asyncio.wait_for(
                self._resolve_remote(show_url),
                timeout=self.config.operation_deadline
            )
        except asyncio.TimeoutError:
            logger.warning(f"Episode lookup for {show_url} hit the {self.config.operation_deadline}s deadline")
            episodes = []

        if episodes:
            return finalize_episodes(episodes)

        logger.warning(f"No episodes found for {show_url}, using the show page itself")
        return [Episode(url=show_url, display_name=PLACEHOLDER_NAME, number=1)]

    async def _resolve_remote(self, show_url: str) -> List[Episode]:
        slug = URLHelper.slug_after(show_url, "/anime/")
        if not slug:
            logger.debug(f"No slug in {show_url}, skipping remote episode lookups")
            return []

        for strategy in (self.from_episodes_page, self.from_url_patterns):
            try:
                episodes = await strategy(slug, show_url)
            except Exception as e:
                logger.warning(f"Episode strategy {strategy.__name__} failed for {show_url}: {e}")
                continue
            if episodes:
                logger.info(f"Found {len(episodes)} episodes via {strategy.__name__}")
                return episodes

        return []

    async def from_episodes_page(self, slug: str, show_url: str) -> List[Episode]:
        """Episodes listed on the show's secondary '<slug>-episodes' page."""
        url = f"{self.origin}/{slug}-episodes/"
        html = await self.client.fetch_text(url, referer=show_url)
        return WitAnimeParser(html, self.origin).parse_episode_page_items()

    async def from_url_patterns(self, slug: str, show_url: str) -> List[Episode]:
        """
        Probe guessed episode URLs.

        Each template is tried for numbers 1..episode_probe_limit; the first
        template with at least one hit wins.
        """
        for template in EPISODE_URL_TEMPLATES:
            episodes = []

            for number in range(1, self.config.episode_probe_limit + 1):
                url = template.format(origin=self.origin, slug=slug, number=number)
                status = await self._probe(url, show_url)
                if status == 200:
                    episodes.append(Episode(url=url, display_name=episode_name(number), number=number))

            if episodes:
                return episodes

        return []

    async def _probe(self, url: str, referer: str) -> Optional[int]:
        try:
            return await self.client.probe(url, referer=referer)
        except NetworkError as e:
            logger.debug(f"Probe failed for {url}: {e}")
            return None


# Export resolver
__all__ = ["EpisodeResolver", "finalize_episodes", "EPISODE_URL_TEMPLATES"]
