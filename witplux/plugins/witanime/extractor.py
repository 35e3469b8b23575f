"""
WitAnime Extractor - Stream link extraction for witanime episode pages.

An episode page can carry its streams in several places at once, so every
strategy runs and contributes what it finds: video tags, embedded player
iframes, file-host download anchors, URLs inside inline scripts and the
site's AJAX server endpoints. Every URL is emitted at most once per call and
HLS master playlists are expanded into one link per variant.
"""

import re
import asyncio
import logging
from typing import Callable, List, Optional, Set

from bs4 import Tag

from witplux.core.exceptions import NetworkError
from witplux.core.models import MediaType, Quality, StreamLink, SubtitleFile
from witplux.plugins.common import (
    HTMLParser,
    QualityExtractor,
    URLHelper,
    get_attr,
    is_m3u8_url,
    is_master_playlist,
    parse_master_playlist,
)
from .config import WitAnimeConfig


logger = logging.getLogger(__name__)

_MEDIA = r'\.(?:m3u8|mp4)'

# Keyed values only count when they point at an .m3u8 or .mp4 resource.
SCRIPT_URL_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        rf'"file"\s*:\s*"([^"]+{_MEDIA}[^"]*)"',
        rf"'file'\s*:\s*'([^']+{_MEDIA}[^']*)'",
        rf'"url"\s*:\s*"([^"]+{_MEDIA}[^"]*)"',
        rf'source\s*[:=]\s*["\']([^"\']+{_MEDIA}[^"\']*)["\']',
        rf'src\s*[:=]\s*["\']([^"\']+{_MEDIA}[^"\']*)["\']',
        rf'(https?://[^\s"\'<>]+?{_MEDIA}[^\s"\'<>]*)',
    )
)

SKIPPED_IFRAMES = ('youtube', 'trailer')
QUALITY_ATTRIBUTES = ('data-quality', 'label', 'res')
SUBTITLE_KINDS = ('subtitles', 'captions')


def sweep_script_urls(text: str) -> List[str]:
    """
    Pull candidate media URLs out of script or response text.

    Returns:
        Candidates in pattern order with JSON escaping removed, duplicates dropped
    """
    candidates = []
    for pattern in SCRIPT_URL_PATTERNS:
        for match in pattern.finditer(text):
            url = match.group(1).replace('\\', '').strip()
            if url and url not in candidates:
                candidates.append(url)
    return candidates


class LinkSink:
    """Per-call emission state: the seen-set and the outbound callbacks."""

    def __init__(
        self,
        callback: Callable[[StreamLink], None],
        subtitle_callback: Optional[Callable[[SubtitleFile], None]] = None
    ):
        self.callback = callback
        self.subtitle_callback = subtitle_callback
        self.seen: Set[str] = set()
        self.seen_subtitles: Set[str] = set()
        self.count = 0

    def claim(self, url: str) -> bool:
        """Reserve a URL; False when it was already emitted in this call."""
        if url in self.seen:
            return False
        self.seen.add(url)
        return True

    def emit(self, link: StreamLink) -> None:
        self.callback(link)
        self.count += 1

    def emit_subtitle(self, subtitle: SubtitleFile) -> None:
        if self.subtitle_callback is None or subtitle.url in self.seen_subtitles:
            return
        self.seen_subtitles.add(subtitle.url)
        self.subtitle_callback(subtitle)


class LinkExtractor:
    """Extracts playable links from witanime episode pages."""

    def __init__(self, client, config: WitAnimeConfig):
        """
        Initialize the extractor.

        Args:
            client: Object providing async fetch_text and post_text
            config: Plugin configuration
        """
        self.client = client
        self.config = config

    @property
    def origin(self) -> str:
        return self.config.main_url

    @property
    def source(self) -> str:
        return self.config.name

    async def extract(
        self,
        episode_url: str,
        callback: Callable[[StreamLink], None],
        subtitle_callback: Optional[Callable[[SubtitleFile], None]] = None
    ) -> bool:
        """
        Resolve the links of an episode page.

        Args:
            episode_url: Episode (or movie) page URL
            callback: Receives each link as soon as it is found
            subtitle_callback: Receives subtitle tracks, if given

        Returns:
            True if at least one link was emitted
        """
        sink = LinkSink(callback, subtitle_callback)

        try:
            await asyncio.wait_for(
                self._extract(episode_url, sink),
                timeout=self.config.operation_deadline
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Link extraction for {episode_url} hit the {self.config.operation_deadline}s deadline "
                f"after {sink.count} links"
            )

        logger.info(f"Emitted {sink.count} links for {episode_url}")
        return sink.count > 0

    async def _extract(self, episode_url: str, sink: LinkSink) -> None:
        try:
            html = await self.client.fetch_text(episode_url)
        except NetworkError as e:
            logger.warning(f"Could not fetch episode page {episode_url}: {e}")
            return

        parser = HTMLParser(html, self.origin)

        strategies = (
            self.from_video_tags,
            self.from_iframes,
            self.from_file_hosts,
            self.from_scripts,
            self.from_ajax,
        )
        for strategy in strategies:
            before = sink.count
            try:
                await strategy(parser, episode_url, sink)
            except NetworkError as e:
                logger.warning(f"Link strategy {strategy.__name__} failed: {e}")
            except Exception as e:
                logger.warning(f"Link strategy {strategy.__name__} raised {type(e).__name__}: {e}")
            else:
                logger.debug(f"Link strategy {strategy.__name__} emitted {sink.count - before} links")

    # Emission

    async def _offer(
        self,
        sink: LinkSink,
        url: str,
        name: str,
        referer: str,
        quality: Quality = Quality.UNKNOWN,
        guess_quality: bool = True,
    ) -> None:
        url = URLHelper.fix_url(url, self.origin)
        if not URLHelper.has_scheme(url) or not sink.claim(url):
            return

        if quality == Quality.UNKNOWN and guess_quality:
            quality = QualityExtractor.extract_from_url(url)

        if is_m3u8_url(url):
            await self._expand_playlist(sink, url, name, referer, quality)
        else:
            self._send(sink, url, name, referer, quality, MediaType.VIDEO)

    def _send(
        self,
        sink: LinkSink,
        url: str,
        name: str,
        referer: str,
        quality: Quality,
        media_type: MediaType
    ) -> None:
        try:
            link = StreamLink(
                source=self.source,
                name=name,
                url=url,
                referer=referer,
                quality=quality,
                media_type=media_type,
            )
        except ValueError as e:
            logger.debug(f"Dropping invalid link {url}: {e}")
            return
        sink.emit(link)

    async def _expand_playlist(
        self,
        sink: LinkSink,
        url: str,
        name: str,
        referer: str,
        quality: Quality
    ) -> None:
        """Emit one link per master-playlist variant, or the playlist itself."""
        try:
            content = await self.client.fetch_text(url, referer=referer)
        except NetworkError as e:
            logger.debug(f"Playlist {url} unavailable ({e}), emitting it as is")
            self._send(sink, url, name, referer, quality, MediaType.M3U8)
            return

        if not is_master_playlist(content):
            self._send(sink, url, name, referer, quality, MediaType.M3U8)
            return

        variants = parse_master_playlist(content, url)
        if not variants:
            self._send(sink, url, name, referer, quality, MediaType.M3U8)
            return

        for variant in variants:
            if not sink.claim(variant.url):
                continue
            variant_name = f"{name} {variant.quality.value}" if variant.quality != Quality.UNKNOWN else name
            self._send(sink, variant.url, variant_name, referer, variant.quality, MediaType.M3U8)

    # Strategies

    async def from_video_tags(self, parser: HTMLParser, page_url: str, sink: LinkSink) -> None:
        """Direct <video>/<source> elements and their subtitle tracks."""
        for element in parser.soup.select("video[src], video source[src]"):
            src = get_attr(element, 'src')
            if not src:
                continue
            quality = self._element_quality(element)
            await self._offer(sink, src, self.source, page_url, quality)

        for track in parser.soup.select("video track[src]"):
            if get_attr(track, 'kind').lower() not in SUBTITLE_KINDS:
                continue
            url = URLHelper.fix_url(get_attr(track, 'src'), self.origin)
            if not url:
                continue
            lang = get_attr(track, 'label') or get_attr(track, 'srclang') or "Unknown"
            try:
                sink.emit_subtitle(SubtitleFile(lang=lang, url=url))
            except ValueError as e:
                logger.debug(f"Dropping invalid subtitle {url}: {e}")

    @staticmethod
    def _element_quality(element: Tag) -> Quality:
        for attr in QUALITY_ATTRIBUTES:
            quality = QualityExtractor.classify(get_attr(element, attr))
            if quality != Quality.UNKNOWN:
                return quality
        return Quality.UNKNOWN

    async def from_iframes(self, parser: HTMLParser, page_url: str, sink: LinkSink) -> None:
        """
        Embedded players.

        Each iframe is fetched with the episode page as referer and searched
        like the page itself; an iframe that cannot be fetched is offered as
        a player link of unknown quality.
        """
        for iframe in parser.soup.select("iframe[src]"):
            iframe_url = URLHelper.fix_url(get_attr(iframe, 'src'), self.origin)
            if not iframe_url or any(skip in iframe_url.lower() for skip in SKIPPED_IFRAMES):
                continue

            try:
                html = await self.client.fetch_text(iframe_url, referer=page_url)
            except NetworkError as e:
                logger.debug(f"Iframe {iframe_url} unavailable ({e}), offering the player itself")
                await self._offer(sink, iframe_url, f"{self.source} Player", page_url, guess_quality=False)
                continue

            embedded = HTMLParser(html, self.origin)
            await self.from_video_tags(embedded, iframe_url, sink)
            await self.from_scripts(embedded, iframe_url, sink)

    async def from_file_hosts(self, parser: HTMLParser, page_url: str, sink: LinkSink) -> None:
        """Download anchors pointing at known file hosts."""
        for anchor in parser.soup.select("a[href]"):
            href = get_attr(anchor, 'href')
            lowered = href.lower()
            service = next(
                (label for marker, label in self.config.file_hosts.items() if marker in lowered),
                None
            )
            if service is None or not URLHelper.has_scheme(href):
                continue

            text = anchor.get_text(" ", strip=True)
            quality = QualityExtractor.classify(text)
            name = f"{text or service} {quality.label}".strip()
            await self._offer(sink, href, name, page_url, quality)

    async def from_scripts(self, parser: HTMLParser, page_url: str, sink: LinkSink) -> None:
        """URLs assigned to file/url/source/src keys, or bare media URLs, in inline scripts."""
        for script in parser.inline_scripts():
            for url in sweep_script_urls(script):
                await self._offer(sink, url, self.source, page_url)

    async def from_ajax(self, parser: HTMLParser, page_url: str, sink: LinkSink) -> None:
        """
        Ask the site's server-list endpoints for the episode.

        Endpoints are tried in order until one answers.
        """
        episode_id = URLHelper.last_path_segment(page_url)
        if not episode_id:
            return

        payload = {"id": episode_id, "episode": episode_id}
        for endpoint in self.config.ajax_endpoints:
            url = URLHelper.fix_url(endpoint, self.origin)
            try:
                body = await self.client.post_text(url, payload, referer=page_url)
            except NetworkError as e:
                logger.debug(f"AJAX endpoint {url} failed: {e}")
                continue

            for candidate in sweep_script_urls(body):
                await self._offer(sink, candidate, self.source, page_url)
            return


# Export extractor
__all__ = ["LinkExtractor", "LinkSink", "sweep_script_urls"]
