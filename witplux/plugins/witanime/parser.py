"""
WitAnime Parser - HTML parsing utilities for witanime pages.

This module turns fetched witanime pages into catalog entries, detail
fields and episode lists. Every lookup is a cascade of selectors the site
has used over time, tried in order until one produces something.
"""

import re
import base64
import binascii
import logging
from typing import Any, Dict, List, Optional

from bs4 import Tag

from witplux.core.models import CatalogEntry, ContentKind, Episode, format_episode_number
from witplux.plugins.common import (
    HTMLParser,
    TextCleaner,
    URLHelper,
    dedupe_by,
    first_success,
    get_attr,
)


logger = logging.getLogger(__name__)


LISTING_CONTAINERS = (
    "div.anime-card-container",
    "div.anime-card-themex, article.anime-card, div.anime-list-item",
)
TITLE_ANCHORS = ("h3 a", "div.anime-card-title a", "h2 a", "a[title]")
POSTER_ATTRIBUTES = ("data-src", "src", "data-lazy-src", "data-original")
PLACEHOLDER_MARKERS = ("placeholder", "default", "blank", "lazy", "data:image")

DETAIL_TITLES = ("h1.anime-details-title", ".anime-details-title", ".anime-info h1", "h1")
DETAIL_POSTERS = ("div.anime-thumbnail img", "div.anime-image img", ".anime-poster img")
DETAIL_SYNOPSIS = ("p.anime-story", "div.anime-story", "div.anime-description", ".synopsis", ".anime-summary")
DETAIL_GENRES = "ul.anime-genres a, div.anime-genres a, .genres a, .anime-info a[href*='genre']"

EPISODE_CONTAINERS = "div.episodes-list-container, div.episode-list, div.anime-episodes-list, ul.episodes"
EPISODE_PAGE_ITEMS = "div.episodes-card-container, .episode-item"

OPEN_EPISODE_RE = re.compile(r"openEpisode\('([^']+)'\)")
EPISODE_TITLE_RE = re.compile(r">الحلقة\s+(\d+(?:\.\d+)?)")
BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
YEAR_RE = re.compile(r"\b((?:19|20)\d{2})\b")

MOVIE_MARKERS = ("movie", "فيلم")
SHORT_FORM_RE = re.compile(r"\b(ova|ona)\b", re.IGNORECASE)


def episode_name(number: float) -> str:
    return f"الحلقة {format_episode_number(number)}"


def decode_episode_token(token: str) -> str:
    """
    Decode an openEpisode() argument.

    The argument is base64 only when it uses the base64 alphabet and its
    length is a multiple of four; anything else, or anything that fails to
    decode as UTF-8, is taken literally.
    """
    if token and len(token) % 4 == 0 and BASE64_RE.match(token):
        try:
            return base64.b64decode(token, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError):
            logger.debug(f"Token {token!r} looked like base64 but did not decode")
    return token


def classify_kind(type_text: str, url: str, title: str = "") -> ContentKind:
    """
    Classify an entry from its type label, URL and title.

    Movie markers take priority over OVA/ONA markers.
    """
    type_text = type_text.lower()
    url_lower = url.lower()
    title_lower = title.lower()

    is_movie = (
        any(marker in type_text for marker in MOVIE_MARKERS)
        or any(marker in title_lower for marker in MOVIE_MARKERS)
        or "/movie/" in url_lower
        or "film" in url_lower
    )
    if is_movie:
        return ContentKind.MOVIE

    is_short_form = (
        "ova" in type_text
        or "ona" in type_text
        or "/ova/" in url_lower
        or "/ona/" in url_lower
        or bool(SHORT_FORM_RE.search(title))
    )
    if is_short_form:
        return ContentKind.SHORT_FORM

    return ContentKind.SERIES


class WitAnimeParser:
    """Specialized parser for witanime content."""

    def __init__(self, html_content: str, base_url: str):
        """
        Initialize WitAnime parser.

        Args:
            html_content: HTML content to parse
            base_url: Site origin for resolving relative links
        """
        self.parser = HTMLParser(html_content, base_url)
        self.base_url = base_url.rstrip('/')

    @property
    def soup(self):
        return self.parser.soup

    def fix_url(self, url: Optional[str]) -> str:
        return URLHelper.fix_url(url, self.base_url)

    # Listings

    def parse_listing(self) -> List[CatalogEntry]:
        """
        Parse catalog cards from a listing or search page.

        Returns:
            Entries in document order, de-duplicated by URL
        """
        containers = first_success(
            [self._containers_for(selector) for selector in LISTING_CONTAINERS],
            self.soup,
        ) or []

        entries = []
        for container in containers:
            try:
                entry = self._parse_card(container)
            except Exception as e:
                logger.debug(f"Skipping malformed card: {e}")
                continue
            if entry:
                entries.append(entry)

        return dedupe_by(entries, lambda entry: entry.url)

    @staticmethod
    def _containers_for(selector: str):
        def select_containers(soup) -> List[Tag]:
            return soup.select(selector)
        select_containers.__name__ = f"containers[{selector}]"
        return select_containers

    def _parse_card(self, card: Tag) -> Optional[CatalogEntry]:
        anchor = self._title_anchor(card)
        if anchor is None:
            return None

        title = TextCleaner.clean_text(anchor.get_text(" ", strip=True)) or get_attr(anchor, 'title')
        href = get_attr(anchor, 'href')
        if not title or not href:
            return None

        url = self.fix_url(href)
        if URLHelper.is_origin(url, self.base_url):
            return None

        type_text = " ".join(
            elem.get_text(" ", strip=True) for elem in card.select("div.anime-card-type a, div.anime-card-type")
        )

        return CatalogEntry(
            title=title,
            url=url,
            poster_url=self.poster_from(card),
            kind=classify_kind(type_text, url, title),
        )

    @staticmethod
    def _title_anchor(card: Tag) -> Optional[Tag]:
        for selector in TITLE_ANCHORS:
            anchor = card.select_one(selector)
            if anchor is not None and (anchor.get_text(strip=True) or get_attr(anchor, 'title')):
                return anchor
        return None

    def poster_from(self, element: Tag) -> Optional[str]:
        """First usable image attribute inside element, skipping placeholders."""
        images = [element] if element.name == "img" else element.select("img")
        for img in images:
            for attr in POSTER_ATTRIBUTES:
                value = get_attr(img, attr)
                if not value:
                    continue
                if any(marker in value.lower() for marker in PLACEHOLDER_MARKERS):
                    continue
                return self.fix_url(value)
        return None

    def parse_episode_cards(self) -> List[CatalogEntry]:
        """
        Parse the homepage "latest episodes" cards into their shows.

        Returns:
            Series entries for the shows the cards belong to
        """
        entries = []

        for card in self.soup.select("div.episodes-card-container"):
            episode_link = card.select_one("a[href*='/episode/']")
            anime_link = card.select_one("div.ep-card-anime-title a")
            if episode_link is None or anime_link is None:
                continue

            title = TextCleaner.clean_text(anime_link.get_text(" ", strip=True))
            href = get_attr(anime_link, 'href')
            if not title or not href:
                continue

            url = self.fix_url(href)
            if URLHelper.is_origin(url, self.base_url):
                continue

            try:
                entries.append(CatalogEntry(
                    title=title,
                    url=url,
                    poster_url=self.poster_from(card),
                    kind=ContentKind.SERIES,
                ))
            except ValueError as e:
                logger.debug(f"Skipping episode card for {title!r}: {e}")

        return dedupe_by(entries, lambda entry: entry.url)

    def has_next_page(self) -> bool:
        """Whether the listing links to a following page."""
        if self.soup.select_one("a.next.page-numbers"):
            return True
        return any(
            "الصفحة التالية" in anchor.get_text() or "Next" in anchor.get_text()
            for anchor in self.soup.find_all('a')
        )

    # Detail page

    def parse_title(self) -> Optional[str]:
        for selector in DETAIL_TITLES:
            title = self.parser.find_text(selector)
            if title:
                return title
        return None

    def parse_anime_details(self, url: str) -> Dict[str, Any]:
        """
        Parse the fields of a show's detail page.

        Returns:
            Dictionary with title (None when absent), poster_url, year, plot,
            tags and kind
        """
        title = self.parse_title()

        poster = None
        for selector in DETAIL_POSTERS:
            element = self.soup.select_one(selector)
            if element is not None:
                poster = self.poster_from(element)
                if poster:
                    break

        plot = None
        for selector in DETAIL_SYNOPSIS:
            plot = self.parser.find_text(selector)
            if plot:
                break

        tags = list(dict.fromkeys(self.parser.find_all_text(DETAIL_GENRES)))

        return {
            'title': title,
            'poster_url': poster,
            'year': self._parse_year(),
            'plot': plot or None,
            'tags': tags,
            'kind': classify_kind(self._type_text(), url, title or ""),
        }

    def _type_text(self) -> str:
        parts = []
        for box in self.soup.select("div.anime-info, div.anime-info-box"):
            if "النوع" in box.get_text():
                parts.extend(a.get_text(" ", strip=True) for a in box.select("a"))
        parts.extend(self.parser.find_all_text(".anime-type a"))
        return " ".join(parts)

    def _parse_year(self) -> Optional[int]:
        info = self.soup.select_one("div.anime-info-container")
        text = (info or self.soup).get_text(" ")
        match = YEAR_RE.search(text)
        return int(match.group(1)) if match else None

    # Episodes found on the page itself

    def parse_script_episodes(self) -> List[Episode]:
        """
        Episodes announced through openEpisode('...') calls in inline scripts.

        Numbers come from 'الحلقة N' headings in the document, paired by
        position; a missing number falls back to the 1-based position.
        """
        tokens: List[str] = []
        for script in self.parser.inline_scripts():
            if "openEpisode(" in script:
                tokens.extend(OPEN_EPISODE_RE.findall(script))

        if not tokens:
            return []

        numbers = []
        for match in EPISODE_TITLE_RE.finditer(self.parser.html):
            try:
                numbers.append(float(match.group(1)))
            except ValueError:
                numbers.append(0.0)

        episodes = []
        for index, token in enumerate(tokens):
            number = numbers[index] if index < len(numbers) else 0.0
            if not 0 < number < TextCleaner.MAX_EPISODE_NUMBER:
                number = float(index + 1)

            url = self.fix_url(decode_episode_token(token))
            if not url:
                continue

            episodes.append(Episode(url=url, display_name=episode_name(number), number=number))

        return episodes

    def parse_container_episodes(self) -> List[Episode]:
        """Episode anchors inside the show page's episode list container."""
        container = self.soup.select_one(EPISODE_CONTAINERS)
        if container is None:
            return []

        episodes: List[Episode] = []
        for anchor in container.select("a[href*='/episode/']"):
            href = get_attr(anchor, 'href')
            if not href:
                continue

            text = TextCleaner.clean_text(anchor.get_text(" ", strip=True))
            number = (
                TextCleaner.extract_episode_number(text)
                or TextCleaner.extract_episode_number(href)
                or float(len(episodes) + 1)
            )
            episodes.append(Episode(
                url=self.fix_url(href),
                display_name=text or episode_name(number),
                number=number,
            ))

        return episodes

    def parse_episode_page_items(self) -> List[Episode]:
        """Episode cards on the dedicated '<slug>-episodes' listing page."""
        episodes: List[Episode] = []

        for item in self.soup.select(EPISODE_PAGE_ITEMS):
            anchor = item.select_one("a[href*='/episode/']")
            if anchor is None:
                continue
            href = get_attr(anchor, 'href')
            if not href:
                continue

            title_elem = item.select_one("h3, .episode-title")
            title = TextCleaner.clean_text(title_elem.get_text(" ", strip=True)) if title_elem else ""
            number = (
                TextCleaner.extract_episode_number(title)
                or TextCleaner.extract_episode_number(href)
                or float(len(episodes) + 1)
            )
            episodes.append(Episode(
                url=self.fix_url(href),
                display_name=title or "حلقة",
                number=number,
            ))

        return episodes


# Export parser class
__all__ = ["WitAnimeParser", "classify_kind", "decode_episode_token", "episode_name"]
