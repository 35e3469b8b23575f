"""
Plugin Utilities - Common utilities and helpers for plugin development.

This module provides the small, site-independent building blocks of the
scrape-and-extract pipeline: HTML selection helpers, URL normalization,
quality classification, episode-number extraction and the ordered
strategy combinator used for cascading selectors.
"""

import re
import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar
from urllib.parse import urlparse, unquote

from bs4 import BeautifulSoup, Tag

from witplux.core.models import Quality


logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class HTMLParser:
    """Utility class for HTML parsing operations."""

    def __init__(self, html_content: str, base_url: str = ""):
        """
        Initialize HTML parser.

        Args:
            html_content: HTML content to parse
            base_url: Origin used to resolve relative links
        """
        self.soup = BeautifulSoup(html_content, 'html.parser')
        self.base_url = base_url

    @property
    def html(self) -> str:
        """Serialized document, used by patterns that span markup."""
        return str(self.soup)

    def find_text(self, selector: str, default: str = "") -> str:
        """
        Find text content using CSS selector.

        Args:
            selector: CSS selector string
            default: Default value if element not found

        Returns:
            Text content or default value
        """
        element = self.soup.select_one(selector)
        if element:
            return element.get_text(" ", strip=True)
        return default

    def find_all_text(self, selector: str) -> List[str]:
        """Find all non-empty text content matching CSS selector."""
        texts = (elem.get_text(" ", strip=True) for elem in self.soup.select(selector))
        return [text for text in texts if text]

    def inline_scripts(self) -> List[str]:
        """Bodies of <script> tags that carry code rather than a src."""
        return [
            script.string or script.get_text()
            for script in self.soup.find_all('script')
            if not script.get('src')
        ]


def get_attr(element: Tag, attr: str) -> str:
    """Read an attribute as a stripped string (BeautifulSoup may return a list)."""
    value = element.get(attr)
    if isinstance(value, list):
        value = value[0] if value else ""
    return value.strip() if isinstance(value, str) else ""


def first_success(
    strategies: Sequence[Callable[[T], Optional[R]]],
    subject: T,
) -> Optional[R]:
    """
    Try strategies in priority order and return the first non-empty result.

    A strategy that raises is logged and treated as producing nothing.
    """
    for strategy in strategies:
        name = getattr(strategy, "__name__", repr(strategy))
        try:
            result = strategy(subject)
        except Exception as e:
            logger.debug(f"Strategy {name} failed: {e}")
            continue
        if result:
            logger.debug(f"Strategy {name} succeeded")
            return result
    return None


class QualityExtractor:
    """Utility class for classifying video quality from free text or URLs."""

    # Ordered: the first row with a matching marker wins.
    QUALITY_TABLE: Tuple[Tuple[Quality, Tuple[str, ...]], ...] = (
        (Quality.P1080, ("1080", "fhd", "full hd", "خارقة")),
        (Quality.P720, ("720", "hd", "عالية")),
        (Quality.P480, ("480", "sd", "متوسطة")),
        (Quality.P360, ("360",)),
        (Quality.P240, ("240",)),
    )

    @classmethod
    def classify(cls, text: Optional[str]) -> Quality:
        """
        Classify text into a quality tier.

        Args:
            text: Link text, attribute value or raw URL

        Returns:
            Detected quality, Quality.UNKNOWN when nothing matches
        """
        if not text:
            return Quality.UNKNOWN

        text_lower = text.lower()
        for quality, markers in cls.QUALITY_TABLE:
            if any(marker in text_lower for marker in markers):
                return quality

        return Quality.UNKNOWN

    @classmethod
    def extract_from_url(cls, url: str) -> Quality:
        """Classify a URL, decoding percent-escapes first."""
        return cls.classify(unquote(url))

    @classmethod
    def from_resolution(cls, resolution: str) -> Quality:
        """Convert an HLS RESOLUTION value such as '1280x720' to a tier."""
        match = re.match(r'\s*(\d+)\s*[xX]\s*(\d+)', resolution or "")
        if not match:
            return Quality.UNKNOWN
        return Quality.from_height(int(match.group(2)))


class URLHelper:
    """Utility class for URL manipulation."""

    @staticmethod
    def has_scheme(url: str) -> bool:
        return url.lower().startswith(('http://', 'https://'))

    @staticmethod
    def fix_url(url: Optional[str], origin: str) -> str:
        """
        Resolve a scraped link against the site origin.

        Rules, in order: empty stays empty; http(s) links are returned
        unchanged; '//host/x' gets 'https:'; '/x' gets the origin;
        anything else is joined to the origin with a slash.
        """
        if not url:
            return ""

        url = url.strip()
        origin = origin.rstrip('/')

        if not url:
            return ""
        if URLHelper.has_scheme(url):
            return url
        if url.startswith('//'):
            return f"https:{url}"
        if url.startswith('/'):
            return f"{origin}{url}"
        return f"{origin}/{url}"

    @staticmethod
    def is_origin(url: str, origin: str) -> bool:
        """Check whether url points at the site root itself."""
        return url.rstrip('/') == origin.rstrip('/')

    @staticmethod
    def last_path_segment(url: str) -> str:
        """Last non-empty path segment of a URL."""
        segments = [part for part in urlparse(url).path.split('/') if part]
        return segments[-1] if segments else ""

    @staticmethod
    def slug_after(url: str, marker: str) -> Optional[str]:
        """
        Path segment that follows a marker such as '/anime/'.

        Returns None when the marker is absent or nothing follows it.
        """
        if marker not in url:
            return None
        slug = url.rsplit(marker, 1)[1].split('?', 1)[0].strip('/')
        return slug or None


_NUMBER = r'(\d+(?:\.\d+)?)'


class TextCleaner:
    """Utility class for cleaning text and extracting numbers from it."""

    # Priority list: the bare-number pattern must stay last or it would
    # shadow every more specific pattern above it.
    EPISODE_NUMBER_PATTERNS: Tuple[re.Pattern, ...] = tuple(
        re.compile(pattern, re.IGNORECASE)
        for pattern in (
            rf'الحلقة[\s\-]*{_NUMBER}',
            rf'حلقة[\s\-]*{_NUMBER}',
            rf'Episode[\s\-]*{_NUMBER}',
            rf'الأونا[\s\-]*{_NUMBER}',
            rf'EP[\s\-]*{_NUMBER}',
            rf'الحلقة\s*الخاصة\s*{_NUMBER}',
            rf'ep-{_NUMBER}/?$',
            rf'episode-{_NUMBER}/?$',
            rf'الحلقة-{_NUMBER}/?$',
            rf'[/\-]{_NUMBER}/?$',
            rf'\b{_NUMBER}\b',
        )
    )

    MAX_EPISODE_NUMBER = 10000

    @staticmethod
    def clean_text(text: Optional[str]) -> str:
        """Collapse whitespace."""
        if not text:
            return ""
        return re.sub(r'\s+', ' ', text).strip()

    @classmethod
    def extract_episode_number(cls, text: Optional[str]) -> Optional[float]:
        """
        Extract an episode number from a title or URL.

        The first pattern that matches decides; its value is accepted only
        when it lies strictly between 0 and 10000.

        Args:
            text: Text containing episode information

        Returns:
            Episode number or None if not found or out of range
        """
        if not text:
            return None

        text = unquote(text)

        for pattern in cls.EPISODE_NUMBER_PATTERNS:
            match = pattern.search(text)
            if match:
                try:
                    value = float(match.group(1))
                except ValueError:
                    return None
                if 0 < value < cls.MAX_EPISODE_NUMBER:
                    return value
                return None

        return None


def dedupe_by(items: Iterable[T], key: Callable[[T], object]) -> List[T]:
    """Keep the first item for each key, preserving order."""
    seen = set()
    result = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result


# Export utility classes and functions
__all__ = [
    "HTMLParser",
    "QualityExtractor",
    "URLHelper",
    "TextCleaner",
    "get_attr",
    "first_success",
    "dedupe_by",
]
