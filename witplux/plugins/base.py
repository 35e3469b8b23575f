"""
Base Plugin Interface - Abstract base class for content provider plugins.

This module defines the interface every provider implements (main page,
search, detail load, link loading) and the shared HTTP layer: one pooled
aiohttp session per plugin, browser-like headers, rate limiting, retries
and a bounded per-request timeout.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urljoin, urlparse

import aiohttp
from pydantic import BaseModel, ConfigDict, Field

from witplux.core.models import (
    CatalogEntry,
    ContentKind,
    MainPageSection,
    PagedListing,
    ShowDetail,
    StreamLink,
    SubtitleFile,
)
from witplux.core.exceptions import NetworkError


logger = logging.getLogger(__name__)

LinkCallback = Callable[[StreamLink], None]
SubtitleCallback = Callable[[SubtitleFile], None]


class PluginMetadata(BaseModel):
    """Metadata information for a plugin."""

    name: str = Field(..., description="Plugin display name")
    version: str = Field(default="1.0.0", description="Plugin version")
    author: str = Field(default="Unknown", description="Plugin author")
    description: str = Field(default="", description="Plugin description")
    website: Optional[str] = Field(None, description="Source website URL")
    lang: str = Field(default="en", description="Content language")
    icon_url: Optional[str] = Field(None, description="Source icon URL")
    supported_kinds: List[ContentKind] = Field(
        default_factory=lambda: [ContentKind.SERIES],
        description="Content kinds the source lists"
    )
    has_main_page: bool = Field(default=True)
    has_download_support: bool = Field(default=False)


class PluginSettings(BaseModel):
    """Request settings shared by every plugin; immutable once built."""

    model_config = ConfigDict(frozen=True)

    user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36",
        description="User agent string for requests"
    )
    timeout: float = Field(15.0, gt=0, le=120, description="Per-request timeout in seconds")
    operation_deadline: float = Field(60.0, gt=0, le=600, description="Overall deadline for one operation")
    max_retries: int = Field(1, ge=0, le=10, description="Retries for page fetches")
    retry_delay: float = Field(1.0, ge=0, le=30, description="Base delay between retries")
    rate_limit: float = Field(0.0, ge=0, le=10, description="Minimum seconds between requests")

    def headers(self) -> Dict[str, str]:
        return {
            'User-Agent': self.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
            'Connection': 'keep-alive',
        }


class BasePlugin(ABC):
    """
    Abstract base class for content provider plugins.

    Subclasses implement the four inbound operations; extractors receive the
    plugin itself as their HTTP client and call fetch_text, post_text and
    probe on it.
    """

    def __init__(self, settings: PluginSettings):
        """
        Initialize the plugin with its settings.

        Args:
            settings: Immutable request settings
        """
        self.settings = settings
        self._session: Optional[aiohttp.ClientSession] = None
        self._last_request_time = 0.0

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata information."""
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Get the origin of the content source, without trailing slash."""
        pass

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the pooled HTTP session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=10,
                limit_per_host=5,
                ttl_dns_cache=300,
                use_dns_cache=True
            )

            timeout = aiohttp.ClientTimeout(total=self.settings.timeout)

            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers=self.settings.headers()
            )

        return self._session

    async def _rate_limit(self) -> None:
        """Enforce rate limiting between requests."""
        if self.settings.rate_limit <= 0:
            return

        current_time = time.monotonic()
        time_since_last = current_time - self._last_request_time

        if time_since_last < self.settings.rate_limit:
            await asyncio.sleep(self.settings.rate_limit - time_since_last)

        self._last_request_time = time.monotonic()

    def _absolute(self, url: str) -> str:
        if not urlparse(url).netloc:
            return urljoin(self.base_url + '/', url)
        return url

    @staticmethod
    def _referer_headers(referer: Optional[str]) -> Dict[str, str]:
        return {'Referer': referer} if referer else {}

    async def fetch_text(self, url: str, referer: Optional[str] = None) -> str:
        """
        GET a page and return its body.

        Args:
            url: URL to fetch (relative URLs resolve against base_url)
            referer: Referer header override

        Returns:
            Response body as text

        Raises:
            NetworkError: On HTTP errors or when all retries fail
        """
        url = self._absolute(url)
        headers = self._referer_headers(referer)
        last_exception: Optional[BaseException] = None

        for attempt in range(self.settings.max_retries + 1):
            await self._rate_limit()
            try:
                self.logger.debug(f"GET {url} (attempt {attempt + 1})")

                async with self.session.get(url, headers=headers) as response:
                    if response.status >= 400:
                        raise NetworkError(
                            f"HTTP {response.status} error for {url}",
                            url=url,
                            status_code=response.status
                        )
                    return await response.text(errors='replace')

            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_exception = e
                self.logger.warning(f"Request failed (attempt {attempt + 1}): {e}")

                if attempt < self.settings.max_retries:
                    await asyncio.sleep(self.settings.retry_delay * (attempt + 1))

        raise NetworkError(
            f"Request failed after {self.settings.max_retries + 1} attempts: {last_exception}",
            url=url,
            details=str(last_exception)
        )

    async def post_text(
        self,
        url: str,
        data: Mapping[str, Any],
        referer: Optional[str] = None
    ) -> str:
        """
        POST form data once and return the body.

        Raises:
            NetworkError: On HTTP errors or transport failures
        """
        url = self._absolute(url)
        headers = {'X-Requested-With': 'XMLHttpRequest', **self._referer_headers(referer)}
        await self._rate_limit()

        try:
            self.logger.debug(f"POST {url}")
            async with self.session.post(url, data=dict(data), headers=headers) as response:
                if response.status >= 400:
                    raise NetworkError(
                        f"HTTP {response.status} error for {url}",
                        url=url,
                        status_code=response.status
                    )
                return await response.text(errors='replace')
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"POST to {url} failed: {e}", url=url, details=str(e))

    async def probe(self, url: str, referer: Optional[str] = None) -> int:
        """
        Request a URL once and report its HTTP status without raising on 4xx/5xx.

        Raises:
            NetworkError: When the request cannot be completed at all
        """
        url = self._absolute(url)
        await self._rate_limit()

        try:
            async with self.session.get(url, headers=self._referer_headers(referer)) as response:
                self.logger.debug(f"Probe {url} -> {response.status}")
                return response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Probe of {url} failed: {e}", url=url, details=str(e))

    @property
    @abstractmethod
    def main_page(self) -> List[MainPageSection]:
        """Static main-page sections."""
        pass

    @abstractmethod
    async def get_main_page(self, page: int, section: MainPageSection) -> PagedListing:
        """
        Get one page of a main-page section.

        Raises:
            NetworkError: If the listing page cannot be fetched
        """
        pass

    @abstractmethod
    async def search(self, query: str) -> List[CatalogEntry]:
        """
        Search the source by title.

        Raises:
            SearchError: If the query is empty
            NetworkError: If the results page cannot be fetched
        """
        pass

    @abstractmethod
    async def load(self, url: str) -> ShowDetail:
        """
        Load a show's detail page.

        Raises:
            LoadError: If the page does not identify a show
        """
        pass

    @abstractmethod
    async def load_links(
        self,
        data: str,
        subtitle_callback: Optional[SubtitleCallback],
        callback: LinkCallback
    ) -> bool:
        """
        Resolve playable links for an episode page, emitting each through callback.

        Returns:
            True if at least one link was emitted
        """
        pass

    async def collect_links(self, data: str) -> List[StreamLink]:
        """Pull-model wrapper around load_links."""
        links: List[StreamLink] = []
        await self.load_links(data, None, links.append)
        return links

    async def cleanup(self) -> None:
        """Clean up resources used by the plugin."""
        if self._session and not self._session.closed:
            try:
                await self._session.close()
                self.logger.debug("HTTP session closed")
            except Exception as e:
                self.logger.debug(f"Error closing HTTP session: {e}")
        self._session = None

    async def __aenter__(self) -> "BasePlugin":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.cleanup()

    def __str__(self) -> str:
        return f"{self.metadata.name} v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.metadata.name}')"


# Export base plugin class and metadata
__all__ = [
    "BasePlugin",
    "PluginMetadata",
    "PluginSettings",
    "LinkCallback",
    "SubtitleCallback",
]
