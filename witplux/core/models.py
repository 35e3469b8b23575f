"""
Core Data Models - Pydantic models for scraped catalog data.

This module defines the value records produced by the scrape-and-extract
pipeline: catalog entries, episodes, stream links, subtitles and the
page-level responses returned to callers. All records are built in a single
pass from a fetched page and never persisted.
"""

from enum import Enum
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


class Quality(str, Enum):
    """Resolution tiers a stream link can be classified into."""

    UNKNOWN = "Unknown"
    P240 = "240p"
    P360 = "360p"
    P480 = "480p"
    P720 = "720p"
    P1080 = "1080p"

    @classmethod
    def from_height(cls, height: Optional[int]) -> "Quality":
        """Convert a pixel height to the nearest tier not below it."""
        if not height or height <= 0:
            return cls.UNKNOWN
        if height <= 240:
            return cls.P240
        elif height <= 360:
            return cls.P360
        elif height <= 480:
            return cls.P480
        elif height <= 720:
            return cls.P720
        else:
            return cls.P1080

    @property
    def height(self) -> int:
        """Get the height in pixels for this quality (0 when unknown)."""
        if self is Quality.UNKNOWN:
            return 0
        return int(self.value.replace('p', ''))

    @property
    def label(self) -> str:
        """Short label used in download link names."""
        return {
            Quality.P1080: "FHD",
            Quality.P720: "HD",
            Quality.P480: "SD",
        }.get(self, "")

    def __str__(self) -> str:
        return self.value


class ContentKind(str, Enum):
    """Kind of catalog entry."""

    SERIES = "anime"
    MOVIE = "movie"
    SHORT_FORM = "ova"


class MediaType(str, Enum):
    """How a stream link is played back."""

    VIDEO = "video"
    M3U8 = "m3u8"


def _require_http_url(v: str) -> str:
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"URL must be absolute http(s): {v!r}")
    return v


class CatalogEntry(BaseModel):
    """
    A single row of a listing page (search results or category browse).

    Within one listing response the url is the de-duplication key.
    """

    title: str = Field(..., min_length=1, description="Show title")
    url: str = Field(..., description="Absolute URL of the show page")
    poster_url: Optional[str] = Field(None, description="Poster image URL")
    kind: ContentKind = Field(ContentKind.SERIES, description="Content kind")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title cannot be blank")
        return v

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure the URL is absolute."""
        return _require_http_url(v)

    def __str__(self) -> str:
        return f"{self.title} ({self.kind.value})"


class Episode(BaseModel):
    """An episode of a show; numbers may be fractional for specials."""

    url: str = Field(..., description="Episode page URL")
    display_name: str = Field(..., description="Name shown to the user")
    number: float = Field(..., ge=0, lt=10000, description="Episode number")

    @property
    def number_text(self) -> str:
        """Episode number without a trailing '.0' for whole numbers."""
        return format_episode_number(self.number)

    def __str__(self) -> str:
        return f"Episode {self.number_text}: {self.display_name}"

    def __repr__(self) -> str:
        return f"Episode(number={self.number_text}, url='{self.url}')"


class StreamLink(BaseModel):
    """A playable stream or download link discovered on an episode page."""

    source: str = Field(..., description="Provider label")
    name: str = Field(..., description="Display name of the link")
    url: str = Field(..., description="Stream or download URL")
    referer: str = Field("", description="Referer required by the host")
    quality: Quality = Field(Quality.UNKNOWN, description="Resolution tier")
    media_type: MediaType = Field(MediaType.VIDEO, description="Progressive video or HLS manifest")

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure the URL is absolute."""
        return _require_http_url(v)

    @property
    def is_m3u8(self) -> bool:
        return self.media_type == MediaType.M3U8

    def __str__(self) -> str:
        return f"{self.name} [{self.quality}] {self.url}"


class SubtitleFile(BaseModel):
    """Subtitle track attached to a video element."""

    lang: str = Field(..., description="Language label")
    url: str = Field(..., description="Subtitle file URL")


class MainPageSection(BaseModel):
    """Static main-page section: a label and the listing URL it browses."""

    label: str = Field(..., min_length=1)
    url: str = Field(..., description="Listing URL; page N>1 appends 'page/N/'")

    def page_url(self, page: int) -> str:
        """Get the listing URL for a given 1-based page number."""
        if page > 1:
            base = self.url if self.url.endswith('/') else self.url + '/'
            return f"{base}page/{page}/"
        return self.url


class PagedListing(BaseModel):
    """One page of a main-page section."""

    section: str
    entries: List[CatalogEntry] = Field(default_factory=list)
    has_next: bool = False


class ShowDetail(BaseModel):
    """
    Detail page of a show.

    Series and OVA carry their episode list; movies carry data_url instead,
    which is the page their links are resolved from.
    """

    title: str = Field(..., min_length=1)
    url: str
    kind: ContentKind = ContentKind.SERIES
    poster_url: Optional[str] = None
    year: Optional[int] = Field(None, ge=1900, le=2100)
    plot: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    episodes: List[Episode] = Field(default_factory=list)
    data_url: Optional[str] = None

    @property
    def is_movie(self) -> bool:
        return self.kind == ContentKind.MOVIE


def format_episode_number(number: float) -> str:
    """Render 12.0 as '12' and 12.5 as '12.5'."""
    if float(number).is_integer():
        return str(int(number))
    return f"{number:g}"


# Type aliases for better code readability
CatalogList = List[CatalogEntry]
EpisodeList = List[Episode]

# Export all models and types
__all__ = [
    "Quality",
    "ContentKind",
    "MediaType",
    "CatalogEntry",
    "Episode",
    "StreamLink",
    "SubtitleFile",
    "MainPageSection",
    "PagedListing",
    "ShowDetail",
    "CatalogList",
    "EpisodeList",
    "format_episode_number",
]
