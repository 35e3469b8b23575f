"""
HLS Playlist Helpers - Parsing of adaptive-manifest (m3u8) playlists.

A master playlist does not describe one stream but a ladder of variant
streams. These helpers split a master playlist into its variants so each can
be offered as a separate link.
"""

import re
import logging
from typing import List, NamedTuple, Optional
from urllib.parse import urljoin

from witplux.core.models import Quality
from witplux.plugins.common.utils import QualityExtractor


logger = logging.getLogger(__name__)

STREAM_INF = "#EXT-X-STREAM-INF"


class PlaylistVariant(NamedTuple):
    """One entry of a master playlist's resolution ladder."""

    url: str
    quality: Quality
    bandwidth: Optional[int] = None
    resolution: Optional[str] = None


def is_m3u8_url(url: str) -> bool:
    return ".m3u8" in url.lower()


def is_master_playlist(content: str) -> bool:
    """Check whether playlist text lists variant streams."""
    return STREAM_INF in content


def parse_master_playlist(content: str, playlist_url: str) -> List[PlaylistVariant]:
    """
    Parse the variant streams of a master playlist.

    Args:
        content: Playlist text
        playlist_url: URL the playlist was fetched from, for relative URIs

    Returns:
        Variants in playlist order; empty when the text is not a master playlist
    """
    variants = []
    lines = [line.strip() for line in content.splitlines()]

    for i, line in enumerate(lines):
        if not line.startswith(STREAM_INF):
            continue

        resolution_match = re.search(r'RESOLUTION=(\d+x\d+)', line, re.IGNORECASE)
        bandwidth_match = re.search(r'(?<!AVERAGE-)BANDWIDTH=(\d+)', line, re.IGNORECASE)
        resolution = resolution_match.group(1) if resolution_match else None

        uri = next(
            (candidate for candidate in lines[i + 1:] if candidate and not candidate.startswith('#')),
            None
        )
        if not uri:
            logger.debug(f"Variant without URI at line {i + 1} of {playlist_url}")
            continue

        if resolution:
            quality = QualityExtractor.from_resolution(resolution)
        else:
            quality = QualityExtractor.extract_from_url(uri)

        variants.append(PlaylistVariant(
            url=urljoin(playlist_url, uri),
            quality=quality,
            bandwidth=int(bandwidth_match.group(1)) if bandwidth_match else None,
            resolution=resolution,
        ))

    return variants


# Export playlist helpers
__all__ = [
    "PlaylistVariant",
    "is_m3u8_url",
    "is_master_playlist",
    "parse_master_playlist",
]
