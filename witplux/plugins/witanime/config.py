"""
WitAnime Configuration - Plugin-specific configuration management.

This module holds the immutable configuration value threaded through the
WitAnime plugin, its parser and its extractors: origin, request headers,
timeouts, probing limits and the static main-page sections.
"""

from typing import Any, Dict, List

from pydantic import Field, field_validator

from witplux.core.models import MainPageSection
from witplux.plugins.base import PluginSettings


DEFAULT_MAIN_URL = "https://witanime.uno"

# Relative to main_url; labels are the site's own section titles.
DEFAULT_SECTIONS = [
    ("/", "الأنميات المثبتة"),
    ("/anime-status/%d9%8a%d8%b9%d8%b1%d8%b6-%d8%a7%d9%84%d8%a7%d9%86/", "الأنميات المعروضة حاليا"),
    ("/anime-status/%d9%85%d9%83%d8%aa%d9%85%d9%84/", "الأنميات المكتملة"),
    ("/anime-type/tv/", "أنميات TV"),
    ("/anime-type/movie/", "أفلام الأنمي"),
    ("/anime-type/ova/", "OVA"),
    ("/anime-type/ona/", "ONA"),
]

DEFAULT_FILE_HOSTS = {
    "mediafire": "MediaFire",
    "workupload": "WorkUpload",
    "hexload": "HexLoad",
    "gofile": "GoFile",
    "mega.nz": "Mega",
    "drive.google": "Google Drive",
}

DEFAULT_AJAX_ENDPOINTS = [
    "/wp-admin/admin-ajax.php",
    "/ajax/episode/servers",
    "/api/episode",
]


class WitAnimeConfig(PluginSettings):
    """Configuration model for the WitAnime plugin."""

    main_url: str = Field(DEFAULT_MAIN_URL, description="Site origin")
    name: str = Field("WitAnime", description="Source label attached to links")
    lang: str = Field("ar", description="Content language")
    accept_language: str = Field("ar,en-US;q=0.9,en;q=0.8", description="Accept-Language header")

    episode_probe_limit: int = Field(3, ge=1, le=10, description="Episodes probed per URL template")
    ajax_endpoints: List[str] = Field(default_factory=lambda: list(DEFAULT_AJAX_ENDPOINTS))
    file_hosts: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_FILE_HOSTS))
    sections: List[MainPageSection] = Field(default_factory=list)

    @field_validator('main_url')
    @classmethod
    def validate_main_url(cls, v: str) -> str:
        """Require an http(s) origin and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(('http://', 'https://')):
            raise ValueError("main_url must start with http:// or https://")
        return v.rstrip('/')

    @field_validator('user_agent')
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        if not v or len(v.strip()) < 10:
            raise ValueError("User agent must be a valid browser string")
        return v.strip()

    @property
    def main_sections(self) -> List[MainPageSection]:
        """Configured sections, or the site defaults built on main_url."""
        if self.sections:
            return list(self.sections)
        return [
            MainPageSection(label=label, url=f"{self.main_url}{path}")
            for path, label in DEFAULT_SECTIONS
        ]

    def headers(self) -> Dict[str, str]:
        """Browser-like header set the site expects."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
            "Accept-Language": self.accept_language,
            "Referer": f"{self.main_url}/",
            "DNT": "1",
            "Connection": "keep-alive",
            "Upgrade-Insecure-Requests": "1",
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "same-origin",
            "Cache-Control": "max-age=0",
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump(mode='json')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WitAnimeConfig':
        """Create configuration from dictionary."""
        return cls.model_validate(data)


def get_default_config() -> Dict[str, Any]:
    """Get default configuration for the WitAnime plugin."""
    return WitAnimeConfig().to_dict()


def validate_config(config: Dict[str, Any]) -> WitAnimeConfig:
    """
    Validate a raw configuration block.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return WitAnimeConfig.from_dict(config)
    except Exception as e:
        raise ValueError(f"Invalid WitAnime plugin configuration: {e}")


# Export configuration utilities
__all__ = ["WitAnimeConfig", "get_default_config", "validate_config", "DEFAULT_MAIN_URL"]
