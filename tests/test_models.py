"""
Tests for witplux.core.models

Coverage:
- Quality tiers, heights and labels
- URL and title validation on catalog entries and links
- Episode number formatting
- Section paging URLs
"""

import pytest
from pydantic import ValidationError

from witplux.core.models import (
    CatalogEntry,
    Episode,
    MainPageSection,
    MediaType,
    Quality,
    ShowDetail,
    StreamLink,
    format_episode_number,
)


class TestQuality:
    """Test the Quality enum."""

    @pytest.mark.parametrize("height,expected", [
        (None, Quality.UNKNOWN),
        (0, Quality.UNKNOWN),
        (144, Quality.P240),
        (360, Quality.P360),
        (480, Quality.P480),
        (576, Quality.P720),
        (720, Quality.P720),
        (1080, Quality.P1080),
        (2160, Quality.P1080),
    ])
    def test_from_height(self, height, expected):
        """Should round up to the nearest tier."""
        assert Quality.from_height(height) == expected

    def test_height_and_label(self):
        """Should expose pixel height and short label."""
        assert Quality.P1080.height == 1080
        assert Quality.UNKNOWN.height == 0
        assert Quality.P1080.label == "FHD"
        assert Quality.P720.label == "HD"
        assert Quality.P480.label == "SD"
        assert Quality.P360.label == ""


class TestCatalogEntry:
    """Test CatalogEntry validation."""

    def test_valid_entry(self):
        """Should strip the title."""
        entry = CatalogEntry(title="  Naruto ", url="https://witanime.test/anime/naruto/")
        assert entry.title == "Naruto"

    def test_relative_url_rejected(self):
        """Should require absolute http(s) URLs."""
        with pytest.raises(ValidationError):
            CatalogEntry(title="Naruto", url="/anime/naruto/")

    def test_blank_title_rejected(self):
        """Should reject whitespace-only titles."""
        with pytest.raises(ValidationError):
            CatalogEntry(title="   ", url="https://witanime.test/anime/naruto/")


class TestEpisodeAndLinks:
    """Test Episode, StreamLink and ShowDetail."""

    def test_episode_number_text(self):
        """Should drop '.0' from whole numbers."""
        assert Episode(url="https://witanime.test/e/1/", display_name="e", number=12).number_text == "12"
        assert Episode(url="https://witanime.test/e/1/", display_name="e", number=12.5).number_text == "12.5"
        assert format_episode_number(3.0) == "3"

    def test_episode_number_range(self):
        """Should reject numbers outside the supported range."""
        with pytest.raises(ValidationError):
            Episode(url="https://witanime.test/e/1/", display_name="e", number=10000)

    def test_stream_link(self):
        """Should default to an unknown-quality video link."""
        link = StreamLink(source="WitAnime", name="WitAnime", url="https://cdn.test/a.mp4")

        assert link.quality == Quality.UNKNOWN
        assert link.media_type == MediaType.VIDEO
        assert not link.is_m3u8

    def test_stream_link_requires_absolute_url(self):
        """Should reject relative link URLs."""
        with pytest.raises(ValidationError):
            StreamLink(source="WitAnime", name="x", url="//cdn.test/a.mp4")

    def test_show_year_range(self):
        """Should reject implausible years."""
        with pytest.raises(ValidationError):
            ShowDetail(title="X", url="https://witanime.test/anime/x/", year=1800)


class TestMainPageSection:
    """Test MainPageSection.page_url."""

    def test_first_page_unchanged(self):
        """Should use the section URL for page 1."""
        section = MainPageSection(label="TV", url="https://witanime.test/anime-type/tv/")
        assert section.page_url(1) == "https://witanime.test/anime-type/tv/"

    def test_later_pages(self):
        """Should append page/N/ with exactly one slash."""
        with_slash = MainPageSection(label="TV", url="https://witanime.test/anime-type/tv/")
        without_slash = MainPageSection(label="TV", url="https://witanime.test/anime-type/tv")

        assert with_slash.page_url(3) == "https://witanime.test/anime-type/tv/page/3/"
        assert without_slash.page_url(3) == "https://witanime.test/anime-type/tv/page/3/"
