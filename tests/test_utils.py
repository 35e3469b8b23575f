"""
Tests for witplux.plugins.common.utils

Coverage:
- URL normalization against the site origin
- Quality classification from text, URLs and HLS resolutions
- Episode number extraction priority and range policy
- Strategy and de-duplication helpers
"""

import pytest

from witplux.core.models import Quality
from witplux.plugins.common import (
    HTMLParser,
    QualityExtractor,
    TextCleaner,
    URLHelper,
    dedupe_by,
    first_success,
    get_attr,
)


ORIGIN = "https://witanime.test"


class TestFixUrl:
    """Test URLHelper.fix_url."""

    def test_empty_stays_empty(self):
        """Should return empty string for empty or missing input."""
        assert URLHelper.fix_url("", ORIGIN) == ""
        assert URLHelper.fix_url(None, ORIGIN) == ""
        assert URLHelper.fix_url("   ", ORIGIN) == ""

    def test_absolute_unchanged(self):
        """Should leave http(s) URLs untouched."""
        assert URLHelper.fix_url("https://cdn.test/a.mp4", ORIGIN) == "https://cdn.test/a.mp4"
        assert URLHelper.fix_url("http://cdn.test/a.mp4", ORIGIN) == "http://cdn.test/a.mp4"

    def test_protocol_relative_gets_https(self):
        """Should prefix protocol-relative URLs with https."""
        assert URLHelper.fix_url("//cdn.test/a.mp4", ORIGIN) == "https://cdn.test/a.mp4"

    def test_root_relative_joined_to_origin(self):
        """Should prefix root-relative paths with the origin."""
        assert URLHelper.fix_url("/anime/x/", ORIGIN) == f"{ORIGIN}/anime/x/"

    def test_bare_relative_joined_with_slash(self):
        """Should join bare relative paths with a slash."""
        assert URLHelper.fix_url("anime/x/", ORIGIN) == f"{ORIGIN}/anime/x/"

    def test_origin_trailing_slash_ignored(self):
        """Should not double the slash when the origin ends with one."""
        assert URLHelper.fix_url("/anime/x/", ORIGIN + "/") == f"{ORIGIN}/anime/x/"

    @pytest.mark.parametrize("raw", ["/a", "a", "//h/a", "https://h/a", "http://h/a"])
    def test_results_always_have_scheme(self, raw):
        """Should always produce a URL with a scheme for non-empty input."""
        fixed = URLHelper.fix_url(raw, ORIGIN)
        assert fixed.startswith(("http://", "https://"))
        assert not fixed.startswith(("/", "//"))


class TestUrlHelpers:
    """Test the smaller URLHelper functions."""

    def test_is_origin(self):
        """Should match the origin with or without trailing slash."""
        assert URLHelper.is_origin(ORIGIN, ORIGIN)
        assert URLHelper.is_origin(ORIGIN + "/", ORIGIN)
        assert not URLHelper.is_origin(ORIGIN + "/anime/x/", ORIGIN)

    def test_slug_after_marker(self):
        """Should return the path after the marker without slashes."""
        assert URLHelper.slug_after(f"{ORIGIN}/anime/sousou-no-frieren/", "/anime/") == "sousou-no-frieren"

    def test_slug_missing_marker(self):
        """Should return None when the marker is absent."""
        assert URLHelper.slug_after(f"{ORIGIN}/episode/x/", "/anime/") is None
        assert URLHelper.slug_after(f"{ORIGIN}/anime/", "/anime/") is None

    def test_last_path_segment(self):
        """Should ignore the trailing slash."""
        assert URLHelper.last_path_segment(f"{ORIGIN}/episode/frieren-episode-1/") == "frieren-episode-1"
        assert URLHelper.last_path_segment(ORIGIN) == ""


class TestQualityExtractor:
    """Test QualityExtractor classification."""

    @pytest.mark.parametrize("text,expected", [
        ("1080p", Quality.P1080),
        ("Full HD", Quality.P1080),
        ("جودة خارقة", Quality.P1080),
        ("720p", Quality.P720),
        ("HD", Quality.P720),
        ("جودة عالية", Quality.P720),
        ("480p", Quality.P480),
        ("SD", Quality.P480),
        ("جودة متوسطة", Quality.P480),
        ("360p", Quality.P360),
        ("240p", Quality.P240),
        ("mystery", Quality.UNKNOWN),
        ("", Quality.UNKNOWN),
        (None, Quality.UNKNOWN),
    ])
    def test_classify(self, text, expected):
        """Should map markers to the right tier."""
        assert QualityExtractor.classify(text) == expected

    def test_highest_tier_wins(self):
        """Should prefer 1080 when both 1080 and 720 appear."""
        assert QualityExtractor.classify("720 / 1080") == Quality.P1080

    def test_url_is_unquoted(self):
        """Should classify percent-encoded Arabic markers in URLs."""
        url = "https://cdn.test/%D8%B9%D8%A7%D9%84%D9%8A%D8%A9/ep1.mp4"
        assert QualityExtractor.extract_from_url(url) == Quality.P720

    @pytest.mark.parametrize("resolution,expected", [
        ("1920x1080", Quality.P1080),
        ("1280x720", Quality.P720),
        ("854x480", Quality.P480),
        ("640x360", Quality.P360),
        ("garbage", Quality.UNKNOWN),
    ])
    def test_from_resolution(self, resolution, expected):
        """Should use the height of an HLS RESOLUTION value."""
        assert QualityExtractor.from_resolution(resolution) == expected


class TestEpisodeNumber:
    """Test TextCleaner.extract_episode_number."""

    @pytest.mark.parametrize("text,expected", [
        ("الحلقة 12", 12),
        ("الحلقة-3", 3),
        ("حلقة 4", 4),
        ("Episode 5", 5),
        ("episode-7/", 7),
        ("EP 8", 8),
        ("الحلقة 12.5", 12.5),
        ("https://witanime.test/episode/naruto-ep-9/", 9),
        ("https://witanime.test/episode/x-%D8%A7%D9%84%D8%AD%D9%84%D9%82%D8%A9-6/", 6),
        ("just 42 here", 42),
    ])
    def test_extracts(self, text, expected):
        """Should extract the number from titles and URLs."""
        assert TextCleaner.extract_episode_number(text) == expected

    def test_no_numbers(self):
        """Should return None when there is nothing to extract."""
        assert TextCleaner.extract_episode_number("no numbers here") is None
        assert TextCleaner.extract_episode_number("") is None
        assert TextCleaner.extract_episode_number(None) is None

    def test_out_of_range_rejected(self):
        """Should reject values outside 0 < n < 10000."""
        assert TextCleaner.extract_episode_number("12345") is None
        assert TextCleaner.extract_episode_number("الحلقة 0") is None

    def test_first_matching_pattern_decides(self):
        """Should not fall through to later patterns after an out-of-range match."""
        assert TextCleaner.extract_episode_number("الحلقة 20000 then 5") is None

    def test_clean_text(self):
        """Should collapse whitespace."""
        assert TextCleaner.clean_text("  a \n\t b  ") == "a b"


class TestHelpers:
    """Test parsing and strategy helpers."""

    def test_get_attr_handles_lists(self):
        """Should return the first value of multi-valued attributes."""
        soup = HTMLParser('<div class="a b" data-x=" y "></div>').soup
        div = soup.select_one("div")
        assert get_attr(div, "class") == "a"
        assert get_attr(div, "data-x") == "y"
        assert get_attr(div, "missing") == ""

    def test_inline_scripts_skip_src(self):
        """Should only return scripts without src."""
        parser = HTMLParser('<script src="/a.js"></script><script>var a = 1;</script>')
        assert parser.inline_scripts() == ["var a = 1;"]

    def test_first_success_skips_empty_and_raising(self):
        """Should return the first non-empty result, ignoring failures."""
        def empty(_):
            return []

        def broken(_):
            raise RuntimeError("boom")

        def found(subject):
            return [subject]

        assert first_success([empty, broken, found], "x") == ["x"]
        assert first_success([empty, broken], "x") is None

    def test_dedupe_by_keeps_first(self):
        """Should keep the first item per key in order."""
        items = [("a", 1), ("b", 2), ("a", 3)]
        assert dedupe_by(items, lambda item: item[0]) == [("a", 1), ("b", 2)]
