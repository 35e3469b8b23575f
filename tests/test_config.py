"""
Tests for configuration handling

Coverage:
- WitAnimeConfig defaults, validation and immutability
- ConfigManager file creation and error reporting
- PluginManager construction from settings blocks
"""

import json

import pytest
from pydantic import ValidationError

from witplux.core.config_manager import ConfigManager
from witplux.core.exceptions import ConfigurationError, PluginError
from witplux.core.models import MainPageSection
from witplux.core.plugin_manager import PluginManager
from witplux.plugins.witanime import WitAnimeConfig, WitAnimePlugin, get_default_config, validate_config


class TestWitAnimeConfig:
    """Test WitAnimeConfig."""

    def test_defaults(self):
        """Should provide working defaults."""
        config = WitAnimeConfig()

        assert config.main_url == "https://witanime.uno"
        assert config.lang == "ar"
        assert config.timeout == 15
        assert config.operation_deadline == 60
        assert config.episode_probe_limit == 3
        assert "mediafire" in config.file_hosts
        assert config.ajax_endpoints[0] == "/wp-admin/admin-ajax.php"

    def test_trailing_slash_removed(self):
        """Should store main_url without a trailing slash."""
        assert WitAnimeConfig(main_url="https://witanime.test/").main_url == "https://witanime.test"

    def test_main_url_scheme_required(self):
        """Should reject non-http origins."""
        with pytest.raises(ValidationError):
            WitAnimeConfig(main_url="witanime.test")

    def test_probe_limit_bounds(self):
        """Should keep the probe limit between 1 and 10."""
        with pytest.raises(ValidationError):
            WitAnimeConfig(episode_probe_limit=0)
        with pytest.raises(ValidationError):
            WitAnimeConfig(episode_probe_limit=11)

    def test_frozen(self):
        """Should not allow mutation after construction."""
        config = WitAnimeConfig()
        with pytest.raises(ValidationError):
            config.timeout = 1

    def test_custom_sections(self):
        """Should prefer configured sections over the defaults."""
        section = MainPageSection(label="Latest", url="https://witanime.test/latest/")
        config = WitAnimeConfig(sections=[section])

        assert config.main_sections == [section]

    def test_round_trip_dict(self):
        """Should rebuild the same configuration from its dictionary."""
        data = get_default_config()
        assert validate_config(data) == WitAnimeConfig()

    def test_validate_config_error(self):
        """Should raise ValueError for invalid blocks."""
        with pytest.raises(ValueError):
            validate_config({"timeout": -1})


class TestConfigManager:
    """Test ConfigManager."""

    def test_creates_default_file(self, tmp_path):
        """Should write a default settings file when none exists."""
        path = tmp_path / "witplux.json"
        manager = ConfigManager(path)

        assert path.exists()
        assert "witanime" in manager.settings.sources
        assert json.loads(path.read_text(encoding="utf-8"))["logging"]["level"] == "INFO"

    def test_reads_source_block(self, tmp_path):
        """Should expose a source's configuration block."""
        path = tmp_path / "witplux.json"
        path.write_text(json.dumps({
            "sources": {"witanime": {"enabled": True, "config": {"main_url": "https://witanime.test"}}}
        }), encoding="utf-8")

        manager = ConfigManager(path)

        assert manager.settings.source_config("witanime") == {"main_url": "https://witanime.test"}
        assert manager.settings.source_config("unknown") == {}

    def test_invalid_json(self, tmp_path):
        """Should raise ConfigurationError for malformed JSON."""
        path = tmp_path / "witplux.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager(path)

        assert exc_info.value.config_path == str(path)

    def test_invalid_schema(self, tmp_path):
        """Should raise ConfigurationError for schema mismatches."""
        path = tmp_path / "witplux.json"
        path.write_text(json.dumps({"logging": {"level": "LOUD"}}), encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigManager(path)


class TestPluginManager:
    """Test PluginManager."""

    def _manager(self, tmp_path, sources):
        path = tmp_path / "witplux.json"
        path.write_text(json.dumps({"sources": sources}), encoding="utf-8")
        return PluginManager(ConfigManager(path))

    def test_create_configured_plugin(self, tmp_path):
        """Should pass the settings block to the plugin."""
        manager = self._manager(tmp_path, {"witanime": {"config": {"main_url": "https://witanime.test/"}}})

        plugin = manager.create_plugin("witanime")

        assert isinstance(plugin, WitAnimePlugin)
        assert plugin.base_url == "https://witanime.test"

    def test_unknown_source(self, tmp_path):
        """Should reject unknown source ids."""
        manager = self._manager(tmp_path, {})

        with pytest.raises(PluginError):
            manager.create_plugin("nowhere")

    def test_disabled_source(self, tmp_path):
        """Should refuse disabled sources."""
        manager = self._manager(tmp_path, {"witanime": {"enabled": False}})

        assert manager.available_sources() == []
        with pytest.raises(PluginError):
            manager.create_plugin("witanime")
