"""
Plugin Manager - Source plugin registry and construction.

This module maps source ids to plugin classes and builds plugin instances
from the per-source blocks of the settings file.
"""

import logging
from typing import Dict, List, Type

from witplux.core.config_manager import ConfigManager
from witplux.core.exceptions import PluginError
from witplux.plugins.base import BasePlugin
from witplux.plugins.witanime import WitAnimePlugin


logger = logging.getLogger(__name__)


AVAILABLE_PLUGINS: Dict[str, Type[BasePlugin]] = {
    "witanime": WitAnimePlugin,
}


class PluginManager:
    """Builds configured source plugins on demand."""

    def __init__(self, config_manager: ConfigManager):
        self.config_manager = config_manager

    def available_sources(self) -> List[str]:
        """Registered source ids enabled in the settings."""
        sources = self.config_manager.settings.sources
        return [
            name for name in AVAILABLE_PLUGINS
            if name not in sources or sources[name].enabled
        ]

    def create_plugin(self, name: str = "witanime") -> BasePlugin:
        """
        Instantiate a source plugin with its configuration block.

        Args:
            name: Source id

        Returns:
            New plugin instance; the caller owns its HTTP session

        Raises:
            PluginError: If the source is unknown, disabled or misconfigured
        """
        plugin_class = AVAILABLE_PLUGINS.get(name)
        if plugin_class is None:
            raise PluginError(
                f"Unknown source '{name}'",
                plugin_name=name,
                details=f"Available: {', '.join(AVAILABLE_PLUGINS)}"
            )

        if name not in self.available_sources():
            raise PluginError(f"Source '{name}' is disabled in the settings", plugin_name=name)

        config = self.config_manager.settings.source_config(name)
        logger.debug(f"Creating plugin {name} with {len(config)} configured keys")
        return plugin_class(config)


# Export plugin manager
__all__ = ["PluginManager", "AVAILABLE_PLUGINS"]
