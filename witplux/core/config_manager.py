"""
Configuration Manager - JSON-based settings loading.

This module loads the WitPlux settings file, creating it with defaults on
first use, and validates it against the configuration schemas.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from witplux.core.config_schemas import AppSettings
from witplux.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "witplux.json"


class ConfigManager:
    """
    Loads application settings from a JSON file.

    A missing file is created with default settings. A file that cannot be
    parsed or does not match the schema raises ConfigurationError instead of
    being silently replaced.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Path of the settings file.
                         Defaults to './witplux.json' if not specified.
        """
        self.config_path = Path(config_path or DEFAULT_CONFIG_FILE)
        self._settings = self._load_settings()

    @property
    def settings(self) -> AppSettings:
        """Get the loaded application settings."""
        return self._settings

    def _load_settings(self) -> AppSettings:
        """Load and validate application settings."""
        if not self.config_path.exists():
            logger.info(f"Settings file {self.config_path} not found, creating default configuration")
            settings = AppSettings()
            self.save(settings)
            return settings

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            settings = AppSettings.model_validate(data)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Settings file is not valid JSON: {e}",
                config_path=str(self.config_path),
                details=str(e)
            )
        except ValidationError as e:
            raise ConfigurationError(
                "Settings file does not match the expected schema",
                config_path=str(self.config_path),
                details=e.errors()
            )

        logger.debug(f"Configuration loaded from {self.config_path}")
        return settings

    def save(self, settings: AppSettings) -> None:
        """Write settings to the configuration file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(settings.model_dump(mode='json'), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to write settings file: {e}",
                config_path=str(self.config_path)
            )


# Export configuration manager
__all__ = ["ConfigManager", "DEFAULT_CONFIG_FILE"]
