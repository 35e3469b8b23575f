"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the structure of the JSON settings file: logging
preferences and per-source configuration blocks. Source blocks are kept as
plain dictionaries here and validated by the owning plugin.
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field, field_validator


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    quiet_libraries: bool = Field(
        default=True,
        description="Reduce aiohttp log noise to warnings"
    )


class SourceConfig(BaseModel):
    """Configuration for an individual source plugin."""

    enabled: bool = Field(
        default=True,
        description="Whether the source is enabled"
    )
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Source-specific configuration"
    )

    @field_validator('config')
    @classmethod
    def validate_config(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Validate the keys every source understands."""
        if 'rate_limit' in v and not isinstance(v['rate_limit'], (int, float)):
            raise ValueError("rate_limit must be a number")

        if 'timeout' in v and (not isinstance(v['timeout'], (int, float)) or v['timeout'] <= 0):
            raise ValueError("timeout must be a positive number")

        return v


class AppSettings(BaseModel):
    """Main application settings container."""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    sources: Dict[str, SourceConfig] = Field(
        default_factory=lambda: {"witanime": SourceConfig()},
        description="Per-source configuration keyed by source id"
    )

    def source_config(self, name: str) -> Dict[str, Any]:
        """Get the raw configuration block for a source (empty if absent)."""
        source = self.sources.get(name)
        return dict(source.config) if source else {}


# Export configuration schemas
__all__ = ["LoggingSettings", "SourceConfig", "AppSettings"]
