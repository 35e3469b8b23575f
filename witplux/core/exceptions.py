"""
Core Exceptions - Custom exception classes for WitPlux.

This module defines the exception hierarchy used by the provider and the
command-line front end. Only a missing title on a detail page is treated
as a hard failure; everything else degrades inside the extraction strategies.
"""

from typing import Optional, Any


class WitPluxError(Exception):
    """Base exception class for all WitPlux-specific errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize WitPlux error.

        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(WitPluxError):
    """Raised when configuration-related errors occur."""

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            config_path: Path to the problematic configuration file
            details: Additional error context
        """
        super().__init__(message, details)
        self.config_path = config_path


class PluginError(WitPluxError):
    """Raised when a provider plugin cannot complete an operation."""

    def __init__(self, message: str, plugin_name: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.plugin_name = plugin_name


class LoadError(PluginError):
    """Raised when a detail page lacks the fields needed to identify the show."""

    def __init__(self, message: str, url: Optional[str] = None, plugin_name: Optional[str] = None):
        super().__init__(message, plugin_name=plugin_name, details=url)
        self.url = url


class NetworkError(WitPluxError):
    """Raised when network-related errors occur."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Any] = None):
        """
        Initialize network error.

        Args:
            message: Error description
            url: URL that caused the error
            status_code: HTTP status code if applicable
            details: Additional error context
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class SearchError(WitPluxError):
    """Raised when search-related errors occur."""

    def __init__(self, message: str, query: Optional[str] = None, source: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.query = query
        self.source = source


# Export all exception classes
__all__ = [
    "WitPluxError",
    "ConfigurationError",
    "PluginError",
    "LoadError",
    "NetworkError",
    "SearchError",
]
