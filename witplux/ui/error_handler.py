"""
Error Handler - Error panels with context and suggestions.

This module provides consistent error display across the CLI, with one
panel layout per exception family of the application.
"""

import traceback
from typing import List, Optional

from rich.panel import Panel

from witplux.core.exceptions import (
    WitPluxError,
    ConfigurationError,
    LoadError,
    PluginError,
    NetworkError,
    SearchError,
)
from witplux.ui.console import get_console
from witplux.ui.themes import get_palette


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    def __init__(self):
        self.palette = get_palette()

    @property
    def console(self):
        return get_console()

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Handle and display an error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        if isinstance(error, WitPluxError):
            self._handle_witplux_error(error, context, show_traceback)
        else:
            self._handle_generic_error(error, context, show_traceback)

    def _handle_witplux_error(
        self,
        error: WitPluxError,
        context: Optional[str],
        show_traceback: bool
    ) -> None:
        lines = [f"[{self.palette.error}]{error.message}[/{self.palette.error}]"]

        if isinstance(error, ConfigurationError):
            title = "⚙️  Configuration Error"
            if error.config_path:
                lines.append(f"\n[dim]Configuration file:[/dim] [cyan]{error.config_path}[/cyan]")
            suggestions = [
                "Check the settings file is valid JSON",
                "Remove the file to regenerate the defaults",
            ]
        elif isinstance(error, LoadError):
            title = "📄 Load Error"
            if error.url:
                lines.append(f"\n[dim]URL:[/dim] [blue]{error.url}[/blue]")
            suggestions = [
                "Make sure the URL points at a show page",
                "Use [cyan]witplux search[/cyan] to find the show's URL",
            ]
        elif isinstance(error, PluginError):
            title = "🔌 Plugin Error"
            if error.plugin_name:
                lines.append(f"\n[dim]Plugin:[/dim] [cyan]{error.plugin_name}[/cyan]")
            suggestions = [
                "Check the source's block in the settings file",
                "Verify the source is enabled",
            ]
        elif isinstance(error, NetworkError):
            title = "🌐 Network Error"
            suggestions = self._network_suggestions(error)
            if error.url:
                lines.append(f"\n[dim]URL:[/dim] [blue]{error.url}[/blue]")
            if error.status_code:
                lines.append(f"\n[dim]Status Code:[/dim] {error.status_code}")
        elif isinstance(error, SearchError):
            title = "🔍 Search Error"
            if error.query is not None:
                lines.append(f"\n[dim]Query:[/dim] '{error.query}'")
            suggestions = [
                "Use a non-empty search term",
                "Try the Arabic or romaji title",
            ]
        else:
            title = "❌ Error"
            suggestions = []

        self._print_panel(title, lines, context, suggestions, error.details if show_traceback else None)

    @staticmethod
    def _network_suggestions(error: NetworkError) -> List[str]:
        suggestions = [
            "Check your internet connection",
            "Verify the site is reachable and main_url is current",
        ]
        if error.status_code == 403:
            suggestions.insert(0, "The site may be blocking requests - try a different user agent")
        elif error.status_code == 404:
            suggestions.insert(0, "The requested page may no longer exist")
        elif error.status_code and error.status_code >= 500:
            suggestions.insert(0, "The site is experiencing issues, try again later")
        return suggestions

    def _handle_generic_error(
        self,
        error: Exception,
        context: Optional[str],
        show_traceback: bool
    ) -> None:
        """Handle generic Python exceptions."""
        lines = [f"[{self.palette.error}]{error.__class__.__name__}: {error}[/{self.palette.error}]"]
        suggestions = [
            "Run again with [cyan]--debug[/cyan] for detailed logs",
            "Report this issue if it persists",
        ]
        details = traceback.format_exc() if show_traceback else None
        self._print_panel("💥 Unexpected Error", lines, context, suggestions, details)

    def _print_panel(
        self,
        title: str,
        lines: List[str],
        context: Optional[str],
        suggestions: List[str],
        details: Optional[object]
    ) -> None:
        if context:
            lines.append(f"\n[dim]Context:[/dim] {context}")

        if suggestions:
            lines.append(f"\n\n[{self.palette.info}]💡 Suggestions:[/{self.palette.info}]")
            lines.extend(f"• {suggestion}" for suggestion in suggestions)

        if details:
            lines.append(f"\n\n[dim]Details:[/dim]\n{details}")

        self.console.print(Panel(
            "\n".join(lines),
            title=title,
            border_style=self.palette.error,
            padding=(1, 2)
        ))

    def display_info(self, message: str, title: str = "ℹ️  Information") -> None:
        """Display an information message."""
        self.console.print(Panel(
            f"[{self.palette.info}]{message}[/{self.palette.info}]",
            title=f"[{self.palette.info}]{title}[/{self.palette.info}]",
            border_style=self.palette.info,
            padding=(1, 2)
        ))


# Global error handler instance
_error_handler = ErrorHandler()


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    return _error_handler


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """
    Handle and display an error using the global error handler.

    Args:
        error: Exception to handle
        context: Additional context
        show_traceback: Whether to show traceback
    """
    _error_handler.handle_error(error, context, show_traceback)


def display_info(message: str, title: str = "ℹ️  Information") -> None:
    """Display an information message using the global error handler."""
    _error_handler.display_info(message, title)


# Export error handling functions
__all__ = [
    "ErrorHandler",
    "get_error_handler",
    "handle_error",
    "display_info",
]
