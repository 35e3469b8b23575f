"""
Console Management - Centralized Rich console configuration.

This module provides the shared Rich console with the application theme.
"""

from typing import Optional

from rich.console import Console

from witplux.ui.themes import get_theme


# Global console instance
_console: Optional[Console] = None


def setup_console(force_terminal: Optional[bool] = None, width: Optional[int] = None) -> Console:
    """
    Set up and configure the global Rich console.

    Args:
        force_terminal: Force terminal mode detection
        width: Console width override

    Returns:
        Configured Rich Console instance
    """
    global _console

    console_kwargs = {
        "theme": get_theme(),
        "stderr": False,  # Use stdout for all output
        "force_terminal": force_terminal,
        "color_system": "auto",
    }
    if width is not None:
        console_kwargs["width"] = width

    _console = Console(**console_kwargs)
    return _console


def get_console() -> Console:
    """
    Get the global Rich console instance.

    Creates a default console if none exists.
    """
    global _console

    if _console is None:
        _console = setup_console()

    return _console


# Export console management functions
__all__ = ["setup_console", "get_console"]
