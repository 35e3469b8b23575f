"""
UI Layer - Rich console, components and error display.

This module contains the console setup, the tables and panels rendered by
the CLI commands and the error panels shown when a command fails.
"""

from witplux.ui.components import UIComponents, get_ui_components
from witplux.ui.themes import ColorPalette, get_palette, get_theme
from witplux.ui.error_handler import ErrorHandler, handle_error, display_info
from witplux.ui.progress import status_spinner
from witplux.ui.console import get_console, setup_console

__all__ = [
    # Core UI Components
    "UIComponents",
    "get_ui_components",
    # Theme System
    "ColorPalette",
    "get_palette",
    "get_theme",
    # Error Handling
    "ErrorHandler",
    "handle_error",
    "display_info",
    # Progress
    "status_spinner",
    # Console Management
    "get_console",
    "setup_console",
]
