"""
Theme System - Color palette and Rich styles.

This module defines the single color palette used by the console, tables
and error panels.
"""

from dataclasses import dataclass

from rich.theme import Theme


@dataclass(frozen=True)
class ColorPalette:
    """Color palette definition."""

    primary: str = "blue"
    secondary: str = "cyan"
    accent: str = "magenta"

    success: str = "green"
    warning: str = "yellow"
    error: str = "red"
    info: str = "blue"

    text_muted: str = "dim white"
    border_primary: str = "blue"
    border_secondary: str = "dim blue"


DEFAULT_PALETTE = ColorPalette()


def get_palette() -> ColorPalette:
    return DEFAULT_PALETTE


def get_theme() -> Theme:
    """Create the Rich theme from the palette."""
    palette = get_palette()

    return Theme({
        "panel.border": palette.border_primary,
        "table.header": f"bold {palette.secondary}",
        "success": palette.success,
        "warning": palette.warning,
        "error": palette.error,
        "info": palette.info,
        "muted": palette.text_muted,
        "title": f"bold {palette.primary}",
        "link": f"underline {palette.primary}",
        # Quality indicators
        "quality.high": palette.success,
        "quality.medium": palette.warning,
        "quality.low": palette.error,
    })


# Export theme helpers
__all__ = ["ColorPalette", "DEFAULT_PALETTE", "get_palette", "get_theme"]
