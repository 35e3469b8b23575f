"""
CLI Layer - Command-line interface components.

This module contains the Typer-based CLI application that exposes the
WitAnime plugin operations to the terminal.
"""

from witplux.cli.main import app

__all__ = ["app"]
