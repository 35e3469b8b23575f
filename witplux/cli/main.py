"""
CLI Main Application - Typer app entry point.

This module provides the witplux command: global options, logging setup
and one command per plugin operation (sections, home, search, info, links).
"""

import sys
import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, TypeVar

import typer
from rich.traceback import install as install_rich_traceback

from witplux import __version__
from witplux.core import ConfigManager
from witplux.core.exceptions import WitPluxError
from witplux.core.models import StreamLink, SubtitleFile
from witplux.core.plugin_manager import PluginManager
from witplux.plugins.base import BasePlugin
from witplux.ui import get_console, get_ui_components, handle_error, display_info, status_spinner
from witplux.cli.context import get_config_manager, set_config_manager


T = TypeVar("T")

# Create main Typer application
app = typer.Typer(
    name="witplux",
    help="🎌 Browse witanime and resolve episode stream links",
    no_args_is_help=True,
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version information and exit",
        is_flag=True,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Settings file path (default: ./witplux.json)",
        dir_okay=False,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode with detailed logging",
        is_flag=True,
    ),
) -> None:
    """
    🎌 WitPlux - witanime scraper and link extractor.

    Lists main-page sections, searches the catalog, loads show details with
    their episodes and resolves playable links for an episode page.
    """
    if version:
        get_console().print(f"[bold blue]WitPlux[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        get_console().print(ctx.get_help())
        raise typer.Exit()

    _setup_logging(debug)
    install_rich_traceback(show_locals=debug)

    try:
        config_manager = ConfigManager(config)
    except WitPluxError as e:
        handle_error(e, "While loading settings", show_traceback=debug)
        raise typer.Exit(1)

    set_config_manager(config_manager)

    if not debug:
        logging_settings = config_manager.settings.logging
        logging.getLogger().setLevel(logging_settings.level)
        if not logging_settings.quiet_libraries:
            logging.getLogger("aiohttp").setLevel(logging.NOTSET)


def _setup_logging(debug: bool = False) -> None:
    """
    Set up application logging.

    Args:
        debug: Enable debug logging
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )
    logging.getLogger().setLevel(level)

    # Reduce noise from third-party libraries
    if not debug:
        logging.getLogger("aiohttp").setLevel(logging.WARNING)


def _create_plugin() -> BasePlugin:
    return PluginManager(get_config_manager()).create_plugin("witanime")


def _run_plugin(operation: Callable[[BasePlugin], Awaitable[T]], message: str) -> T:
    """
    Run one async plugin operation and close the plugin's session afterwards.

    WitPlux errors are shown as a panel and end the command with exit code 1;
    Ctrl-C ends it with 130.
    """
    async def runner() -> T:
        plugin = _create_plugin()
        async with plugin:
            with status_spinner(message):
                return await operation(plugin)

    try:
        return asyncio.run(runner())
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)
    except WitPluxError as e:
        handle_error(e, message.rstrip('.'))
        raise typer.Exit(1)


@app.command(name="sections")
def list_sections() -> None:
    """🏠 List the main-page sections."""
    try:
        plugin = _create_plugin()
    except WitPluxError as e:
        handle_error(e, "Creating plugin")
        raise typer.Exit(1)

    get_console().print(get_ui_components().create_sections_table(plugin.main_page))


@app.command(name="home")
def show_home(
    section_index: int = typer.Argument(0, help="Section number from 'witplux sections'"),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
) -> None:
    """📰 Show one page of a main-page section."""
    try:
        plugin = _create_plugin()
    except WitPluxError as e:
        handle_error(e, "Creating plugin")
        raise typer.Exit(1)

    sections = plugin.main_page
    if not 0 <= section_index < len(sections):
        raise typer.BadParameter(
            f"Section must be between 0 and {len(sections) - 1}",
            param_hint="SECTION_INDEX"
        )
    section = sections[section_index]

    listing = _run_plugin(
        lambda p: p.get_main_page(page, section),
        f"Loading '{section.label}' page {page}..."
    )

    console = get_console()
    console.print(get_ui_components().create_catalog_table(listing.entries, title=f"📰 {listing.section}"))
    if listing.has_next:
        console.print(f"[dim]More available: --page {page + 1}[/dim]")


@app.command(name="search")
def search(query: str = typer.Argument(..., help="Title to search for")) -> None:
    """🔍 Search the catalog."""
    results = _run_plugin(lambda p: p.search(query), f"Searching for '{query}'...")

    if not results:
        display_info(f"No results for '{query}'")
        return

    get_console().print(get_ui_components().create_catalog_table(results, title=f"🔍 Results for '{query}'"))


@app.command(name="info")
def show_info(url: str = typer.Argument(..., help="Show page URL")) -> None:
    """📋 Show a show's details and episode list."""
    detail = _run_plugin(lambda p: p.load(url), "Loading show...")

    components = get_ui_components()
    console = get_console()
    console.print(components.create_detail_panel(detail))
    if detail.episodes:
        console.print(components.create_episodes_table(detail.episodes))


@app.command(name="links")
def show_links(url: str = typer.Argument(..., help="Episode page URL, or a movie's page")) -> None:
    """🔗 Resolve playable links for an episode."""
    links: List[StreamLink] = []
    subtitles: List[SubtitleFile] = []

    found = _run_plugin(
        lambda p: p.load_links(url, subtitles.append, links.append),
        "Resolving links..."
    )

    if not found:
        display_info(f"No links found for {url}")
        raise typer.Exit(1)

    get_console().print(get_ui_components().create_links_table(links, subtitles))


def cli_main() -> None:
    """
    Main CLI entry point for the witplux command.

    This function is called when the user runs 'witplux' from the command line.
    """
    try:
        app()
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)  # Standard exit code for SIGINT
    except Exception as e:
        handle_error(e, "Unexpected error in CLI")
        sys.exit(1)


# Export main components
__all__ = ["app", "cli_main"]
