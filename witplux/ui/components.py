"""
UI Components - Standardized Rich components for consistent interface.

This module provides the tables and panels the CLI commands render:
catalog listings, show details, episode lists and resolved links.
"""

from typing import List, Optional

from rich.panel import Panel
from rich.table import Table

from witplux.core.models import (
    CatalogEntry,
    Episode,
    MainPageSection,
    Quality,
    ShowDetail,
    StreamLink,
    SubtitleFile,
)
from witplux.ui.themes import get_palette


class UIComponents:
    """Collection of standardized UI components with consistent styling."""

    def __init__(self):
        self.palette = get_palette()

    def _table(self, title: str) -> Table:
        return Table(
            title=title,
            show_header=True,
            header_style=f"bold {self.palette.secondary}",
            border_style=self.palette.border_primary,
            expand=True
        )

    def create_sections_table(self, sections: List[MainPageSection]) -> Table:
        table = self._table("🏠 Main Page Sections")
        table.add_column("#", style="dim", width=4)
        table.add_column("Section", style=self.palette.primary)
        table.add_column("URL", style=self.palette.text_muted, overflow="fold")

        for i, section in enumerate(sections):
            table.add_row(str(i), section.label, section.url)

        return table

    def create_catalog_table(self, entries: List[CatalogEntry], title: str = "🔍 Results") -> Table:
        """
        Create a table displaying catalog entries.

        Args:
            entries: Entries to list
            title: Table title

        Returns:
            Formatted table with one row per entry
        """
        table = self._table(title)
        table.add_column("#", style="dim", width=4)
        table.add_column("Title", style=self.palette.primary, min_width=30)
        table.add_column("Type", style=self.palette.accent, width=8)
        table.add_column("URL", style=self.palette.text_muted, overflow="fold")

        for i, entry in enumerate(entries, 1):
            table.add_row(str(i), entry.title, entry.kind.value, entry.url)

        return table

    def create_detail_panel(self, detail: ShowDetail) -> Panel:
        """Create a panel summarizing a show's detail page."""
        lines = [f"[bold {self.palette.primary}]{detail.title}[/bold {self.palette.primary}]"]
        lines.append(f"[dim]Type:[/dim] {detail.kind.value}")
        if detail.year:
            lines.append(f"[dim]Year:[/dim] {detail.year}")
        if detail.tags:
            lines.append(f"[dim]Genres:[/dim] {', '.join(detail.tags)}")
        if detail.poster_url:
            lines.append(f"[dim]Poster:[/dim] {detail.poster_url}")
        if detail.data_url:
            lines.append(f"[dim]Watch page:[/dim] {detail.data_url}")
        if detail.plot:
            lines.append(f"\n{detail.plot}")

        return Panel(
            "\n".join(lines),
            title="📋 Show Details",
            border_style=self.palette.border_primary,
            padding=(1, 2)
        )

    def create_episodes_table(self, episodes: List[Episode]) -> Table:
        table = self._table("📺 Episodes")
        table.add_column("#", style="dim", width=6)
        table.add_column("Name", style=self.palette.primary, min_width=20)
        table.add_column("URL", style=self.palette.text_muted, overflow="fold")

        for episode in episodes:
            table.add_row(episode.number_text, episode.display_name, episode.url)

        return table

    def _quality_style(self, quality: Quality) -> str:
        if quality.height >= 720:
            return "quality.high"
        if quality.height >= 480:
            return "quality.medium"
        if quality.height > 0:
            return "quality.low"
        return "muted"

    def create_links_table(
        self,
        links: List[StreamLink],
        subtitles: Optional[List[SubtitleFile]] = None
    ) -> Table:
        """
        Create a table displaying resolved links.

        Args:
            links: Links in emission order
            subtitles: Subtitle tracks, listed after the links

        Returns:
            Formatted table of links
        """
        table = self._table("🔗 Links")
        table.add_column("Name", style=self.palette.primary, min_width=16)
        table.add_column("Quality", width=8)
        table.add_column("Type", style=self.palette.accent, width=6)
        table.add_column("URL", style=self.palette.text_muted, overflow="fold")

        for link in links:
            style = self._quality_style(link.quality)
            table.add_row(
                link.name,
                f"[{style}]{link.quality.value}[/{style}]",
                link.media_type.value,
                link.url
            )

        for subtitle in subtitles or []:
            table.add_row(f"Subtitle ({subtitle.lang})", "-", "sub", subtitle.url)

        return table


# Global components instance
_ui_components: Optional[UIComponents] = None


def get_ui_components() -> UIComponents:
    """Get the global UI components instance."""
    global _ui_components
    if _ui_components is None:
        _ui_components = UIComponents()
    return _ui_components


# Export UI components
__all__ = ["UIComponents", "get_ui_components"]
