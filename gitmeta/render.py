"""
Rendering functions for gitmeta output.

This module handles all pretty-printing and table formatting.
Core functions return data, this module makes it human-readable.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .domain import GitMetadata

console = Console()


def render_metadata_table(metadata: GitMetadata, title: Optional[str] = None,
                          out: Optional[Console] = None) -> None:
    """
    Render git metadata as a two-column table.

    Missing fields are shown dimmed so gaps in detection stand out.

    Args:
        metadata: Metadata to display
        title: Optional table title (defaults to the base directory)
        out: Console to print to (defaults to the module console)
    """
    table = Table(
        title=title or metadata.base_dir,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for field, value in metadata.to_dict().items():
        if isinstance(value, list):
            value = ", ".join(value)
        display = escape(value) if value else "[dim]-[/dim]"
        table.add_row(field, display)

    (out or console).print(table)
