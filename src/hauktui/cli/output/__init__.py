"""Centralized CLI output utilities.

Usage:
    from hauktui.cli.output import Table

    table = Table(title="Results")
    table.add_column("Name", style="cyan")
    table.add_row("badge")
    console.print(table)
"""

from hauktui.cli.output.formatters import OutputFormat, render_structured
from hauktui.cli.output.table import Table

__all__ = ["OutputFormat", "Table", "render_structured"]
