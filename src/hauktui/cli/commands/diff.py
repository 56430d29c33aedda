"""Diff command: show drift between local and upstream component files."""

from __future__ import annotations

from pathlib import Path

import typer

from hauktui.cli.commands.base import (
    CwdOption,
    OutputOption,
    console,
    handle_error,
    open_project,
)
from hauktui.cli.output import OutputFormat, Table, render_structured
from hauktui.core.exceptions import HauktuiError
from hauktui.services.sync import CompareReport, DriftState

STATE_STYLES: dict[DriftState, tuple[str, str]] = {
    DriftState.UNCHANGED: ("green", "✓"),
    DriftState.UPSTREAM_UPDATED: ("yellow", "↑"),
    DriftState.LOCALLY_MODIFIED: ("blue", "●"),
    DriftState.CONFLICT: ("magenta", "⚡"),
    DriftState.MISSING_LOCALLY: ("red", "-"),
    DriftState.LOCAL_ONLY: ("cyan", "+"),
}


def format_state(state: DriftState) -> str:
    """Colored marker and label for a drift state."""
    style, marker = STATE_STYLES[state]
    return f"[{style}]{marker} {state}[/{style}]"


def _display_compare_report(report: CompareReport) -> None:
    console.print(
        f"\nComparing [cyan]{report.name}[/cyan] "
        f"(local v{report.installed_version} ↔ upstream v{report.upstream_version})\n"
    )

    table = Table(show_header=True)
    table.add_column("File", style="bold")
    table.add_column("State")
    table.add_column("Local", style="dim")
    table.add_column("Baseline", style="dim")
    table.add_column("Upstream", style="dim")

    for diff in report.files:
        table.add_row(
            diff.file,
            format_state(diff.state),
            diff.local or "-",
            diff.baseline or "-",
            diff.upstream or "-",
        )

    console.print(table)
    console.print()

    if not report.has_changes:
        console.print("[green]No differences found.[/green]")
        return

    if report.has_local_changes:
        console.print(
            "[yellow]Local edits detected.[/yellow] Updating will overwrite them: "
            f"run `hauktui update {report.name} --force` or "
            f"`hauktui add --overwrite {report.name}`."
        )
    else:
        console.print(f"Run `hauktui update {report.name}` to update.")


def diff(
    component: str = typer.Argument(..., help="Component to compare."),
    output: OutputOption = OutputFormat.TABLE,
    cwd: CwdOption = Path("."),
) -> None:
    """Show differences between local and upstream component files."""
    try:
        project = open_project(cwd.resolve())
        ledger = project.ledger_store.load()
        report = project.manager.compare(ledger, component)
    except HauktuiError as e:
        handle_error(e)

    if output == OutputFormat.TABLE:
        _display_compare_report(report)
    else:
        data = report.model_dump(mode="json")
        data["has_changes"] = report.has_changes
        render_structured(data, output)
