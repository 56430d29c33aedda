"""Status command: installed components and their drift at a glance."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from hauktui.cli.commands.base import (
    CwdOption,
    OutputOption,
    console,
    handle_error,
    open_project,
)
from hauktui.cli.commands.diff import format_state
from hauktui.cli.output import OutputFormat, Table, render_structured
from hauktui.core.exceptions import ComponentFetchError, ComponentNotFoundError, HauktuiError
from hauktui.services.sync import DriftState

logger = structlog.get_logger()


def status(
    output: OutputOption = OutputFormat.TABLE,
    cwd: CwdOption = Path("."),
) -> None:
    """Show installed components, their versions and local drift."""
    logger.info("Checking project status", cwd=str(cwd))

    rows: list[dict[str, Any]] = []
    try:
        project = open_project(cwd.resolve())
        ledger = project.ledger_store.load()

        for name in ledger.names():
            entry = ledger.components[name]
            row: dict[str, Any] = {
                "name": name,
                "installed_version": entry.version,
                "installed_at": entry.installed_at.isoformat(),
                "upstream_version": None,
                "files": {},
                "error": None,
            }
            try:
                report = project.manager.compare(ledger, name)
            except (ComponentNotFoundError, ComponentFetchError) as e:
                row["error"] = e.message
            else:
                row["upstream_version"] = report.upstream_version
                row["files"] = report.counts()
            rows.append(row)
    except HauktuiError as e:
        handle_error(e)

    if output != OutputFormat.TABLE:
        data = {"component_dir": project.config.component_dir, "components": rows}
        render_structured(data, output)
        return

    if not rows:
        console.print("No components installed. Run `hauktui add <component>` to add one.")
        return

    table = Table(title=f"Installed Components ({project.config.component_dir})")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Installed")
    table.add_column("Upstream")
    table.add_column("Files")

    for row in rows:
        if row["error"]:
            files = f"[red]{row['error']}[/red]"
        else:
            files = ", ".join(
                f"{format_state(DriftState(state))} ({count})"
                for state, count in row["files"].items()
            )
        upstream = row["upstream_version"] or "-"
        if row["upstream_version"] and row["upstream_version"] != row["installed_version"]:
            upstream = f"[yellow]{upstream}[/yellow]"
        table.add_row(row["name"], row["installed_version"], upstream, files)

    console.print(table)
    logger.info("Status check complete", components=len(rows))
