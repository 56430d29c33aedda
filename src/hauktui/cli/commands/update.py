"""Update command: upgrade installed components to their latest versions."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer

from hauktui.cli.commands.base import (
    CwdOption,
    OutputOption,
    YesOption,
    confirm_action,
    console,
    handle_error,
    open_project,
)
from hauktui.cli.output import OutputFormat, Table, render_structured
from hauktui.core.exceptions import HauktuiError
from hauktui.services.sync import ItemStatus, UpgradeReport

logger = structlog.get_logger()


def _display_candidates(report: UpgradeReport) -> None:
    table = Table(title="Updates Available")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Installed")
    table.add_column("Latest", style="green")
    table.add_column("Local Changes")

    for candidate in report.candidates:
        table.add_row(
            candidate.name,
            candidate.installed_version,
            candidate.latest_version,
            "[yellow]yes[/yellow]" if candidate.has_local_changes else "-",
        )

    console.print(table)


def _display_errors(report: UpgradeReport) -> None:
    for outcome in report.errors:
        console.print(f"[red]Error:[/red] {outcome.message}")


def _display_outcomes(report: UpgradeReport) -> None:
    for outcome in report.outcomes:
        if outcome.status == ItemStatus.UPDATED:
            console.print(
                f"[green]Updated[/green] [cyan]{outcome.name}[/cyan] "
                f"({outcome.previous_version} → {outcome.version})"
            )
            if outcome.notes:
                console.print(f"  [dim]{outcome.notes}[/dim]")
        elif outcome.status == ItemStatus.SKIPPED:
            console.print(f"[yellow]Skipped[/yellow] {outcome.name}: {outcome.message}")
        else:
            console.print(f"[red]Failed[/red] {outcome.name}: {outcome.message}")


def update(
    components: list[str] | None = typer.Argument(
        None, help="Components to update (default: all installed)."
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Update components even if they have local modifications.",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Only check for updates without applying them.",
    ),
    yes: YesOption = False,
    output: OutputOption = OutputFormat.TABLE,
    cwd: CwdOption = Path("."),
) -> None:
    """Update installed components to their latest versions."""
    logger.info("Checking for updates", components=components, force=force, cwd=str(cwd))

    try:
        project = open_project(cwd.resolve())
        ledger = project.ledger_store.load()

        if not ledger.components:
            console.print("No components installed.")
            return

        names = components or None
        check_report = project.manager.upgrade(ledger, names, check_only=True)
    except HauktuiError as e:
        handle_error(e)

    if check and output != OutputFormat.TABLE:
        render_structured(check_report.model_dump(mode="json"), output)
        if check_report.errors:
            raise typer.Exit(1)
        return

    _display_errors(check_report)

    if not check_report.candidates:
        console.print("[green]All components are up to date![/green]")
        if check_report.errors:
            raise typer.Exit(1)
        return

    _display_candidates(check_report)

    if check:
        console.print(f"\n{len(check_report.candidates)} update(s) available.")
        console.print("Run `hauktui update` to apply updates.")
        if check_report.errors:
            raise typer.Exit(1)
        return

    eligible = check_report.candidates if force else check_report.safe
    unsafe = check_report.unsafe
    if unsafe and not force:
        console.print(
            f"\n[yellow]{len(unsafe)} component(s) have local modifications.[/yellow] "
            "Use --force to overwrite, or update individually."
        )
        if not eligible:
            raise typer.Exit(0)

    if not yes and not confirm_action(f"Update {len(eligible)} component(s)?", default=True):
        console.print("Update cancelled.")
        raise typer.Exit(0)

    try:
        report = project.manager.upgrade(ledger, names, force=force)
        project.ledger_store.save(ledger)
    except HauktuiError as e:
        handle_error(e)

    logger.info(
        "Update complete",
        updated=len(report.updated),
        skipped_unsafe=report.skipped_unsafe,
        failed=len(report.failed),
    )

    console.print()
    _display_outcomes(report)

    console.print()
    if report.updated:
        console.print(f"[green]Updated {len(report.updated)} component(s).[/green]")
    else:
        console.print("No components were updated.")

    if report.failed:
        raise typer.Exit(1)
