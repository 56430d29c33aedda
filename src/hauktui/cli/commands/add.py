"""Add command: vendor components into the project."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer

from hauktui.cli.commands.base import (
    CwdOption,
    YesOption,
    confirm_action,
    console,
    handle_error,
    open_project,
)
from hauktui.cli.output import Table
from hauktui.core.exceptions import HauktuiError
from hauktui.registry import LocalRegistryProvider, resolve_dependencies
from hauktui.services.sync import InstallReport, ItemStatus

logger = structlog.get_logger()

_STATUS_STYLES = {
    ItemStatus.INSTALLED: "green",
    ItemStatus.UPDATED: "green",
    ItemStatus.SKIPPED: "yellow",
    ItemStatus.ERROR: "red",
}


def _display_install_report(report: InstallReport) -> None:
    table = Table(title="Add Results")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")

    for outcome in report.outcomes:
        style = _STATUS_STYLES[outcome.status]
        if outcome.status == ItemStatus.INSTALLED:
            details = f"v{outcome.version}: {', '.join(outcome.files)}"
        else:
            details = outcome.message or ""
        table.add_row(outcome.name, f"[{style}]{outcome.status}[/{style}]", details)

    console.print(table)

    for outcome in report.installed:
        if outcome.notes:
            console.print(f"[blue]i[/blue] {outcome.name}: {outcome.notes}")


def _required_packages(report: InstallReport, provider: LocalRegistryProvider) -> list[str]:
    """Third-party requirements of the components that were installed."""
    packages: dict[str, str] = {}
    for outcome in report.installed:
        descriptor = provider.get_component(outcome.name)
        if descriptor is not None:
            packages.update(descriptor.dependencies)
    return [f"{name}{spec}" for name, spec in sorted(packages.items())]


def add(
    components: list[str] | None = typer.Argument(None, help="Components to add."),
    all_components: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Install every available component.",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        "-o",
        help="Overwrite components that are already installed.",
    ),
    no_deps: bool = typer.Option(
        False,
        "--no-deps",
        help="Do not add the components that the requested ones build on.",
    ),
    yes: YesOption = False,
    cwd: CwdOption = Path("."),
) -> None:
    """Add components to your project."""
    logger.info("Adding components", components=components, all=all_components, cwd=str(cwd))

    try:
        project = open_project(cwd.resolve())

        if all_components:
            names = [c.name for c in project.provider.list_components()]
            console.print(f"Installing all {len(names)} components...")
        else:
            names = list(components or [])

        if not names:
            available = ", ".join(c.name for c in project.provider.list_components())
            console.print("[yellow]No components specified.[/yellow]")
            console.print(f"Available: {available}")
            raise typer.Exit(1)

        if not no_deps:
            names = resolve_dependencies(project.provider, names)

        ledger = project.ledger_store.load()
        report = project.manager.install(
            ledger,
            names,
            overwrite=overwrite,
            assume_yes=yes,
            confirm=lambda name: confirm_action(f"{name} already exists. Overwrite?"),
        )
        project.ledger_store.save(ledger)
    except HauktuiError as e:
        handle_error(e)

    _display_install_report(report)

    packages = _required_packages(report, project.provider)
    if packages:
        console.print(f"\nRequired packages: [bold]{' '.join(packages)}[/bold]")

    logger.info(
        "Add complete",
        installed=len(report.installed),
        skipped=len(report.skipped),
        errors=len(report.errors),
    )

    console.print()
    if report.installed:
        console.print(
            f"[green]Added {len(report.installed)} component(s) to "
            f"{project.config.component_dir}[/green]"
        )
    else:
        console.print("No components were added.")

    if report.errors:
        raise typer.Exit(1)
