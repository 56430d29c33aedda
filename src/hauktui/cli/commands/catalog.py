"""Catalog commands: list and view registry components."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.panel import Panel

from hauktui.cli.commands.base import CwdOption, console, get_provider, handle_error
from hauktui.cli.output import Table
from hauktui.core.exceptions import ComponentNotFoundError, HauktuiError
from hauktui.registry import ComponentCategory, ComponentDescriptor, search_components


def list_components(
    search: str | None = typer.Option(
        None,
        "--search",
        "-s",
        help="Search components by name, description or tag.",
    ),
    category: ComponentCategory | None = typer.Option(
        None,
        "--category",
        help="Filter by category.",
        case_sensitive=False,
    ),
    cwd: CwdOption = Path("."),
) -> None:
    """List available components."""
    try:
        provider = get_provider(cwd.resolve())
        components = search_components(provider, search, category)
    except HauktuiError as e:
        handle_error(e)

    if not components:
        console.print("[yellow]No components found.[/yellow]")
        return

    by_category: dict[str, list[ComponentDescriptor]] = {}
    for component in components:
        by_category.setdefault(component.category, []).append(component)

    table = Table(title="Available Components")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Version", style="dim")
    table.add_column("Description")

    for category_name, items in by_category.items():
        table.add_row(f"[bold]{category_name.upper()}[/bold]", "", "")
        for component in items:
            table.add_row(f"  {component.name}", component.version, component.description)

    console.print(table)
    console.print("[dim]Run `hauktui add <component>` to add a component[/dim]")


def format_component_info(descriptor: ComponentDescriptor) -> str:
    """Rich markup describing a component."""
    lines = [
        f"[bold]{descriptor.name}[/bold] [dim]v{descriptor.version}[/dim]",
        f"  {descriptor.description}",
        f"  [dim]Category:[/dim] {descriptor.category}",
        f"  [dim]Tags:[/dim] {', '.join(descriptor.tags)}",
        f"  [dim]Files:[/dim] {', '.join(descriptor.files)}",
    ]
    if descriptor.dependencies:
        packages = ", ".join(f"{n}{s}" for n, s in descriptor.dependencies.items())
        lines.append(f"  [dim]Packages:[/dim] {packages}")
    if descriptor.registry_dependencies:
        lines.append(f"  [dim]Requires:[/dim] {', '.join(descriptor.registry_dependencies)}")
    if descriptor.notes:
        lines.append(f"  [dim]Note:[/dim] {descriptor.notes}")
    return "\n".join(lines)


def view(
    component: str = typer.Argument(..., help="Component name."),
    cwd: CwdOption = Path("."),
) -> None:
    """View component details."""
    try:
        descriptor = get_provider(cwd.resolve()).get_component(component)
        if descriptor is None:
            raise ComponentNotFoundError(component)
    except HauktuiError as e:
        handle_error(e)

    console.print(Panel(format_component_info(descriptor), border_style="cyan"))
