"""Base utilities for hauktui CLI commands.

Common Typer options, error handling, and the wiring that turns a project
directory into a ready-to-use SyncManager.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console

from hauktui.cli.output import OutputFormat
from hauktui.core.config import ProjectConfig, is_initialized, load_config
from hauktui.core.exceptions import (
    ComponentFetchError,
    ComponentNotFoundError,
    ComponentNotInstalledError,
    ConfigNotFoundError,
    HauktuiError,
    LedgerError,
)
from hauktui.registry import LocalRegistryProvider
from hauktui.services.sync import LedgerStore, LocalFileStore, SyncManager

# Shared console instance for all commands
console = Console()


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

CwdOption = Annotated[
    Path,
    typer.Option(
        "--cwd",
        "-c",
        help="Project root directory",
        file_okay=False,
        resolve_path=True,
    ),
]

YesOption = Annotated[
    bool,
    typer.Option(
        "--yes",
        "-y",
        help="Skip confirmation prompts",
    ),
]

OutputOption = Annotated[
    OutputFormat,
    typer.Option(
        "--output",
        "-o",
        help="Output format: table, json, or yaml",
        case_sensitive=False,
    ),
]


# =============================================================================
# Error Handling
# =============================================================================


def handle_error(error: HauktuiError) -> NoReturn:
    """Print a hauktui error with a hint and exit with status 1.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    console.print(f"[red]Error:[/red] {error.message}")

    if isinstance(error, ConfigNotFoundError):
        console.print("\n[dim]Hint: Run `hauktui init` first.[/dim]")
    elif isinstance(error, ComponentNotInstalledError):
        console.print(f"\n[dim]Hint: Run `hauktui add {error.name}` to install it.[/dim]")
    elif isinstance(error, ComponentNotFoundError):
        console.print("\n[dim]Hint: Run `hauktui list` to see available components.[/dim]")
    elif isinstance(error, ComponentFetchError):
        console.print("\n[dim]Hint: Check the registry path in hauk.config.json.[/dim]")
    elif isinstance(error, LedgerError):
        console.print("\n[dim]Hint: Fix or remove hauk.lock.json and re-run `hauktui add`.[/dim]")

    raise typer.Exit(1)


def confirm_action(message: str, default: bool = False) -> bool:
    """Prompt user to confirm an action.

    Args:
        message: Confirmation message to display.
        default: Default response if user just presses Enter.

    Returns:
        True if user confirms, False otherwise.
    """
    return typer.confirm(message, default=default)


# =============================================================================
# Project wiring
# =============================================================================


@dataclass
class Project:
    """Everything a command needs to operate on one consumer project."""

    root: Path
    config: ProjectConfig
    store: LocalFileStore
    ledger_store: LedgerStore
    provider: LocalRegistryProvider
    manager: SyncManager


def open_project(cwd: Path) -> Project:
    """Load the config of an initialized project and wire up the engine.

    Raises:
        ConfigNotFoundError: If the project has not been initialized.
        ConfigError: If hauk.config.json is invalid.
    """
    config = load_config(cwd)
    store = LocalFileStore(cwd)
    provider = LocalRegistryProvider(config.resolved_registry_path(cwd))
    return Project(
        root=cwd,
        config=config,
        store=store,
        ledger_store=LedgerStore(store),
        provider=provider,
        manager=SyncManager(provider, store, config.component_dir),
    )


def get_provider(cwd: Path) -> LocalRegistryProvider:
    """Registry provider for catalog commands, which work without ``init``."""
    if is_initialized(cwd):
        return LocalRegistryProvider(load_config(cwd).resolved_registry_path(cwd))
    return LocalRegistryProvider(ProjectConfig().resolved_registry_path(cwd))
