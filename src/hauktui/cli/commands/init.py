"""Init command for setting up hauktui in a project."""

from __future__ import annotations

from pathlib import Path

import structlog
import typer
from rich.panel import Panel

from hauktui.cli.commands.base import CwdOption, YesOption, console
from hauktui.core.config import CONFIG_FILE, ProjectConfig, is_initialized, save_config

app = typer.Typer(help="Initialize hauktui in a project.")
logger = structlog.get_logger()


@app.callback(invoke_without_command=True)
def init(
    ctx: typer.Context,
    cwd: CwdOption = Path("."),
    component_dir: str | None = typer.Option(
        None,
        "--component-dir",
        "-d",
        help="Where vendored components are stored, relative to the project root.",
    ),
    registry_path: str | None = typer.Option(
        None,
        "--registry",
        help="Local registry directory to install components from.",
    ),
    yes: YesOption = False,
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite an existing configuration.",
    ),
) -> None:
    """Write hauk.config.json and create the component directory."""
    if ctx.invoked_subcommand is not None:
        return

    root = cwd.resolve()
    config_file = root / CONFIG_FILE
    logger.info("Initializing project", path=str(config_file))

    if is_initialized(root) and not force:
        console.print(f"[yellow]hauktui is already initialized at {config_file}[/yellow]")
        console.print("Use --force to overwrite.")
        raise typer.Exit(code=1)

    config = ProjectConfig()
    if component_dir is None and not yes:
        component_dir = typer.prompt(
            "Where would you like to store components?",
            default=config.component_dir,
        )

    try:
        config = ProjectConfig.model_validate(
            {
                **config.model_dump(by_alias=True),
                "componentDir": component_dir or config.component_dir,
                "registryPath": registry_path,
            }
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    (root / config.component_dir).mkdir(parents=True, exist_ok=True)
    save_config(config, root)

    console.print(
        Panel(
            f"[green]hauktui initialized successfully![/green]\n\n"
            f"Configuration created at: {config_file}\n"
            f"Components directory: {config.component_dir}\n\n"
            f"Next steps:\n"
            f"  1. Run [bold]hauktui list[/bold] to browse components\n"
            f"  2. Run [bold]hauktui add badge[/bold] to add your first component",
            title="hauktui init",
            border_style="green",
        )
    )

    logger.info("Project initialized", config_file=str(config_file))
