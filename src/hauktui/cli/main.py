"""Main CLI entry point using Typer."""

from __future__ import annotations

import typer
from rich.console import Console

from hauktui import __version__
from hauktui.cli.commands import add, catalog, diff, init, status, update
from hauktui.logging.config import configure_logging

app = typer.Typer(
    name="hauktui",
    help="A copy-in component workflow for terminal UIs.",
    add_completion=True,
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"hauktui version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
) -> None:
    """hauktui - vendor terminal UI components into your project."""
    configure_logging(verbose=verbose, debug=debug)


# Register subcommands
app.add_typer(init.app, name="init")
app.command()(add.add)
app.command()(diff.diff)
app.command()(update.update)
app.command("list")(catalog.list_components)
app.command()(catalog.view)
app.command()(status.status)


if __name__ == "__main__":
    app()
