"""Machine-readable output for commands that support ``--output``."""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any

import typer
import yaml


class OutputFormat(StrEnum):
    """Supported output formats for CLI commands."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


def render_structured(data: dict[str, Any] | list[Any], output: OutputFormat) -> None:
    """Print data as JSON or YAML on stdout.

    Written with ``typer.echo`` rather than the Rich console so the output
    is never wrapped or highlighted.

    Args:
        data: JSON-compatible data, e.g. ``model.model_dump(mode="json")``.
        output: JSON or YAML; TABLE is handled by each command.
    """
    if output == OutputFormat.JSON:
        typer.echo(json.dumps(data, indent=2, default=str))
    elif output == OutputFormat.YAML:
        typer.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip())
    else:
        raise ValueError(f"render_structured does not handle {output!r}")
