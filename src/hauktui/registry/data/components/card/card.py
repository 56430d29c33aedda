"""Card: a titled panel with an optional footer of key hints."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel

from .card_footer import CardFooter


def Card(
    body: RenderableType,
    title: str | None = None,
    hints: dict[str, str] | None = None,
) -> Panel:
    """Wrap ``body`` in a rounded panel, adding key hints underneath."""
    content: RenderableType = body
    if hints:
        content = Group(body, CardFooter(hints))
    return Panel(content, title=title, border_style="bright_black")
