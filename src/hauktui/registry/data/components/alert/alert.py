"""Alert: a bordered message box with a severity badge."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from ..badge.badge import Badge

BORDERS = {
    "success": "green",
    "warning": "yellow",
    "error": "red",
}


def Alert(message: str, severity: str = "default", title: str | None = None) -> Panel:
    """Render ``message`` in a panel colored by ``severity``."""
    body = Text.assemble(Badge(severity.upper(), severity), " ", message)
    return Panel(body, title=title, border_style=BORDERS.get(severity, "white"))
