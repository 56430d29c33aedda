"""Kbd: a keyboard key hint such as ``[ctrl+c] quit``."""

from __future__ import annotations

from rich.text import Text


def Kbd(key: str, action: str | None = None) -> Text:
    """Render a key, optionally followed by what it does."""
    text = Text(f"[{key}]", style="bold cyan")
    if action:
        text.append(f" {action}", style="dim")
    return text
