"""Footer row of key hints for Card."""

from __future__ import annotations

from rich.text import Text

from ..kbd.kbd import Kbd


def CardFooter(hints: dict[str, str]) -> Text:
    """Join key hints on one line."""
    return Text("  ").join(Kbd(key, action) for key, action in hints.items())
