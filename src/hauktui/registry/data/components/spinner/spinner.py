"""Spinner: an animated activity indicator."""

from __future__ import annotations

from rich.spinner import Spinner as RichSpinner


def Spinner(label: str = "Loading...", style: str = "dots") -> RichSpinner:
    """Build a spinner renderable for use inside ``rich.live.Live``."""
    return RichSpinner(style, text=label, style="cyan")
