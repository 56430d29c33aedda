"""Badge: a small inline status label."""

from __future__ import annotations

from rich.text import Text

VARIANTS = {
    "default": "bold white on grey23",
    "success": "bold black on green",
    "warning": "bold black on yellow",
    "error": "bold white on red",
}


def Badge(label: str, variant: str = "default") -> Text:
    """Render ``label`` as a padded, colored badge."""
    return Text(f" {label} ", style=VARIANTS.get(variant, VARIANTS["default"]))
