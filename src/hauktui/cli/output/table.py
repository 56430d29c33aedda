"""Rich Table with defaults shared by every hauktui command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from rich.table import Table as RichTable

if TYPE_CHECKING:
    from rich.console import ConsoleRenderable, RichCast
    from rich.style import Style

OverflowMethod = Literal["fold", "crop", "ellipsis", "ignore"]
JustifyMethod = Literal["default", "left", "center", "right", "full"]
VerticalAlignMethod = Literal["top", "middle", "bottom"]


class Table(RichTable):
    """Rich Table whose columns fold long text instead of truncating it.

    File names and fingerprints must stay readable in narrow terminals, so
    ``overflow="fold"`` is the default for every column.
    """

    def add_column(
        self,
        header: ConsoleRenderable | RichCast | str = "",
        footer: ConsoleRenderable | RichCast | str = "",
        *,
        header_style: Style | str | None = None,
        highlight: bool | None = None,
        footer_style: Style | str | None = None,
        style: Style | str | None = None,
        justify: JustifyMethod = "default",
        vertical: VerticalAlignMethod = "top",
        overflow: OverflowMethod = "fold",
        width: int | None = None,
        min_width: int | None = None,
        max_width: int | None = None,
        ratio: int | None = None,
        no_wrap: bool = False,
    ) -> None:
        """Add a column with overflow="fold" unless told otherwise."""
        super().add_column(
            header,
            footer,
            header_style=header_style,
            highlight=highlight,
            footer_style=footer_style,
            style=style,
            justify=justify,
            vertical=vertical,
            overflow=overflow,
            width=width,
            min_width=min_width,
            max_width=max_width,
            ratio=ratio,
            no_wrap=no_wrap,
        )
