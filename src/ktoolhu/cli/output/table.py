"""Table output shared by all commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from rich.table import Table as RichTable

if TYPE_CHECKING:
    from rich.console import ConsoleRenderable, RichCast

OverflowMethod = Literal["fold", "crop", "ellipsis", "ignore"]


class Table(RichTable):
    """Rich Table whose columns wrap long values instead of truncating them.

    Resource names, finalizer lists and eviction messages are frequently
    longer than a terminal column, so ``overflow`` defaults to ``"fold"``.

    Usage:
        from ktoolhu.cli.output import Table

        table = Table(title="Evicted pods")
        table.add_column("Name")
        table.add_column("Age", no_wrap=True)
        table.add_row("web-7d9f", "3d")
    """

    def add_column(
        self,
        header: ConsoleRenderable | RichCast | str = "",
        footer: ConsoleRenderable | RichCast | str = "",
        *,
        overflow: OverflowMethod = "fold",
        **kwargs: Any,
    ) -> None:
        """Add a column with overflow="fold" by default."""
        super().add_column(header, footer, overflow=overflow, **kwargs)
