"""
Alloy Console Interface
========================

Rich-powered console abstraction giving every Alloy tool the same section
headers, status messages, tables and spinners.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator, Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_ALLOY_THEME = Theme(
    {
        "alloy.section": "bold bright_magenta",
        "alloy.success": "bold green",
        "alloy.warning": "bold yellow",
        "alloy.error": "bold red",
        "alloy.info": "bold bright_blue",
        "alloy.dim": "dim white",
        "alloy.deobf": "bold bright_green",
        "alloy.obf": "bold bright_yellow",
        "alloy.descriptor": "bright_cyan",
    }
)


class AlloyConsole:
    """Unified console interface for the Alloy tools.

    Usage::

        con = AlloyConsole()
        con.section("Mapping Summary")
        con.success("Loaded 4,812 classes")
    """

    def __init__(self, *, quiet: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (useful in library / test mode).
        """
        self._console = Console(
            theme=_ALLOY_THEME,
            quiet=quiet,
            highlight=False,
        )

    # ------------------------------------------------------------------ #
    #  Section header
    # ------------------------------------------------------------------ #

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(f"  {title}  ", style="alloy.section", characters="─")
        self._console.print()

    # ------------------------------------------------------------------ #
    #  Message helpers
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._console.print(
            f"[alloy.success][✔] SUCCESS:[/alloy.success] {message}"
        )

    def warning(self, message: str) -> None:
        self._console.print(
            f"[alloy.warning][⚠] WARNING:[/alloy.warning] {message}"
        )

    def error(self, message: str) -> None:
        self._console.print(
            f"[alloy.error][✘] ERROR:[/alloy.error] {message}"
        )

    def info(self, message: str) -> None:
        self._console.print(
            f"[alloy.info][ℹ] INFO:[/alloy.info] {message}"
        )

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Row tuples; each cell is stringified.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))

        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Status spinner
    # ------------------------------------------------------------------ #

    @contextmanager
    def status(self, message: str = "Working...") -> Generator[Any, None, None]:
        """Context-manager showing a spinner with a status message.

        Example::

            with con.status("Parsing mappings..."):
                table = engine.load(path)
        """
        with self._console.status(
            f"[alloy.info]{message}[/alloy.info]",
            spinner="dots",
            spinner_style="bright_cyan",
        ) as status_obj:
            yield status_obj

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()
