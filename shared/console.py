"""
coffdump Console Interface
===========================

Rich-powered console abstraction used by the CLI and the presentation layer.

Two Rich consoles are kept apart: the *output* console writes the dump to
stdout, the *message* console writes status and error messages to stderr so
that redirected dumps stay clean.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence, TextIO

from rich.console import Console
from rich.markup import escape
from rich.measure import Measurement
from rich.segment import Segments
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_COFF_THEME = Theme(
    {
        "coff.success": "bold green",
        "coff.error": "bold red",
    }
)


# Upper bound for a table's natural width.
_MAX_TABLE_WIDTH = 1024


class CoffConsole:
    """Unified console interface for coffdump.

    Usage::

        con = CoffConsole()
        con.line("[Header]")           # literal text, no markup parsing
        con.error("Truncated file")    # styled, to stderr

    Args:
        quiet:  Suppress all output.
        file:   Alternative stream for dump output (defaults to stdout).
        stderr_file: Alternative stream for messages (defaults to stderr).
    """

    def __init__(
        self,
        *,
        quiet: bool = False,
        file: TextIO | None = None,
        stderr_file: TextIO | None = None,
    ) -> None:
        self._console = Console(
            theme=_COFF_THEME,
            quiet=quiet,
            highlight=False,
            file=file,
        )
        self._messages = Console(
            theme=_COFF_THEME,
            quiet=quiet,
            highlight=False,
            stderr=stderr_file is None,
            file=stderr_file,
        )

    # ------------------------------------------------------------------ #
    #  Dump output (stdout)
    # ------------------------------------------------------------------ #

    def line(self, text: str = "") -> None:
        """Print *text* verbatim: no markup, no highlighting, no wrapping.

        COFF dump labels such as ``[Header]`` look like Rich markup tags, so
        plain dump lines must bypass markup parsing.
        """
        self._console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def lines(self, texts: Sequence[str]) -> None:
        for text in texts:
            self.line(text)

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        justify: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:   Table title.
            columns: Column header labels.
            rows:    Row tuples; each cell is stringified and rendered
                     literally (no markup).
            caption: Optional footer caption.
            justify: Optional per-column justification (``left``/``right``).
        """
        tbl = Table(
            title=Text(title),
            caption=Text(caption) if caption is not None else None,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            just = justify[idx] if justify and idx < len(justify) else "left"
            tbl.add_column(col_name, justify=just)  # type: ignore[arg-type]

        for row in rows:
            tbl.add_row(*(Text(str(cell)) for cell in row))

        # Rendered at its natural width so cells are never truncated.
        options = self._console.options
        natural = Measurement.get(
            self._console, options.update_width(_MAX_TABLE_WIDTH), tbl,
        ).maximum
        segments = self._console.render(
            tbl, options.update_width(max(natural, options.max_width)),
        )
        self._console.print(Segments(segments), crop=False)

    def json(self, data: str) -> None:
        """Print a JSON document verbatim."""
        self._console.print(data, markup=False, highlight=False, emoji=False, soft_wrap=True)

    # ------------------------------------------------------------------ #
    #  Messages (stderr)
    # ------------------------------------------------------------------ #

    def success(self, message: str) -> None:
        self._messages.print(f"[coff.success]✔ {escape(message)}[/coff.success]")

    def error(self, message: str) -> None:
        self._messages.print(f"[coff.error]ERROR:[/coff.error] {escape(message)}")
