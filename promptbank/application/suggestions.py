"""Console rendering of failed prompt resolutions."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from promptbank.data import Ambiguous, MatchResult, NoMatch

_stderr_console: Console | None = None


def _default_console() -> Console:
    global _stderr_console
    if _stderr_console is None:
        _stderr_console = Console(stderr=True)
    return _stderr_console


def render_resolution(result: MatchResult, query: str, console: Console | None = None) -> None:
    """Print suggestions for an ambiguous result or a not-found message.

    Definite results print nothing.
    """
    console = console or _default_console()

    if isinstance(result, Ambiguous):
        console.print(Text.assemble(("Error", "red"), ": Multiple matches. Did you mean:"))
        table = Table.grid(padding=(0, 2))
        table.add_column(min_width=12)
        table.add_column()
        table.add_column()
        for prompt in result.candidates:
            table.add_row(
                Text(prompt.name, style="bold"),
                Text(f"({prompt.short_code})", style="dim"),
                Text(prompt.description),
            )
        console.print(table)
    elif isinstance(result, NoMatch):
        console.print(Text.assemble(("Error", "red"), f": No prompt found matching '{query}'"))
