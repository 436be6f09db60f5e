"""CLI utilities shared by commands."""

from typing import Any, Iterable, Sequence

from rich.table import Table
from rich.text import Text


class ExitCode:
    """Standardized exit codes for CLI commands.

        0 = Success
        1 = Validation error (unknown class/key, malformed input)
        3 = File not found
    """

    SUCCESS = 0
    VALIDATION_ERROR = 1
    FILE_NOT_FOUND = 3


def make_table(
    title: str, columns: Sequence[str], rows: Iterable[Sequence[Any]]
) -> Table:
    """Rich table with a bold header; cells are plain text, never markup."""
    table = Table(title=title, show_header=True, header_style="bold")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(Text("") if cell is None else Text(str(cell)) for cell in row))
    return table
