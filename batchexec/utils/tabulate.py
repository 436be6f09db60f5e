"""Render lists of flat records as plain-text tables for the log."""

import logging
from enum import Enum
from typing import Any, Iterable, Mapping

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .text import trunc

UNDEFINED = "(undef)"


def _cell(value: Any, max_len: int) -> Text:
    if value is None:
        return Text(UNDEFINED)
    if isinstance(value, Enum):
        value = value.value
    return Text(trunc(str(value), max_len))


def build_table(
    records: Iterable[Mapping[str, Any]],
    sort: str = "name",
    max_len: int = 30,
) -> Table:
    """Build a Rich table from records sharing the same keys.

    The `sort` column comes first and rows are ordered by it; the other
    columns follow in alphabetical order. Columns are taken from the first
    record.
    """
    rows = list(records)
    table = Table(box=box.SIMPLE_HEAD, show_edge=False, pad_edge=False)
    if not rows:
        return table

    first = rows[0]
    header = [sort] if sort in first else []
    header += sorted(k for k in first if k != sort)
    for column in header:
        table.add_column(column, no_wrap=True)

    if sort in first:
        rows.sort(key=lambda rec: str(rec.get(sort, "")))
    for rec in rows:
        table.add_row(*(_cell(rec.get(column), max_len) for column in header))
    return table


def render_lines(table: Table, width: int = 200) -> list[str]:
    """Render a table to a list of plain text lines (no colour codes)."""
    console = Console(width=width, color_system=None, force_terminal=False)
    with console.capture() as capture:
        console.print(table)
    return [line.rstrip() for line in capture.get().splitlines() if line.strip()]


def log_table(
    logger: logging.Logger,
    records: Iterable[Mapping[str, Any]],
    sort: str = "name",
    max_len: int = 30,
) -> int:
    """Emit a table through `logger` at INFO, one line per message.

    Returns:
        Number of records tabulated.
    """
    rows = list(records)
    for line in render_lines(build_table(rows, sort=sort, max_len=max_len)):
        logger.info(line)
    return len(rows)
