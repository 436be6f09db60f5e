"""Logging helpers shared by batchexec modules.

Adds a TRACE level below DEBUG for the very chatty diagnostics the
registries emit, and a Rich-backed root logger setup for CLI use.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

TRACE = 5

logging.addLevelName(TRACE, "TRACE")


def trace(logger: logging.Logger, msg: str, *args) -> None:
    """Log at TRACE level (cheap no-op when TRACE is disabled)."""
    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, msg, *args)


def resolve_level(name: str | int) -> int:
    """Map a level name ("info", "TRACE", ...) or number to a logging level."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    console: Console | None = None,
    level: str | int | None = None,
) -> int:
    """Configure the root logger with a RichHandler.

    Args:
        verbose: Log at INFO
        debug: Log at DEBUG (wins over verbose)
        console: Console to write to (stderr by default)
        level: Explicit level, used when neither flag is set

    Returns:
        The level that was applied.
    """
    resolved = logging.WARNING if level is None else resolve_level(level)
    if verbose:
        resolved = logging.INFO
    if debug:
        resolved = logging.DEBUG

    logging.basicConfig(
        level=resolved,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console or Console(stderr=True),
                show_path=False,
                markup=False,
            )
        ],
        force=True,
    )
    logging.getLogger("batchexec").setLevel(resolved)
    return resolved
