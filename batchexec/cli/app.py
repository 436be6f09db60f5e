"""Core CLI app definition and global state."""

from typing import Annotated

import typer
from rich.console import Console

from ..utils.logging import setup_logging

app = typer.Typer(
    name="batchexec",
    help="Inspect batch executive attributes, platform and list-of-values files.",
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        print(f"batchexec {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log at INFO level"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log at DEBUG level"),
    ] = False,
):
    """batchexec: batch executive framework.

    Use --verbose or --debug to see the executive's own log output.
    """
    from ..config import get_config

    setup_logging(verbose=verbose, debug=debug, level=get_config().log_level)


# Import commands to register them with the app
from .commands import (  # noqa: E402, F401
    attributes,
    lov,
    platform_cmd,
)
