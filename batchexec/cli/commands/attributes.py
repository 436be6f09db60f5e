"""Attributes command: show the attributes a fresh BatchExec carries."""

import typer

from ...core import EnumRegistry
from ...executive import BatchExec
from ..app import app, console
from ..utils import make_table


@app.command("attributes")
def attributes_command(
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Include private (underscore) attributes"
    ),
):
    """List a BatchExec object's attributes with kind, value and default.

    Example:
        batchexec attributes --all
    """
    bx = BatchExec(lov=EnumRegistry(), fatal=0)

    rows = [
        [
            attr.name,
            attr.kind.value,
            attr.value,
            attr.default,
            "yes" if attr.read_only else "",
        ]
        for attr in bx.attrs.descriptors()
        if show_all or attr.is_public
    ]
    console.print(
        make_table(
            f"{type(bx).__name__} attributes",
            ["Name", "Kind", "Value", "Default", "Read-only"],
            rows,
        )
    )
