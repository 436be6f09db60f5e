"""LoV command: load a list-of-values YAML file and query it."""

from pathlib import Path

import typer
from rich.markup import escape

from ...core import EnumRegistry
from ...errors import CallSyntaxError, UnknownClassError, UnknownKeyError
from ..app import app, console
from ..utils import ExitCode, make_table


@app.command("lov")
def lov_command(
    lov_file: Path = typer.Argument(..., help="YAML file of {class: {key: description}}"),
    lov_class: str | None = typer.Option(
        None, "--class", "-c", help="Show the keys of this class"
    ),
    key: str | None = typer.Option(
        None, "--key", "-k", help="Look up this key's description (needs --class)"
    ),
):
    """List LoV classes, a class's keys, or one key's description.

    Examples:
        batchexec lov colors.yaml
        batchexec lov colors.yaml --class color
        batchexec lov colors.yaml --class color --key red
    """
    if not lov_file.exists():
        console.print(f"[red]✗[/red] File not found: {escape(str(lov_file))}")
        raise typer.Exit(ExitCode.FILE_NOT_FOUND)

    registry = EnumRegistry()
    try:
        counts = registry.load_yaml(lov_file)
    except CallSyntaxError as exc:
        console.print(f"[red]✗[/red] {escape(str(exc))}")
        raise typer.Exit(ExitCode.VALIDATION_ERROR)

    if key is not None and lov_class is None:
        console.print("[red]Usage:[/red] --key requires --class")
        raise typer.Exit(ExitCode.VALIDATION_ERROR)

    try:
        if lov_class is None:
            rows = [[name, counts[name]] for name in registry.classes()]
            console.print(make_table(str(lov_file), ["Class", "Keys"], rows))
        elif key is None:
            rows = [
                [k, registry.lookup(lov_class, k)] for k in registry.keys(lov_class)
            ]
            console.print(make_table(lov_class, ["Key", "Description"], rows))
        else:
            console.print(registry.lookup(lov_class, key), markup=False)
    except (UnknownClassError, UnknownKeyError) as exc:
        console.print(f"[red]✗[/red] {escape(str(exc))}")
        raise typer.Exit(ExitCode.VALIDATION_ERROR)
