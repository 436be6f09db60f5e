"""Platform command: report what the executive detects about this OS."""

from rich.markup import escape

from ...core import EnumRegistry
from ...executive import BatchExec
from ..app import app, console
from ..utils import make_table


@app.command("platform")
def platform_command():
    """Show platform predicates and the OS version tokens.

    Example:
        batchexec platform
    """
    bx = BatchExec(lov=EnumRegistry(), fatal=0)

    checks = [
        ("on_linux", bx.on_linux()),
        ("on_windows", bx.on_windows()),
        ("on_cygwin", bx.on_cygwin()),
        ("on_wsl", bx.on_wsl()),
        ("like_unix", bx.like_unix()),
        ("like_windows", bx.like_windows()),
    ]
    console.print(make_table("Platform", ["Check", "Result"], checks))
    console.print(f"[bold]OS version:[/bold] {escape(' '.join(bx.os_version()))}")
