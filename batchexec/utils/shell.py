"""Run shell commands and hand back their decoded output."""

import logging
import subprocess

from .logging import trace
from .text import ascii_fold, crlf, strip_nul, tokenize

logger = logging.getLogger(__name__)


def run_capture(cmd: str, timeout: float | None = None) -> str:
    """Run `cmd` through the shell and return its stdout as text.

    The exit status is not checked; callers judge success by the output,
    as a pipe read would. stderr passes through to the terminal.
    """
    logger.debug("executing [%s]", cmd)
    proc = subprocess.run(
        cmd,
        shell=True,
        stdout=subprocess.PIPE,
        timeout=timeout,
    )
    output = proc.stdout.decode("utf-8", errors="replace")
    trace(logger, "exit [%d] bytes [%d]", proc.returncode, len(proc.stdout))
    return output


def output_lines(output: str, strip_blank: bool = False) -> list[str]:
    """Clean raw command output into lines.

    Lines are ASCII-folded with CR and NUL characters removed; blank lines
    are dropped when `strip_blank` is set.
    """
    lines = []
    for raw in output.splitlines():
        line = strip_nul(crlf(ascii_fold(raw)))
        if strip_blank and not line:
            continue
        lines.append(line)
    return lines


def output_tokens(output: str) -> list[str]:
    """Clean raw command output into whitespace-delimited tokens."""
    return tokenize(strip_nul(ascii_fold(output)))
