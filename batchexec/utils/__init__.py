"""Pure helpers with no dependency on the registries or the host object.

Modules:
- logging: TRACE level and Rich logging setup
- rwlock: reader/writer lock
- tabulate: plain-text tables for the log
- text: CR stripping, trimming, truncation, ASCII folding
- shell: subprocess wrappers returning decoded output
- platforms: OS detection predicates
"""

from .rwlock import ReadWriteLock
from .tabulate import build_table, log_table, render_lines
from .text import ascii_fold, crlf, tokenize, trim, trim_ws, trunc

__all__ = [
    "ReadWriteLock",
    "ascii_fold",
    "build_table",
    "crlf",
    "log_table",
    "render_lines",
    "tokenize",
    "trim",
    "trim_ws",
    "trunc",
]
