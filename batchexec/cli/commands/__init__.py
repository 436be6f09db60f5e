"""CLI commands for batchexec."""

from . import (
    attributes,
    lov,
    platform_cmd,
)

__all__ = [
    "attributes",
    "lov",
    "platform_cmd",
]
