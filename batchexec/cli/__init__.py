"""Command-line interface for batchexec."""

from .app import app

__all__ = ["app"]
