"""CLI commands for dirtree."""

from . import run

__all__ = ["run"]
