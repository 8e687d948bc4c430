"""Main CLI entry point for dirtree."""  # pragma: no cover

from dirtree.cli.app import app  # pragma: no cover

# Register commands
from dirtree.cli.commands import run  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
