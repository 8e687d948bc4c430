from typing import Optional

import typer

from dirtree.config import init_cli_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import dirtree

        typer.echo(f"dirtree version: {dirtree.__version__}")
        raise typer.Exit()


app = typer.Typer(name="dirtree", no_args_is_help=True)


@app.callback()
def app_callback(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """In-memory directory tree simulator."""
    init_cli_logging()
