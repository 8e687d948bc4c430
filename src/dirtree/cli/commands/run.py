"""Run commands for dirtree CLI.

`dirtree run` reads command lines from a file or stdin and applies them to an
empty-rooted tree. `dirtree demo` does the same with a built-in session.
"""

import json
import locale
import sys
from pathlib import Path
from typing import Annotated, Any, Iterable, List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.tree import Tree

from dirtree.cli.app import app
from dirtree.config import ConfigManager, DirTreeConfig
from dirtree.schemas.directory import DirectoryNode
from dirtree.services.directory_service import DEMO_COMMANDS, DirectoryTree
from dirtree.utils import SortKey, get_sort_key, unicode_sort_key

console = Console()


def _print_json(result: Any) -> None:
    """Print a result as formatted JSON."""
    print(json.dumps(result, indent=2, ensure_ascii=True, default=str))


def read_command_lines(source: Iterable[str]) -> List[str]:
    """Strip line endings and drop empty lines.

    Whitespace-only lines are kept; they run as unknown commands.
    """
    lines = (line.rstrip("\r\n") for line in source)
    return [line for line in lines if line]


def build_tree(config: DirTreeConfig) -> DirectoryTree:
    """Create an empty-rooted tree configured from the app config."""
    sort_key = get_sort_key(config.collation)
    if config.collation == "locale":
        try:
            locale.setlocale(locale.LC_COLLATE, "")
        except locale.Error as e:
            logger.warning(f"Cannot use locale collation ({e}), falling back to unicode")
            sort_key = unicode_sort_key

    return DirectoryTree(
        indent=config.indent_width,
        sort_key=sort_key,
        echo_commands=config.echo_commands,
    )


def add_nodes_to_tree(branch: Tree, node: DirectoryNode, sort_key: SortKey) -> None:
    """Add a node's children to a Rich tree, sorted by name."""
    for child in sorted(node.children, key=lambda c: sort_key(c.name)):
        add_nodes_to_tree(branch.add(f"[bold]{escape(child.name)}/[/bold]"), child, sort_key)


def display_tree(tree: DirectoryTree) -> None:
    """Display the final tree using Rich."""
    rich_tree = Tree(escape(tree.name) or "/")
    if not tree.root.has_children:
        rich_tree.add("[dim]empty[/dim]")
    add_nodes_to_tree(rich_tree, tree.root, tree.sort_key)
    console.print(Panel(rich_tree, expand=False))


def execute(command_lines: List[str], json_output: bool, pretty: bool) -> None:
    """Apply command lines to a fresh tree and render the requested summaries."""
    config = ConfigManager().config
    tree = build_tree(config)

    logger.info(f"Processing {len(command_lines)} command(s)")
    failures = tree.run_all(command_lines)
    if failures:
        logger.info(f"{failures} command(s) reported errors")

    if json_output:
        _print_json(tree.root.model_dump())
    if pretty:
        display_tree(tree)


@app.command()
def run(
    file: Annotated[
        Optional[Path],
        typer.Argument(help="File of command lines. Reads stdin when omitted or '-'."),
    ] = None,
    json_output: bool = typer.Option(
        False, "--json", help="Print the final tree as JSON after processing"
    ),
    pretty: bool = typer.Option(
        False, "--pretty", "-p", help="Print the final tree as a Rich tree after processing"
    ),
):
    """Apply CREATE, LIST, MOVE and DELETE commands to an in-memory tree.

    Every command line is echoed before it runs. Failed commands are reported
    on stderr and processing continues with the next line.
    """
    try:
        if file is None or str(file) == "-":
            command_lines = read_command_lines(sys.stdin)
        else:
            with file.open(encoding="utf-8") as handle:
                command_lines = read_command_lines(handle)
    except OSError as e:
        logger.error(f"Error reading commands: {e}")
        typer.echo(f"Error reading commands: {e}", err=True)
        raise typer.Exit(code=1)

    execute(command_lines, json_output, pretty)


@app.command()
def demo(
    json_output: bool = typer.Option(
        False, "--json", help="Print the final tree as JSON after processing"
    ),
    pretty: bool = typer.Option(
        False, "--pretty", "-p", help="Print the final tree as a Rich tree after processing"
    ),
):
    """Run a built-in session that exercises every command."""
    execute(list(DEMO_COMMANDS), json_output, pretty)
