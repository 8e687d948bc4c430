"""Directory tree service: an in-memory tree mutated by a tiny command language."""

from typing import Callable, Iterable, List, Optional, Tuple

import typer
from loguru import logger

from dirtree.schemas.command import Command, CommandKeyword
from dirtree.schemas.directory import DirectoryNode
from dirtree.services.exceptions import (
    CyclicMoveError,
    DirTreeError,
    NodeExistsError,
    NodeNotFoundError,
)
from dirtree.utils import SortKey, parse_path, unicode_sort_key

LineWriter = Callable[[str], None]

# Sample session touching every command
DEMO_COMMANDS: Tuple[str, ...] = (
    "CREATE fruits",
    "CREATE vegetables",
    "CREATE grains",
    "CREATE fruits/apples",
    "CREATE fruits/apples/fuji",
    "LIST",
    "CREATE grains/squash",
    "MOVE grains/squash vegetables",
    "CREATE foods",
    "MOVE grains foods",
    "MOVE fruits foods",
    "MOVE vegetables foods",
    "LIST",
    "DELETE fruits/apples",
    "DELETE foods/fruits/apples",
    "LIST",
)


def _echo_out(line: str) -> None:
    typer.echo(line)


def _echo_err(line: str) -> None:
    typer.echo(line, err=True)


def build_chain(segments: Tuple[str, ...]) -> DirectoryNode:
    """Build a node for segments[0] whose sole descendant chain covers the rest."""
    node = DirectoryNode(name=segments[0])
    if len(segments) > 1:
        node.add_child(build_chain(segments[1:]))
    return node


class DirectoryTree:
    """Service for building and mutating a directory tree.

    The tree is rooted at ``root``. A root with an empty name is never printed
    by LIST; its children are listed from indent level 0.
    """

    def __init__(
        self,
        path: str = "",
        *,
        out: Optional[LineWriter] = None,
        err: Optional[LineWriter] = None,
        indent: int = 2,
        sort_key: Optional[SortKey] = None,
        echo_commands: bool = True,
    ):
        """Initialize the tree.

        Args:
            path: Slash-separated path; every segment becomes a node, each the
                sole child of the previous. An empty string gives an unnamed root.
            out: Writer for echoed commands, listings and informational lines.
            err: Writer for error messages.
            indent: Spaces per depth level in LIST output.
            sort_key: Collation key used to order siblings for LIST.
            echo_commands: Echo each command line before processing it.
        """
        self.root = build_chain(parse_path(path)) if path else DirectoryNode(name="")
        self.out = out or _echo_out
        self.err = err or _echo_err
        self.indent = indent
        self.sort_key = sort_key or unicode_sort_key
        self.echo_commands = echo_commands

    @property
    def name(self) -> str:
        return self.root.name

    # --- Command dispatch ---

    def run(self, command_line: str) -> bool:
        """Process one command line.

        The line is echoed first, even when processing fails. Errors are
        written to the error writer and never propagate.

        Returns:
            True if the command succeeded (unknown keywords count as success).
        """
        if self.echo_commands:
            self.out(command_line)

        try:
            command = Command.parse(command_line)
            self._dispatch(command)
            return True
        except DirTreeError as e:
            logger.warning(f"Command failed: {command_line!r}: {e}")
            self.err(str(e))
            return False
        except Exception as e:
            logger.exception(f"Unexpected error processing {command_line!r}")
            self.err(f"Unexpected error: {e}")
            return False

    def run_all(self, command_lines: Iterable[str]) -> int:
        """Process command lines in order and return how many failed."""
        failures = 0
        for command_line in command_lines:
            if not self.run(command_line):
                failures += 1
        return failures

    def _dispatch(self, command: Command) -> None:
        keyword = command.known_keyword
        logger.debug(f"Dispatching {command.keyword} {command.args}")

        if keyword is CommandKeyword.CREATE:
            self.create(command.args[0])
        elif keyword is CommandKeyword.LIST:
            # If the root has a blank name, don't print it
            self.list(0 if self.root.name else -1)
        elif keyword is CommandKeyword.MOVE:
            self.move(command.args[0], command.args[1])
        elif keyword is CommandKeyword.DELETE:
            self.delete(command.args[0])
        else:
            self.out(f"Unknown command: {command.keyword}")

    # --- Operations ---

    def create(self, path: str) -> bool:
        """Create every missing node along path.

        Existing segments are descended into, so creating an existing path is
        a silent no-op.

        Returns:
            True if at least one node was created.
        """
        segments = parse_path(path)
        node = self.root
        for index, segment in enumerate(segments):
            child = node.get_child(segment)
            if child is None:
                node.add_child(build_chain(segments[index:]))
                logger.debug(f"Created {path}")
                return True
            node = child
        return False

    def list_lines(self, level: int = 0) -> List[str]:
        """Render the tree as indented lines, siblings sorted by name.

        A negative level suppresses the root's own line. Children are re-sorted
        in place on every call.
        """
        lines: List[str] = []
        self._render(self.root, level, lines)
        return lines

    def list(self, level: int = 0) -> None:
        for line in self.list_lines(level):
            self.out(line)

    def _render(self, node: DirectoryNode, level: int, lines: List[str]) -> None:
        if level >= 0:
            lines.append(" " * (self.indent * level) + node.name)

        node.children.sort(key=lambda child: self.sort_key(child.name))
        for child in node.children:
            self._render(child, level + 1, lines)

    def pick(self, path: str) -> DirectoryNode:
        """Detach the node at path from its parent and return it."""
        segments = parse_path(path)
        parent = self._resolve(segments[:-1], path, "move")
        node = parent.remove_child(segments[-1])
        if node is None:
            raise NodeNotFoundError(path, segments[-1], "move")
        return node

    def place(self, path: str, node: DirectoryNode) -> None:
        """Attach a detached node as a child of the node at path."""
        destination = self._resolve(parse_path(path), path, "move")
        if destination.get_child(node.name) is not None:
            raise NodeExistsError(path, node.name)
        destination.add_child(node)

    def move(self, target_path: str, dest_path: str) -> None:
        """Move the node at target_path under the node at dest_path.

        Both ends are resolved and checked before anything is detached, so a
        failed move leaves the tree unchanged.
        """
        target_segments = parse_path(target_path)
        dest_segments = parse_path(dest_path)

        parent = self._resolve(target_segments[:-1], target_path, "move")
        target = parent.get_child(target_segments[-1])
        if target is None:
            raise NodeNotFoundError(target_path, target_segments[-1], "move")

        destination = self._resolve(dest_segments, dest_path, "move")
        if dest_segments[: len(target_segments)] == target_segments:
            raise CyclicMoveError(target_path, dest_path)
        if destination is parent:
            logger.debug(f"{target_path} is already in {dest_path}")
            return
        if destination.get_child(target.name) is not None:
            raise NodeExistsError(dest_path, target.name)

        self.place(dest_path, self.pick(target_path))
        logger.debug(f"Moved {target_path} to {dest_path}")

    def delete(self, path: str) -> bool:
        """Remove the node at path together with its subtree.

        A missing intermediate segment is an error; a missing final segment is
        a silent no-op.

        Returns:
            True if a node was removed.
        """
        segments = parse_path(path)
        parent = self._resolve(segments[:-1], path, "delete")
        removed = parent.remove_child(segments[-1]) is not None
        if not removed:
            logger.debug(f"Nothing to delete at {path}")
        return removed

    def exists(self, path: str) -> bool:
        try:
            self._resolve(parse_path(path), path, "find")
        except NodeNotFoundError:
            return False
        return True

    def get(self, path: str) -> DirectoryNode:
        return self._resolve(parse_path(path), path, "find")

    def _resolve(
        self, segments: Tuple[str, ...], path: str, operation: str
    ) -> DirectoryNode:
        """Walk segments from the root, failing on the first missing one."""
        node = self.root
        for segment in segments:
            child = node.get_child(segment)
            if child is None:
                raise NodeNotFoundError(path, segment, operation)
            node = child
        return node

    def __repr__(self) -> str:
        return f"DirectoryTree(root={self.root.name!r})"
