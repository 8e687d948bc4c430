"""Utility functions for dirtree."""

import locale
import sys
import unicodedata
from pathlib import Path
from typing import Callable, Tuple

from loguru import logger

from dirtree.services.exceptions import InvalidPathError

PATH_SEPARATOR = "/"

SortKey = Callable[[str], object]


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = False,
    log_to_stdout: bool = False,
    log_dir: Path | None = None,
) -> None:
    """Configure loguru sinks.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR
        log_to_file: Write to ~/.dirtree/dirtree.log with rotation
        log_to_stdout: Write to stderr (stdout is reserved for command output)
        log_dir: Override the directory holding the log file
    """
    # Remove default handler and any existing handlers
    logger.remove()
    logger.enable("dirtree")

    if log_to_file:
        log_path = (log_dir or Path.home() / ".dirtree") / "dirtree.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(log_path),
            level=log_level,
            rotation="10 MB",
            retention="10 days",
            backtrace=True,
            diagnose=True,
            enqueue=True,
            colorize=False,
        )

    if log_to_stdout:
        logger.add(sys.stderr, level=log_level, backtrace=True, diagnose=True, colorize=True)


def parse_path(path: str) -> Tuple[str, ...]:
    """Split a slash-separated path into its validated segments.

    Paths are always relative: no leading or trailing slash and no empty
    segments.

    Examples:
        >>> parse_path("fruits/apples/fuji")
        ('fruits', 'apples', 'fuji')
        >>> parse_path("fruits")
        ('fruits',)
    """
    if not path:
        raise InvalidPathError(path, "path is empty")
    if path.startswith(PATH_SEPARATOR):
        raise InvalidPathError(path, "leading slash")
    if path.endswith(PATH_SEPARATOR):
        raise InvalidPathError(path, "trailing slash")

    segments = tuple(path.split(PATH_SEPARATOR))
    if any(not segment for segment in segments):
        raise InvalidPathError(path, "empty segment")
    return segments


def _strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def unicode_sort_key(name: str) -> Tuple[str, str, str]:
    """Collation key approximating locale-aware string comparison.

    Primary order ignores accents and case, then accents break ties, then
    lowercase sorts before uppercase.

    Examples:
        >>> sorted(["banana", "Apple", "apple", "Banana"], key=unicode_sort_key)
        ['apple', 'Apple', 'banana', 'Banana']
    """
    folded = name.casefold()
    return _strip_accents(folded), folded, name.swapcase()


def get_sort_key(collation: str) -> SortKey:
    """Return the sibling sort key for a collation name."""
    if collation == "locale":
        return locale.strxfrm
    if collation == "ordinal":
        return str
    return unicode_sort_key
