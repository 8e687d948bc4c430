"""Schemas for parsed command lines.

A command line is a keyword followed by positional arguments, all separated
by single spaces:

    CREATE <path>
    LIST
    MOVE <path> <path>
    DELETE <path>

No quoting or escaping is supported.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from dirtree.services.exceptions import CommandSyntaxError


class CommandKeyword(str, Enum):
    """Keywords understood by the command dispatcher."""

    CREATE = "CREATE"
    LIST = "LIST"
    MOVE = "MOVE"
    DELETE = "DELETE"


# Number of positional arguments each keyword takes
COMMAND_ARITY: Dict[CommandKeyword, int] = {
    CommandKeyword.CREATE: 1,
    CommandKeyword.LIST: 0,
    CommandKeyword.MOVE: 2,
    CommandKeyword.DELETE: 1,
}


class Command(BaseModel):
    """A single command line split into its keyword and arguments."""

    keyword: str = Field(description="Raw command keyword as typed")
    args: List[str] = Field(default_factory=list, description="Positional arguments")

    @property
    def known_keyword(self) -> Optional[CommandKeyword]:
        try:
            return CommandKeyword(self.keyword)
        except ValueError:
            return None

    @property
    def is_known(self) -> bool:
        return self.known_keyword is not None

    @classmethod
    def parse(cls, line: str) -> "Command":
        """Split a command line on single spaces.

        Unknown keywords parse successfully so the dispatcher can report them.
        A known keyword with the wrong number of arguments raises
        CommandSyntaxError.
        """
        keyword, *args = line.split(" ")
        command = cls(keyword=keyword, args=args)

        known = command.known_keyword
        if known is not None:
            expected = COMMAND_ARITY[known]
            if len(args) != expected:
                raise CommandSyntaxError(
                    f"{known.value} expects {expected} argument(s), got {len(args)}"
                )
        return command
