"""Pydantic schemas for dirtree."""

from dirtree.schemas.command import Command, CommandKeyword
from dirtree.schemas.directory import DirectoryNode

__all__ = [
    "Command",
    "CommandKeyword",
    "DirectoryNode",
]
