"""Schemas for directory tree nodes."""

from typing import List, Optional

from pydantic import BaseModel


class DirectoryNode(BaseModel):
    """Directory node owning an ordered list of uniquely named children."""

    name: str
    children: List["DirectoryNode"] = []  # Default to empty list

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def get_child(self, name: str) -> Optional["DirectoryNode"]:
        return next((child for child in self.children if child.name == name), None)

    def add_child(self, node: "DirectoryNode") -> None:
        self.children.append(node)

    def remove_child(self, name: str) -> Optional["DirectoryNode"]:
        """Detach the child with the given name and return it, if present."""
        for index, child in enumerate(self.children):
            if child.name == name:
                return self.children.pop(index)
        return None


# Support for recursive model
DirectoryNode.model_rebuild()
