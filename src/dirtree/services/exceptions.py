"""Errors raised by directory tree operations."""


class DirTreeError(Exception):
    """Base exception for handled directory tree failures."""

    pass


class InvalidPathError(DirTreeError):
    """Raised when a path string is not a valid slash-separated segment list."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path '{path}': {reason}")


class CommandSyntaxError(DirTreeError):
    """Raised when a known command is given the wrong number of arguments."""

    pass


class NodeNotFoundError(DirTreeError):
    """Raised when a path segment does not exist during traversal."""

    def __init__(self, path: str, missing_segment: str, operation: str = "find"):
        self.path = path
        self.missing_segment = missing_segment
        self.operation = operation
        super().__init__(f"Cannot {operation} {path} - {missing_segment} does not exist")


class NodeExistsError(DirTreeError):
    """Raised when attaching a node would duplicate a sibling name."""

    def __init__(self, path: str, name: str):
        self.path = path
        self.name = name
        super().__init__(f"Cannot move into {path} - {name} already exists there")


class CyclicMoveError(DirTreeError):
    """Raised when a node would be moved into itself or one of its descendants."""

    def __init__(self, target: str, destination: str):
        self.target = target
        self.destination = destination
        super().__init__(f"Cannot move {target} into {destination} - destination is inside {target}")
