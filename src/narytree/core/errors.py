"""Exceptions for fatal tree usage errors.

Recoverable failures (missing ids and the like) are returned as
``OperationError`` values instead; see ``narytree.core.results``.
"""

from __future__ import annotations

from typing import Iterable, Optional


class NaryTreeError(Exception):
    """Base exception for narytree errors."""

    pass


class InvalidParentError(NaryTreeError):
    """Raised when a node would become its own parent or its own ancestor."""

    def __init__(self, node_id: str, parent_id: str, message: Optional[str] = None):
        self.node_id = node_id
        self.parent_id = parent_id
        super().__init__(message or f"Cannot add node {node_id!r} as a child of itself")


class DanglingReferenceError(NaryTreeError):
    """Raised when traversal meets a child id with no node in the map."""

    def __init__(self, child_id: str, parent_id: Optional[str]):
        self.child_id = child_id
        self.parent_id = parent_id
        super().__init__(f"Expecting a node for id {child_id!r} (child of {parent_id!r}), found none")


class InvalidStepError(NaryTreeError):
    """Raised when a caller-supplied step function returns a malformed value."""

    def __init__(self, value: object, expected: str):
        self.value = value
        super().__init__(f"the given function must return {expected}, got: {value!r}")


class NodeNotFoundError(NaryTreeError, KeyError):
    """Raised when an operation requires an id that is not in the tree."""

    def __init__(self, node_id: str, operation: str = "lookup"):
        self.node_id = node_id
        self.operation = operation
        super().__init__(node_id)

    def __str__(self) -> str:
        return f"{self.operation}: node {self.node_id!r} not found in tree"


class TreeOperationError(NaryTreeError):
    """Raised by ``OperationError.unwrap()`` to turn an error value into an exception."""

    def __init__(self, operation: str, node_ids: Iterable[str], reason: str):
        self.operation = operation
        self.node_ids = list(node_ids)
        self.reason = reason
        ids = ", ".join(self.node_ids) or "<none>"
        super().__init__(f"{operation} failed ({ids}): {reason}")


__all__ = [
    "DanglingReferenceError",
    "InvalidParentError",
    "InvalidStepError",
    "NaryTreeError",
    "NodeNotFoundError",
    "TreeOperationError",
]
