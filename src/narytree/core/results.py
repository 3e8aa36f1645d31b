"""Recoverable error values returned by tree operations."""

from __future__ import annotations

from typing import Any, Iterable, List, NoReturn

from pydantic import BaseModel, Field

from narytree.core.errors import TreeOperationError


class OperationError(BaseModel):
    """An operation that did not apply.

    Returned in place of a ``Tree`` so that callers can check the outcome
    before continuing a composition chain::

        result = tree.delete(node_id)
        if not result.ok:
            print(result.describe())
    """

    operation: str  # add_child, move_nodes, delete, detach, merge
    reason: str  # not_found, mixed_parents, id_collision
    node_ids: List[str] = Field(default_factory=list)
    message: str = ""

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def not_found(cls, operation: str, node_ids: Iterable[str]) -> "OperationError":
        ids = list(node_ids)
        return cls(
            operation=operation,
            reason="not_found",
            node_ids=ids,
            message=f"node(s) not found: {', '.join(ids)}",
        )

    @classmethod
    def mixed_parents(cls, operation: str, node_ids: Iterable[str]) -> "OperationError":
        ids = list(node_ids)
        return cls(
            operation=operation,
            reason="mixed_parents",
            node_ids=ids,
            message="nodes to move do not share the same parent",
        )

    @classmethod
    def id_collision(cls, operation: str, node_ids: Iterable[str]) -> "OperationError":
        ids = sorted(node_ids)
        return cls(
            operation=operation,
            reason="id_collision",
            node_ids=ids,
            message=f"ids present in both trees: {', '.join(ids)}",
        )

    def describe(self) -> str:
        return f"{self.operation}: {self.message or self.reason}"

    def unwrap(self) -> NoReturn:
        """Raise this error value as a ``TreeOperationError``."""
        raise TreeOperationError(self.operation, self.node_ids, self.message or self.reason)


def is_error(value: Any) -> bool:
    """True if ``value`` is an ``OperationError``."""
    return isinstance(value, OperationError)


__all__ = ["OperationError", "is_error"]
