"""
Suspendable fold over a tree's pre-order node sequence.

The step function receives ``(node, acc)`` and returns a command, one of:

    (Step.CONT, acc)     continue with the next node
    (Step.HALT, acc)     stop now; result status "halted"
    (Step.SUSPEND, acc)  pause; result status "suspended", resumable

``cont``, ``halt`` and ``suspend`` build these tuples. A suspended result
carries a continuation bound to a position in a snapshot of the sequence,
so resuming is repeatable:

    result = fold(tree, 0, step)
    while result.status == "suspended":
        result = result.resume()
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel

from narytree.core.errors import InvalidStepError
from narytree.core.node import Node
from narytree.core.tree import Tree


class Step(str, Enum):
    """Fold commands."""

    CONT = "cont"
    HALT = "halt"
    SUSPEND = "suspend"


Command = Tuple[Step, Any]
StepFunction = Callable[[Node, Any], Command]


def cont(acc: Any) -> Command:
    return (Step.CONT, acc)


def halt(acc: Any) -> Command:
    return (Step.HALT, acc)


def suspend(acc: Any) -> Command:
    return (Step.SUSPEND, acc)


class FoldResult(BaseModel):
    """Outcome of a fold: done, halted early, or suspended mid-way."""

    status: Literal["done", "halted", "suspended"]
    acc: Any = None
    continuation: Optional[Callable[..., Any]] = None

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def done(self) -> bool:
        return self.status == "done"

    def resume(self, command: Optional[Command] = None) -> "FoldResult":
        """
        Continue a suspended fold.

        Args:
            command: Command to continue with; defaults to ``cont(self.acc)``

        Raises:
            ValueError: the fold is not suspended
        """
        if self.continuation is None:
            raise ValueError(f"cannot resume a fold with status {self.status!r}")
        return self.continuation(command if command is not None else cont(self.acc))


def _unpack(command: Any) -> Command:
    if isinstance(command, tuple) and len(command) == 2 and isinstance(command[0], Step):
        return command
    raise InvalidStepError(command, "(Step.CONT | Step.HALT | Step.SUSPEND, acc)")


def _run(nodes: Sequence[Node], position: int, command: Any, step: StepFunction) -> FoldResult:
    while True:
        instruction, acc = _unpack(command)
        if instruction is Step.HALT:
            return FoldResult(status="halted", acc=acc)
        if instruction is Step.SUSPEND:
            resume_at = position
            return FoldResult(
                status="suspended",
                acc=acc,
                continuation=lambda next_command: _run(nodes, resume_at, next_command, step),
            )
        if position >= len(nodes):
            return FoldResult(status="done", acc=acc)
        command = step(nodes[position], acc)
        position += 1


def fold(tree: Tree, acc: Any, step: StepFunction) -> FoldResult:
    """Fold ``step`` over ``tree`` in pre-order, starting from ``cont(acc)``."""
    return _run(tuple(tree.to_list()), 0, cont(acc), step)


__all__ = ["Command", "FoldResult", "Step", "StepFunction", "cont", "fold", "halt", "suspend"]
