"""
Tree node model.

A Node is an immutable record. The owning Tree stores it under its id and
rewrites it (via ``model_copy``) whenever the structure changes:

    Node(id, name, content, parent, level, children)
         |                    |       |      |
         opaque, fixed        |       |      ordered child ids
                              |       depth, 0 for the root
                              parent id, None for the root
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel

from narytree.core.ids import IdGenerator, default_id_generator


class Node(BaseModel):
    """A node in an N-ary tree."""

    id: str
    name: Any = None
    content: Any = None  # None means "no content"
    parent: Optional[str] = None
    level: int = 0
    children: Tuple[str, ...] = ()

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @classmethod
    def new(
        cls,
        name: Any = None,
        content: Any = None,
        *,
        id_generator: Optional[IdGenerator] = None,
    ) -> "Node":
        """
        Create a standalone node with a fresh id.

        Args:
            name: Display label
            content: Arbitrary payload
            id_generator: Id source; the process default when omitted

        Returns:
            A root-shaped node (level 0, no parent, no children)
        """
        generator = id_generator or default_id_generator()
        return cls(id=generator(), name=name, content=content)

    @property
    def is_root(self) -> bool:
        """Check if this node has no parent."""
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        return len(self.children) == 0

    @property
    def has_content(self) -> bool:
        return self.content is not None

    def describe(self) -> str:
        """Human-readable one-line description."""
        return f"[{self.id}] {self.name} (level {self.level}, {len(self.children)} children)"


__all__ = ["Node"]
