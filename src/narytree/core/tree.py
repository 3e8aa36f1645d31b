"""
N-ary tree with value semantics.

The tree is an id-indexed map of immutable nodes plus the id of the root.
Every structural operation builds a new node map from the old one and
returns a new Tree; nodes the operation does not touch are shared.

Tree Structure:
    Root (level 0)
    ├── Branch (level 1)
    │   └── Leaf (level 2)
    └── Other (level 1)

    root_id = Root.id
    nodes   = {Root.id: Root, Branch.id: Branch, Leaf.id: Leaf, Other.id: Other}

Operations that cannot apply (unknown ids, mixed parents, id collisions)
return an ``OperationError`` value. Usage errors that would break the tree
(a node becoming its own ancestor, dangling child ids) raise.
"""

from __future__ import annotations

import functools
import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field, field_serializer, field_validator

from narytree.core.errors import (
    DanglingReferenceError,
    InvalidParentError,
    InvalidStepError,
    NodeNotFoundError,
)
from narytree.core.node import Node
from narytree.core.results import OperationError
from narytree.utils.logging import log_calls

logger = logging.getLogger(__name__)

NodeRef = Union[Node, str]


class Sentinel(str, Enum):
    """Markers returned by ``get_and_update`` callbacks."""

    POP = "pop"


POP = Sentinel.POP


def _node_id(ref: NodeRef) -> str:
    return ref.id if isinstance(ref, Node) else ref


# =========================================================================
# Node map helpers
#
# These work on a private copy of the node map owned by the running
# operation, never on a map reachable from an existing Tree.
# =========================================================================


def _without(ids: Tuple[str, ...], removed: Iterable[str]) -> Tuple[str, ...]:
    removed_set = set(removed)
    return tuple(i for i in ids if i not in removed_set)


def _unlink(nodes: Dict[str, Node], node_ids: Sequence[str]) -> None:
    """Remove node_ids from their current parents' children lists.

    Each affected parent is rebuilt once, however many ids leave it.
    """
    by_parent: Dict[str, List[str]] = {}
    for node_id in node_ids:
        parent_id = nodes[node_id].parent
        if parent_id is not None and parent_id in nodes:
            by_parent.setdefault(parent_id, []).append(node_id)
    for parent_id, removed in by_parent.items():
        parent = nodes[parent_id]
        nodes[parent_id] = parent.model_copy(update={"children": _without(parent.children, removed)})


def _append_children(nodes: Dict[str, Node], parent_id: str, child_ids: Sequence[str]) -> None:
    """Append child_ids (in order) to parent_id's children, moving existing ones to the end."""
    parent = nodes[parent_id]
    children = _without(parent.children, child_ids) + tuple(child_ids)
    nodes[parent_id] = parent.model_copy(update={"children": children})


def _relevel(nodes: Dict[str, Node], top_id: str, level: int) -> None:
    """Set top_id to ``level`` and recompute levels of its whole subtree."""
    stack = [(top_id, level)]
    while stack:
        node_id, node_level = stack.pop()
        node = nodes.get(node_id)
        if node is None:
            raise DanglingReferenceError(node_id, None)
        if node.level != node_level:
            nodes[node_id] = node.model_copy(update={"level": node_level})
        stack.extend((child_id, node_level + 1) for child_id in node.children)


def _reparent(nodes: Dict[str, Node], node_ids: Sequence[str], parent_id: Optional[str]) -> None:
    """Detach node_ids from their parents and point them at parent_id.

    The new parent's children list is left to the caller.
    """
    _unlink(nodes, node_ids)
    level = 0 if parent_id is None else nodes[parent_id].level + 1
    for node_id in node_ids:
        nodes[node_id] = nodes[node_id].model_copy(update={"parent": parent_id})
        _relevel(nodes, node_id, level)


def _is_ancestor_or_self(nodes: Mapping[str, Node], ancestor_id: str, node_id: Optional[str]) -> bool:
    """True if ancestor_id is node_id or lies on node_id's path to the root."""
    seen = set()
    while node_id is not None and node_id not in seen:
        if node_id == ancestor_id:
            return True
        seen.add(node_id)
        node = nodes.get(node_id)
        node_id = node.parent if node is not None else None
    return False


def _check_parent(nodes: Mapping[str, Node], node_id: str, parent_id: str) -> None:
    if node_id == parent_id:
        raise InvalidParentError(node_id, parent_id)
    if _is_ancestor_or_self(nodes, node_id, parent_id):
        raise InvalidParentError(
            node_id,
            parent_id,
            f"Cannot move node {node_id!r} under its own descendant {parent_id!r}",
        )


class Tree(BaseModel):
    """
    An immutable N-ary tree.

    ``nodes`` is the sole owner of every node; nodes refer to each other only
    by id. It is a read-only mapping: operations return new trees.

    Iterating a tree yields its nodes in pre-order, ``len(tree)`` is the node
    count and ``node_id in tree`` tests membership. An empty tree is falsy,
    so check operation results with ``result.ok`` rather than truthiness.
    """

    root_id: Optional[str] = None
    nodes: Mapping[str, Node] = Field(default_factory=lambda: MappingProxyType({}))

    model_config = {"frozen": True}

    @field_validator("nodes")
    @classmethod
    def freeze_nodes(cls, v: Mapping[str, Node]) -> Mapping[str, Node]:
        return MappingProxyType(dict(v))

    @field_serializer("nodes")
    def serialize_nodes(self, v: Mapping[str, Node]) -> Dict[str, Any]:
        return {node_id: node.model_dump() for node_id, node in v.items()}

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def new(cls, node: Optional[Node] = None) -> "Tree":
        """
        Create an empty tree, or a tree rooted at ``node``.

        The root's parent is forced to None and its level to 0. Children the
        node may carry are dropped: the new map does not hold them.
        """
        if node is None:
            return cls()
        root = node.model_copy(update={"parent": None, "level": 0, "children": ()})
        return cls._build(root.id, {root.id: root})

    @classmethod
    def _build(cls, root_id: Optional[str], nodes: Dict[str, Node]) -> "Tree":
        return cls.model_construct(root_id=root_id, nodes=MappingProxyType(nodes))

    def _replace(self, nodes: Dict[str, Node]) -> "Tree":
        return self._build(self.root_id, nodes)

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> "Tree":
        """Return self; counterpart of ``OperationError.unwrap``."""
        return self

    def describe(self) -> str:
        root = self.root
        root_desc = f"root={root.name!r}" if root is not None else "empty"
        return f"Tree({root_desc}, {len(self.nodes)} nodes)"

    # =========================================================================
    # Structural Mutation
    # =========================================================================

    @log_calls()
    def add_child(self, child: Node, parent: Optional[NodeRef] = None) -> Union["Tree", OperationError]:
        """
        Add ``child`` as the last child of ``parent`` (default: the root).

        If the child id is already in the tree, the stored node keeps its name
        and content but is moved to the end of the parent's children,
        re-parented, and its subtree levels are recomputed. Adding the same
        child twice is therefore idempotent.

        Raises:
            InvalidParentError: child and parent are the same node, or the
                parent lies inside the child's subtree
        """
        parent_id = self.root_id if parent is None else _node_id(parent)
        if parent_id is not None and child.id == parent_id:
            raise InvalidParentError(child.id, parent_id)
        parent_node = self.nodes.get(parent_id) if parent_id is not None else None
        if parent_node is None:
            logger.debug("add_child: parent %s not found", parent_id)
            return OperationError.not_found("add_child", [str(parent_id)])

        nodes = dict(self.nodes)
        if child.id in nodes:
            _check_parent(nodes, child.id, parent_id)
            _reparent(nodes, [child.id], parent_id)
        else:
            nodes[child.id] = child.model_copy(
                update={"parent": parent_id, "level": parent_node.level + 1, "children": ()}
            )
        _append_children(nodes, parent_id, [child.id])
        return self._replace(nodes)

    @log_calls()
    def move_nodes(self, children: Sequence[NodeRef], new_parent: NodeRef) -> Union["Tree", OperationError]:
        """
        Move sibling nodes under ``new_parent``, appended in the given order.

        All moved nodes must currently share one parent; otherwise nothing is
        moved and an OperationError is returned. An empty list is a no-op.

        Raises:
            InvalidParentError: the new parent is one of the moved nodes or
                one of their descendants
        """
        child_ids = list(dict.fromkeys(_node_id(c) for c in children))
        if not child_ids:
            return self
        new_parent_id = _node_id(new_parent)

        missing = [i for i in child_ids + [new_parent_id] if i not in self.nodes]
        if missing:
            logger.debug("move_nodes: missing ids %s", missing)
            return OperationError.not_found("move_nodes", missing)
        old_parents = {self.nodes[i].parent for i in child_ids}
        if len(old_parents) > 1:
            logger.debug("move_nodes: ids %s have parents %s", child_ids, old_parents)
            return OperationError.mixed_parents("move_nodes", child_ids)
        for child_id in child_ids:
            _check_parent(self.nodes, child_id, new_parent_id)

        nodes = dict(self.nodes)
        _reparent(nodes, child_ids, new_parent_id)
        _append_children(nodes, new_parent_id, child_ids)
        return self._replace(nodes)

    @log_calls()
    def delete(self, node: NodeRef) -> Union["Tree", OperationError]:
        """
        Delete a single node, promoting its children.

        The children of a deleted node are appended, in order, to the deleted
        node's parent. Deleting a root with children promotes its first
        child to root; the remaining children are appended to the new root.
        Deleting the only node leaves an empty tree.
        """
        node_id = _node_id(node)
        target = self.nodes.get(node_id)
        if target is None:
            logger.debug("delete: node %s not found", node_id)
            return OperationError.not_found("delete", [node_id])

        nodes = dict(self.nodes)
        children = list(target.children)
        root_id = self.root_id
        if target.parent is not None:
            _unlink(nodes, [node_id])
            _reparent(nodes, children, target.parent)
            _append_children(nodes, target.parent, children)
        elif children:
            root_id, rest = children[0], children[1:]
            _reparent(nodes, [root_id], None)
            _reparent(nodes, rest, root_id)
            _append_children(nodes, root_id, rest)
            logger.info("Deleted root %s; promoted %s to root", node_id, root_id)
        else:
            root_id = None

        del nodes[node_id]
        return self._build(root_id, nodes)

    @log_calls()
    def detach(self, node: NodeRef) -> Union["Tree", OperationError]:
        """
        Copy the subtree rooted at ``node`` into a new, independent tree.

        The source tree is not modified; compose with ``delete`` to remove
        the branch from it as well. Levels are recomputed relative to the
        new root and child order is preserved.
        """
        node_id = _node_id(node)
        if node_id not in self.nodes:
            logger.debug("detach: node %s not found", node_id)
            return OperationError.not_found("detach", [node_id])

        nodes: Dict[str, Node] = {}
        for member, depth in self._preorder(node_id):
            update: Dict[str, Any] = {"level": depth}
            if depth == 0:
                update["parent"] = None
            nodes[member.id] = member.model_copy(update=update)
        return self._build(node_id, nodes)

    @log_calls()
    def merge(self, branch: "Tree", node: NodeRef) -> Union["Tree", OperationError]:
        """
        Graft ``branch`` as the last child of ``node``.

        Branch levels are shifted by the grafting node's depth + 1. The two
        trees must not share ids; an empty branch leaves the tree unchanged.
        """
        node_id = _node_id(node)
        target = self.nodes.get(node_id)
        if target is None:
            logger.debug("merge: node %s not found", node_id)
            return OperationError.not_found("merge", [node_id])
        if branch.root_id is None:
            return self
        overlap = self.nodes.keys() & branch.nodes.keys()
        if overlap:
            logger.debug("merge: %d colliding ids", len(overlap))
            return OperationError.id_collision("merge", overlap)

        nodes = dict(self.nodes)
        shift = target.level + 1
        for branch_id, branch_node in branch.nodes.items():
            nodes[branch_id] = branch_node.model_copy(update={"level": branch_node.level + shift})
        nodes[branch.root_id] = nodes[branch.root_id].model_copy(update={"parent": node_id})
        nodes[node_id] = target.model_copy(update={"children": target.children + (branch.root_id,)})
        return self._replace(nodes)

    @log_calls()
    def put(self, node_id: NodeRef, replacement: Node) -> "Tree":
        """
        Replace the name and content of the node at ``node_id``.

        Parent, level and children of the stored node are kept, so the
        hierarchy is unchanged whatever ``replacement`` carries.

        Raises:
            NodeNotFoundError: ``node_id`` is not in the tree
        """
        node_id = _node_id(node_id)
        current = self.nodes.get(node_id)
        if current is None:
            raise NodeNotFoundError(node_id, "put")
        nodes = dict(self.nodes)
        nodes[node_id] = current.model_copy(update={"name": replacement.name, "content": replacement.content})
        return self._replace(nodes)

    # =========================================================================
    # Node Access
    # =========================================================================

    def get(self, node_id: NodeRef) -> Optional[Node]:
        """Get a node by id, or None."""
        return self.nodes.get(_node_id(node_id))

    @property
    def root(self) -> Optional[Node]:
        """Get the root node."""
        if self.root_id is None:
            return None
        return self.nodes.get(self.root_id)

    def _resolve(self, ref: NodeRef) -> Optional[Node]:
        if isinstance(ref, Node):
            return self.nodes.get(ref.id, ref)
        return self.nodes.get(ref)

    def _child(self, child_id: str, parent_id: str) -> Node:
        child = self.nodes.get(child_id)
        if child is None:
            raise DanglingReferenceError(child_id, parent_id)
        return child

    # =========================================================================
    # Familial Relationships
    # =========================================================================

    def parent(self, node: NodeRef) -> Optional[Node]:
        """Get the parent of a node, or None for a root or unknown node."""
        current = self._resolve(node)
        if current is None or current.parent is None:
            return None
        return self.nodes.get(current.parent)

    def children(self, node: NodeRef) -> List[Node]:
        """Get the direct children of a node, in order."""
        current = self._resolve(node)
        if current is None:
            return []
        return [self._child(cid, current.id) for cid in current.children]

    def siblings(self, node: NodeRef) -> List[Node]:
        """Get all siblings of a node (same parent, excluding itself)."""
        node_id = _node_id(node)
        parent = self.parent(node)
        if parent is None:
            return []
        return [self._child(cid, parent.id) for cid in parent.children if cid != node_id]

    # =========================================================================
    # Bulk Transforms
    # =========================================================================

    def update_content(self, func: Callable[[Any], Any]) -> "Tree":
        """Apply ``func`` to the content of every node."""
        nodes = {
            node_id: node.model_copy(update={"content": func(node.content)}) for node_id, node in self.nodes.items()
        }
        return self._replace(nodes)

    def each_leaf(self, func: Callable[[Any], Any]) -> "Tree":
        """Apply ``func`` to the content of every leaf node."""
        nodes = dict(self.nodes)
        for node_id, node in self.nodes.items():
            if node.is_leaf:
                nodes[node_id] = node.model_copy(update={"content": func(node.content)})
        return self._replace(nodes)

    # =========================================================================
    # Traversal
    # =========================================================================

    def _preorder(self, start_id: str) -> Iterator[Tuple[Node, int]]:
        """Yield (node, depth relative to start) in pre-order."""
        stack: List[Tuple[str, Optional[str], int]] = [(start_id, None, 0)]
        while stack:
            node_id, parent_id, depth = stack.pop()
            node = self.nodes.get(node_id)
            if node is None:
                raise DanglingReferenceError(node_id, parent_id)
            yield node, depth
            stack.extend((cid, node_id, depth + 1) for cid in reversed(node.children))

    def __iter__(self) -> Iterator[Node]:  # type: ignore[override]
        if self.root_id is None:
            return
        for node, _depth in self._preorder(self.root_id):
            yield node

    def to_list(self) -> List[Node]:
        """Nodes in pre-order: root, then each child subtree in order."""
        return list(self)

    def reduce(self, func: Callable[[Any, Node], Any], initial: Any) -> Any:
        """Fold ``func(acc, node)`` over the nodes in pre-order."""
        return functools.reduce(func, self, initial)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Node):
            return item.id in self.nodes
        return item in self.nodes

    # =========================================================================
    # Access Protocol
    # =========================================================================

    def __getitem__(self, node_id: NodeRef) -> Node:
        node = self.nodes.get(_node_id(node_id))
        if node is None:
            raise NodeNotFoundError(_node_id(node_id))
        return node

    def pop(self, node_id: NodeRef, default: Any = None) -> Tuple[Any, "Tree"]:
        """Delete a node, returning ``(node, new_tree)`` or ``(default, self)``."""
        result = self.delete(node_id)
        if isinstance(result, OperationError):
            return default, self
        return self.nodes[_node_id(node_id)], result

    def get_and_update(
        self, node_id: NodeRef, func: Callable[[Optional[Node]], Any]
    ) -> Tuple[Any, Union["Tree", OperationError]]:
        """
        Get a node and update it in one pass.

        ``func`` receives the current node (or None) and returns either a
        ``(value, replacement)`` pair, applied with ``put``, or ``POP``,
        which deletes the node.

        Raises:
            InvalidStepError: ``func`` returned anything else
        """
        current = self.get(node_id)
        outcome = func(current)
        if outcome is POP:
            return current, self.delete(node_id)
        if isinstance(outcome, tuple) and len(outcome) == 2:
            value, replacement = outcome
            return value, self.put(node_id, replacement)
        raise InvalidStepError(outcome, "a two-element tuple or POP")


def is_nary_tree(value: Any) -> bool:
    """Check whether the argument is a Tree."""
    return isinstance(value, Tree)


__all__ = ["POP", "NodeRef", "Sentinel", "Tree", "is_nary_tree"]
