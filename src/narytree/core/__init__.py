"""
Core tree data structure.

Components:
- Node: Immutable identity-bearing record
- Tree: Root id + id-indexed node map, with value-semantics operations
- OperationError: Recoverable error value returned by operations
- fold: Suspendable fold over the pre-order node sequence

Example:
    from narytree.core import Node, Tree

    root = Node.new("Root")
    tree = Tree.new(root).add_child(Node.new("A")).add_child(Node.new("B"))
    [n.name for n in tree]   # ['Root', 'A', 'B']
"""

from narytree.core.errors import (
    DanglingReferenceError,
    InvalidParentError,
    InvalidStepError,
    NaryTreeError,
    NodeNotFoundError,
    TreeOperationError,
)
from narytree.core.fold import FoldResult, Step, cont, fold, halt, suspend
from narytree.core.ids import CounterIdGenerator, RandomIdGenerator, default_id_generator, set_default_id_generator
from narytree.core.node import Node
from narytree.core.printing import format_tree, print_tree
from narytree.core.results import OperationError, is_error
from narytree.core.tree import POP, Tree, is_nary_tree

__all__ = [
    "CounterIdGenerator",
    "DanglingReferenceError",
    "FoldResult",
    "InvalidParentError",
    "InvalidStepError",
    "NaryTreeError",
    "Node",
    "NodeNotFoundError",
    "OperationError",
    "POP",
    "RandomIdGenerator",
    "Step",
    "Tree",
    "TreeOperationError",
    "cont",
    "default_id_generator",
    "fold",
    "format_tree",
    "halt",
    "is_error",
    "is_nary_tree",
    "print_tree",
    "set_default_id_generator",
    "suspend",
]
