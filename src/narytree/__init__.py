"""narytree - an immutable N-ary tree with id-indexed nodes."""

__version__ = "0.1.0"

from narytree.core import (
    POP,
    CounterIdGenerator,
    DanglingReferenceError,
    FoldResult,
    InvalidParentError,
    InvalidStepError,
    NaryTreeError,
    Node,
    NodeNotFoundError,
    OperationError,
    RandomIdGenerator,
    Step,
    Tree,
    TreeOperationError,
    cont,
    default_id_generator,
    fold,
    format_tree,
    halt,
    is_error,
    is_nary_tree,
    print_tree,
    set_default_id_generator,
    suspend,
)

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
