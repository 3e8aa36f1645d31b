"""Plain-text tree rendering."""

from __future__ import annotations

from typing import Callable, List, Optional

from rich.console import Console

from narytree.config import PrintStyle, load_settings
from narytree.core.node import Node
from narytree.core.tree import Tree

LabelFunction = Callable[[Node], str]


def node_name(node: Node) -> str:
    """Default label: the node's name."""
    return "" if node.name is None else str(node.name)


def format_tree(
    tree: Tree,
    label: Optional[LabelFunction] = None,
    style: Optional[PrintStyle] = None,
) -> List[str]:
    """
    Render a tree as one line per node, in pre-order.

    Each line is indented two spaces per level and marked ``*`` for internal
    nodes and ``-`` for leaves (the defaults of ``Settings.print_style``,
    which ``NARYTREE_PRINT_*`` variables override):

        * Root
          * Branch
            - Leaf
          - Other
    """
    label = label or node_name
    style = style or load_settings().print_style
    return [style.prefix(node.level, node.is_leaf) + label(node) for node in tree]


def print_tree(
    tree: Tree,
    label: Optional[LabelFunction] = None,
    *,
    style: Optional[PrintStyle] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Write ``format_tree`` output to the console's file, by default stdout.

    Lines are written verbatim: labels are not parsed as markup, and tabs,
    carriage returns and other control characters pass through unchanged.
    """
    out = console or Console()
    lines = format_tree(tree, label, style)
    out.file.write("".join(line + "\n" for line in lines))
    out.file.flush()


__all__ = ["format_tree", "node_name", "print_tree"]
