"""
narytree CLI: build the demo tree and generate node ids.

- demo: builds a goal / criteria / alternatives tree and prints it
- ids: prints ids from the random or counter generator
"""

from __future__ import annotations

import random
from typing import Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from narytree.config import load_settings
from narytree.core.ids import CounterIdGenerator, IdGenerator, RandomIdGenerator
from narytree.core.node import Node
from narytree.core.printing import print_tree
from narytree.core.tree import Tree
from narytree.utils.logging import configure_logging

app = typer.Typer(help="narytree CLI: build the demo tree and generate node ids.")
console = Console()

# (name, weight, parent name)
DEMO_NODES = [
    ("Goal", 0.45, None),
    ("Benefits", 0.67, "Goal"),
    ("Cost", 0.33, "Goal"),
    ("Alt 1", 0.1, "Cost"),
    ("Alt 2", 0.4, "Cost"),
    ("Alt 3", 0.5, "Cost"),
    ("Speed", 0.2, "Benefits"),
    ("Image", 0.3, "Benefits"),
    ("Features", 0.5, "Benefits"),
]


def build_demo_tree(id_generator: Optional[IdGenerator] = None) -> Tree:
    """Build the demo decision tree; each node's content is ``{"w": weight}``."""
    by_name: Dict[str, Node] = {}
    tree = Tree.new()
    for name, weight, parent_name in DEMO_NODES:
        node = Node.new(name, {"w": weight}, id_generator=id_generator)
        by_name[name] = node
        if parent_name is None:
            tree = Tree.new(node)
        else:
            tree = tree.add_child(node, by_name[parent_name]).unwrap()
    return tree


def _find_by_name(tree: Tree, name: str) -> Optional[Node]:
    return next((node for node in tree if node.name == name), None)


def _render_table(tree: Tree) -> None:
    table = Table(title=tree.describe())
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Level", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Siblings", justify="right")

    for node in tree:
        weight = node.content.get("w") if isinstance(node.content, dict) else None
        table.add_row(
            node.id,
            str(node.name),
            str(node.level),
            "" if weight is None else f"{weight:.2f}",
            str(len(tree.siblings(node))),
        )

    console.print(table)


def _label(node: Node) -> str:
    if isinstance(node.content, dict) and "w" in node.content:
        return f"{node.name} (w={node.content['w']})"
    return str(node.name)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log tree operations at DEBUG level"),
) -> None:
    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def demo(
    counter_ids: bool = typer.Option(False, "--counter-ids", help="Use sequential ids (node0, node1, ...)"),
    table: bool = typer.Option(False, "--table", help="Also display a table of nodes"),
    detach: Optional[str] = typer.Option(None, "--detach", help="Name of a node whose subtree to detach and print"),
) -> None:
    """Build and print the demo decision tree."""
    generator: Optional[IdGenerator] = CounterIdGenerator() if counter_ids else None
    tree = build_demo_tree(generator)

    print_tree(tree, _label)
    if table:
        _render_table(tree)

    if detach is not None:
        node = _find_by_name(tree, detach)
        if node is None:
            console.print(f"[red]No node named[/red] {detach!r}")
            raise typer.Exit(code=1)
        branch = tree.detach(node).unwrap()
        console.print(f"\n[bold]Detached {detach} ({len(branch)} nodes):[/bold]")
        print_tree(branch, _label)


@app.command()
def ids(
    count: int = typer.Option(5, "--count", "-n", min=1, help="Number of ids to generate"),
    bits: Optional[int] = typer.Option(None, "--bits", help="Bits of entropy per random id"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible random ids"),
    counter: bool = typer.Option(False, "--counter", help="Use the sequential generator"),
    prefix: str = typer.Option("node", "--prefix", help="Prefix for sequential ids"),
) -> None:
    """Print generated node ids, one per line."""
    generator: IdGenerator
    if counter:
        generator = CounterIdGenerator(prefix=prefix)
    else:
        rng = random.Random(seed) if seed is not None else None
        try:
            generator = RandomIdGenerator(bits=bits or load_settings().id_bits, rng=rng)
        except ValueError as err:
            console.print(f"[red]Invalid option:[/red] {err}")
            raise typer.Exit(code=1)

    for _ in range(count):
        console.print(generator(), markup=False, highlight=False)


__all__ = ["app", "build_demo_tree"]
