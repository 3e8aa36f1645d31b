"""
Shared fixtures for tree tests.
"""

from typing import Callable, Dict, Tuple

import pytest

from narytree import CounterIdGenerator, Node, Tree


def _assert_invariants(tree: Tree) -> None:
    """Check the structural invariants every tree must satisfy."""
    nodes = tree.nodes
    if tree.root_id is None:
        assert nodes == {}
        return

    assert tree.root_id in nodes
    for node_id, node in nodes.items():
        assert node.id == node_id
        assert len(set(node.children)) == len(node.children), f"duplicate children in {node_id}"
        for child_id in node.children:
            assert child_id in nodes, f"dangling child {child_id}"
            assert nodes[child_id].parent == node_id
        if node.parent is None:
            assert node_id == tree.root_id
            assert node.level == 0
        else:
            assert node.parent in nodes, f"dangling parent of {node_id}"
            assert node_id in nodes[node.parent].children
            assert node.level == nodes[node.parent].level + 1

    reachable = [node.id for node in tree]
    assert len(reachable) == len(set(reachable))
    assert set(reachable) == set(nodes)


@pytest.fixture
def check_invariants() -> Callable[[Tree], None]:
    return _assert_invariants


@pytest.fixture
def id_gen() -> CounterIdGenerator:
    """Deterministic ids: node0, node1, ..."""
    return CounterIdGenerator()


@pytest.fixture
def make(id_gen) -> Callable[..., Node]:
    def _make(name=None, content=None) -> Node:
        return Node.new(name, content, id_generator=id_gen)

    return _make


@pytest.fixture
def family(make) -> Tuple[Tree, Dict[str, Node]]:
    """
    Root
    ├── A
    │   ├── A1
    │   └── A2
    └── B
        └── B1
    """
    names = {name: make(name) for name in ["Root", "A", "A1", "A2", "B", "B1"]}
    tree = Tree.new(names["Root"])
    for child, parent in [("A", "Root"), ("B", "Root"), ("A1", "A"), ("A2", "A"), ("B1", "B")]:
        tree = tree.add_child(names[child], names[parent].id)
    return tree, names
