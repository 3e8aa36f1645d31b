"""
Tests for print_tree / format_tree.
"""

import io

import pytest
from rich.console import Console

from narytree import DanglingReferenceError, Node, Tree, format_tree, print_tree
from narytree.config import PrintStyle


class TestFormatTree:
    """Line layout."""

    def test_format_family(self, family):
        tree, _ = family

        assert format_tree(tree) == [
            "* Root",
            "  * A",
            "    - A1",
            "    - A2",
            "  * B",
            "    - B1",
        ]

    def test_single_node_is_a_leaf(self):
        assert format_tree(Tree.new(Node.new("Solo"))) == ["- Solo"]

    def test_custom_label(self, make):
        tree = Tree.new(make("Root", {"w": 0.5})).add_child(make("Leaf", {"w": 0.25}))
        lines = format_tree(tree, lambda n: f"{n.name}: {n.content['w']}")

        assert lines == ["* Root: 0.5", "  - Leaf: 0.25"]

    def test_nameless_node(self):
        assert format_tree(Tree.new(Node.new())) == ["- "]

    def test_custom_style(self, family):
        tree, _ = family
        lines = format_tree(tree, style=PrintStyle(indent=4, branch_marker="+", leaf_marker="."))

        assert lines[:3] == ["+ Root", "    + A", "        . A1"]

    def test_empty_tree(self):
        assert format_tree(Tree.new()) == []


class TestPrintTree:
    """Output to standard output."""

    def test_print_tree(self, family, capsys):
        tree, _ = family
        print_tree(tree)

        out = capsys.readouterr().out
        assert out.splitlines() == format_tree(tree)

    def test_print_tree_with_label(self, make, capsys):
        tree = Tree.new(make("Root")).add_child(make("Child"))
        print_tree(tree, lambda n: f"<{n.name}>")

        assert capsys.readouterr().out == "* <Root>\n  - <Child>\n"

    def test_labels_are_not_markup(self, make, capsys):
        tree = Tree.new(make("[bold]Root[/bold]"))
        print_tree(tree)

        assert capsys.readouterr().out == "- [bold]Root[/bold]\n"

    def test_dangling_child_raises(self):
        root = Node(id="r", name="Root", children=("gone",))
        tree = Tree(root_id="r", nodes={"r": root})

        with pytest.raises(DanglingReferenceError):
            print_tree(tree)

    def test_control_characters_pass_through(self, make, capsys):
        """Tabs and carriage returns in labels reach stdout unchanged."""
        tree = Tree.new(make("a\tb")).add_child(make("x\ry"))
        print_tree(tree)

        assert capsys.readouterr().out == "* a\tb\n  - x\ry\n"

    def test_output_matches_format_tree_exactly(self, make, capsys):
        tree = Tree.new(make("  padded  ")).add_child(make("été :smile:"))
        print_tree(tree)

        assert capsys.readouterr().out == "".join(line + "\n" for line in format_tree(tree))

    def test_writes_to_given_console(self, family):
        tree, _ = family
        buffer = io.StringIO()
        print_tree(tree, console=Console(file=buffer))

        assert buffer.getvalue().splitlines() == format_tree(tree)


class TestStyleFromSettings:
    """The default style comes from the environment."""

    @pytest.fixture
    def plus_style(self, monkeypatch):
        monkeypatch.setenv("NARYTREE_PRINT_INDENT", "3")
        monkeypatch.setenv("NARYTREE_PRINT_BRANCH_MARKER", "+")
        monkeypatch.setenv("NARYTREE_PRINT_LEAF_MARKER", "o")

    def test_format_tree_uses_env_style(self, family, plus_style):
        tree, _ = family

        assert format_tree(tree)[:3] == ["+ Root", "   + A", "      o A1"]

    def test_print_tree_uses_env_style(self, make, plus_style, capsys):
        tree = Tree.new(make("Root")).add_child(make("Leaf"))
        print_tree(tree)

        assert capsys.readouterr().out == "+ Root\n   o Leaf\n"

    def test_explicit_style_wins(self, family, plus_style):
        tree, _ = family

        assert format_tree(tree, style=PrintStyle())[:2] == ["* Root", "  * A"]
