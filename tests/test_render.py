"""Tests for to_tree projection and ASCII drawing.

Covers each variant's projection, the exact outline format, order
preservation, determinism, and long sequential chains that would exceed
the recursion limit with a naive recursive renderer.
"""

from __future__ import annotations

import pytest
from hypothesis import given

from traced import EMPTY, Fact, Group, TreeNode, draw, draw_log, pure, to_tree, trace_step
from tests.conftest import abc_pipeline, tree_labels
from tests.strategies import trace_logs


def _expected_labels(log) -> list:
    """Reference projection written recursively, for comparison."""
    if log == EMPTY:
        return ["", []]
    if isinstance(log, Fact):
        return [log.message, []]
    return [log.label or "", [_expected_labels(c) for c in log.children]]


# ---------------------------------------------------------------------------
# to_tree
# ---------------------------------------------------------------------------


class TestToTree:
    """Projection of each TraceLog variant."""

    def test_empty(self) -> None:
        assert to_tree(EMPTY) == TreeNode(label="", children=())

    def test_fact(self) -> None:
        assert to_tree(Fact("hello")) == TreeNode(label="hello")

    def test_labeled_group(self) -> None:
        tree = to_tree(Group.of("root", Fact("a"), Fact("b")))
        assert tree_labels(tree) == ["root", [["a", []], ["b", []]]]

    def test_unlabeled_group(self) -> None:
        tree = to_tree(Group.of(None, Fact("a")))
        assert tree.label == ""
        assert [c.label for c in tree.children] == ["a"]

    def test_empty_child_renders_as_blank_leaf(self) -> None:
        tree = to_tree(Group.of("g", EMPTY))
        assert tree_labels(tree) == ["g", [["", []]]]

    def test_nested_order_preserved(self) -> None:
        log = Group.of(
            "root",
            Group.of("left", Fact("l1"), Fact("l2")),
            Fact("middle"),
            Group.of("right", Group.of("deep", Fact("d"))),
        )
        assert tree_labels(to_tree(log)) == [
            "root",
            [
                ["left", [["l1", []], ["l2", []]]],
                ["middle", []],
                ["right", [["deep", [["d", []]]]]],
            ],
        ]

    @given(trace_logs)
    def test_matches_recursive_projection(self, log) -> None:
        assert tree_labels(to_tree(log)) == _expected_labels(log)


# ---------------------------------------------------------------------------
# draw
# ---------------------------------------------------------------------------


class TestDraw:
    """The outline format."""

    def test_single_node(self) -> None:
        assert draw(TreeNode(label="only")) == "only\n"

    def test_siblings(self) -> None:
        tree = to_tree(Group.of("root", Fact("a"), Fact("b"), Fact("c")))
        assert draw(tree) == (
            "root\n"
            "|\n"
            "+- a\n"
            "|\n"
            "+- b\n"
            "|\n"
            "`- c\n"
        )

    def test_nested_continuations(self) -> None:
        log = Group.of(
            "root",
            Group.of("x", Fact("x1"), Fact("x2")),
            Group.of("y", Fact("y1")),
        )
        assert draw_log(log) == (
            "root\n"
            "|\n"
            "+- x\n"
            "|  |\n"
            "|  +- x1\n"
            "|  |\n"
            "|  `- x2\n"
            "|\n"
            "`- y\n"
            "   |\n"
            "   `- y1\n"
        )

    def test_sequencing_order(self) -> None:
        """A nested inside B nested inside C."""
        assert abc_pipeline().draw() == (
            "C\n"
            "|\n"
            "`- B\n"
            "   |\n"
            "   `- A\n"
        )

    def test_multiline_label(self) -> None:
        tree = TreeNode(
            label="root",
            children=(TreeNode(label="line1\nline2"), TreeNode(label="x")),
        )
        assert draw(tree) == (
            "root\n"
            "|\n"
            "+- line1\n"
            "|  line2\n"
            "|\n"
            "`- x\n"
        )

    def test_empty_root_label(self) -> None:
        assert draw_log(Group.of(None, Fact("a"))) == "\n|\n`- a\n"

    def test_empty_log(self) -> None:
        assert draw_log(EMPTY) == "\n"

    @given(trace_logs)
    def test_round_trip_stability(self, log) -> None:
        """Drawing the same log twice is byte-identical."""
        assert draw(to_tree(log)) == draw(to_tree(log))

    @given(trace_logs)
    def test_one_line_per_node_plus_spacers(self, log) -> None:
        tree = to_tree(log)

        def count(node) -> int:
            return 1 + sum(count(c) for c in node.children)

        nodes = count(tree)
        # Every non-root node adds one label line and one spacer line.
        assert len(draw(tree).splitlines()) == 2 * nodes - 1

    def test_str_of_tree_is_drawing(self) -> None:
        tree = to_tree(Group.of("root", Fact("a")))
        assert str(tree) == draw(tree)


class TestLongChains:
    """Rendering does not recurse per level."""

    def test_chain_deeper_than_recursion_limit(self) -> None:
        result = pure(0)
        for i in range(1500):
            result = result.then(lambda n, i=i: trace_step(n + 1, f"step {i}"))
        tree = to_tree(result.log)
        assert tree.label == "step 1499"
        lines = draw(tree).splitlines()
        assert len(lines) == 2 * 1500 - 1
        assert lines[-1].endswith("`- step 0")


class TestInvalidInput:
    """Non-TraceLog nodes are rejected."""

    def test_unknown_child_is_a_type_error(self) -> None:
        with pytest.raises(TypeError, match="Expected a TraceLog, got object"):
            to_tree(Group.of("g", object()))
