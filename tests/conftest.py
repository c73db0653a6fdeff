"""Shared test fixtures for traced.

Provides small traced pipelines and helpers for inspecting trees.
"""

from io import StringIO

import pytest

from traced import Traced, pure, trace_step


@pytest.fixture
def out() -> StringIO:
    """File-like sink for rich output."""
    return StringIO()


# ------------------------------------------------------------------
# Shared test helpers
# ------------------------------------------------------------------

def step(message: str, delta: int = 1):
    """A step that adds ``delta`` and logs ``message`` as a labeled node."""
    return lambda n: trace_step(n + delta, message)


def abc_pipeline() -> Traced[int]:
    """Three sequential steps logging A, B, C."""
    return pure(0).then(step("A")).then(step("B")).then(step("C"))


def tree_labels(tree) -> list:
    """Nested [label, [children...]] form of a TreeNode, for readable asserts."""
    return [tree.label, [tree_labels(child) for child in tree.children]]
