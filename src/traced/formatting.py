"""Pretty-print support for traces.

Uses rich library for formatted terminal output.
All functions accept their target object and print to a rich Console.

To avoid circular imports, this module does NOT import ``traced.traced``
at module level. Traced values are recognised by their ``log`` attribute.
"""
from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from traced.models.config import DEFAULT_RENDER_CONFIG, RenderConfig
from traced.models.log import Empty, Fact, Group
from traced.models.tree import TreeNode
from traced.operations.render import to_tree


def _ensure_utf8_stdout() -> None:
    """Reconfigure stdout to UTF-8 on Windows so tree guides render."""
    import sys
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        try:
            sys.stdout.reconfigure(encoding="utf-8")
        except (OSError, ValueError):
            pass


def _make_console(file: Any = None) -> Console:
    """Create a Console, optionally writing to a file-like object."""
    if file is not None:
        return Console(file=file, force_terminal=False, width=100)
    _ensure_utf8_stdout()
    return Console()


def _label_text(label: str, config: RenderConfig, *, leaf: bool) -> Text:
    if not label:
        return Text(config.empty_label, style="dim italic")
    return Text(label, style="white" if leaf else "bold cyan")


def to_rich_tree(tree: TreeNode, *, config: RenderConfig | None = None) -> Tree:
    """Build a ``rich.tree.Tree`` mirroring ``tree``.

    Leaves are plain, inner nodes bold. Empty labels are shown as
    ``config.empty_label``. Child order is preserved.
    """
    config = config or DEFAULT_RENDER_CONFIG
    root = Tree(_label_text(tree.label, config, leaf=not tree.children))
    stack: list[tuple[TreeNode, Tree]] = [(tree, root)]
    while stack:
        node, rich_node = stack.pop()
        for child in node.children:
            rich_child = rich_node.add(
                _label_text(child.label, config, leaf=not child.children)
            )
            stack.append((child, rich_child))
    return root


def _coerce_tree(target: Any) -> TreeNode:
    if isinstance(target, TreeNode):
        return target
    if isinstance(target, (Empty, Fact, Group)):
        return to_tree(target)
    log = getattr(target, "log", None)
    if isinstance(log, (Empty, Fact, Group)):
        return to_tree(log)
    raise TypeError(
        f"Expected a TreeNode, TraceLog or Traced value, got {type(target).__name__}"
    )


def pprint_tree(
    tree: TreeNode, *, config: RenderConfig | None = None, file: Any = None
) -> None:
    """Pretty-print a TreeNode.

    Args:
        tree: The tree to print.
        config: Display settings.
        file: Optional file-like object for output (used in tests).
    """
    console = _make_console(file)
    console.print(to_rich_tree(tree, config=config))


def pprint_trace(
    target: Any, *, config: RenderConfig | None = None, file: Any = None
) -> None:
    """Pretty-print a Traced value, a TraceLog or a TreeNode.

    Args:
        target: Any of Traced, Empty/Fact/Group, or TreeNode.
        config: Display settings.
        file: Optional file-like object for output (used in tests).
    """
    pprint_tree(_coerce_tree(target), config=config, file=file)
