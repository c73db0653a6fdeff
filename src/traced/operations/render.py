"""Projection of TraceLog values to display trees, and ASCII drawing.

``to_tree`` maps each variant to a TreeNode. ``draw`` produces the classic
outline form::

    C
    |
    +- B
    |  |
    |  `- A
    |
    `- D

Both are total and iterative, so long sequential chains (which nest one
level per step) render without hitting the recursion limit.
"""

from __future__ import annotations

from traced.models.log import Empty, Fact, Group, TraceLog
from traced.models.tree import TreeNode

_BRANCH = "+- "
_LAST = "`- "
_CONTINUE = "|  "
_BLANK = "   "
_SPACER = "|"


def to_tree(log: TraceLog) -> TreeNode:
    """Project a TraceLog onto a TreeNode.

    Empty renders as an unlabeled leaf, Fact as a labeled leaf, Group as a
    node labeled with its label (or ``""``) whose children keep their order.
    """
    # Post-order walk: each frame is (log, expanded). Finished subtrees are
    # pushed onto `built` and popped back off by their parent.
    built: list[TreeNode] = []
    stack: list[tuple[TraceLog, bool]] = [(log, False)]
    while stack:
        current, expanded = stack.pop()
        if isinstance(current, Empty):
            built.append(TreeNode(label=""))
        elif isinstance(current, Fact):
            built.append(TreeNode(label=current.message))
        elif isinstance(current, Group) and not expanded:
            stack.append((current, True))
            for child in reversed(current.children):
                stack.append((child, False))
        elif isinstance(current, Group):
            n = len(current.children)
            children = tuple(built[len(built) - n:]) if n else ()
            if n:
                del built[len(built) - n:]
            built.append(TreeNode(label=current.label or "", children=children))
        else:
            raise TypeError(f"Expected a TraceLog, got {type(current).__name__}")
    return built[0]


def draw(tree: TreeNode) -> str:
    """Draw a TreeNode as an ASCII outline.

    Every child is preceded by a ``|`` spacer line. Intermediate siblings
    use ``+-`` and continue with ``|``; the last sibling uses `` `- `` and
    continues with blanks. Multi-line labels are indented under their
    first line. The result ends with a newline.
    """
    lines: list[str] = []
    # Frame: (node, first-line prefix, continuation prefix, spacer line or None)
    stack: list[tuple[TreeNode, str, str, str | None]] = [(tree, "", "", None)]
    while stack:
        node, first, other, spacer = stack.pop()
        if spacer is not None:
            lines.append(spacer)
        label_lines = node.label.split("\n")
        lines.append(first + label_lines[0])
        lines.extend(other + extra for extra in label_lines[1:])
        last_index = len(node.children) - 1
        for i in range(last_index, -1, -1):
            is_last = i == last_index
            stack.append((
                node.children[i],
                other + (_LAST if is_last else _BRANCH),
                other + (_BLANK if is_last else _CONTINUE),
                other + _SPACER,
            ))
    return "\n".join(lines) + "\n"


def draw_log(log: TraceLog) -> str:
    """Shortcut for ``draw(to_tree(log))``."""
    return draw(to_tree(log))
