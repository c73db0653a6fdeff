"""Display tree model for rendered traces.

TreeNode is the projection of a TraceLog that renderers consume.
Not a trace itself -- used for display only.
"""

from __future__ import annotations

from pydantic import BaseModel


class TreeNode(BaseModel):
    """A rooted tree of display strings."""

    model_config = {"frozen": True}

    label: str = ""
    children: tuple[TreeNode, ...] = ()

    def __str__(self) -> str:
        from traced.operations.render import draw

        return draw(self)

    def __repr__(self) -> str:
        return f"TreeNode({self.label!r}, children={len(self.children)})"

    def pprint(self, *, file=None) -> None:
        """Pretty-print this tree with rich."""
        from traced.formatting import pprint_tree

        pprint_tree(self, file=file)
