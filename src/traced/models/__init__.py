"""Domain models for traced."""

from traced.models.config import JoinConfig, RenderConfig
from traced.models.log import EMPTY, Empty, Fact, Group, TraceLog
from traced.models.tree import TreeNode

__all__ = [
    "EMPTY",
    "Empty",
    "Fact",
    "Group",
    "JoinConfig",
    "RenderConfig",
    "TraceLog",
    "TreeNode",
]
