"""traced: mergeable execution traces for sequential and parallel computations.

Steps return their value paired with a small trace. Combinators merge
those traces into a dependency tree while the step code stays focused on
values, and the tree can be drawn for inspection.
"""

from traced._version import __version__

# Core value type and combinators
from traced.traced import (
    Traced,
    agroup,
    ajoin,
    chain,
    group,
    join,
    pure,
    then,
    trace_fact,
    trace_step,
    traced_step,
)

# Trace data model
from traced.models.log import EMPTY, Empty, Fact, Group, TraceLog, empty, fact, is_empty, size
from traced.models.tree import TreeNode

# Configuration
from traced.models.config import JoinConfig, RenderConfig

# Merge algebra
from traced.operations.merge import MergeOutcome, MergeRejected, Merged, merge, merge_all, try_merge

# Rendering
from traced.operations.render import draw, draw_log, to_tree
from traced.formatting import pprint_trace, to_rich_tree

# Exceptions
from traced.exceptions import (
    BranchError,
    BranchFailedError,
    IllegalMergeTarget,
    InvalidBranchError,
    TracedError,
)

__all__ = [
    "__version__",
    # Core
    "Traced",
    "agroup",
    "ajoin",
    "chain",
    "group",
    "join",
    "pure",
    "then",
    "trace_fact",
    "trace_step",
    "traced_step",
    # Trace data model
    "EMPTY",
    "Empty",
    "Fact",
    "Group",
    "TraceLog",
    "TreeNode",
    "empty",
    "fact",
    "is_empty",
    "size",
    # Configuration
    "JoinConfig",
    "RenderConfig",
    # Merge algebra
    "MergeOutcome",
    "MergeRejected",
    "Merged",
    "merge",
    "merge_all",
    "try_merge",
    # Rendering
    "draw",
    "draw_log",
    "pprint_trace",
    "to_rich_tree",
    "to_tree",
    # Exceptions
    "BranchError",
    "BranchFailedError",
    "IllegalMergeTarget",
    "InvalidBranchError",
    "TracedError",
]
