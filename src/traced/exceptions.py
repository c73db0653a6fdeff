"""Traced exception hierarchy.

All traced-specific exceptions inherit from TracedError.
"""

from __future__ import annotations

from typing import Any


def _kind(log: Any) -> str:
    return type(log).__name__


class TracedError(Exception):
    """Base exception for all traced errors."""


class IllegalMergeTarget(TracedError):
    """Raised when a merge targets something other than a Group.

    Only Empty (on either side) or a Group on the right-hand side can
    absorb another trace. Merging into a Fact has no meaning and is
    treated as a programming error, never retried.
    """

    def __init__(self, left: Any, right: Any) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot merge {_kind(left)} into {_kind(right)}: "
            f"the right-hand operand must be Empty or a Group"
        )


class BranchError(TracedError):
    """Base exception for parallel join errors."""


class BranchFailedError(BranchError):
    """Raised when a branch of a parallel join raises.

    The first failing branch in declaration order is reported. Traces
    accumulated by the other branches are discarded.
    """

    def __init__(self, index: int, label: str | None, cause: BaseException) -> None:
        self.index = index
        self.label = label
        self.cause = cause
        where = f" of group '{label}'" if label else ""
        super().__init__(
            f"Branch {index}{where} failed: {type(cause).__name__}: {cause}"
        )


class InvalidBranchError(BranchError):
    """Raised when a join branch is not a Traced value or a callable producing one."""

    def __init__(self, index: int, actual_type: str) -> None:
        self.index = index
        self.actual_type = actual_type
        super().__init__(
            f"Branch {index} must be a Traced value or a callable returning one, "
            f"got {actual_type}"
        )
