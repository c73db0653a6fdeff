"""Merge algebra for TraceLog values.

``merge(a, b)`` prepends ``a`` as the first child of the Group ``b``.
Empty is a two-sided identity. Any other right-hand operand is rejected:
a Fact cannot absorb another trace.

The combine is deliberately asymmetric. It behaves like a monoid only for
right-leaning chains whose right operand is always the accumulating Group,
which is exactly how the sequencing and join combinators use it.

Two entry points are provided:

- ``try_merge`` returns a tagged ``MergeOutcome`` (``Merged`` or
  ``MergeRejected``) and never raises.
- ``merge`` unwraps that outcome and raises ``IllegalMergeTarget`` on
  rejection.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from traced.exceptions import IllegalMergeTarget
from traced.models.log import Empty, Group, TraceLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Merged:
    """A successful merge."""

    log: TraceLog

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> TraceLog:
        return self.log


@dataclass(frozen=True)
class MergeRejected:
    """A merge whose right-hand operand cannot absorb the left."""

    left: TraceLog
    right: TraceLog
    reason: str = "right-hand operand must be Empty or a Group"

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> TraceLog:
        raise IllegalMergeTarget(self.left, self.right)


MergeOutcome = Union[Merged, MergeRejected]


def try_merge(a: TraceLog, b: TraceLog) -> MergeOutcome:
    """Merge ``a`` into ``b`` without raising.

    Returns:
        ``Merged`` with the combined log, or ``MergeRejected`` when ``b``
        is a Fact and ``a`` is not Empty.
    """
    if isinstance(a, Empty):
        return Merged(b)
    if isinstance(b, Empty):
        return Merged(a)
    if isinstance(b, Group):
        return Merged(Group(b.label, (a,) + b.children))
    return MergeRejected(a, b)


def merge(a: TraceLog, b: TraceLog) -> TraceLog:
    """Merge ``a`` into ``b``.

    Raises:
        IllegalMergeTarget: If ``b`` is not Empty or a Group (and ``a``
            is not Empty).
    """
    return try_merge(a, b).unwrap()


def _merge_checked(a: TraceLog, b: TraceLog) -> TraceLog:
    """Merge on combinator paths where a rejection means misuse.

    Logs the rejected operands before raising so the failing step can be
    identified from the log alone.
    """
    outcome = try_merge(a, b)
    if not outcome.ok:
        logger.error(
            "Illegal merge of %s into %s", type(a).__name__, type(b).__name__
        )
        return outcome.unwrap()
    logger.debug("Merge %s into %s", type(a).__name__, type(b).__name__)
    return outcome.unwrap()


def merge_all(logs: Iterable[TraceLog], into: TraceLog) -> TraceLog:
    """Right-fold ``logs`` into ``into``.

    ``merge_all([l0, l1], g)`` is ``merge(l0, merge(l1, g))``, so the logs
    become the leading children of ``g`` in their original order.
    """
    result = into
    for log in reversed(list(logs)):
        result = _merge_checked(log, result)
    return result
