"""TraceLog domain model.

A TraceLog is one of three immutable variants:

- ``Empty``: the identity element, carries nothing.
- ``Fact``: one atomic message with no children.
- ``Group``: an optional label over an ordered tuple of child logs.

Children order is meaningful: the oldest dependency comes first, later
merges in declaration order follow. Variants are frozen dataclasses, so a
log is never mutated after construction. Merging lives in
``traced.operations.merge``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Empty:
    """No trace."""

    def __repr__(self) -> str:
        return "Empty()"


@dataclass(frozen=True)
class Fact:
    """An atomic, childless trace event."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class Group:
    """A trace node with an optional label and ordered children.

    ``children`` is always stored as a tuple, so callers may pass any
    iterable.
    """

    label: Optional[str] = None
    children: tuple[TraceLog, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def of(cls, label: Optional[str], *children: TraceLog) -> Group:
        """Build a Group from positional children.

        Example::

            Group.of("root", Fact("a"), Fact("b"))
        """
        return cls(label, children)

    def __str__(self) -> str:
        return self.label or ""


TraceLog = Union[Empty, Fact, Group]

EMPTY = Empty()


def empty() -> TraceLog:
    """Return the empty trace."""
    return EMPTY


def fact(message: str) -> TraceLog:
    """Return a single-message trace."""
    return Fact(message)


def group(label: Optional[str] = None, children=()) -> TraceLog:
    """Return a Group node."""
    return Group(label, tuple(children))


def is_empty(log: TraceLog) -> bool:
    return isinstance(log, Empty)


def size(log: TraceLog) -> int:
    """Count the Fact and Group nodes in a trace. Empty counts as zero."""
    count = 0
    stack = [log]
    while stack:
        current = stack.pop()
        if isinstance(current, Fact):
            count += 1
        elif isinstance(current, Group):
            count += 1
            stack.extend(current.children)
    return count
