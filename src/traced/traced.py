"""Traced computations: a value paired with the trace that produced it.

Steps are plain functions ``T -> Traced[U]``. The combinators here thread
and merge the trace so step code only deals with values:

- ``then`` sequences a step after a prior result. The prior trace is
  merged into the step's trace, so earlier work nests under later work.
- ``group`` runs branches concurrently and makes their traces siblings
  under one Group, in declaration order.
- ``join`` runs branches concurrently and folds their traces into the
  trace of a step that consumes all their values.

There is no ambient accumulator. Every partial trace is owned by exactly
one Traced value until a combinator consumes it.

Example::

    from traced import pure, trace_step

    result = (
        pure(0)
        >> (lambda n: trace_step(n + 1, "A"))
        >> (lambda n: trace_step(n + 1, "B"))
    )
    print(result.draw())
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from traced.exceptions import InvalidBranchError
from traced.models.config import JoinConfig
from traced.models.log import EMPTY, Fact, Group, TraceLog
from traced.models.tree import TreeNode
from traced.operations.merge import _merge_checked, merge_all
from traced.operations.parallel import gather_branches, run_branches
from traced.operations.render import draw, to_tree

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Traced(Generic[T]):
    """A computed value and the trace accumulated to produce it.

    Attributes:
        value: The computed value.
        log: The TraceLog recorded while producing ``value``.
    """

    value: T
    log: TraceLog = EMPTY

    def then(self, step: Callable[[T], Traced[U]]) -> Traced[U]:
        """Run ``step`` on this value and merge this trace into the step's.

        The resulting trace is ``merge(self.log, result.log)``: this trace
        becomes the first child of whatever Group the step established.

        Raises:
            TypeError: If ``step`` does not return a Traced value.
            IllegalMergeTarget: If the step's trace is a Fact and this
                trace is not empty.
        """
        result = step(self.value)
        if not isinstance(result, Traced):
            raise TypeError(
                f"Step {_name(step)} must return a Traced value, "
                f"got {type(result).__name__}"
            )
        return Traced(result.value, _merge_checked(self.log, result.log))

    __rshift__ = then

    def map(self, fn: Callable[[T], U]) -> Traced[U]:
        """Transform the value, keeping the trace unchanged."""
        return Traced(fn(self.value), self.log)

    def tell(self, log: TraceLog) -> Traced[T]:
        """Merge ``log`` in front of this trace (``merge(log, self.log)``)."""
        return Traced(self.value, _merge_checked(log, self.log))

    def run(self) -> tuple[T, TreeNode]:
        """Return the value together with the rendered trace tree."""
        return self.value, to_tree(self.log)

    def render(self) -> TreeNode:
        return to_tree(self.log)

    def draw(self) -> str:
        """Draw the trace as an ASCII outline."""
        return draw(to_tree(self.log))

    def pprint(self, *, file: Any = None) -> None:
        """Pretty-print the trace with rich."""
        from traced.formatting import pprint_trace

        pprint_trace(self, file=file)

    def __repr__(self) -> str:
        return f"Traced({self.value!r}, log={self.log!r})"


Branch = Union[Traced[T], Callable[[], Traced[T]]]
AsyncBranch = Union[Traced[T], Awaitable[Traced[T]], Callable[[], Awaitable[Traced[T]]]]


def _name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


# ------------------------------------------------------------------
# Primitives
# ------------------------------------------------------------------

def pure(value: T) -> Traced[T]:
    """Wrap a value with an empty trace."""
    return Traced(value, EMPTY)


def trace_fact(value: T, message: str) -> Traced[T]:
    """Wrap a value with a single Fact.

    A Fact is a leaf: it can be merged *into* a Group, but nothing can be
    merged into it. Use ``trace_step`` when prior work should nest under
    this message.
    """
    return Traced(value, Fact(message))


def trace_step(value: T, message: str) -> Traced[T]:
    """Wrap a value with a labeled, childless Group.

    Sequencing this after earlier work (via ``then``) nests the earlier
    trace under ``message``.
    """
    return Traced(value, Group(message, ()))


def then(prior: Traced[T], step: Callable[[T], Traced[U]]) -> Traced[U]:
    """Sequential bind. See ``Traced.then``."""
    return prior.then(step)


def chain(initial: Traced[T], *steps: Callable[[Any], Traced[Any]]) -> Traced[Any]:
    """Sequence ``steps`` after ``initial``, left to right."""
    return functools.reduce(Traced.then, steps, initial)


def traced_step(
    message: str, *, as_fact: bool = False
) -> Callable[[Callable[[T], U]], Callable[[T], Traced[U]]]:
    """Decorate ``fn(x) -> U`` into a step ``x -> Traced[U]``.

    ``message`` is a ``str.format`` template. It receives the input as
    ``{0}`` and the output as ``{result}``.

    Example::

        @traced_step("{0} doubled is {result}")
        def double(n):
            return n * 2

        pure(3).then(double).draw()   # "3 doubled is 6\\n"
    """
    wrap = trace_fact if as_fact else trace_step

    def decorator(fn: Callable[[T], U]) -> Callable[[T], Traced[U]]:
        @functools.wraps(fn)
        def step(value: T) -> Traced[U]:
            result = fn(value)
            return wrap(result, message.format(value, result=result))

        return step

    return decorator


# ------------------------------------------------------------------
# Parallel joins
# ------------------------------------------------------------------

def _as_thunk(index: int, branch: Any) -> Callable[[], Traced[Any]]:
    if isinstance(branch, Traced):
        return lambda: branch
    if callable(branch):
        return branch
    raise InvalidBranchError(index, type(branch).__name__)


def _check_results(results: Sequence[Any]) -> list[Traced[Any]]:
    for index, result in enumerate(results):
        if not isinstance(result, Traced):
            raise InvalidBranchError(index, type(result).__name__)
    return list(results)


def _run(
    branches: Sequence[Branch[T]],
    label: Optional[str],
    config: Optional[JoinConfig],
) -> list[Traced[T]]:
    thunks = [_as_thunk(i, b) for i, b in enumerate(branches)]
    return _check_results(run_branches(thunks, label=label, config=config))


def group(
    label: Optional[str],
    branches: Sequence[Branch[T]],
    *,
    config: Optional[JoinConfig] = None,
) -> Traced[list[T]]:
    """Run branches concurrently and join their traces under one Group.

    Each branch is a Traced value or a zero-argument callable returning
    one. Callables run concurrently; the join waits for all of them.

    The result trace is ``Group(label, [b0.log, b1.log, ...])`` and the
    value is ``[b0.value, b1.value, ...]``, both in declaration order
    regardless of which branch finished first. Empty branch traces
    vanish, as with any merge.

    Raises:
        BranchFailedError: If a branch raised.
        InvalidBranchError: If a branch is not a Traced value or callable,
            or a callable did not return a Traced value.
    """
    results = _run(branches, label, config)
    log = merge_all([r.log for r in results], Group(label, ()))
    return Traced([r.value for r in results], log)


def join(
    branches: Sequence[Branch[T]],
    step: Callable[[list[T]], Traced[U]],
    *,
    label: Optional[str] = None,
    config: Optional[JoinConfig] = None,
) -> Traced[U]:
    """Run branches concurrently, then feed all their values to ``step``.

    The branch traces are folded, in declaration order, into the trace
    returned by ``step``. When ``step`` uses ``trace_step`` this makes the
    branches siblings directly under the step's message.

    Raises:
        BranchFailedError: If a branch raised.
        IllegalMergeTarget: If ``step`` returned a Fact trace.
    """
    results = _run(branches, label, config)
    outcome = step([r.value for r in results])
    if not isinstance(outcome, Traced):
        raise TypeError(
            f"Step {_name(step)} must return a Traced value, "
            f"got {type(outcome).__name__}"
        )
    return Traced(outcome.value, merge_all([r.log for r in results], outcome.log))


async def _ready(value: Traced[T]) -> Traced[T]:
    return value


async def _call_branch(branch: Callable[[], Any]) -> Any:
    # Sync callables run off the loop so they overlap like thread-pool branches.
    if inspect.iscoroutinefunction(branch):
        return await branch()
    produced = await asyncio.to_thread(branch)
    if inspect.isawaitable(produced):
        return await produced
    return produced


def _check_async_branch(index: int, branch: Any) -> None:
    if isinstance(branch, Traced) or inspect.isawaitable(branch) or callable(branch):
        return
    raise InvalidBranchError(index, type(branch).__name__)


def _as_awaitable(branch: Any) -> Awaitable[Any]:
    if isinstance(branch, Traced):
        return _ready(branch)
    if inspect.isawaitable(branch):
        return branch
    return _call_branch(branch)


async def _arun(
    branches: Sequence[AsyncBranch[T]], label: Optional[str]
) -> list[Traced[T]]:
    try:
        for index, branch in enumerate(branches):
            _check_async_branch(index, branch)
    except InvalidBranchError:
        # Caller-supplied coroutines will never be awaited now.
        for branch in branches:
            if inspect.iscoroutine(branch):
                branch.close()
        raise
    awaitables = [_as_awaitable(b) for b in branches]
    return _check_results(await gather_branches(awaitables, label=label))


async def agroup(
    label: Optional[str], branches: Sequence[AsyncBranch[T]]
) -> Traced[list[T]]:
    """Async ``group``: branches are awaitables, callables or Traced values.

    Coroutine functions run on the loop; plain callables run in worker
    threads via ``asyncio.to_thread``. Branches are checked before any of
    them starts, so a bad branch leaves no coroutine unawaited.
    """
    results = await _arun(branches, label)
    log = merge_all([r.log for r in results], Group(label, ()))
    return Traced([r.value for r in results], log)


async def ajoin(
    branches: Sequence[AsyncBranch[T]],
    step: Callable[[list[T]], Traced[U]],
    *,
    label: Optional[str] = None,
) -> Traced[U]:
    """Async ``join``. ``step`` itself is synchronous."""
    results = await _arun(branches, label)
    outcome = step([r.value for r in results])
    if not isinstance(outcome, Traced):
        raise TypeError(
            f"Step {_name(step)} must return a Traced value, "
            f"got {type(outcome).__name__}"
        )
    return Traced(outcome.value, merge_all([r.log for r in results], outcome.log))
