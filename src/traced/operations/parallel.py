"""Concurrent execution of join branches.

Branches run on a thread pool (or via ``asyncio.gather`` for the async
variants). Results always come back in declaration order, independent of
completion order. The join waits for every branch to settle; if any
branch raised, the first failure in declaration order is re-raised as
BranchFailedError after the others have finished.

Each branch builds its own result privately. Nothing here touches trace
values, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TypeVar

from traced.exceptions import BranchFailedError
from traced.models.config import DEFAULT_JOIN_CONFIG, JoinConfig

logger = logging.getLogger(__name__)

R = TypeVar("R")


def _raise_first_failure(
    outcomes: Sequence[object], label: str | None
) -> None:
    for index, outcome in enumerate(outcomes):
        if isinstance(outcome, BaseException):
            logger.error(
                "Branch %d of join %r failed: %s", index, label, outcome
            )
            raise BranchFailedError(index, label, outcome) from outcome


def run_branches(
    branches: Sequence[Callable[[], R]],
    *,
    label: str | None = None,
    config: JoinConfig | None = None,
) -> list[R]:
    """Run zero-argument callables concurrently and collect their results.

    Args:
        branches: Branch thunks, in declaration order.
        label: Join label, used only for logging and error messages.
        config: Pool settings. Defaults to one worker per branch.

    Returns:
        Branch results in declaration order.

    Raises:
        BranchFailedError: If any branch raised.
    """
    config = config or DEFAULT_JOIN_CONFIG
    if not branches:
        return []

    workers = config.workers_for(len(branches))
    logger.debug(
        "Join %r: starting %d branch(es) on %d worker(s)",
        label, len(branches), workers,
    )
    with ThreadPoolExecutor(
        max_workers=workers, thread_name_prefix=config.thread_name_prefix
    ) as pool:
        futures: list[Future[R]] = [pool.submit(branch) for branch in branches]
    # Leaving the with-block waits for every future to settle.

    outcomes: list[object] = []
    for future in futures:
        exc = future.exception()
        outcomes.append(exc if exc is not None else future.result())
    _raise_first_failure(outcomes, label)
    logger.debug("Join %r: %d branch(es) complete", label, len(branches))
    return outcomes  # type: ignore[return-value]


async def gather_branches(
    branches: Sequence[Awaitable[R]],
    *,
    label: str | None = None,
) -> list[R]:
    """Await branches concurrently and collect their results in declaration order.

    Raises:
        BranchFailedError: If any branch raised.
    """
    if not branches:
        return []
    logger.debug("Async join %r: gathering %d branch(es)", label, len(branches))
    outcomes = await asyncio.gather(*branches, return_exceptions=True)
    _raise_first_failure(outcomes, label)
    logger.debug("Async join %r: %d branch(es) complete", label, len(branches))
    return list(outcomes)
