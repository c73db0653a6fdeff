"""Sample workload: agents recruit units across villages, then fight.

Two agents march their own routes in parallel. Each village visit is a
traced step that sleeps for a simulated delay and logs
``"<name> (<units before>) + <recruits>"``. When both campaigns finish,
a combat step compares unit counts and logs ``"<winner> won!"``; the two
campaign traces become its children, first declared first.

This is example code for exercising the combinators, used by the
``traced demo`` command and the tests.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from typing import Optional

from traced.models.config import JoinConfig
from traced.traced import Traced, chain, join, pure, trace_step

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Agent:
    name: str
    units: int = 0


@dataclass(frozen=True)
class Village:
    name: str
    recruits: int


BOND = Agent("Bond")
SMITH = Agent("Smith")

# Bond ends with 11 units after three villages, Smith with 13 after two.
BOND_ROUTE: tuple[Village, ...] = (
    Village("Ashford", 6),
    Village("Brookmere", 3),
    Village("Cinderfell", 2),
)
SMITH_ROUTE: tuple[Village, ...] = (
    Village("Dunmore", 7),
    Village("Eastwick", 6),
)


def recruit(village: Village, *, delay: float = 0.0) -> Callable[[Agent], Traced[Agent]]:
    """Build the step that visits ``village`` and adds its recruits."""

    def step(agent: Agent) -> Traced[Agent]:
        if delay > 0:
            time.sleep(delay)
        logger.debug(
            "%s recruits %d in %s", agent.name, village.recruits, village.name
        )
        message = f"{agent.name} ({agent.units}) + {village.recruits}"
        return trace_step(replace(agent, units=agent.units + village.recruits), message)

    return step


def campaign(
    agent: Agent, route: Sequence[Village], *, delay: float = 0.0
) -> Traced[Agent]:
    """Visit every village on ``route`` in order."""
    return chain(pure(agent), *(recruit(v, delay=delay) for v in route))


def combat(agents: list[Agent]) -> Traced[Agent]:
    """The agent with the most units wins. Ties go to the first declared."""
    winner = agents[0]
    for agent in agents[1:]:
        if agent.units > winner.units:
            winner = agent
    logger.debug(
        "Combat: %s", ", ".join(f"{a.name}={a.units}" for a in agents)
    )
    return trace_step(winner, f"{winner.name} won!")


def battle(
    *,
    delay: float = 0.0,
    config: Optional[JoinConfig] = None,
) -> Traced[Agent]:
    """Run Bond's and Smith's campaigns concurrently, then fight.

    ``delay`` is the simulated latency of every village visit. Bond has
    the longer route, so with a non-zero delay Smith finishes first; the
    trace still lists Bond's campaign first.
    """
    return join(
        [
            lambda: campaign(BOND, BOND_ROUTE, delay=delay),
            lambda: campaign(SMITH, SMITH_ROUTE, delay=delay),
        ],
        combat,
        label="battle",
        config=config,
    )
