"""traced CLI -- terminal interface for inspecting traced computations.

This module is NEVER imported from traced/__init__.py.
It is only loaded via the ``traced`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging

import click


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """traced: mergeable execution traces for sequential and parallel steps."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


# Register subcommands after cli group is defined
from traced.cli.commands.demo import demo  # noqa: E402

cli.add_command(demo)
