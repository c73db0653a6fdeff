"""traced demo -- run the sample battle and show its trace."""

from __future__ import annotations

import click

from traced.cli.formatting import format_error, format_summary, format_tree, get_console


@click.command()
@click.option(
    "--delay",
    default=0.0,
    type=click.FloatRange(min=0.0),
    envvar="TRACED_DELAY",
    show_default=True,
    help="Simulated latency of each village visit, in seconds.",
)
@click.option(
    "--workers",
    default=None,
    type=click.IntRange(min=1),
    envvar="TRACED_WORKERS",
    help="Worker threads for the parallel join (default: one per branch).",
)
@click.option(
    "--rich/--plain",
    "use_rich",
    default=False,
    help="Render the trace as a rich tree instead of a plain outline.",
)
def demo(delay: float, workers: int | None, use_rich: bool) -> None:
    """Run two agent campaigns in parallel, fight, and print the trace."""
    from traced.models.config import JoinConfig, RenderConfig
    from traced.models.log import size
    from traced.sample import battle

    console = get_console()
    try:
        result = battle(delay=delay, config=JoinConfig(max_workers=workers))
        winner, tree = result.run()
        format_summary(winner.name, winner.units, size(result.log), console)
        format_tree(
            tree, console, config=RenderConfig(style="rich" if use_rich else "ascii")
        )
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None
