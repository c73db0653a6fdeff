"""Rich formatting helpers for the traced CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from traced.models.config import RenderConfig
from traced.formatting import to_rich_tree
from traced.operations.render import draw

if TYPE_CHECKING:
    from traced.models.tree import TreeNode


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_tree(tree: TreeNode, console: Console, *, config: RenderConfig) -> None:
    """Display a trace tree in the configured style."""
    if config.style == "rich":
        console.print(to_rich_tree(tree, config=config))
    else:
        # Plain outline printed verbatim.
        console.print(
            draw(tree), end="", markup=False, highlight=False, emoji=False, soft_wrap=True
        )


def format_summary(winner: str, units: int, node_count: int, console: Console) -> None:
    """Display the outcome line above the tree."""
    console.print(
        f"[bold green]{escape(winner)}[/bold green] wins with "
        f"[cyan]{units}[/cyan] units "
        f"[dim]({node_count} trace nodes)[/dim]"
    )


def format_error(message: str, console: Console) -> None:
    """Display an error message in red."""
    console.print(f"[red]Error:[/red] {escape(message)}")
