"""Configuration models for traced.

JoinConfig controls how parallel branches are executed.
RenderConfig controls how traces are displayed.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, field_validator


class JoinConfig(BaseModel):
    """Execution settings for parallel joins."""

    max_workers: Optional[int] = None  # None = one worker per branch
    thread_name_prefix: str = "traced-branch"

    @field_validator("max_workers")
    @classmethod
    def _positive_workers(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("max_workers must be >= 1")
        return v

    def workers_for(self, branch_count: int) -> int:
        """Number of worker threads to use for ``branch_count`` branches."""
        if self.max_workers is None:
            return max(branch_count, 1)
        return min(self.max_workers, max(branch_count, 1))


class RenderConfig(BaseModel):
    """Display settings for trace output."""

    style: Literal["ascii", "rich"] = "ascii"
    empty_label: str = "(unlabeled)"  # rich output only; draw() keeps labels as-is


DEFAULT_JOIN_CONFIG = JoinConfig()
DEFAULT_RENDER_CONFIG = RenderConfig()
