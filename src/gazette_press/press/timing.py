"""
Module: press.timing

Purpose:
    Stage timing for the layout pipeline, so slow gazettes can be traced
    to the stage responsible (usually image optimisation).

Key Classes:
    - StageTimings: Durations per pipeline stage

Key Functions:
    - timed_stage: Context manager for timing a stage

Dependencies:
    - time (std)
    - contextlib (std)
    - dataclasses (std)

Used By:
    - press.service: Records fetch/validate/optimize/place/compose/verify
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Generator, Tuple

logger = logging.getLogger(__name__)


@dataclass
class StageTimings:
    """
    Durations of pipeline stages in seconds, in the order they ran.

    Example:
        >>> timings = StageTimings()
        >>> timings.record("optimize", 1.25)
        >>> timings.slowest()
        ('optimize', 1.25)
    """
    stages: Dict[str, float] = field(default_factory=dict)

    def record(self, stage: str, duration: float) -> None:
        """Record a stage; a repeated stage accumulates."""
        self.stages[stage] = self.stages.get(stage, 0.0) + duration

    @property
    def total(self) -> float:
        return sum(self.stages.values())

    def slowest(self) -> Tuple[str, float]:
        if not self.stages:
            return ("", 0.0)
        return max(self.stages.items(), key=lambda x: x[1])

    def summary(self) -> str:
        """Generate human-readable timing summary."""
        lines = ["", "=== Layout Timing Summary ==="]
        for stage, duration in self.stages.items():
            lines.append(f"  {stage:12s} {duration:.3f}s")
        lines.append(f"  {'total':12s} {self.total:.3f}s")
        lines.append("")
        return "\n".join(lines)


@contextmanager
def timed_stage(timings: StageTimings, stage: str) -> Generator[None, None, None]:
    """
    Context manager for timing a pipeline stage.

    The duration is recorded even when the stage raises.

    Example:
        >>> timings = StageTimings()
        >>> with timed_stage(timings, "place"):
        ...     rects = placer.place(items)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        timings.record(stage, elapsed)
        logger.debug(f"Stage {stage} took {elapsed:.3f}s")
