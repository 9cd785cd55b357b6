"""Fixed-step scheduling of physics updates against variable frame time."""

from __future__ import annotations

import logging
import math
from typing import Callable


logger = logging.getLogger(__name__)

DEFAULT_FIXED_DT = 1.0 / 120.0


class FixedStepScheduler:
    """Accumulator that turns frame durations into whole physics steps.

    `advance` returns the interpolation fraction alpha in [0, 1): how far the
    unconsumed time has progressed toward the next step.
    """

    def __init__(
        self,
        fixed_dt: float = DEFAULT_FIXED_DT,
        max_steps_per_advance: int | None = None,
    ) -> None:
        if not (math.isfinite(fixed_dt) and fixed_dt > 0.0):
            raise ValueError("fixed_dt must be > 0")
        if max_steps_per_advance is not None and max_steps_per_advance < 1:
            raise ValueError("max_steps_per_advance must be >= 1")
        self.fixed_dt = float(fixed_dt)
        self.max_steps_per_advance = max_steps_per_advance
        self.accumulator = 0.0
        self.steps_taken = 0
        self.dropped_time = 0.0

    @property
    def simulated_time(self) -> float:
        return self.steps_taken * self.fixed_dt

    def advance(self, frame_dt: float, step: Callable[[float], None]) -> float:
        if not math.isfinite(frame_dt) or frame_dt < 0.0:
            raise ValueError("frame_dt must be >= 0")
        if frame_dt == 0.0:
            return 0.0

        self.accumulator += frame_dt
        ran = 0
        while self.accumulator >= self.fixed_dt:
            if self.max_steps_per_advance is not None and ran >= self.max_steps_per_advance:
                self._drop_backlog()
                break
            step(self.fixed_dt)
            self.accumulator -= self.fixed_dt
            ran += 1

        self.steps_taken += ran
        logger.debug("advance(%.6f): %d steps, accumulator=%.6f", frame_dt, ran, self.accumulator)
        return self.accumulator / self.fixed_dt

    def reset(self) -> None:
        self.accumulator = 0.0
        self.steps_taken = 0
        self.dropped_time = 0.0

    def _drop_backlog(self) -> None:
        backlog = math.floor(self.accumulator / self.fixed_dt)
        dropped = backlog * self.fixed_dt
        self.accumulator -= dropped
        # Rounding can leave the remainder a hair outside [0, fixed_dt).
        if self.accumulator >= self.fixed_dt:
            self.accumulator = math.fmod(self.accumulator, self.fixed_dt)
        elif self.accumulator < 0.0:
            self.accumulator = 0.0
        self.dropped_time += dropped
        logger.warning(
            "scheduler fell behind: dropped %d steps (%.4f s of simulated time)",
            backlog,
            dropped,
        )
