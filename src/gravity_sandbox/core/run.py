"""Headless fixed-step run loop with optional sampling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .forces.nbody_gravity import ForcePass
from .integrators import Integrator
from .state.bodies import BodyRegistry


@dataclass(slots=True)
class RunResult:
    bodies: BodyRegistry
    time: np.ndarray | None = None
    pos: np.ndarray | None = None
    vel: np.ndarray | None = None


def run(
    bodies: BodyRegistry,
    model: ForcePass,
    integrator: Integrator,
    dt: float,
    steps: int,
    sample_every: int | None = None,
    callback: Callable[[int, BodyRegistry], None] | None = None,
) -> RunResult:
    if sample_every is not None and sample_every <= 0:
        raise ValueError("sample_every must be > 0")

    times: list[float] = []
    pos: list[np.ndarray] = []
    vel: list[np.ndarray] = []

    def sample(step: int) -> None:
        times.append(step * dt)
        pos.append(bodies.pos.copy())
        vel.append(bodies.vel.copy())

    if sample_every is not None:
        sample(0)

    for step in range(1, steps + 1):
        integrator.step(bodies, model, dt)
        if callback is not None:
            callback(step, bodies)
        if sample_every is not None and step % sample_every == 0:
            sample(step)

    if sample_every is None:
        return RunResult(bodies=bodies)

    return RunResult(
        bodies=bodies,
        time=np.asarray(times, dtype=np.float64),
        pos=np.asarray(pos, dtype=np.float64),
        vel=np.asarray(vel, dtype=np.float64),
    )
