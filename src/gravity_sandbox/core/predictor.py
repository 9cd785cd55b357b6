"""Preview trajectory for a body that has not been committed yet."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from .forces.nbody_gravity import NBodyGravity
from .integrators import Integrator, VelocityVerlet
from .state.bodies import Body, BodyRegistry, RegistrySnapshot


ArrayF = NDArray[np.float64]

logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_STEPS = 10_000
DEFAULT_PREVIEW_DT = 1.0 / 120.0


class TrajectoryPredictor:
    """Integrate one candidate body through the field of a frozen snapshot.

    Snapshot bodies act as fixed gravitational sources and are never
    advanced, so the path is a one-body-in-static-field approximation rather
    than an N+1 body run. The result depends only on the inputs.
    """

    def __init__(
        self,
        model: NBodyGravity,
        integrator: Integrator | None = None,
        steps: int = DEFAULT_PREVIEW_STEPS,
        dt: float = DEFAULT_PREVIEW_DT,
    ) -> None:
        if steps <= 0:
            raise ValueError("steps must be > 0")
        if dt <= 0.0:
            raise ValueError("dt must be > 0")
        self.model = model
        self.integrator = integrator if integrator is not None else VelocityVerlet()
        self.steps = int(steps)
        self.dt = float(dt)

    @property
    def duration(self) -> float:
        return self.steps * self.dt

    def predict(self, candidate: Body, snapshot: RegistrySnapshot) -> ArrayF:
        """Return predicted positions with shape (steps, 2)."""
        ghost = BodyRegistry(capacity=1)
        ghost.add(candidate.copy())
        field = self.model.static_field(snapshot)

        path = np.empty((self.steps, 2), dtype=np.float64)
        for k in range(self.steps):
            self.integrator.step(ghost, field, self.dt)
            path[k] = ghost.pos[0]

        logger.debug(
            "predicted %d points against %d sources, end=(%.3f, %.3f)",
            self.steps,
            snapshot.count(),
            path[-1, 0],
            path[-1, 1],
        )
        return path
