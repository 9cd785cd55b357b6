"""Headless simulation context for an interactive host.

The host (window, input polling, drawing) owns one `SandboxSimulation` and
calls into it: `advance` once per rendered frame, and the `on_*` methods as
the spawn gesture progresses. Nothing here is global; every piece of state
lives on the instance.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from numpy.typing import NDArray

from ..config import SimulationConfig
from ..core.diagnostics.bodies import (
    kinetic_energy,
    linear_momentum,
    potential_energy_gravity,
)
from ..core.errors import InvalidBodyError
from ..core.forces.nbody_gravity import NBodyGravity
from ..core.integrators import make_integrator
from ..core.predictor import TrajectoryPredictor
from ..core.scheduler import FixedStepScheduler
from ..core.state.bodies import Body, BodyRegistry


ArrayF = NDArray[np.float64]

logger = logging.getLogger(__name__)


class SpawnController:
    """Candidate-body lifecycle for a press / drag / release gesture.

    Launch velocity is the drag vector from the press point, in simulation
    units per second.
    """

    def __init__(self, predictor: TrajectoryPredictor) -> None:
        self.predictor = predictor
        self.candidate: Body | None = None
        self.press_position: ArrayF | None = None
        self.preview_path: ArrayF | None = None

    @property
    def active(self) -> bool:
        return self.candidate is not None

    def press(self, position: Any, density: float, radius: float, colour: Any = None) -> Body:
        try:
            body = Body.create(
                position=position,
                velocity=(0.0, 0.0),
                density=density,
                radius=radius,
                colour=colour,
            )
        except InvalidBodyError as exc:
            logger.warning("rejected spawn at %s: %s", position, exc)
            raise
        self.candidate = body
        self.press_position = body.position.copy()
        self.preview_path = None
        return body

    def drag(self, position: Any, registry: BodyRegistry) -> ArrayF | None:
        if self.candidate is None:
            return None
        self.candidate.velocity = self._launch_velocity(position)
        self.preview_path = self.predictor.predict(self.candidate, registry.snapshot())
        return self.preview_path

    def release(self, position: Any, registry: BodyRegistry) -> int | None:
        if self.candidate is None:
            return None
        body = self.candidate
        body.velocity = self._launch_velocity(position)
        self.candidate = None
        self.press_position = None
        self.preview_path = None
        try:
            return registry.add(body)
        except InvalidBodyError as exc:
            logger.warning("rejected spawn at %s: %s", body.position.tolist(), exc)
            raise

    def _launch_velocity(self, position: Any) -> ArrayF:
        if self.press_position is None:
            raise ValueError("no spawn gesture in progress")
        return np.asarray(position, dtype=np.float64) - self.press_position


class SandboxSimulation:
    def __init__(
        self,
        config: SimulationConfig | None = None,
        registry: BodyRegistry | None = None,
    ) -> None:
        self.config = config if config is not None else SimulationConfig()
        self.bodies = registry if registry is not None else BodyRegistry()
        self.model = NBodyGravity(G=self.config.G, softening=self.config.softening)
        self.integrator = make_integrator(self.config.integrator)
        self.scheduler = FixedStepScheduler(
            fixed_dt=self.config.fixed_dt,
            max_steps_per_advance=self.config.max_steps_per_advance,
        )
        self.predictor = TrajectoryPredictor(
            model=self.model,
            integrator=make_integrator(self.config.integrator),
            steps=self.config.preview_steps,
            dt=self.config.preview_dt,
        )
        self.spawner = SpawnController(self.predictor)
        self.alpha = 0.0

    # Frame tick.
    def advance(self, frame_dt: float) -> float:
        """Consume one frame's elapsed time; return the interpolation alpha."""
        self.alpha = self.scheduler.advance(frame_dt, self.step)
        return self.alpha

    def step(self, dt: float) -> None:
        self.integrator.step(self.bodies, self.model, dt)

    def add_body(self, body: Body) -> int:
        return self.bodies.add(body)

    # Input events.
    def on_press_start(
        self, position: Any, density: float, radius: float, colour: Any = None
    ) -> Body:
        return self.spawner.press(position, density, radius, colour)

    def on_drag(self, position: Any) -> ArrayF | None:
        return self.spawner.drag(position, self.bodies)

    def on_release(self, position: Any) -> int | None:
        return self.spawner.release(position, self.bodies)

    # Render queries.
    @property
    def candidate(self) -> Body | None:
        return self.spawner.candidate

    @property
    def preview_path(self) -> ArrayF | None:
        return self.spawner.preview_path

    def interpolated_positions(self, alpha: float | None = None) -> ArrayF:
        return self.bodies.interpolated_positions(self.alpha if alpha is None else alpha)

    def diagnostics(self) -> dict[str, Any]:
        ke = kinetic_energy(self.bodies)
        pe = potential_energy_gravity(self.bodies, self.config.G, self.config.softening)
        return {
            "bodies": self.bodies.count(),
            "step": self.scheduler.steps_taken,
            "time": self.scheduler.simulated_time,
            "kinetic": ke,
            "potential": pe,
            "energy": ke + pe,
            "momentum": linear_momentum(self.bodies),
        }
