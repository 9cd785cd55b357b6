"""Tunable simulation constants."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

from .core.forces.nbody_gravity import DEFAULT_G, DEFAULT_SOFTENING
from .core.integrators import INTEGRATORS
from .core.predictor import DEFAULT_PREVIEW_DT, DEFAULT_PREVIEW_STEPS
from .core.scheduler import DEFAULT_FIXED_DT


@dataclass(frozen=True, slots=True)
class SimulationConfig:
    G: float = DEFAULT_G
    softening: float = DEFAULT_SOFTENING
    fixed_dt: float = DEFAULT_FIXED_DT
    integrator: str = "velocity_verlet"
    preview_steps: int = DEFAULT_PREVIEW_STEPS
    preview_dt: float = DEFAULT_PREVIEW_DT
    max_steps_per_advance: int | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if not (math.isfinite(self.G) and self.G > 0.0):
            raise ValueError("G must be > 0")
        if not (math.isfinite(self.softening) and self.softening > 0.0):
            raise ValueError("softening must be > 0")
        if not (math.isfinite(self.fixed_dt) and self.fixed_dt > 0.0):
            raise ValueError("fixed_dt must be > 0")
        if self.integrator not in INTEGRATORS:
            raise ValueError(f"unsupported integrator: {self.integrator}")
        if self.preview_steps <= 0:
            raise ValueError("preview_steps must be > 0")
        if not (math.isfinite(self.preview_dt) and self.preview_dt > 0.0):
            raise ValueError("preview_dt must be > 0")
        if self.max_steps_per_advance is not None and self.max_steps_per_advance < 1:
            raise ValueError("max_steps_per_advance must be >= 1")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def config_from_defn(defn: dict[str, Any]) -> SimulationConfig:
    sim = defn.get("simulation", {})
    if not isinstance(sim, dict):
        raise ValueError("simulation must be an object")
    known = {f.name for f in fields(SimulationConfig)}
    unknown = set(sim) - known
    if unknown:
        raise ValueError(f"unknown simulation field: {sorted(unknown)[0]}")
    return SimulationConfig(**sim)
