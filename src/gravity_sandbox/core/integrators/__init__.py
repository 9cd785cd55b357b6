"""Integrator interfaces and implementations.

`VelocityVerlet` is the default scheme. `SymplecticEuler` is a first-order
fallback; energy error is noticeably larger, so tests written against one
scheme do not carry their tolerances over to the other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..forces.nbody_gravity import ForcePass
from ..state.bodies import BodyRegistry


INTEGRATORS = ("velocity_verlet", "symplectic_euler")


class Integrator(Protocol):
    name: str

    def step(self, bodies: BodyRegistry, model: ForcePass, dt: float) -> None:
        """Advance every body by one fixed step (mutating)."""


def prime_forces(bodies: BodyRegistry, model: ForcePass) -> None:
    """Recompute the carried force at current positions."""
    model.accumulate(bodies)
    bodies.prev_force[:] = bodies.force
    bodies.force.fill(0.0)
    bodies.forces_primed = True


@dataclass(slots=True)
class VelocityVerlet:
    name: str = "velocity_verlet"

    def step(self, bodies: BodyRegistry, model: ForcePass, dt: float) -> None:
        if bodies.count() == 0:
            return
        if not bodies.forces_primed:
            prime_forces(bodies, model)

        pos, vel = bodies.pos, bodies.vel
        prev_force, force = bodies.prev_force, bodies.force
        inv_m = bodies.inverse_mass[:, None]

        bodies.prev_pos[:] = pos
        pos += vel * dt + 0.5 * (prev_force * inv_m) * dt * dt

        model.accumulate(bodies)

        vel += 0.5 * (prev_force + force) * inv_m * dt
        prev_force[:] = force
        force.fill(0.0)


@dataclass(slots=True)
class SymplecticEuler:
    name: str = "symplectic_euler"

    def step(self, bodies: BodyRegistry, model: ForcePass, dt: float) -> None:
        if bodies.count() == 0:
            return
        pos, vel, force = bodies.pos, bodies.vel, bodies.force
        inv_m = bodies.inverse_mass[:, None]
        bodies.prev_pos[:] = pos

        model.accumulate(bodies)

        vel += force * inv_m * dt
        pos += vel * dt
        bodies.prev_force[:] = force
        force.fill(0.0)
        bodies.forces_primed = True


def make_integrator(name: str) -> Integrator:
    if name == "velocity_verlet":
        return VelocityVerlet()
    if name == "symplectic_euler":
        return SymplecticEuler()
    raise ValueError(f"unsupported integrator: {name}")
