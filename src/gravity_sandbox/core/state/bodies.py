"""Body containers.

A `Body` is a free-standing value (used for the candidate being configured by
the input shell). Bodies committed to the simulation live in a
`BodyRegistry`, which stores them as growable struct-of-arrays with stable
indices.
"""

from __future__ import annotations

import logging
import math
import sys
from dataclasses import dataclass, field
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from ..errors import InvalidBodyError
from ..math.vector import lerp


ArrayF = NDArray[np.float64]

logger = logging.getLogger(__name__)

_INITIAL_CAPACITY = 16
# Below this the reciprocal overflows.
_MIN_MASS = 4.0 / sys.float_info.max


def _vec2(value: Any, name: str) -> ArrayF:
    v = np.array(value, dtype=np.float64)
    if v.shape != (2,):
        raise ValueError(f"{name} must have shape (2,)")
    return v


def _inverse_mass(mass: float) -> float:
    if abs(mass) < _MIN_MASS:
        return math.inf
    return 1.0 / mass


def validate_body_parameters(density: float, radius: float) -> None:
    """Raise InvalidBodyError unless density, radius, mass and inverse mass are finite and > 0."""
    if not (math.isfinite(density) and density > 0.0):
        raise InvalidBodyError(f"density must be > 0, got {density!r}")
    if not (math.isfinite(radius) and radius > 0.0):
        raise InvalidBodyError(f"radius must be > 0, got {radius!r}")
    mass = density * radius * radius
    if not (math.isfinite(mass) and mass > 0.0):
        raise InvalidBodyError(f"mass out of range for density={density!r}, radius={radius!r}")
    inverse_mass = _inverse_mass(mass)
    if not (math.isfinite(inverse_mass) and inverse_mass > 0.0):
        raise InvalidBodyError(f"inverse mass out of range for density={density!r}, radius={radius!r}")


@dataclass(slots=True, eq=False)
class Body:
    position: ArrayF
    velocity: ArrayF
    density: float
    radius: float
    colour: Any = None
    previous_position: ArrayF | None = None
    accumulated_force: ArrayF | None = None
    previous_force: ArrayF | None = None
    inverse_mass: float = field(init=False)

    def __post_init__(self) -> None:
        self.position = _vec2(self.position, "position")
        self.velocity = _vec2(self.velocity, "velocity")
        self.density = float(self.density)
        self.radius = float(self.radius)
        if self.previous_position is None:
            self.previous_position = self.position.copy()
        else:
            self.previous_position = _vec2(self.previous_position, "previous_position")
        if self.accumulated_force is None:
            self.accumulated_force = np.zeros(2, dtype=np.float64)
        else:
            self.accumulated_force = _vec2(self.accumulated_force, "accumulated_force")
        if self.previous_force is None:
            self.previous_force = np.zeros(2, dtype=np.float64)
        else:
            self.previous_force = _vec2(self.previous_force, "previous_force")
        self.inverse_mass = _inverse_mass(self.density * self.radius * self.radius)

    @classmethod
    def create(
        cls,
        position: Any,
        velocity: Any,
        density: float,
        radius: float,
        colour: Any = None,
    ) -> "Body":
        """Build a validated body; raises InvalidBodyError on bad parameters."""
        validate_body_parameters(float(density), float(radius))
        return cls(
            position=position,
            velocity=velocity,
            density=density,
            radius=radius,
            colour=colour,
        )

    @property
    def mass(self) -> float:
        return 1.0 / self.inverse_mass if self.inverse_mass != 0.0 else math.inf

    def copy(self) -> "Body":
        return Body(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            density=self.density,
            radius=self.radius,
            colour=self.colour,
            previous_position=self.previous_position.copy(),
            accumulated_force=self.accumulated_force.copy(),
            previous_force=self.previous_force.copy(),
        )


class BodyView:
    """Read-only proxy onto one body stored in a registry."""

    __slots__ = ("_reg", "_i")

    def __init__(self, registry: "BodyRegistry", idx: int) -> None:
        self._reg = registry
        self._i = int(idx)

    @property
    def position(self) -> ArrayF:
        return self._reg._pos[self._i].copy()

    @property
    def previous_position(self) -> ArrayF:
        return self._reg._prev_pos[self._i].copy()

    @property
    def velocity(self) -> ArrayF:
        return self._reg._vel[self._i].copy()

    @property
    def previous_force(self) -> ArrayF:
        return self._reg._prev_force[self._i].copy()

    @property
    def inverse_mass(self) -> float:
        return float(self._reg._inv_mass[self._i])

    @property
    def mass(self) -> float:
        return 1.0 / float(self._reg._inv_mass[self._i])

    @property
    def density(self) -> float:
        return float(self._reg._density[self._i])

    @property
    def radius(self) -> float:
        return float(self._reg._radius[self._i])

    @property
    def colour(self) -> Any:
        return self._reg._colour[self._i]

    def to_body(self) -> Body:
        return Body(
            position=self.position,
            velocity=self.velocity,
            density=self.density,
            radius=self.radius,
            colour=self.colour,
            previous_position=self.previous_position,
            accumulated_force=self._reg._force[self._i].copy(),
            previous_force=self.previous_force,
        )

    def __repr__(self) -> str:
        return (
            f"BodyView(index={self._i}, position={self.position.tolist()}, "
            f"velocity={self.velocity.tolist()}, radius={self.radius})"
        )


@dataclass(frozen=True, slots=True, eq=False)
class RegistrySnapshot:
    """Immutable copy of the physical state of a registry at one instant."""

    pos: ArrayF
    vel: ArrayF
    inverse_mass: ArrayF

    def __post_init__(self) -> None:
        for arr in (self.pos, self.vel, self.inverse_mass):
            arr.flags.writeable = False

    @property
    def mass(self) -> ArrayF:
        return 1.0 / self.inverse_mass

    def count(self) -> int:
        return int(self.pos.shape[0])

    def __len__(self) -> int:
        return self.count()


class BodyRegistry:
    """Ordered, append-only set of simulated bodies.

    Storage is struct-of-arrays with amortised growth. Indices are stable for
    the lifetime of the registry since nothing is ever removed.
    """

    def __init__(self, capacity: int = _INITIAL_CAPACITY) -> None:
        capacity = max(int(capacity), 1)
        self._n = 0
        self._pos = np.zeros((capacity, 2), dtype=np.float64)
        self._prev_pos = np.zeros((capacity, 2), dtype=np.float64)
        self._vel = np.zeros((capacity, 2), dtype=np.float64)
        self._force = np.zeros((capacity, 2), dtype=np.float64)
        self._prev_force = np.zeros((capacity, 2), dtype=np.float64)
        self._inv_mass = np.zeros(capacity, dtype=np.float64)
        self._density = np.zeros(capacity, dtype=np.float64)
        self._radius = np.zeros(capacity, dtype=np.float64)
        self._colour: list[Any] = []
        # Carried forces no longer match current positions once the body set
        # changes; integrators recompute them before the next position phase.
        self.forces_primed = True

    # Array views over the live bodies, in insertion order.
    @property
    def pos(self) -> ArrayF:
        return self._pos[: self._n]

    @property
    def prev_pos(self) -> ArrayF:
        return self._prev_pos[: self._n]

    @property
    def vel(self) -> ArrayF:
        return self._vel[: self._n]

    @property
    def force(self) -> ArrayF:
        return self._force[: self._n]

    @property
    def prev_force(self) -> ArrayF:
        return self._prev_force[: self._n]

    @property
    def inverse_mass(self) -> ArrayF:
        return self._inv_mass[: self._n]

    @property
    def mass(self) -> ArrayF:
        return 1.0 / self._inv_mass[: self._n]

    @property
    def radius(self) -> ArrayF:
        return self._radius[: self._n]

    @property
    def colour(self) -> list[Any]:
        return list(self._colour)

    def add(self, body: Body) -> int:
        """Append a body and return its index."""
        validate_body_parameters(body.density, body.radius)
        if self._n == self._pos.shape[0]:
            self._grow(2 * self._pos.shape[0])
        i = self._n
        self._pos[i] = body.position
        self._prev_pos[i] = body.previous_position
        self._vel[i] = body.velocity
        self._force[i] = 0.0
        self._prev_force[i] = body.previous_force
        self._inv_mass[i] = body.inverse_mass
        self._density[i] = body.density
        self._radius[i] = body.radius
        self._colour.append(body.colour)
        self._n += 1
        self.forces_primed = False
        logger.debug(
            "added body %d at (%.3f, %.3f) mass=%.6g", i, body.position[0], body.position[1], body.mass
        )
        return i

    def count(self) -> int:
        return self._n

    def __len__(self) -> int:
        return self._n

    def __getitem__(self, idx: int) -> BodyView:
        if idx < 0:
            idx += self._n
        if not 0 <= idx < self._n:
            raise IndexError("body index out of range")
        return BodyView(self, idx)

    def __iter__(self) -> Iterator[BodyView]:
        for i in range(self._n):
            yield BodyView(self, i)

    def snapshot(self) -> RegistrySnapshot:
        return RegistrySnapshot(
            pos=self.pos.copy(),
            vel=self.vel.copy(),
            inverse_mass=self.inverse_mass.copy(),
        )

    def interpolated_positions(self, alpha: float) -> ArrayF:
        """Render positions blended between the last two physics ticks."""
        return lerp(self.prev_pos, self.pos, alpha)

    def _grow(self, capacity: int) -> None:
        for name in ("_pos", "_prev_pos", "_vel", "_force", "_prev_force"):
            old = getattr(self, name)
            new = np.zeros((capacity, 2), dtype=np.float64)
            new[: self._n] = old[: self._n]
            setattr(self, name, new)
        for name in ("_inv_mass", "_density", "_radius"):
            old = getattr(self, name)
            new = np.zeros(capacity, dtype=np.float64)
            new[: self._n] = old[: self._n]
            setattr(self, name, new)
