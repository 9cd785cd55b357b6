"""Body diagnostics.

Functions accept a `BodyRegistry` or a `RegistrySnapshot`; anything exposing
`pos`, `vel` and `mass` arrays works.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]


class BodyArrays(Protocol):
    @property
    def pos(self) -> ArrayF: ...

    @property
    def vel(self) -> ArrayF: ...

    @property
    def mass(self) -> ArrayF: ...


def total_mass(bodies: BodyArrays) -> float:
    if bodies.pos.shape[0] == 0:
        return 0.0
    return float(np.sum(bodies.mass))


def center_of_mass(bodies: BodyArrays) -> np.ndarray:
    if bodies.pos.shape[0] == 0:
        raise ValueError("cannot compute center of mass for empty body set")
    m = bodies.mass
    return np.sum(bodies.pos * m[:, np.newaxis], axis=0) / np.sum(m)


def linear_momentum(bodies: BodyArrays) -> np.ndarray:
    if bodies.pos.shape[0] == 0:
        return np.zeros(2, dtype=np.float64)
    return np.sum(bodies.vel * bodies.mass[:, np.newaxis], axis=0)


def kinetic_energy(bodies: BodyArrays) -> float:
    if bodies.pos.shape[0] == 0:
        return 0.0
    v2 = np.sum(bodies.vel**2, axis=1)
    return float(0.5 * np.sum(bodies.mass * v2))


def potential_energy_gravity(bodies: BodyArrays, G: float, softening: float = 0.0) -> float:
    """Pairwise -G*m1*m2/r; softening uses the same squared-distance floor as the force."""
    pos = bodies.pos
    n = pos.shape[0]
    if n < 2:
        return 0.0

    mass = bodies.mass
    iu = np.triu_indices(n, k=1)
    delta = pos[iu[1]] - pos[iu[0]]
    dist2 = np.maximum(np.sum(delta * delta, axis=-1), softening)
    mprod = mass[iu[0]] * mass[iu[1]]
    return float(-G * np.sum(mprod / np.sqrt(dist2)))


def total_energy_gravity(bodies: BodyArrays, G: float, softening: float = 0.0) -> float:
    return kinetic_energy(bodies) + potential_energy_gravity(bodies, G, softening)
