"""Newtonian pairwise gravity between bodies."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from ..state.bodies import Body, BodyRegistry, RegistrySnapshot


ArrayF = NDArray[np.float64]

DEFAULT_G = 30.0
# Floor applied to the squared separation, not a Plummer length.
DEFAULT_SOFTENING = 1e-6


class ForcePass(Protocol):
    def accumulate(self, bodies: BodyRegistry) -> None:
        """Overwrite bodies.force with the force acting on every body."""


class NBodyGravity:
    def __init__(self, G: float = DEFAULT_G, softening: float = DEFAULT_SOFTENING) -> None:
        self.G = float(G)
        self.softening = float(softening)

    def pair_force(self, a: Body, b: Body) -> tuple[ArrayF, ArrayF]:
        """Return (force on a, force on b); the second is the exact negation."""
        f = _pair_kernel(
            a.position[None, :],
            b.position[None, :],
            np.array([a.mass * b.mass]),
            self.G,
            self.softening,
        )[0]
        return f, -f

    def accumulate(self, bodies: BodyRegistry) -> None:
        force = bodies.force
        force.fill(0.0)
        n = bodies.count()
        if n < 2:
            return
        i, j = _pair_indices(n)
        mass = bodies.mass
        f = _pair_kernel(
            bodies.pos[i], bodies.pos[j], mass[i] * mass[j], self.G, self.softening
        )
        np.add.at(force, i, f)
        np.subtract.at(force, j, f)

    def accumulate_static(self, bodies: BodyRegistry, sources: RegistrySnapshot) -> None:
        """Force on each body from fixed sources; sources feel nothing back."""
        force = bodies.force
        force.fill(0.0)
        if bodies.count() == 0 or sources.count() == 0:
            return
        n, m = bodies.count(), sources.count()
        a_pos = np.repeat(bodies.pos, m, axis=0)
        b_pos = np.tile(sources.pos, (n, 1))
        mprod = np.outer(bodies.mass, sources.mass).reshape(-1)
        f = _pair_kernel(a_pos, b_pos, mprod, self.G, self.softening)
        force += f.reshape(n, m, 2).sum(axis=1)

    def static_field(self, sources: RegistrySnapshot) -> "StaticField":
        return StaticField(model=self, sources=sources)


@dataclass(frozen=True, slots=True)
class StaticField:
    """Force pass that pulls bodies toward a frozen set of sources."""

    model: NBodyGravity
    sources: RegistrySnapshot

    def accumulate(self, bodies: BodyRegistry) -> None:
        self.model.accumulate_static(bodies, self.sources)


@lru_cache(maxsize=32)
def _pair_indices(n: int) -> tuple[np.ndarray, np.ndarray]:
    i, j = np.triu_indices(n, k=1)
    i.flags.writeable = False
    j.flags.writeable = False
    return i, j


def _pair_kernel(
    pos_a: ArrayF,
    pos_b: ArrayF,
    mass_product: ArrayF,
    G: float,
    softening: float,
) -> ArrayF:
    r = pos_b - pos_a
    r2 = np.maximum(np.sum(r * r, axis=-1), softening)
    r_hat = r / np.sqrt(r2)[:, np.newaxis]
    magnitude = G * mass_product / r2
    return r_hat * magnitude[:, np.newaxis]
