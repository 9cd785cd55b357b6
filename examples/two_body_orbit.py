"""Two-body orbit example with diagnostics."""

from __future__ import annotations

import numpy as np

from gravity_sandbox.core.diagnostics import linear_momentum, total_energy_gravity
from gravity_sandbox.core.forces import NBodyGravity
from gravity_sandbox.core.integrators import VelocityVerlet
from gravity_sandbox.core.state import Body, BodyRegistry


if __name__ == "__main__":
    G = 30.0
    bodies = BodyRegistry()
    bodies.add(Body(position=(0.0, 0.0), velocity=(0.0, 0.0), density=100.0, radius=100.0))
    bodies.add(Body(position=(500.0, 0.0), velocity=(0.0, 180.0), density=1.0, radius=30.0))

    model = NBodyGravity(G=G)
    integrator = VelocityVerlet()

    dt = 1.0 / 120.0
    steps = 12_000
    report_every = 600

    r = np.linalg.norm(bodies.pos[1] - bodies.pos[0])
    r_min = r
    r_max = r
    e0 = total_energy_gravity(bodies, G=G)

    for step in range(1, steps + 1):
        integrator.step(bodies, model, dt)
        r = np.linalg.norm(bodies.pos[1] - bodies.pos[0])
        r_min = min(r_min, r)
        r_max = max(r_max, r)

        if step % report_every == 0:
            p = linear_momentum(bodies)
            e = total_energy_gravity(bodies, G=G)
            print(
                f"step {step:5d} | r_min={r_min:.3f} r_max={r_max:.3f} | "
                f"|p|={np.linalg.norm(p):.6e} | dE/E0={(e - e0) / abs(e0):.3e}"
            )
