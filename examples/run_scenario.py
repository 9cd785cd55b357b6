"""Run a scenario JSON headless and print diagnostics."""

from __future__ import annotations

import argparse
from pathlib import Path

from gravity_sandbox.core.diagnostics import (
    kinetic_energy,
    linear_momentum,
    total_energy_gravity,
    total_mass,
)
from gravity_sandbox.core.run import run
from gravity_sandbox.io import load_scenario, scenario_to_runtime


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("scenario", type=Path)
    parser.add_argument("--steps", type=int, default=1200)
    parser.add_argument("--sample-every", type=int, default=None)
    args = parser.parse_args()

    sim = scenario_to_runtime(load_scenario(args.scenario))
    dt = sim.config.fixed_dt
    result = run(
        sim.bodies, sim.model, sim.integrator, dt, args.steps, sample_every=args.sample_every
    )
    bodies = result.bodies

    print("steps:", args.steps)
    print("dt:", dt)
    print("sim time:", dt * args.steps)
    print("total mass:", total_mass(bodies))
    print("momentum:", linear_momentum(bodies))
    print("KE:", kinetic_energy(bodies))
    print("total energy:", total_energy_gravity(bodies, G=sim.config.G))
    if result.pos is not None:
        spread = result.pos.max(axis=(0, 1)) - result.pos.min(axis=(0, 1))
        print("samples:", result.time.shape[0], "extent:", spread)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
