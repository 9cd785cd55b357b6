"""Drive the spawn gesture the way an interactive host would."""

from __future__ import annotations

import numpy as np

from gravity_sandbox.config import SimulationConfig
from gravity_sandbox.io import default_scenario, scenario_to_runtime


if __name__ == "__main__":
    defn = default_scenario(center=(960.0, 540.0))
    defn["simulation"] = SimulationConfig(preview_steps=1200).to_dict()
    sim = scenario_to_runtime(defn)
    rng = np.random.default_rng(0)
    frame_dt = 1.0 / 60.0

    press = np.array([960.0, 140.0])
    sim.on_press_start(
        press,
        density=max(rng.uniform() * 20.0, 1.0),
        radius=max(rng.uniform() * 60.0, 20.0),
        colour=tuple(int(c) for c in rng.integers(0, 256, size=3)) + (255,),
    )
    for k in range(1, 31):
        alpha = sim.advance(frame_dt)
        path = sim.on_drag(press + (-5.0 * k, 0.0))
        print(
            f"frame {k:3d} | alpha={alpha:.3f} | preview end="
            f"({path[-1, 0]:.1f}, {path[-1, 1]:.1f})"
        )
    idx = sim.on_release(press + (-150.0, 0.0))
    print("committed body", idx, "velocity", sim.bodies[idx].velocity)

    for _ in range(600):
        sim.advance(frame_dt)
    info = sim.diagnostics()
    print(f"after 10 s: {info['bodies']} bodies, {info['step']} steps, E={info['energy']:.6e}")
