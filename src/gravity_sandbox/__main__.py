"""Run a scenario headless through the frame-tick entry point."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import numpy as np

from . import __version__
from .io.scenario import default_scenario, load_scenario, scenario_to_runtime


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="gravity_sandbox")
    parser.add_argument("scenario", type=Path, nargs="?", default=None)
    parser.add_argument("--frames", type=int, default=600)
    parser.add_argument("--fps", type=float, default=60.0)
    parser.add_argument("--report-every", type=int, default=60)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.fps <= 0:
        parser.error("--fps must be > 0")

    defn = load_scenario(args.scenario) if args.scenario is not None else default_scenario()
    sim = scenario_to_runtime(defn)
    frame_dt = 1.0 / args.fps

    print(f"gravity_sandbox v{__version__}")
    e0 = sim.diagnostics()["energy"]
    scale = abs(e0) or 1.0
    for frame in range(1, args.frames + 1):
        alpha = sim.advance(frame_dt)
        if args.report_every > 0 and frame % args.report_every == 0:
            info = sim.diagnostics()
            print(
                f"frame {frame:5d} | steps={info['step']:6d} t={info['time']:.3f} "
                f"alpha={alpha:.3f} | |p|={np.linalg.norm(info['momentum']):.6e} "
                f"| dE/E0={(info['energy'] - e0) / scale:.3e}"
            )

    info = sim.diagnostics()
    print("bodies:", info["bodies"])
    print("steps:", info["step"])
    print("sim time:", info["time"])
    print("total energy:", info["energy"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
