"""Scenario I/O and adapters.

A scenario is an initial-condition document: simulation constants plus the
bodies present at startup. It is not a dump of running state.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np

from ..app.simulation import SandboxSimulation
from ..config import SimulationConfig, config_from_defn
from ..core.state.bodies import Body


ScenarioDefinition = dict[str, Any]

ORANGE = [255, 161, 0, 255]
BLUE = [0, 121, 241, 255]
RED = [230, 41, 55, 255]
GREEN = [0, 228, 48, 255]


def load_scenario(path: str | Path) -> ScenarioDefinition:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return _validate_scenario_v1(data)


def save_scenario(path: str | Path, defn: ScenarioDefinition) -> None:
    Path(path).write_text(
        json.dumps(_validate_scenario_v1(defn), indent=2, sort_keys=True),
        encoding="utf-8",
    )


def default_scenario(center: tuple[float, float] = (0.0, 0.0)) -> ScenarioDefinition:
    """A sun with two counter-rotating planets and one slower outer body."""
    cx, cy = float(center[0]), float(center[1])
    return {
        "schema_version": 1,
        "metadata": {"name": "Default", "description": "Sun with three orbiters."},
        "simulation": SimulationConfig().to_dict(),
        "bodies": [
            {"pos": [cx, cy], "vel": [0.0, 0.0], "density": 100.0, "radius": 100.0, "colour": ORANGE},
            {"pos": [cx + 500.0, cy], "vel": [0.0, 180.0], "density": 1.0, "radius": 30.0, "colour": BLUE},
            {"pos": [cx - 500.0, cy], "vel": [0.0, -180.0], "density": 2.0, "radius": 30.0, "colour": RED},
            {"pos": [cx, cy + 900.0], "vel": [180.0, 0.0], "density": 10.0, "radius": 50.0, "colour": GREEN},
        ],
    }


def scenario_to_runtime(defn: ScenarioDefinition) -> SandboxSimulation:
    defn = _validate_scenario_v1(defn)
    sim = SandboxSimulation(config=config_from_defn(defn))
    for entry in defn.get("bodies", []):
        sim.add_body(
            Body.create(
                position=entry["pos"],
                velocity=entry["vel"],
                density=entry["density"],
                radius=entry["radius"],
                colour=tuple(entry["colour"]) if "colour" in entry else None,
            )
        )
    return sim


def _require(obj: dict[str, Any], key: str, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"missing required field: {ctx}.{key}")
    return obj[key]


def _validate_vec2(value: Any, ctx: str) -> None:
    a = np.asarray(value, dtype=np.float64)
    if a.shape != (2,):
        raise ValueError(f"{ctx} must have 2 values")
    if not np.all(np.isfinite(a)):
        raise ValueError(f"{ctx} must be finite")


def _validate_colour(value: Any, ctx: str) -> None:
    if not isinstance(value, list) or len(value) != 4:
        raise ValueError(f"{ctx} must be a list of 4 values")
    for c in value:
        if not isinstance(c, int) or isinstance(c, bool) or not 0 <= c <= 255:
            raise ValueError(f"{ctx} values must be integers in 0..255")


def _validate_scenario_v1(data: Any) -> ScenarioDefinition:
    if not isinstance(data, dict):
        raise ValueError("scenario must be a JSON object")
    if data.get("schema_version") != 1:
        raise ValueError("schema_version must be 1")

    config_from_defn(data)

    bodies = data.get("bodies", [])
    if not isinstance(bodies, list):
        raise ValueError("bodies must be a list")
    for idx, entry in enumerate(bodies):
        ctx = f"bodies[{idx}]"
        if not isinstance(entry, dict):
            raise ValueError(f"{ctx} must be an object")
        _validate_vec2(_require(entry, "pos", ctx), f"{ctx}.pos")
        _validate_vec2(_require(entry, "vel", ctx), f"{ctx}.vel")
        for key in ("density", "radius"):
            value = _require(entry, key, ctx)
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise ValueError(f"{ctx}.{key} must be a number")
            if not value > 0:
                raise ValueError(f"{ctx}.{key} must be > 0")
        if "colour" in entry:
            _validate_colour(entry["colour"], f"{ctx}.colour")
    return data
