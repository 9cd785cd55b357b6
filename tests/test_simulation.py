from __future__ import annotations

import logging

import numpy as np
import pytest

from gravity_sandbox.app import SandboxSimulation
from gravity_sandbox.config import SimulationConfig
from gravity_sandbox.core.diagnostics import linear_momentum
from gravity_sandbox.core.errors import InvalidBodyError
from gravity_sandbox.core.integrators import SymplecticEuler, VelocityVerlet
from gravity_sandbox.core.state import Body


def _sim(**overrides) -> SandboxSimulation:
    config = SimulationConfig(**{"preview_steps": 60, **overrides})
    return SandboxSimulation(config=config)


def _sun_and_planet(sim: SandboxSimulation) -> None:
    sim.add_body(Body(position=(0.0, 0.0), velocity=(0.0, 0.0), density=100.0, radius=100.0))
    sim.add_body(Body(position=(500.0, 0.0), velocity=(0.0, 180.0), density=1.0, radius=30.0))


def test_concrete_scenario_one_fixed_step() -> None:
    sim = _sim()
    _sun_and_planet(sim)

    alpha = sim.advance(1.0 / 120.0)

    assert sim.scheduler.steps_taken == 1
    assert alpha == 0.0
    vx = sim.bodies.vel[1, 0]
    # F / m * dt = 108000 / 900 / 120
    assert vx < 0.0
    assert vx == pytest.approx(-1.0, rel=1e-2)
    assert np.array_equal(sim.bodies.prev_pos[1], [500.0, 0.0])


def test_integrator_follows_config() -> None:
    assert isinstance(_sim().integrator, VelocityVerlet)
    assert isinstance(_sim(integrator="symplectic_euler").integrator, SymplecticEuler)
    assert isinstance(_sim(integrator="symplectic_euler").predictor.integrator, SymplecticEuler)


def test_spawn_gesture_lifecycle() -> None:
    sim = _sim()
    _sun_and_planet(sim)

    body = sim.on_press_start((100.0, 100.0), density=2.0, radius=20.0, colour=(1, 2, 3, 255))
    assert sim.candidate is body
    assert sim.preview_path is None
    assert sim.bodies.count() == 2

    path = sim.on_drag((130.0, 100.0))
    assert path is not None
    assert path.shape == (60, 2)
    assert sim.preview_path is path
    assert np.array_equal(sim.candidate.velocity, [30.0, 0.0])
    assert sim.bodies.count() == 2

    idx = sim.on_release((140.0, 90.0))
    assert idx == 2
    assert sim.bodies.count() == 3
    assert sim.candidate is None
    assert sim.preview_path is None
    view = sim.bodies[2]
    assert np.array_equal(view.position, [100.0, 100.0])
    assert np.array_equal(view.velocity, [40.0, -10.0])
    assert view.colour == (1, 2, 3, 255)
    assert view.mass == pytest.approx(800.0)


def test_drag_and_release_without_press_are_ignored() -> None:
    sim = _sim()
    assert sim.on_drag((1.0, 1.0)) is None
    assert sim.on_release((1.0, 1.0)) is None
    assert sim.bodies.count() == 0


def test_rejected_spawn_leaves_registry_untouched(caplog: pytest.LogCaptureFixture) -> None:
    sim = _sim()
    _sun_and_planet(sim)
    pos_before = sim.bodies.pos.copy()

    with caplog.at_level(logging.WARNING, logger="gravity_sandbox.app.simulation"):
        with pytest.raises(InvalidBodyError):
            sim.on_press_start((10.0, 10.0), density=1.0, radius=0.0)
    assert "rejected spawn" in caplog.text

    assert sim.candidate is None
    assert sim.bodies.count() == 2
    assert np.array_equal(sim.bodies.pos, pos_before)


def test_paused_frame_keeps_state_and_zero_alpha() -> None:
    sim = _sim()
    _sun_and_planet(sim)
    sim.advance(0.02)
    pos = sim.bodies.pos.copy()

    assert sim.advance(0.0) == 0.0
    assert np.array_equal(sim.bodies.pos, pos)
    assert np.allclose(sim.interpolated_positions(), sim.bodies.prev_pos)


def test_interpolated_positions_between_ticks() -> None:
    sim = _sim(fixed_dt=0.01)
    _sun_and_planet(sim)
    alpha = sim.advance(0.015)

    assert alpha == pytest.approx(0.5)
    expected = sim.bodies.prev_pos + 0.5 * (sim.bodies.pos - sim.bodies.prev_pos)
    assert np.allclose(sim.interpolated_positions(), expected)


def test_same_outcome_regardless_of_frame_rate() -> None:
    slow = _sim()
    fast = _sim()
    _sun_and_planet(slow)
    _sun_and_planet(fast)

    for _ in range(60):
        slow.advance(1.0 / 30.0)
    for _ in range(240):
        fast.advance(1.0 / 120.0)

    n = min(slow.scheduler.steps_taken, fast.scheduler.steps_taken)
    assert abs(slow.scheduler.steps_taken - fast.scheduler.steps_taken) <= 1
    if slow.scheduler.steps_taken == fast.scheduler.steps_taken:
        assert np.allclose(slow.bodies.pos, fast.bodies.pos)
    assert n >= 239


def test_diagnostics_report() -> None:
    sim = _sim()
    _sun_and_planet(sim)
    info = sim.diagnostics()

    assert info["bodies"] == 2
    assert info["step"] == 0
    assert info["kinetic"] == pytest.approx(0.5 * 900.0 * 180.0**2)
    assert info["potential"] == pytest.approx(-30.0 * 1_000_000.0 * 900.0 / 500.0)
    assert info["energy"] == pytest.approx(info["kinetic"] + info["potential"])
    assert np.allclose(info["momentum"], [0.0, 900.0 * 180.0])


def test_diagnostics_use_configured_softening_for_coincident_bodies() -> None:
    sim = _sim()
    sim.add_body(Body(position=(0.0, 0.0), velocity=(0.0, 0.0), density=1.0, radius=1.0))
    sim.add_body(Body(position=(0.0, 0.0), velocity=(0.0, 0.0), density=1.0, radius=1.0))
    info = sim.diagnostics()

    assert np.isfinite(info["potential"])
    assert np.isfinite(info["energy"])
    assert info["potential"] == pytest.approx(-30.0 / np.sqrt(sim.config.softening))


def test_launch_velocity_without_press_raises() -> None:
    sim = _sim()
    with pytest.raises(ValueError, match="no spawn gesture"):
        sim.spawner._launch_velocity((1.0, 1.0))


def test_momentum_conserved_across_irregular_frames_and_mid_run_spawn() -> None:
    sim = _sim()
    _sun_and_planet(sim)
    rng = np.random.default_rng(7)
    p0 = linear_momentum(sim.bodies)

    for frame_dt in rng.uniform(0.0, 0.05, size=120):
        sim.advance(float(frame_dt))

    sim.on_press_start((0.0, -800.0), density=2.0, radius=20.0)
    sim.on_release((150.0, -800.0))
    assert sim.bodies.count() == 3
    expected = p0 + 800.0 * np.array([150.0, 0.0])

    for frame_dt in rng.uniform(0.0, 0.05, size=120):
        sim.advance(float(frame_dt))

    assert sim.scheduler.steps_taken > 240
    p1 = linear_momentum(sim.bodies)
    scale = np.sum(sim.bodies.mass * np.linalg.norm(sim.bodies.vel, axis=1)) + 1.0
    assert np.linalg.norm(p1 - expected) < 1e-9 * scale
