from __future__ import annotations


def test_sanity_import() -> None:
    import gravity_sandbox as gs

    assert isinstance(gs.__version__, str)


def test_public_names() -> None:
    from gravity_sandbox.app import SandboxSimulation, SpawnController
    from gravity_sandbox.core.errors import InvalidBodyError
    from gravity_sandbox.core.forces import DEFAULT_G, DEFAULT_SOFTENING, NBodyGravity
    from gravity_sandbox.core.integrators import INTEGRATORS, make_integrator
    from gravity_sandbox.core.state import BodyRegistry
    from gravity_sandbox.io import default_scenario

    assert issubclass(InvalidBodyError, ValueError)
    assert set(INTEGRATORS) == {"velocity_verlet", "symplectic_euler"}
    assert DEFAULT_SOFTENING > 0.0
    assert NBodyGravity().G == DEFAULT_G
    assert isinstance(SandboxSimulation().spawner, SpawnController)
    assert isinstance(SandboxSimulation().bodies, BodyRegistry)
    assert type(make_integrator("velocity_verlet")).__name__ == "VelocityVerlet"
    assert default_scenario()["schema_version"] == 1
