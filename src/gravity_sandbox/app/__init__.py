"""Headless application layer driven by an external window/input shell."""

from .simulation import SandboxSimulation, SpawnController  # noqa: F401
