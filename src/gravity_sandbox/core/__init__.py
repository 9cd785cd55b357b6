"""Simulation core: bodies, forces, integrators, scheduling and prediction."""
