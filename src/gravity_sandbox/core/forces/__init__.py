"""Forces and model utilities."""

from .nbody_gravity import DEFAULT_G, DEFAULT_SOFTENING, NBodyGravity  # noqa: F401
