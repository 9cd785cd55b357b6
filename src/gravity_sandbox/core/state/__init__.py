"""State namespace."""

from .bodies import Body, BodyRegistry, BodyView, RegistrySnapshot  # noqa: F401
