"""Math utilities namespace."""

from .vector import lerp  # noqa: F401
