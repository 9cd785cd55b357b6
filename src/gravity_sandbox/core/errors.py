"""Errors raised by the simulation core."""

from __future__ import annotations


class InvalidBodyError(ValueError):
    """A body with non-positive (or non-finite) density or radius."""
