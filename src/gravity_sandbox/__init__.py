"""Interactive N-body gravity sandbox core."""

__version__ = "0.1.0"
