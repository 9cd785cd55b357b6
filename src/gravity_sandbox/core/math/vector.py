"""Vector utilities for NumPy arrays.

All vectors are expected to be shaped (..., 2).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


ArrayF = NDArray[np.float64]


def lerp(a: ArrayF, b: ArrayF, t: float) -> ArrayF:
    """Linear interpolation from a (t=0) to b (t=1)."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return a + (b - a) * t
