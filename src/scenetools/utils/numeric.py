"""Decimal rounding used to suppress floating-point noise in comparisons.

Rounding rule: half toward positive infinity, computed in binary floating
point as ``floor(value * 10**decimals + 0.5) / 10**decimals``. Values that
look like a tie in decimal may not be one in binary, e.g.
``round_to_decimals(1.005) == 1.0`` because ``1.005 * 100`` evaluates to
``100.49999999999999``. Values too large to scale without overflowing are
returned unchanged.
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


def round_to_decimals(value: float, decimals: int = 2) -> float:
    factor = 10.0 ** decimals
    scaled = value * factor
    if not math.isfinite(scaled):
        # Too large to carry fractional digits at this precision.
        return value
    return math.floor(scaled + 0.5) / factor


def _is_vector3(vector: Any) -> bool:
    if isinstance(vector, np.ndarray):
        return vector.shape == (3,) and np.issubdtype(vector.dtype, np.number)
    if isinstance(vector, (list, tuple)):
        return len(vector) == 3 and all(
            isinstance(c, Real) and not isinstance(c, bool) for c in vector
        )
    return False


def round_vector(vector: Any, decimals: int = 2) -> NDArray[np.float64] | Any:
    """Round each component of a 3-vector.

    Args:
        vector: A length-3 numpy array, list or tuple of numbers
        decimals: Number of decimal places to keep

    Returns:
        A new float64 array, or the input unchanged (with a warning) if it
        is not a 3-vector
    """
    if not _is_vector3(vector):
        logger.warning("round_vector: not a 3-vector: %r", vector)
        return vector
    return np.array(
        [round_to_decimals(float(c), decimals) for c in vector], dtype=np.float64
    )
