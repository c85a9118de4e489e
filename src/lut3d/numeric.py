"""Float sanitizing and linear interpolation helpers."""

import math

import numpy as np

FLT_MAX = float(np.finfo(np.float32).max)


def sanitize(value: float) -> float:
    """Map NaN and infinities to finite float32 values.

    NaN becomes 0.0, -inf becomes -FLT_MAX and +inf becomes FLT_MAX.
    Finite values are returned unchanged.
    """
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        return -FLT_MAX if value < 0 else FLT_MAX
    return value


def sanitize_array(values: np.ndarray) -> np.ndarray:
    """Vectorized :func:`sanitize`, returning a new float32 array."""
    values = np.asarray(values, dtype=np.float32)
    return np.nan_to_num(values, nan=0.0, posinf=FLT_MAX, neginf=-FLT_MAX)


def lerp(v0: float, v1: float, f: float) -> float:
    return v0 + (v1 - v0) * f



def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def domain_scale(domain_min: float, domain_max: float) -> float:
    """Per-channel post-lookup scale, ``clamp(1 / (max - min), 0, 1)``.

    A degenerate domain (max == min) yields an infinite reciprocal which
    clamps to 1.0; an inverted one clamps to 0.0.
    """
    span = domain_max - domain_min
    if span == 0:
        return 1.0
    return clamp(1.0 / span, 0.0, 1.0)
