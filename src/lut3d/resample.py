"""Resampling of non-uniform 1D curves onto a uniform lookup table.

CineSpace files describe each channel's input shaping as an arbitrary
monotonic list of (input, output) points. Consumers want a fixed-size table
they can index directly, so the curve is reconstructed piecewise-linearly and
sampled at ``size`` evenly spaced positions across its input domain.
"""

from dataclasses import dataclass, field
from typing import Sequence

import numpy as np

from .exceptions import InvalidArgumentError, InvalidDataError
from .grid import PRELUT_SIZE
from .numeric import lerp, sanitize_array

MIN_CURVE_POINTS = 3


@dataclass(frozen=True, eq=False)
class RawCurve:
    """Non-uniform curve samples with strictly increasing inputs."""
    inputs: np.ndarray = field(repr=False)
    outputs: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        inputs = np.asarray(self.inputs, dtype=np.float64)
        outputs = np.asarray(self.outputs, dtype=np.float64)
        object.__setattr__(self, "inputs", inputs)
        object.__setattr__(self, "outputs", outputs)

        if inputs.ndim != 1 or inputs.shape != outputs.shape:
            raise InvalidDataError(
                f"Curve needs matching input/output arrays, got {inputs.shape} and {outputs.shape}"
            )
        if not MIN_CURVE_POINTS <= len(inputs) <= PRELUT_SIZE:
            raise InvalidDataError(
                f"Curve needs {MIN_CURVE_POINTS} to {PRELUT_SIZE} points, got {len(inputs)}"
            )
        steps = np.diff(inputs)
        if not np.all(steps > 0):
            bad = int(np.argmin(steps > 0)) + 1
            raise InvalidDataError(
                f"Non increasing curve input at point {bad}: "
                f"{inputs[bad - 1]} then {inputs[bad]}"
            )

    @classmethod
    def from_points(cls, inputs: Sequence[float], outputs: Sequence[float]) -> "RawCurve":
        return cls(inputs=np.asarray(inputs), outputs=np.asarray(outputs))

    def __len__(self) -> int:
        return len(self.inputs)

    @property
    def in_min(self) -> float:
        return float(self.inputs[0])

    @property
    def in_max(self) -> float:
        return float(self.inputs[-1])

    @property
    def out_min(self) -> float:
        return float(self.outputs.min())

    @property
    def out_max(self) -> float:
        return float(self.outputs.max())


def nearest_sample_index(inputs: np.ndarray, x):
    """Greatest ``idx`` with ``inputs[idx] <= x``, clamped so ``idx + 1`` is valid.

    Accepts a scalar or an array of positions; returns an int or an int array.
    """
    idx = np.clip(np.searchsorted(inputs, x, side="right") - 1, 0, len(inputs) - 2)
    if np.ndim(idx) == 0:
        return int(idx)
    return idx


def resample(curve: RawCurve, output_size: int = PRELUT_SIZE) -> np.ndarray:
    """Sample ``curve`` at ``output_size`` uniform positions over its input domain.

    Positions outside the curve's sampled inputs are clamped to the first or
    last output rather than extrapolated. Results are sanitized float32.

    Args:
        curve: Curve to reconstruct
        output_size: Number of uniform samples (at least 2)

    Returns:
        float32 array of ``output_size`` samples
    """
    if output_size < 2:
        raise InvalidArgumentError(
            "Resampled curve needs at least 2 samples",
            argument="output_size",
            value=output_size,
        )

    inputs, outputs = curve.inputs, curve.outputs
    mix = np.arange(output_size, dtype=np.float64) / (output_size - 1)
    x = lerp(curve.in_min, curve.in_max, mix)

    idx = nearest_sample_index(inputs, x)

    x0 = inputs[idx]
    x1 = inputs[idx + 1]
    local = np.clip((x - x0) / (x1 - x0), 0.0, 1.0)

    return sanitize_array(lerp(outputs[idx], outputs[idx + 1], local))
