"""Grid data model, allocation and sample-order normalization.

Every format stores its samples in its own line order. Parsers fill a
:class:`GridBuffer` in that native order and :meth:`GridBuffer.finalize`
re-projects the samples into the canonical ``table[i, j, k]`` layout, where
``i`` indexes the red input, ``j`` green and ``k`` blue. Consumers only ever
see the canonical layout.

Example:
    >>> buffer = allocate(2)
    >>> buffer.samples[:] = 0.0
    >>> lut = buffer.finalize(SampleOrder.RED_FASTEST)
    >>> lut.sample(1, 0, 0)
    (0.0, 0.0, 0.0)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from .exceptions import InvalidArgumentError, InvalidDataError, OutOfMemoryError

logger = logging.getLogger(__name__)

MAX_LEVEL = 256
PRELUT_SIZE = 65536

RGB = Tuple[float, float, float]


class LUTFormat(Enum):
    """Supported LUT text formats."""
    DAT = "dat"        # DaVinci sampled grid
    CUBE = "cube"      # Iridas / Resolve
    THREEDL = "3dl"    # Autodesk integer grid
    M3D = "m3d"        # Pandora
    CSP = "csp"        # Cinespace

    @classmethod
    def from_tag(cls, tag: str) -> "LUTFormat":
        """Resolve a format tag or extension, case-insensitively."""
        normalized = (tag or "").strip().lower().lstrip(".")
        for fmt in cls:
            if fmt.value == normalized:
                return fmt
        raise InvalidArgumentError(
            f"Unrecognized '.{normalized}' LUT format",
            argument="format",
            value=tag,
            valid_values=[fmt.value for fmt in cls],
        )

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "LUTFormat":
        """Guess the format from the text after the last '.' of the file name.

        A bare ``.cube`` counts as a cube file.
        """
        name = Path(path).name
        if "." not in name:
            raise InvalidDataError(f"Unable to guess the format from the extension of '{path}'")
        return cls.from_tag(name.rsplit(".", 1)[1])


class SampleOrder(Enum):
    """Which canonical axis varies fastest along a file's sample lines."""
    BLUE_FASTEST = "blue_fastest"  # dat, 3dl, m3d
    RED_FASTEST = "red_fastest"    # cube, csp


def canonical_index(position: int, size: int, order: SampleOrder) -> Tuple[int, int, int]:
    """Map the ``position``-th sample line of a file to its canonical (i, j, k)."""
    outer, mid, inner = position // (size * size), (position // size) % size, position % size
    if order is SampleOrder.BLUE_FASTEST:
        return (outer, mid, inner)
    return (inner, mid, outer)


def to_canonical(samples: np.ndarray, size: int, order: SampleOrder) -> np.ndarray:
    """Re-project native-order samples of shape (size³, 3) to (size, size, size, 3)."""
    cube = samples.reshape(size, size, size, 3)
    if order is SampleOrder.RED_FASTEST:
        cube = cube.transpose(2, 1, 0, 3)
    return np.ascontiguousarray(cube, dtype=np.float32)


def _freeze(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


@dataclass(frozen=True, eq=False)
class PreLut:
    """Per-channel 1D pre-lookup built from CineSpace input curves.

    Attributes:
        curves: Read-only float32 array of shape (3, PRELUT_SIZE)
        min: Lower bound of each channel's input domain
        max: Upper bound of each channel's input domain
        scale: ``(PRELUT_SIZE - 1) / (max - min)`` per channel, the factor a
            consumer multiplies ``value - min`` by to get a curve index
    """
    curves: np.ndarray = field(repr=False)
    min: RGB
    max: RGB
    scale: RGB

    @property
    def size(self) -> int:
        return int(self.curves.shape[1])

    def lookup(self, channel: int, index: int) -> float:
        return float(self.curves[channel, index])

    def domain(self, channel: int) -> Tuple[float, float]:
        return (self.min[channel], self.max[channel])


@dataclass(frozen=True, eq=False)
class Lut3D:
    """An immutable, canonically indexed 3D LUT.

    Attributes:
        size: Edge length of the cube (2-256)
        table: Read-only float32 array of shape (size, size, size, 3),
            addressed as ``table[i, j, k]`` for red, green, blue input indices
        scale: Per-channel multiplier correcting for a non-unit domain
        prelut: Optional per-channel pre-lookup
        source_format: Format the LUT was parsed from (None when synthesized)
        title: Title declared by the file, if any
    """
    size: int
    table: np.ndarray = field(repr=False)
    scale: RGB = (1.0, 1.0, 1.0)
    prelut: Optional[PreLut] = None
    source_format: Optional[LUTFormat] = None
    title: str = ""

    def __post_init__(self) -> None:
        expected = (self.size, self.size, self.size, 3)
        if self.table.shape != expected:
            raise ValueError(f"table shape {self.table.shape} does not match {expected}")

    @property
    def num_entries(self) -> int:
        return self.size ** 3

    @property
    def has_prelut(self) -> bool:
        return self.prelut is not None

    def flat_index(self, i: int, j: int, k: int) -> int:
        return (i * self.size + j) * self.size + k

    def sample(self, i: int, j: int, k: int) -> RGB:
        r, g, b = self.table[i, j, k]
        return (float(r), float(g), float(b))

    def flat(self) -> np.ndarray:
        """Canonical samples as a (size³, 3) view, red index slowest."""
        return self.table.reshape(-1, 3)


@dataclass
class GridBuffer:
    """Mutable staging storage a parser fills before the LUT is published."""
    size: int
    samples: np.ndarray = field(repr=False)
    prelut: Optional[np.ndarray] = field(default=None, repr=False)

    def finalize(
        self,
        order: SampleOrder,
        scale: RGB = (1.0, 1.0, 1.0),
        prelut_min: Optional[RGB] = None,
        prelut_max: Optional[RGB] = None,
        source_format: Optional[LUTFormat] = None,
        title: str = "",
    ) -> Lut3D:
        """Freeze the buffer into a :class:`Lut3D` in canonical order."""
        prelut = None
        if self.prelut is not None:
            if prelut_min is None or prelut_max is None:
                raise ValueError("pre-lookup domain is required when a pre-lookup was allocated")
            last = self.prelut.shape[1] - 1
            prelut = PreLut(
                curves=_freeze(self.prelut),
                min=tuple(float(v) for v in prelut_min),
                max=tuple(float(v) for v in prelut_max),
                scale=tuple(
                    last / (hi - lo) for lo, hi in zip(prelut_min, prelut_max)
                ),
            )

        return Lut3D(
            size=self.size,
            table=_freeze(to_canonical(self.samples, self.size, order)),
            scale=tuple(float(s) for s in scale),
            prelut=prelut,
            source_format=source_format,
            title=title,
        )


def allocate(size: int, wants_prelut: bool = False) -> GridBuffer:
    """Allocate staging storage for a ``size``³ grid.

    Contents are uninitialized; the caller must fill every entry.

    Args:
        size: Cube edge length, 2 to 256
        wants_prelut: Also allocate three PRELUT_SIZE-entry curves

    Raises:
        InvalidArgumentError: If size is out of range
        OutOfMemoryError: If the buffers cannot be allocated
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or not 2 <= size <= MAX_LEVEL:
        raise InvalidArgumentError(
            "Too large or invalid 3D LUT size",
            argument="size",
            value=size,
        )
    size = int(size)
    entries = size ** 3

    try:
        samples = np.empty((entries, 3), dtype=np.float32)
        prelut = np.empty((3, PRELUT_SIZE), dtype=np.float32) if wants_prelut else None
    except MemoryError as e:
        raise OutOfMemoryError(
            "Unable to allocate 3D LUT buffers",
            requested_entries=entries,
            cause=e,
        )

    logger.debug(f"Allocated {size}x{size}x{size} grid (prelut={wants_prelut})")
    return GridBuffer(size=size, samples=samples, prelut=prelut)
