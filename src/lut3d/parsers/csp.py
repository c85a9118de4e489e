"""CineSpace format (``.csp``).

Layout::

    CSPLUTV100
    3D
    BEGIN METADATA          (optional, skipped)
    ...
    END METADATA
    <points>                per channel, red then green then blue:
    <inputs...>               2 points: "in_min in_max" / "out_min out_max"
    <outputs...>              N > 2 points: N inputs then N outputs
    <size> <size> <size>
    <r g b>                 size³ samples, red varying fastest

When all three channels declare an N-point curve, the curves are resampled
into a uniform pre-lookup and the grid scale is left at 1. Otherwise each
channel's input domain becomes its post-lookup scale.
"""

import logging
from enum import Enum
from typing import List, Optional

from ..exceptions import InvalidArgumentError, UnsupportedFeatureError
from ..grid import PRELUT_SIZE, GridBuffer, LUTFormat, Lut3D, SampleOrder, allocate
from ..numeric import domain_scale
from ..reader import LUTReader, parse_int
from ..resample import RawCurve, resample
from .base import LUTFormatParser

logger = logging.getLogger(__name__)

MAGIC = "CSPLUTV100"


class CspState(Enum):
    """Parser states, in file order."""
    READ_MAGIC = "read_magic"
    READ_DIM_TAG = "read_dim_tag"
    READ_METADATA = "read_metadata"
    READ_CHANNEL_DOMAIN = "read_channel_domain"
    READ_GRID_DIMS = "read_grid_dims"
    READ_GRID_SAMPLES = "read_grid_samples"
    BUILD_PRELUT = "build_prelut"
    DONE = "done"


class CspParser(LUTFormatParser):
    format = LUTFormat.CSP
    order = SampleOrder.RED_FASTEST

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._reset()

        self._handlers = {
            CspState.READ_MAGIC: self.read_magic,
            CspState.READ_DIM_TAG: self.read_dim_tag,
            CspState.READ_METADATA: self.read_metadata,
            CspState.READ_CHANNEL_DOMAIN: self.read_channel_domain,
            CspState.READ_GRID_DIMS: self.read_grid_dims,
            CspState.READ_GRID_SAMPLES: self.read_grid_samples,
            CspState.BUILD_PRELUT: self.build_prelut,
        }

    def _reset(self) -> None:
        """Start over at READ_MAGIC with default domains."""
        self.state = CspState.READ_MAGIC
        self.line = ""
        self.channel = 0
        self.in_min: List[float] = [0.0, 0.0, 0.0]
        self.in_max: List[float] = [1.0, 1.0, 1.0]
        self.out_min: List[float] = [0.0, 0.0, 0.0]
        self.out_max: List[float] = [1.0, 1.0, 1.0]
        self.curves: List[Optional[RawCurve]] = [None, None, None]
        self.buffer: Optional[GridBuffer] = None
        self.lut: Optional[Lut3D] = None

    @property
    def has_prelut(self) -> bool:
        return all(curve is not None for curve in self.curves)

    def parse(self, reader: LUTReader) -> Optional[Lut3D]:
        self._reset()
        try:
            while self.state is not CspState.DONE:
                self.state = self.step(reader)
            return self.lut
        finally:
            # curve points and staging buffers are only needed during the parse
            self.curves = [None, None, None]
            self.buffer = None

    def step(self, reader: LUTReader) -> CspState:
        """Run the handler for the current state and return the next state."""
        return self._handlers[self.state](reader)

    # --- states --------------------------------------------------------

    def read_magic(self, reader: LUTReader) -> CspState:
        line = reader.next_meaningful_line()
        if line.strip() != MAGIC:
            raise InvalidArgumentError(
                "Not cineSpace LUT format",
                argument="magic",
                value=line.strip()[:20],
            )
        return CspState.READ_DIM_TAG

    def read_dim_tag(self, reader: LUTReader) -> CspState:
        line = reader.next_meaningful_line()
        if not line.lstrip().startswith("3D"):
            raise InvalidArgumentError(
                "Not 3D LUT format",
                argument="type",
                value=line.strip()[:20],
            )
        return CspState.READ_METADATA

    def read_metadata(self, reader: LUTReader) -> CspState:
        """Skip an optional metadata block and stop at the first channel line."""
        inside = False
        while True:
            line = reader.next_meaningful_line()
            stripped = line.strip()
            if stripped.startswith("BEGIN METADATA"):
                inside = True
            elif stripped.startswith("END METADATA"):
                inside = False
            elif not inside:
                self.line = line
                return CspState.READ_CHANNEL_DOMAIN

    def read_channel_domain(self, reader: LUTReader) -> CspState:
        c = self.channel
        tokens = self.line.split()
        points = parse_int(tokens[0], reader, self.line)

        if points > 2:
            self._read_curve(reader, c, points)
        elif points == 2:
            self.in_min[c], self.in_max[c] = reader.floats(reader.next_meaningful_line(), 2)
            self.out_min[c], self.out_max[c] = reader.floats(reader.next_meaningful_line(), 2)
        else:
            raise UnsupportedFeatureError(
                f"Unsupported number of pre-lut points: {points}",
                feature="prelut_points",
                format_tag=self.format.value,
            )

        self.line = reader.next_meaningful_line()
        self.channel += 1
        if self.channel < 3:
            return CspState.READ_CHANNEL_DOMAIN
        return CspState.READ_GRID_DIMS

    def _read_curve(self, reader: LUTReader, c: int, points: int) -> None:
        if points > PRELUT_SIZE:
            raise reader.error(f"Prelut size too large: {points} > {PRELUT_SIZE}")

        inputs = []
        for _ in range(points):
            value = reader.next_float()
            if inputs and value <= inputs[-1]:
                raise reader.error("Invalid file, non increasing prelut")
            inputs.append(value)
        outputs = [reader.next_float() for _ in range(points)]

        curve = RawCurve.from_points(inputs, outputs)
        self.curves[c] = curve
        self.in_min[c], self.in_max[c] = curve.in_min, curve.in_max
        self.out_min[c], self.out_max[c] = curve.out_min, curve.out_max
        logger.debug(
            f"channel {c}: {points} point curve, in [{curve.in_min}, {curve.in_max}]"
        )

    def read_grid_dims(self, reader: LUTReader) -> CspState:
        size_r, size_g, size_b = reader.ints(self.line, 3)
        if size_r != size_g or size_r != size_b:
            raise UnsupportedFeatureError(
                f"Unsupported size combination: {size_r}x{size_g}x{size_b}",
                feature="non_cubic_grid",
                format_tag=self.format.value,
            )
        self.buffer = allocate(size_r, wants_prelut=self.has_prelut)
        return CspState.READ_GRID_SAMPLES

    def read_grid_samples(self, reader: LUTReader) -> CspState:
        self.read_samples(reader, self.buffer)
        if self.has_prelut:
            return CspState.BUILD_PRELUT

        scale = tuple(domain_scale(lo, hi) for lo, hi in zip(self.in_min, self.in_max))
        self.lut = self.buffer.finalize(self.order, scale=scale, source_format=self.format)
        return CspState.DONE

    def parse_sample(self, reader: LUTReader, line: str) -> List[float]:
        r, g, b = reader.floats(line, 3)
        return [
            r * (self.out_max[0] - self.out_min[0]),
            g * (self.out_max[1] - self.out_min[1]),
            b * (self.out_max[2] - self.out_min[2]),
        ]

    def build_prelut(self, reader: LUTReader) -> CspState:
        prelut = self.buffer.prelut
        for c, curve in enumerate(self.curves):
            prelut[c] = resample(curve, prelut.shape[1])

        self.lut = self.buffer.finalize(
            self.order,
            prelut_min=tuple(self.in_min),
            prelut_max=tuple(self.in_max),
            source_format=self.format,
        )
        return CspState.DONE
