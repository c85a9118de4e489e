"""Pandora format (``.m3d``).

The header declares the number of input entries (``in``), the output value
range (``out``) and the channel order of each sample line
(``values red green blue``). Sample data starts after the ``values`` line.
"""

import logging
from typing import List, Optional, Sequence

from ..exceptions import InvalidArgumentError
from ..grid import MAX_LEVEL, LUTFormat, Lut3D, SampleOrder, allocate
from ..reader import LUTReader, parse_int
from .base import LUTFormatParser

logger = logging.getLogger(__name__)

MAX_ENTRIES = MAX_LEVEL * MAX_LEVEL * MAX_LEVEL
CHANNELS = {"r": 0, "g": 1, "b": 2}


def grid_size_for(entries: int) -> int:
    """Smallest edge length whose cube holds ``entries`` samples."""
    size = 1
    while size * size * size < entries:
        size += 1
    return size


class M3DParser(LUTFormatParser):
    format = LUTFormat.M3D
    order = SampleOrder.BLUE_FASTEST

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._reset()

    def _reset(self) -> None:
        self.rgb_map: List[int] = [0, 1, 2]
        self.out_scale = 1.0

    def parse(self, reader: LUTReader) -> Optional[Lut3D]:
        self._reset()
        entries_in: Optional[int] = None
        entries_out: Optional[int] = None

        for line in reader:
            tokens = line.split()
            if not tokens:
                continue
            key = tokens[0]
            if key == "in" and len(tokens) > 1:
                entries_in = parse_int(tokens[1], reader, line)
            elif key == "out" and len(tokens) > 1:
                entries_out = parse_int(tokens[1], reader, line)
            elif key == "values":
                self._set_channel_map(reader, tokens[1:])
                break

        if entries_in is None or entries_out is None:
            raise InvalidArgumentError(
                "in and out must be defined",
                argument="in" if entries_in is None else "out",
            )
        for name, value in (("in", entries_in), ("out", entries_out)):
            if not 2 <= value <= MAX_ENTRIES:
                raise InvalidArgumentError(
                    f"invalid {name} ({value})",
                    argument=name,
                    value=value,
                )

        size = grid_size_for(entries_in)
        logger.debug(f"in={entries_in} out={entries_out} -> {size}^3 grid, map={self.rgb_map}")
        self.out_scale = 1.0 / (entries_out - 1)

        buffer = allocate(size)
        self.read_samples(reader, buffer)
        return buffer.finalize(self.order, source_format=self.format)

    def _set_channel_map(self, reader: LUTReader, names: Sequence[str]) -> None:
        for channel, name in enumerate(names[:3]):
            key = name[0].lower()
            if key not in CHANNELS:
                raise reader.error(f"Unknown channel '{name}' in values directive")
            self.rgb_map[channel] = CHANNELS[key]

    def parse_sample(self, reader: LUTReader, line: str) -> Sequence[float]:
        raw = reader.floats(line, 3)
        return [raw[self.rgb_map[c]] * self.out_scale for c in range(3)]
