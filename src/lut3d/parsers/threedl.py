"""Autodesk integer grid (``.3dl``).

Assumes a 17x17x17 grid of integer triplets normalized by 16³, preceded by
a single mesh header line that is discarded.
"""

from typing import Optional, Sequence

from ..grid import LUTFormat, Lut3D, SampleOrder, allocate
from ..reader import LUTReader
from .base import LUTFormatParser

# TODO: read the grid size and bit depth from the mesh header line
# instead of assuming 17 levels at 12 bits.
GRID_SIZE = 17
SAMPLE_SCALE = float(16 * 16 * 16)


class ThreeDLParser(LUTFormatParser):
    format = LUTFormat.THREEDL
    order = SampleOrder.BLUE_FASTEST

    def parse(self, reader: LUTReader) -> Optional[Lut3D]:
        buffer = allocate(GRID_SIZE)

        reader.next_meaningful_line()
        self.read_samples(reader, buffer)
        return buffer.finalize(self.order, source_format=self.format)

    def parse_sample(self, reader: LUTReader, line: str) -> Sequence[float]:
        return [v / SAMPLE_SCALE for v in reader.ints(line, 3)]
