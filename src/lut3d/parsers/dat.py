"""DaVinci-style sampled grid (``.dat``).

Three floats per line, blue varying fastest, with an optional
``3DLUTSIZE <n>`` directive on the first meaningful line.
"""

from typing import Optional

from ..grid import LUTFormat, Lut3D, SampleOrder, allocate
from ..reader import LUTReader, parse_int
from .base import LUTFormatParser

SIZE_DIRECTIVE = "3DLUTSIZE"


class DatParser(LUTFormatParser):
    format = LUTFormat.DAT
    order = SampleOrder.BLUE_FASTEST

    def parse(self, reader: LUTReader) -> Optional[Lut3D]:
        size = self.config.dat_default_size

        first_line: Optional[str] = reader.next_meaningful_line()
        tokens = first_line.split()
        if tokens[0] == SIZE_DIRECTIVE:
            if len(tokens) < 2:
                raise reader.error(f"{SIZE_DIRECTIVE} needs a value")
            size = parse_int(tokens[1], reader, first_line)
            first_line = None

        buffer = allocate(size)
        self.read_samples(reader, buffer, first_line=first_line)
        return buffer.finalize(self.order, source_format=self.format)
