"""Iridas / Resolve cube format (``.cube``).

Header directives (``TITLE``, ``DOMAIN_MIN``, ``DOMAIN_MAX``,
``LUT_3D_INPUT_RANGE``) may appear before ``LUT_3D_SIZE`` or interleaved with
the samples. Samples are three floats per line with red varying fastest.
The declared domain becomes the per-channel post-lookup scale.
"""

import logging
import re
from typing import List, Optional

from ..grid import LUTFormat, Lut3D, SampleOrder, allocate
from ..numeric import domain_scale
from ..reader import LUTReader, parse_int, skip_line
from .base import LUTFormatParser

logger = logging.getLogger(__name__)

SIZE_DIRECTIVE = "LUT_3D_SIZE"
TITLE_PATTERN = re.compile(r'TITLE\s+"?([^"]*)"?')


class CubeParser(LUTFormatParser):
    format = LUTFormat.CUBE
    order = SampleOrder.RED_FASTEST

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._reset()

    def _reset(self) -> None:
        self.domain_min: List[float] = [0.0, 0.0, 0.0]
        self.domain_max: List[float] = [1.0, 1.0, 1.0]
        self.title = ""

    def parse(self, reader: LUTReader) -> Optional[Lut3D]:
        self._reset()
        for line in reader:
            stripped = line.strip()
            if stripped.startswith(SIZE_DIRECTIVE):
                tokens = stripped.split()
                if len(tokens) < 2:
                    raise reader.error(f"{SIZE_DIRECTIVE} needs a value")
                size = parse_int(tokens[1], reader, line)

                buffer = allocate(size)
                self.read_samples(reader, buffer)

                scale = tuple(
                    domain_scale(lo, hi) for lo, hi in zip(self.domain_min, self.domain_max)
                )
                return buffer.finalize(
                    self.order,
                    scale=scale,
                    source_format=self.format,
                    title=self.title,
                )

            self._handle_directive(reader, stripped)

        return None

    def next_sample_line(self, reader: LUTReader) -> str:
        while True:
            line = reader.next_line()
            if skip_line(line):
                continue
            if not self._handle_directive(reader, line.strip()):
                return line

    def _handle_directive(self, reader: LUTReader, stripped: str) -> bool:
        """Apply a header directive; False if ``stripped`` is not one."""
        if stripped.startswith("DOMAIN_"):
            if stripped.startswith("DOMAIN_MIN"):
                self.domain_min = reader.floats(stripped[len("DOMAIN_MIN"):], 3)
            elif stripped.startswith("DOMAIN_MAX"):
                self.domain_max = reader.floats(stripped[len("DOMAIN_MAX"):], 3)
            else:
                raise reader.error("Unknown DOMAIN directive")
            logger.debug(f"min: {self.domain_min} | max: {self.domain_max}")
            return True

        if stripped.startswith("LUT_3D_INPUT_RANGE"):
            lo, hi = reader.floats(stripped[len("LUT_3D_INPUT_RANGE"):], 2)
            self.domain_min = [lo, lo, lo]
            self.domain_max = [hi, hi, hi]
            return True

        if stripped.startswith("TITLE"):
            match = TITLE_PATTERN.match(stripped)
            if match:
                self.title = match.group(1)
            return True

        return False
