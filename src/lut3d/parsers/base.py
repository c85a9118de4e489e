"""Base class shared by the format parsers."""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..config import LoaderConfig
from ..grid import GridBuffer, LUTFormat, Lut3D, SampleOrder
from ..reader import LUTReader

logger = logging.getLogger(__name__)


class LUTFormatParser(ABC):
    """Parses one LUT text format into a :class:`Lut3D`.

    Subclasses set ``format`` and ``order`` and implement :meth:`parse`.
    The sample loop in :meth:`read_samples` is shared; formats customise it
    through :meth:`next_sample_line` and :meth:`parse_sample`.
    """

    format: LUTFormat
    order: SampleOrder

    def __init__(self, config: Optional[LoaderConfig] = None) -> None:
        self.config = config or LoaderConfig()

    @abstractmethod
    def parse(self, reader: LUTReader) -> Optional[Lut3D]:
        """Parse the whole input.

        Returns None when the input ended without declaring a grid.
        """

    def next_sample_line(self, reader: LUTReader) -> str:
        return reader.next_meaningful_line()

    def parse_sample(self, reader: LUTReader, line: str) -> Sequence[float]:
        return reader.floats(line, 3)

    def read_samples(
        self,
        reader: LUTReader,
        buffer: GridBuffer,
        first_line: Optional[str] = None,
    ) -> None:
        """Fill ``buffer`` with size³ samples in the format's native order.

        Args:
            reader: Source positioned before the first sample
            buffer: Freshly allocated staging buffer
            first_line: Sample line the caller already consumed, if any
        """
        samples = buffer.samples
        for position in range(buffer.size ** 3):
            if position == 0 and first_line is not None:
                line = first_line
            else:
                line = self.next_sample_line(reader)
            samples[position] = self.parse_sample(reader, line)
        logger.debug(f"Read {buffer.size ** 3} {self.format.value} samples")
