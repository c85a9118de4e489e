"""LUT loading entry points.

Selects a parser by format tag or file extension, or synthesizes an identity
grid when no source is given. A load either returns a complete, immutable
:class:`Lut3D` or raises; nothing partial is ever returned.

Example:
    >>> from lut3d.loader import Lut3DContext
    >>> context = Lut3DContext()
    >>> lut = context.load_path("grade.cube")
    >>> lut.sample(0, 0, 0)
"""

import logging
import threading
import time
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .config import LoaderConfig
from .exceptions import InvalidDataError, Lut3DError, LutIOError
from .grid import LUTFormat, Lut3D, SampleOrder, allocate
from .parsers import get_parser_class
from .reader import LUTReader
from .utils.logging import get_logger

logger = logging.getLogger(__name__)

IDENTITY_SIZE = 32

TextSource = Union[str, bytes]
PathSource = Union[str, Path]


def build_identity(size: int = IDENTITY_SIZE) -> Lut3D:
    """Build an identity LUT where ``table[i, j, k] == (i, j, k) / (size - 1)``."""
    buffer = allocate(size)

    ramp = np.arange(size, dtype=np.float64) / (size - 1)
    r, g, b = np.meshgrid(ramp, ramp, ramp, indexing="ij")
    buffer.samples[:] = np.stack([r, g, b], axis=-1).reshape(-1, 3)

    return buffer.finalize(SampleOrder.BLUE_FASTEST)


def _decode(text: TextSource, config: LoaderConfig, fmt: LUTFormat) -> str:
    if isinstance(text, str):
        return text
    try:
        return bytes(text).decode(config.encoding, config.decode_errors)
    except UnicodeDecodeError as e:
        raise InvalidDataError(
            f"LUT text is not valid {config.encoding}",
            format_tag=fmt.value,
            cause=e,
        )


def _parse(text: str, fmt: LUTFormat, config: LoaderConfig) -> Lut3D:
    parser = get_parser_class(fmt)(config)
    lut = parser.parse(LUTReader(text, fmt.value))

    if lut is None or not lut.size:
        raise InvalidDataError("3D LUT is empty", format_tag=fmt.value)

    logger.debug(
        f"Parsed {fmt.value} LUT: size={lut.size} scale={lut.scale} prelut={lut.has_prelut}"
    )
    return lut


def load_from_text(
    text: Optional[TextSource],
    format_tag: str,
    config: Optional[LoaderConfig] = None,
) -> Lut3D:
    """Parse LUT text of the given format.

    Empty text yields the identity grid.

    Args:
        text: LUT source as bytes or str
        format_tag: One of dat, cube, 3dl, m3d, csp (case-insensitive)
        config: Loader configuration

    Raises:
        InvalidArgumentError: Unknown format tag or out-of-range header values
        InvalidDataError: Malformed text
        UnsupportedFeatureError: Valid text using an unsupported feature
        OutOfMemoryError: Grid allocation failed
    """
    config = config or LoaderConfig()

    if not text:
        return build_identity(config.identity_size)

    fmt = LUTFormat.from_tag(format_tag)
    return _parse(_decode(text, config, fmt), fmt, config)


def load_from_path(
    path: Optional[PathSource],
    config: Optional[LoaderConfig] = None,
) -> Lut3D:
    """Load a LUT file, guessing the format from its extension.

    A ``None`` path yields the identity grid.

    Raises:
        InvalidDataError: Path has no extension, or the file is malformed
        InvalidArgumentError: Unknown extension
        LutIOError: File cannot be read
    """
    config = config or LoaderConfig()

    if path is None:
        return build_identity(config.identity_size)

    path = Path(path)
    fmt = LUTFormat.from_path(path)

    try:
        data = path.read_bytes()
    except OSError as e:
        raise LutIOError(
            f"{path}: {e.strerror or e}",
            path=str(path),
            operation="read",
            cause=e,
        )

    return _parse(_decode(data, config, fmt), fmt, config)


class Lut3DContext:
    """Owns the LUT currently in use by a colour-transform consumer.

    Each successful load replaces the held LUT wholesale; a failed load
    leaves the previous one in place. Loads are serialized by a lock, while
    readers simply take the :attr:`lut` reference, which is never mutated.
    """

    def __init__(self, config: Optional[LoaderConfig] = None) -> None:
        self.config = config or LoaderConfig()
        self._lut: Optional[Lut3D] = None
        self._lock = threading.Lock()
        self._logger = get_logger("context")

    @property
    def lut(self) -> Optional[Lut3D]:
        return self._lut

    @property
    def is_loaded(self) -> bool:
        return self._lut is not None

    def load_text(self, text: Optional[TextSource], format_tag: str) -> Lut3D:
        return self._load(
            f"<{format_tag} text>",
            lambda: load_from_text(text, format_tag, self.config),
        )

    def load_path(self, path: Optional[PathSource]) -> Lut3D:
        return self._load(
            str(path) if path is not None else "<identity>",
            lambda: load_from_path(path, self.config),
        )

    def load_identity(self, size: Optional[int] = None) -> Lut3D:
        return self._load(
            "<identity>",
            lambda: build_identity(size if size is not None else self.config.identity_size),
        )

    def release(self) -> None:
        """Drop the held grid and pre-lookup."""
        with self._lock:
            self._lut = None
        self._logger.debug("Released LUT")

    def _load(self, source: str, load) -> Lut3D:
        with self._lock:
            self._logger.load_start(source)
            start = time.perf_counter()
            try:
                lut = load()
            except Lut3DError as e:
                self._logger.load_failed(source, e)
                raise

            self._lut = lut
            self._logger.load_complete(
                source,
                duration_seconds=time.perf_counter() - start,
                size=lut.size,
                prelut=lut.has_prelut,
            )
            return lut


def release(target: Union[Lut3DContext, Lut3D, None]) -> None:
    """Release the buffers held by ``target``.

    A :class:`Lut3DContext` drops its current LUT. A bare :class:`Lut3D` is
    immutable and freed once unreferenced, so there is nothing to do.
    """
    if isinstance(target, Lut3DContext):
        target.release()
    elif target is not None and not isinstance(target, Lut3D):
        raise TypeError(f"Cannot release {type(target).__name__}")
