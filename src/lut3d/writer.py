"""Serialize a :class:`Lut3D` as ``.cube`` text."""

import logging
from pathlib import Path
from typing import Optional, Union

from .exceptions import LutIOError
from .grid import Lut3D

logger = logging.getLogger(__name__)


def write_cube(lut: Lut3D, title: Optional[str] = None) -> str:
    """Write ``lut`` in cube format, red varying fastest.

    DOMAIN_MIN and DOMAIN_MAX directives are emitted when the LUT carries a
    non-unit scale, so re-parsing reproduces the same scale. Pre-lookup
    curves have no cube representation and are not written.
    """
    lines = []

    title = title if title is not None else lut.title
    if title:
        lines.append(f'TITLE "{title}"')

    if lut.has_prelut:
        lines.append("# pre-lookup curves omitted")

    if lut.scale != (1.0, 1.0, 1.0):
        # a zero scale comes from an inverted domain; [1, 0] reproduces it
        domain_min = [0.0 if s > 0 else 1.0 for s in lut.scale]
        domain_max = [1.0 / s if s > 0 else 0.0 for s in lut.scale]
        lines.append(f"DOMAIN_MIN {domain_min[0]!r} {domain_min[1]!r} {domain_min[2]!r}")
        lines.append(f"DOMAIN_MAX {domain_max[0]!r} {domain_max[1]!r} {domain_max[2]!r}")

    lines.append(f"LUT_3D_SIZE {lut.size}")
    lines.append("")

    size = lut.size
    table = lut.table
    for k in range(size):
        for j in range(size):
            for i in range(size):
                r, g, b = table[i, j, k]
                lines.append(f"{r:.10f} {g:.10f} {b:.10f}")

    return "\n".join(lines) + "\n"


def save_cube(lut: Lut3D, path: Union[str, Path], title: Optional[str] = None) -> None:
    """Write ``lut`` to ``path`` in cube format."""
    path = Path(path)
    try:
        path.write_text(write_cube(lut, title), encoding="utf-8")
    except OSError as e:
        raise LutIOError(
            f"Failed to write LUT: {e}",
            path=str(path),
            operation="write",
            cause=e,
        )
    logger.info(f"Written LUT to {path}")
