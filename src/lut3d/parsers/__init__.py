"""Format parsers for lut3d.

One parser class per supported text format:
- DatParser: DaVinci sampled grid (.dat)
- CubeParser: Iridas / Resolve cube (.cube)
- ThreeDLParser: Autodesk integer grid (.3dl)
- M3DParser: Pandora (.m3d)
- CspParser: CineSpace with optional pre-lookup curves (.csp)
"""

from typing import Dict, Type

from ..grid import LUTFormat
from .base import LUTFormatParser
from .cube import CubeParser
from .csp import CspParser, CspState
from .dat import DatParser
from .m3d import M3DParser
from .threedl import ThreeDLParser

PARSERS: Dict[LUTFormat, Type[LUTFormatParser]] = {
    LUTFormat.DAT: DatParser,
    LUTFormat.CUBE: CubeParser,
    LUTFormat.THREEDL: ThreeDLParser,
    LUTFormat.M3D: M3DParser,
    LUTFormat.CSP: CspParser,
}


def get_parser_class(fmt: LUTFormat) -> Type[LUTFormatParser]:
    return PARSERS[fmt]


__all__ = [
    "LUTFormatParser",
    "DatParser",
    "CubeParser",
    "ThreeDLParser",
    "M3DParser",
    "CspParser",
    "CspState",
    "PARSERS",
    "get_parser_class",
]
