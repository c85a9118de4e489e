"""lut3d - 3D colour lookup table loading for dat, cube, 3dl, m3d and csp files."""
__version__ = "0.1.0"

from .config import LoaderConfig, load_config
from .grid import (
    MAX_LEVEL,
    PRELUT_SIZE,
    GridBuffer,
    LUTFormat,
    Lut3D,
    PreLut,
    SampleOrder,
    allocate,
)
from .loader import (
    Lut3DContext,
    build_identity,
    load_from_path,
    load_from_text,
    release,
)
from .writer import save_cube, write_cube

# Exceptions
from .exceptions import (
    Lut3DError,
    InvalidArgumentError,
    InvalidDataError,
    UnsupportedFeatureError,
    OutOfMemoryError,
    LutIOError,
)

# Structured logging
from .utils.logging import (
    LogConfig,
    Lut3DLogger,
    configure_logging,
    get_logger,
    set_level,
)

__all__ = [
    "__version__",
    # Loading
    "load_from_text",
    "load_from_path",
    "build_identity",
    "release",
    "Lut3DContext",
    "LoaderConfig",
    "load_config",
    # Data model
    "Lut3D",
    "PreLut",
    "GridBuffer",
    "LUTFormat",
    "SampleOrder",
    "allocate",
    "MAX_LEVEL",
    "PRELUT_SIZE",
    # Writing
    "write_cube",
    "save_cube",
    # Exceptions
    "Lut3DError",
    "InvalidArgumentError",
    "InvalidDataError",
    "UnsupportedFeatureError",
    "OutOfMemoryError",
    "LutIOError",
    # Logging
    "LogConfig",
    "Lut3DLogger",
    "configure_logging",
    "get_logger",
    "set_level",
]
