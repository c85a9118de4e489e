"""Utility modules for lut3d."""

from .logging import (
    LogConfig,
    Lut3DLogger,
    configure_logging,
    get_logger,
    set_level,
)

__all__ = [
    "LogConfig",
    "Lut3DLogger",
    "configure_logging",
    "get_logger",
    "set_level",
]
