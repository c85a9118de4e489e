"""Structured logging utilities for lut3d.

This module provides configurable, structured logging with support for:
- JSON format for machine parsing
- Human-readable text format for development
- Component-specific log levels
- Rotating log files

Example usage:
    >>> from lut3d.utils.logging import get_logger, LogConfig, configure_logging
    >>>
    >>> # Configure logging at application startup
    >>> config = LogConfig(
    ...     log_level="DEBUG",
    ...     log_format="json",
    ...     component_levels={"parsers": "WARNING"}
    ... )
    >>> configure_logging(config)
    >>>
    >>> # Get a component logger
    >>> logger = get_logger("context")
    >>> logger.info("Loaded LUT", path="grade.cube", size=33)
"""

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Literal, Optional

# Type aliases
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["text", "json"]

ROOT_LOGGER = "lut3d"
VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class LogConfig:
    """Configuration for lut3d logging.

    Attributes:
        log_level: Default log level for all components
        log_format: Output format ('text' for human-readable, 'json' for structured)
        log_file: Optional file path for log output
        component_levels: Dictionary of component-specific log levels
        max_file_size_mb: Maximum log file size before rotation (default: 10MB)
        backup_count: Number of rotated log files to keep (default: 5)
        include_timestamp: Whether to include timestamps in output
        include_source: Whether to include source file/line information
    """

    log_level: LogLevel = "WARNING"
    log_format: LogFormat = "text"
    log_file: Optional[str] = None
    component_levels: Dict[str, LogLevel] = field(default_factory=dict)
    max_file_size_mb: int = 10
    backup_count: int = 5
    include_timestamp: bool = True
    include_source: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.log_level.upper() not in VALID_LEVELS:
            raise ValueError(
                f"Invalid log_level '{self.log_level}'. "
                f"Must be one of: {VALID_LEVELS}"
            )
        if self.log_format not in ("text", "json"):
            raise ValueError(
                f"Invalid log_format '{self.log_format}'. "
                "Must be 'text' or 'json'"
            )
        for component, level in self.component_levels.items():
            if level.upper() not in VALID_LEVELS:
                raise ValueError(
                    f"Invalid log level '{level}' for component '{component}'. "
                    f"Must be one of: {VALID_LEVELS}"
                )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogConfig":
        """Create LogConfig from dictionary."""
        return cls(
            log_level=data.get("log_level", "WARNING"),
            log_format=data.get("log_format", "text"),
            log_file=data.get("log_file"),
            component_levels=data.get("component_levels", {}),
            max_file_size_mb=data.get("max_file_size_mb", 10),
            backup_count=data.get("backup_count", 5),
            include_timestamp=data.get("include_timestamp", True),
            include_source=data.get("include_source", False),
        )


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Outputs log records as JSON objects with consistent structure:
    {
        "timestamp": "2024-12-29T10:30:45.123Z",
        "level": "INFO",
        "component": "context",
        "message": "Loaded LUT",
        "size": 33
    }
    """

    def __init__(self, include_source: bool = False) -> None:
        super().__init__()
        self.include_source = include_source

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "component": record.name.split(".")[-1],
            "message": record.getMessage(),
        }

        if self.include_source:
            log_entry["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter.

    Outputs log records in format:
    2024-12-29 10:30:45 | INFO     | lut3d.context | Loaded LUT [size=33]
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_source: bool = False,
    ) -> None:
        self.include_timestamp = include_timestamp
        self.include_source = include_source

        if include_timestamp:
            fmt = "%(asctime)s | %(levelname)-8s | %(name)-12s | %(message)s"
        else:
            fmt = "%(levelname)-8s | %(name)-12s | %(message)s"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text string."""
        message = super().format(record)

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            extra_str = ", ".join(f"{k}={v}" for k, v in extra_fields.items())
            message = f"{message} [{extra_str}]"

        if self.include_source:
            message = f"{message} ({record.filename}:{record.lineno})"

        return message


class Lut3DLogger(logging.LoggerAdapter):
    """Logger adapter that accepts structured keyword fields.

    >>> logger.info("Loaded LUT", size=33, format="cube")
    """

    def __init__(
        self,
        logger: logging.Logger,
        component: str,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(logger, extra or {})
        self.component = component

    def process(
        self,
        msg: str,
        kwargs: Dict[str, Any],
    ) -> tuple:
        """Move structured keyword arguments into ``extra_fields``."""
        extra_fields = {}
        for key in list(kwargs.keys()):
            if key not in ("exc_info", "stack_info", "stacklevel", "extra"):
                extra_fields[key] = kwargs.pop(key)

        if self.extra:
            extra_fields.update(self.extra)

        kwargs.setdefault("extra", {})
        kwargs["extra"]["extra_fields"] = extra_fields

        return msg, kwargs

    def load_start(self, source: str, **kwargs: Any) -> None:
        """Log the start of a LUT load."""
        self.debug(f"Loading LUT from {source}", source=source, **kwargs)

    def load_complete(
        self,
        source: str,
        duration_seconds: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        """Log a successful LUT load."""
        if duration_seconds is not None:
            kwargs["duration_ms"] = round(duration_seconds * 1000, 2)
        self.info(f"Loaded LUT from {source}", source=source, **kwargs)

    def load_failed(self, source: str, error: Exception) -> None:
        """Log a failed LUT load with the error's details."""
        details = getattr(error, "details", {}) or {}
        self.error(
            f"Failed to load LUT from {source}: {getattr(error, 'message', error)}",
            source=source,
            error_type=type(error).__name__,
            **details,
        )


# Global configuration
_log_config: Optional[LogConfig] = None
_configured_loggers: Dict[str, Lut3DLogger] = {}


def configure_logging(config: Optional[LogConfig] = None) -> None:
    """Configure logging for the ``lut3d`` logger namespace.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    global _log_config

    if config is None:
        config = LogConfig()

    _log_config = config

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, config.log_level.upper()))

    root_logger.handlers.clear()

    if config.log_format == "json":
        formatter = JSONFormatter(include_source=config.include_source)
    else:
        formatter = TextFormatter(
            include_timestamp=config.include_timestamp,
            include_source=config.include_source,
        )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(getattr(logging, config.log_level.upper()))
    root_logger.addHandler(console_handler)

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(getattr(logging, config.log_level.upper()))
        root_logger.addHandler(file_handler)

    for component, level in config.component_levels.items():
        component_logger = logging.getLogger(f"{ROOT_LOGGER}.{component}")
        component_logger.setLevel(getattr(logging, level.upper()))

    root_logger.propagate = False


def get_logger(component: str) -> Lut3DLogger:
    """Get a structured logger for a component.

    Unlike the application-level :func:`configure_logging`, this does not
    install handlers; a library user who never configures logging gets the
    standard ``logging`` behaviour.

    Args:
        component: Component name (e.g., 'context', 'parsers.cube')
    """
    if component in _configured_loggers:
        return _configured_loggers[component]

    base_logger = logging.getLogger(f"{ROOT_LOGGER}.{component}")

    if _log_config and component in _log_config.component_levels:
        level = _log_config.component_levels[component]
        base_logger.setLevel(getattr(logging, level.upper()))

    logger = Lut3DLogger(base_logger, component)
    _configured_loggers[component] = logger

    return logger


def get_config() -> Optional[LogConfig]:
    """Get current logging configuration."""
    return _log_config


def set_level(level: LogLevel, component: Optional[str] = None) -> None:
    """Set log level dynamically.

    Args:
        level: New log level
        component: Component to set level for (None for root)
    """
    if component:
        logger = logging.getLogger(f"{ROOT_LOGGER}.{component}")
    else:
        logger = logging.getLogger(ROOT_LOGGER)

    logger.setLevel(getattr(logging, level.upper()))
