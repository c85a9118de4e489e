"""Standardized exception hierarchy for lut3d.

Every failure while loading a LUT is reported through one of these
exceptions. Each is designed to be:
- Self-descriptive with clear error messages
- Categorized so callers can tell bad arguments from bad files
- Chainable for preserving original exception context

Exception Hierarchy:
    Lut3DError (base)
    +-- InvalidArgumentError
    +-- InvalidDataError
    +-- UnsupportedFeatureError
    +-- OutOfMemoryError
    +-- LutIOError
"""

from typing import Any, Dict, Optional


class Lut3DError(Exception):
    """Base exception for all lut3d errors.

    All lut3d-specific exceptions inherit from this class,
    allowing for broad exception handling when needed.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary with additional context
        cause: Original exception that caused this error (if any)
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize Lut3DError.

        Args:
            message: Human-readable error description
            details: Optional dictionary with additional context
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

        # Chain the cause exception for proper traceback
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with error type, message, and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


class InvalidArgumentError(Lut3DError):
    """A caller-supplied or header-declared value is out of range.

    Examples:
        - Grid size outside 2..256
        - Unknown format tag or file extension
        - Pandora file without ``in``/``out`` declarations
        - CineSpace file without its magic line
    """

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        value: Optional[Any] = None,
        valid_values: Optional[list] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize InvalidArgumentError.

        Args:
            message: Description of the error
            argument: Name of the offending argument or directive
            value: The invalid value provided
            valid_values: List of valid values (if applicable)
            cause: Original exception
        """
        details = {}
        if argument:
            details["argument"] = argument
        if value is not None:
            details["value"] = value
        if valid_values:
            details["valid_values"] = valid_values
        super().__init__(message, details=details, cause=cause)


class InvalidDataError(Lut3DError):
    """Malformed LUT text.

    Examples:
        - Unexpected end of input
        - Token that is not a number
        - Sample line with fewer than three values
        - Non-increasing curve samples
        - Loader finished without a grid
    """

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        format_tag: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize InvalidDataError.

        Args:
            message: Description of the data error
            line_number: 1-based line where the problem was found
            line: Offending line text
            format_tag: Format being parsed
            cause: Original exception
        """
        details = {}
        if format_tag:
            details["format"] = format_tag
        if line_number is not None:
            details["line_number"] = line_number
        if line is not None:
            details["line"] = line.strip()[:80]
        super().__init__(message, details=details, cause=cause)


class UnsupportedFeatureError(Lut3DError):
    """Well-formed input that uses something this loader declines to handle.

    Examples:
        - Non-cubic CineSpace grid (e.g. 17x17x33)
        - CineSpace channel with fewer than two curve points
    """

    def __init__(
        self,
        message: str,
        feature: Optional[str] = None,
        format_tag: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize UnsupportedFeatureError.

        Args:
            message: Description of the unsupported feature
            feature: Short name of the feature
            format_tag: Format being parsed
            cause: Original exception
        """
        details = {}
        if feature:
            details["feature"] = feature
        if format_tag:
            details["format"] = format_tag
        super().__init__(message, details=details, cause=cause)


class OutOfMemoryError(Lut3DError):
    """Grid or pre-lookup buffers could not be allocated."""

    def __init__(
        self,
        message: str,
        requested_entries: Optional[int] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize OutOfMemoryError.

        Args:
            message: Description of memory error
            requested_entries: Number of RGB entries requested
            cause: Original exception
        """
        details = {}
        if requested_entries is not None:
            details["requested_entries"] = requested_entries
        super().__init__(message, details=details, cause=cause)


class LutIOError(Lut3DError):
    """A LUT or configuration file could not be opened or read."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        """Initialize LutIOError.

        Args:
            message: Description of the I/O error
            path: Path of the file involved
            operation: Operation that failed (read, write)
            cause: Original exception
        """
        details = {}
        if path:
            details["path"] = path
        if operation:
            details["operation"] = operation
        super().__init__(message, details=details, cause=cause)


# Exception mapping for easy lookup
EXCEPTION_MAP = {
    "invalid_argument": InvalidArgumentError,
    "invalid_data": InvalidDataError,
    "unsupported_feature": UnsupportedFeatureError,
    "memory": OutOfMemoryError,
    "io": LutIOError,
}


def get_exception_class(error_type: str) -> type:
    """Get exception class by name.

    Args:
        error_type: Error type name (lowercase)

    Returns:
        Exception class

    Raises:
        KeyError: If error type not found
    """
    return EXCEPTION_MAP[error_type.lower()]
