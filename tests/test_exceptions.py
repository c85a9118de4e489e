"""Tests for the exception hierarchy."""
import pytest

from lut3d.exceptions import (
    EXCEPTION_MAP,
    InvalidArgumentError,
    InvalidDataError,
    Lut3DError,
    LutIOError,
    OutOfMemoryError,
    UnsupportedFeatureError,
    get_exception_class,
)


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    @pytest.mark.parametrize(
        "cls",
        [InvalidArgumentError, InvalidDataError, UnsupportedFeatureError, OutOfMemoryError, LutIOError],
    )
    def test_subclasses_base(self, cls):
        """Test every error inherits from Lut3DError."""
        assert issubclass(cls, Lut3DError)
        assert issubclass(cls, Exception)

    def test_categories_are_distinct(self):
        """Test argument and data errors are not confused."""
        assert not issubclass(InvalidArgumentError, InvalidDataError)
        assert not issubclass(InvalidDataError, InvalidArgumentError)


class TestExceptionDetails:
    """Tests for messages, details and chaining."""

    def test_str_without_details(self):
        assert str(Lut3DError("boom")) == "boom"

    def test_str_with_details(self):
        """Test details are appended to the message."""
        error = InvalidDataError("Invalid number 'x'", line_number=3, format_tag="cube")
        assert str(error) == "Invalid number 'x' [format=cube, line_number=3]"

    def test_line_is_stripped_and_truncated(self):
        """Test long offending lines are shortened."""
        error = InvalidDataError("bad", line="  " + "9" * 200 + "\n")
        assert error.details["line"] == "9" * 80

    def test_invalid_argument_details(self):
        error = InvalidArgumentError(
            "Too large or invalid 3D LUT size",
            argument="size",
            value=0,
            valid_values=None,
        )
        assert error.details == {"argument": "size", "value": 0}

    def test_unsupported_feature_details(self):
        error = UnsupportedFeatureError("no", feature="non_cubic_grid", format_tag="csp")
        assert error.details == {"feature": "non_cubic_grid", "format": "csp"}

    def test_out_of_memory_details(self):
        assert OutOfMemoryError("oom", requested_entries=8).details == {"requested_entries": 8}

    def test_cause_chained(self):
        """Test the cause becomes __cause__."""
        cause = ValueError("could not convert")
        error = InvalidDataError("bad", cause=cause)

        assert error.cause is cause
        assert error.__cause__ is cause

    def test_to_dict(self):
        """Test converting to a serializable dictionary."""
        error = LutIOError("Failed", path="/tmp/a.cube", operation="read", cause=OSError("nope"))

        assert error.to_dict() == {
            "error_type": "LutIOError",
            "message": "Failed",
            "details": {"path": "/tmp/a.cube", "operation": "read"},
            "cause": "nope",
        }


class TestExceptionLookup:
    """Tests for name lookup."""

    def test_get_exception_class(self):
        assert get_exception_class("invalid_data") is InvalidDataError
        assert get_exception_class("IO") is LutIOError

    def test_map_covers_every_error(self):
        assert set(EXCEPTION_MAP.values()) == {
            InvalidArgumentError,
            InvalidDataError,
            UnsupportedFeatureError,
            OutOfMemoryError,
            LutIOError,
        }

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            get_exception_class("timeout")
