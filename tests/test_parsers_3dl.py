"""Tests for the 3dl parser."""
import pytest

from lut3d import load_from_text
from lut3d.exceptions import InvalidDataError
from lut3d.parsers.threedl import GRID_SIZE, SAMPLE_SCALE

MESH_HEADER = " ".join(str(v * 64) for v in range(GRID_SIZE))


def threedl_text(lines):
    return "\n".join([MESH_HEADER] + list(lines)) + "\n"


def identity_lines():
    step = int(SAMPLE_SCALE) // (GRID_SIZE - 1)
    return [
        f"{i * step} {j * step} {k * step}"
        for i in range(GRID_SIZE)
        for j in range(GRID_SIZE)
        for k in range(GRID_SIZE)
    ]


class TestThreeDLParser:
    """Tests for the Autodesk integer grid."""

    def test_identity(self):
        """Test a 17-level integer identity normalizes to [0, 1]."""
        lut = load_from_text(threedl_text(identity_lines()), "3dl")

        assert lut.size == 17
        assert lut.sample(0, 0, 0) == (0.0, 0.0, 0.0)
        assert lut.sample(16, 0, 0) == (1.0, 0.0, 0.0)
        assert lut.sample(0, 0, 16) == (0.0, 0.0, 1.0)
        assert lut.sample(8, 4, 2) == (0.5, 0.25, 0.125)

    def test_header_after_comments(self):
        """Test comments before the mesh header are skipped."""
        text = "# Autodesk\n\n" + threedl_text(identity_lines())
        assert load_from_text(text, "3dl").sample(16, 16, 16) == (1.0, 1.0, 1.0)

    def test_sixteen_lines(self):
        """Test a file with only 16 data lines fails."""
        with pytest.raises(InvalidDataError, match="Unexpected end of input"):
            load_from_text(threedl_text(identity_lines()[:16]), "3dl")

    def test_header_only(self):
        with pytest.raises(InvalidDataError):
            load_from_text(MESH_HEADER + "\n", "3dl")

    def test_float_samples_rejected(self):
        """Test sample values must be integers."""
        lines = identity_lines()
        lines[3] = "0 0.5 0"
        with pytest.raises(InvalidDataError) as exc_info:
            load_from_text(threedl_text(lines), "3dl")

        assert exc_info.value.details["line_number"] == 5
