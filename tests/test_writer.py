"""Tests for cube serialization."""
import numpy as np
import pytest

from lut3d import build_identity, load_from_path, load_from_text, save_cube, write_cube
from lut3d.exceptions import LutIOError


class TestWriteCube:
    """Tests for write_cube."""

    @pytest.mark.parametrize("size", [2, 3, 9])
    def test_round_trip(self, size):
        """Test writing and re-parsing reproduces the grid."""
        lut = build_identity(size)
        parsed = load_from_text(write_cube(lut), "cube")

        assert parsed.size == size
        assert parsed.scale == (1.0, 1.0, 1.0)
        np.testing.assert_allclose(parsed.table, lut.table, atol=1e-7)

    def test_round_trip_graded(self, graded_lines):
        """Test a non-symmetric grid survives the round trip."""
        text = "LUT_3D_SIZE 4\n" + "\n".join(graded_lines(4, red_fastest=True)) + "\n"
        lut = load_from_text(text, "cube")

        np.testing.assert_allclose(load_from_text(write_cube(lut), "cube").table, lut.table, atol=1e-7)

    def test_red_fastest_output(self):
        """Test samples are written with red varying fastest."""
        lines = write_cube(build_identity(3)).splitlines()
        samples = lines[lines.index("LUT_3D_SIZE 3") + 2:]

        assert len(samples) == 27
        assert samples[1] == "0.5000000000 0.0000000000 0.0000000000"
        assert samples[3] == "0.0000000000 0.5000000000 0.0000000000"
        assert samples[9] == "0.0000000000 0.0000000000 0.5000000000"

    def test_domain_written_for_non_unit_scale(self, identity_cube_text):
        """Test a non-unit scale round-trips through DOMAIN_MAX."""
        lut = load_from_text("DOMAIN_MAX 2.0 4.0 1.0\n" + identity_cube_text, "cube")
        text = write_cube(lut)

        assert "DOMAIN_MAX 2.0 4.0 1.0" in text
        assert load_from_text(text, "cube").scale == lut.scale

    def test_zero_scale_round_trip(self, identity_cube_text):
        """Test a zero scale from an inverted domain survives the round trip."""
        lut = load_from_text("DOMAIN_MIN 1 0 0\nDOMAIN_MAX 0 2 1\n" + identity_cube_text, "cube")
        text = write_cube(lut)

        assert lut.scale == (0.0, 0.5, 1.0)
        assert "DOMAIN_MIN 1.0 0.0 0.0" in text
        assert "DOMAIN_MAX 0.0 2.0 1.0" in text
        assert load_from_text(text, "cube").scale == lut.scale

    def test_no_domain_for_unit_scale(self):
        assert "DOMAIN" not in write_cube(build_identity(2))

    def test_title(self):
        """Test an explicit title is written and re-read."""
        text = write_cube(build_identity(2), title="Print Emulation")

        assert text.splitlines()[0] == 'TITLE "Print Emulation"'
        assert load_from_text(text, "cube").title == "Print Emulation"

    def test_title_from_source(self, identity_cube_text):
        lut = load_from_text('TITLE "Day For Night"\n' + identity_cube_text, "cube")
        assert 'TITLE "Day For Night"' in write_cube(lut)

    def test_trailing_newline(self):
        assert write_cube(build_identity(2)).endswith("1.0000000000\n")


class TestSaveCube:
    """Tests for save_cube."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "identity.cube"
        save_cube(build_identity(5), path)

        np.testing.assert_allclose(load_from_path(path).table, build_identity(5).table, atol=1e-7)

    def test_unwritable_path(self, tmp_path):
        """Test write failures raise LutIOError."""
        path = tmp_path / "missing-dir" / "identity.cube"
        with pytest.raises(LutIOError) as exc_info:
            save_cube(build_identity(2), path)

        assert exc_info.value.details["operation"] == "write"
