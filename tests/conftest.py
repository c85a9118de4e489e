"""Shared pytest fixtures for lut3d tests."""
import logging
from pathlib import Path
from typing import Callable, List, Tuple

import pytest

import lut3d.utils.logging as lut3d_logging


# ============================================================================
# Sample grids
# ============================================================================

def graded(i: int, j: int, k: int, size: int) -> Tuple[float, float, float]:
    """A non-symmetric test grade: each output channel follows one input axis
    with a different gain, so any axis mix-up changes the table."""
    s = size - 1
    return (i / s, 0.5 * j / s, 0.25 * k / s)


def native_lines(
    size: int,
    red_fastest: bool,
    fn: Callable[[int, int, int, int], Tuple[float, float, float]] = graded,
    fmt: str = "{:.6f} {:.6f} {:.6f}",
) -> List[str]:
    """Sample lines for ``fn`` in a file's native order."""
    lines = []
    for outer in range(size):
        for mid in range(size):
            for inner in range(size):
                if red_fastest:
                    i, j, k = inner, mid, outer
                else:
                    i, j, k = outer, mid, inner
                lines.append(fmt.format(*fn(i, j, k, size)))
    return lines


IDENTITY_CUBE_2 = """LUT_3D_SIZE 2
0 0 0
1 0 0
0 1 0
1 1 0
0 0 1
1 0 1
0 1 1
1 1 1
"""


@pytest.fixture
def identity_cube_text() -> str:
    """A size-2 identity cube in red-fastest order."""
    return IDENTITY_CUBE_2


@pytest.fixture
def graded_lines() -> Callable[..., List[str]]:
    """Factory for native-order sample lines of the test grade."""
    return native_lines


@pytest.fixture
def graded_fn() -> Callable[[int, int, int, int], Tuple[float, float, float]]:
    return graded


@pytest.fixture
def write_lut(tmp_path) -> Callable[[str, str], Path]:
    """Write LUT text to a file under tmp_path and return its path."""
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


# ============================================================================
# Logging isolation
# ============================================================================

@pytest.fixture(autouse=True)
def reset_lut3d_logging(monkeypatch):
    """Undo handlers, levels and propagation changes made by a test."""
    monkeypatch.setattr(lut3d_logging, "_log_config", None)
    yield
    root = logging.getLogger(lut3d_logging.ROOT_LOGGER)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True
    for name in ("context", "parsers"):
        logging.getLogger(f"{lut3d_logging.ROOT_LOGGER}.{name}").setLevel(logging.NOTSET)
