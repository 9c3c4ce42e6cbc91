"""Shared test configuration and fixtures for the PNG2PDF test suite."""

import sys
from pathlib import Path

import fitz
import pytest

# Add backend to Python path so imports work
backend_dir = str(Path(__file__).parent.parent / "backend")
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)


def _png(width: int, height: int, alpha: bool = False) -> bytes:
    pix = fitz.Pixmap(fitz.csRGB, fitz.IRect(0, 0, width, height), alpha)
    pix.clear_with(200)
    return pix.tobytes("png")


@pytest.fixture(scope="session")
def make_png():
    """Factory returning PNG bytes of the requested pixel size."""
    return _png


@pytest.fixture(scope="session")
def wide_png():
    return _png(200, 100)


@pytest.fixture(scope="session")
def tall_png():
    return _png(100, 200)


@pytest.fixture(scope="session")
def square_png():
    return _png(64, 64, alpha=True)
