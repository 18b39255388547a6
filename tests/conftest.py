"""Shared fixtures: small real image files written with Pillow."""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest
from PIL import Image as PILImage


def solid(width, height, color):
    """(H, W, C) uint8 array filled with *color*."""
    return np.full((height, width, len(color)), color, dtype=np.uint8)


@pytest.fixture
def write_image():
    """Write a pixel array to *path* (format from the extension), creating parents."""
    def _write(path: Path, pixels: np.ndarray) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        PILImage.fromarray(pixels).save(path)
        return path
    return _write


@pytest.fixture
def trees(tmp_path):
    """Empty source, destination and diff roots."""
    src = tmp_path / "src"
    dest = tmp_path / "dest"
    diff = tmp_path / "diff"
    src.mkdir()
    dest.mkdir()
    return src, dest, diff
