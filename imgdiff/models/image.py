from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import numpy as np


class ImageKind(Enum):
    """File formats the codec layer knows how to read and write."""
    BMP = "bmp"
    PNG = "png"


@dataclass
class Image:
    """
    Simple data object: RGB or RGBA pixels (+ source path for bookkeeping).
    No codec logic outside the image repository.
    """
    pixels: np.ndarray  # Shape (H, W, C), dtype uint8, C is 3 (RGB) or 4 (RGBA).
    path: Path | None = None  # Where the image was read from or will be written to.
    kind: ImageKind | None = None  # Resolved once at load time.

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]
