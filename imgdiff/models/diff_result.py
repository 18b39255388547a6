from __future__ import annotations
from dataclasses import dataclass
from .image import Image


@dataclass
class DiffResult:
    """
    Visual diff of two images plus its scalar summary.
    score is a percentage: 0.0 for identical pixel data, never above 100.0.
    """
    score: float
    image: Image  # Inverted difference: identical regions are white.
