from pathlib import Path
from typing import Union
import logging
import numpy as np

from ..models.image import Image, ImageKind
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """I/O helpers.  No comparison logic here."""

    def __init__(self):
        self.image_repository = ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None, kind: ImageKind = None) -> Image:
        return self.image_repository.create_image(pixels, path, kind)

    def kind_of(self, path: Union[str, Path]) -> ImageKind:
        """Classify a file by its (case-insensitive) extension."""
        return self.image_repository.kind_of(path)

    def load(self, path: Union[str, Path]) -> Image:
        """Load a single image from disk into an Image object."""
        img = self.image_repository.load(path)
        logger.debug(f"Decoded {img.path}: {img.width}x{img.height}x{img.channels}")
        return img

    def save(self, image: Image) -> None:
        """
        Business-level method to save the image to its own path.
        The format follows the path's extension.
        """
        self.image_repository.save(image)

    def get_image_dimensions(self, img: Image):
        return self.image_repository.retrieve_image_dimensions(img)

    def same_dimensions(self, first: Image, second: Image) -> bool:
        return self.get_image_dimensions(first) == self.get_image_dimensions(second)
