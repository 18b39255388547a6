from pathlib import Path
from typing import Union
import numpy as np
import cv2
from PIL import Image as PILImage

from ..errors import DecodeError, OutputWriteError, UnsupportedImageKindError
from ..models.image import Image, ImageKind

EXTENSION_KINDS = {
    ".bmp": ImageKind.BMP,
    ".png": ImageKind.PNG,
}


class ImageRepository:
    """
    Handles file I/O for Image entities.
    Decoding goes through OpenCV, encoding through Pillow.
    """

    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None, kind: ImageKind = None) -> Image:
        if path is None:
            return Image(pixels, kind=kind)
        return Image(pixels=pixels, path=Path(path), kind=kind)

    @staticmethod
    def retrieve_image_dimensions(img: Image):
        return img.pixels.shape[:2]

    @staticmethod
    def kind_of(path: Union[str, Path]) -> ImageKind:
        path = Path(path)
        kind = EXTENSION_KINDS.get(path.suffix.lower())
        if kind is None:
            raise UnsupportedImageKindError(f"Unsupported image type: {path}", path=path)
        return kind

    @classmethod
    def load(cls, path: Union[str, Path]) -> Image:
        path = Path(path)
        kind = cls.kind_of(path)

        # imdecode instead of imread: imread returns None without saying why
        try:
            raw = np.fromfile(path, dtype=np.uint8)
        except OSError as err:
            raise DecodeError(f"Cannot read {path}: {err}", path=path) from err
        arr = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED) if raw.size else None
        if arr is None:
            raise DecodeError(f"Image not decodable: {path}", path=path)

        return Image(pixels=cls._to_rgb(arr), path=path, kind=kind)

    @staticmethod
    def _to_rgb(arr: np.ndarray) -> np.ndarray:
        """OpenCV channel order (BGR/BGRA, or gray) → RGB/RGBA uint8."""
        if arr.dtype == np.uint16:
            arr = (arr >> 8).astype(np.uint8)
        elif arr.dtype != np.uint8:
            arr = arr.astype(np.uint8)

        if arr.ndim == 3 and arr.shape[2] == 1:
            arr = arr[:, :, 0]
        if arr.ndim == 2:
            return cv2.cvtColor(arr, cv2.COLOR_GRAY2RGB)
        if arr.shape[2] == 4:
            return cv2.cvtColor(arr, cv2.COLOR_BGRA2RGBA)
        return cv2.cvtColor(arr, cv2.COLOR_BGR2RGB)

    @staticmethod
    def save(image: Image) -> None:
        try:
            fmt = image.kind.name if image.kind is not None else None
            PILImage.fromarray(image.pixels).save(image.path, format=fmt)
        except (OSError, ValueError) as err:
            raise OutputWriteError(f"Cannot write {image.path}: {err}", path=image.path) from err
