import numpy as np

from ..errors import ChannelMismatchError
from ..models.diff_result import DiffResult
from ..models.image import Image
from .image_service import ImageService


class DiffService:
    """
    Pixel-level comparison of two decoded images.
    *   No I/O here. Works only with Image objects (uint8 numpy arrays).
    *   The score is a weighted L1-over-max ratio, not a perceptual metric.
    """

    def __init__(self):
        self.image_service = ImageService()

    def diff(self, src: Image, dest: Image) -> DiffResult:
        """
        Compare two images of equal dimensions.

        For every channel sample a (src) and b (dest):
            delta          = max(a, b) - min(a, b)
            diff sample    = 255 - delta   (identical regions render white)
            score          = 100 * sum(delta) / sum(max(a, b))

        Args:
            src: Image from the source tree.
            dest: Image from the destination tree, same width and height as *src*.

        Returns:
            DiffResult: score in [0, 100] and the inverted difference image,
            which takes dest's path and kind.

        Raises:
            ChannelMismatchError: the images have different channel counts.
        """
        if src.channels != dest.channels:
            raise ChannelMismatchError(
                f"Channel count differs ({src.channels} vs {dest.channels}): {src.path} vs {dest.path}",
                path=src.path,
            )

        high = np.maximum(src.pixels, dest.pixels)
        delta = high - np.minimum(src.pixels, dest.pixels)  # uint8, never wraps

        diff_pixels = 255 - delta
        score = self.score(delta, high)

        return DiffResult(
            score=score,
            image=self.image_service.create_image(diff_pixels, dest.path, dest.kind),
        )

    @staticmethod
    def score(delta: np.ndarray, high: np.ndarray) -> float:
        """
        Percentage of accumulated difference over accumulated maxima.
        An all-black pair has nothing to compare against and scores 0.0.
        """
        max_value = int(high.sum(dtype=np.uint64))
        if max_value == 0:
            return 0.0
        current_value = int(delta.sum(dtype=np.uint64))
        return (current_value * 100.0) / max_value
