import numpy as np
import pytest

from imgdiff.errors import ChannelMismatchError
from imgdiff.models.image import Image, ImageKind
from imgdiff.services.diff_service import DiffService

from conftest import solid


def image(pixels):
    return Image(pixels=pixels, kind=ImageKind.PNG)


class TestDiff:
    def test_identity(self):
        """Identical pixels score exactly 0.0 and render all white."""
        rng = np.random.default_rng(7)
        pixels = rng.integers(0, 256, size=(6, 5, 3), dtype=np.uint8)

        result = DiffService().diff(image(pixels), image(pixels.copy()))

        assert result.score == 0.0
        assert (result.image.pixels == 255).all()

    def test_hand_computed_pixel(self):
        """One pixel: deltas (10, 0, 250), maxima (20, 5, 250)."""
        a = np.array([[[10, 5, 0]]], dtype=np.uint8)
        b = np.array([[[20, 5, 250]]], dtype=np.uint8)

        result = DiffService().diff(image(a), image(b))

        assert result.score == pytest.approx(260 * 100.0 / 275)
        np.testing.assert_array_equal(result.image.pixels, [[[245, 255, 5]]])

    def test_delta_never_wraps(self):
        a = np.array([[[0, 255, 3]]], dtype=np.uint8)
        b = np.array([[[255, 0, 4]]], dtype=np.uint8)

        result = DiffService().diff(image(a), image(b))

        np.testing.assert_array_equal(result.image.pixels, [[[0, 0, 254]]])

    def test_swapping_inputs_keeps_score(self):
        rng = np.random.default_rng(1)
        a = rng.integers(0, 256, size=(8, 8, 4), dtype=np.uint8)
        b = rng.integers(0, 256, size=(8, 8, 4), dtype=np.uint8)
        service = DiffService()

        forward = service.diff(image(a), image(b))
        backward = service.diff(image(b), image(a))

        assert forward.score == backward.score
        np.testing.assert_array_equal(forward.image.pixels, backward.image.pixels)

    @pytest.mark.parametrize("seed", range(5))
    def test_score_within_bounds(self, seed):
        rng = np.random.default_rng(seed)
        a = rng.integers(0, 256, size=(16, 9, 3), dtype=np.uint8)
        b = rng.integers(0, 256, size=(16, 9, 3), dtype=np.uint8)

        score = DiffService().diff(image(a), image(b)).score

        assert 0.0 <= score <= 100.0

    def test_black_against_white_is_100(self):
        result = DiffService().diff(image(solid(3, 3, (0, 0, 0))), image(solid(3, 3, (255, 255, 255))))

        assert result.score == 100.0
        assert (result.image.pixels == 0).all()

    def test_all_black_pair_scores_zero(self):
        """Nothing to normalise against: guarded instead of dividing by zero."""
        black = solid(4, 4, (0, 0, 0, 0))

        result = DiffService().diff(image(black), image(black.copy()))

        assert result.score == 0.0

    def test_rectangle_score_is_area_ratio(self):
        """White canvas with a black rectangle of area A out of T scores 100 * A / T."""
        white = solid(10, 10, (255, 255, 255))
        marked = white.copy()
        marked[2:5, 3:7] = 0  # 12 pixels

        result = DiffService().diff(image(marked), image(white))

        assert result.score == pytest.approx(12.0)

    def test_channel_mismatch_refused(self):
        with pytest.raises(ChannelMismatchError):
            DiffService().diff(image(solid(2, 2, (1, 2, 3))), image(solid(2, 2, (1, 2, 3, 4))))

    def test_diff_image_takes_destination_identity(self, tmp_path):
        dest = Image(pixels=solid(2, 2, (9, 9, 9)), path=tmp_path / "d.bmp", kind=ImageKind.BMP)

        result = DiffService().diff(image(solid(2, 2, (1, 1, 1))), dest)

        assert result.image.path == dest.path
        assert result.image.kind is ImageKind.BMP
