"""Tests for box-averaged image pyramids."""
import numpy as np
import pytest
from sparse_flow.utils.pyramid import build_pyramid


class TestBuildPyramid:
    """Test pyramid construction."""

    def test_pyramid_levels(self):
        img = np.random.randint(0, 256, size=(128, 128)).astype(np.uint8)
        pyr = build_pyramid(img, 4)
        assert len(pyr) == 4

    def test_halving_dimensions(self):
        """Each level has floor(previous / 2) rows and columns."""
        img = np.random.randint(0, 256, size=(101, 77)).astype(np.uint8)
        pyr = build_pyramid(img, 5)
        for i in range(1, len(pyr)):
            assert pyr[i].shape == (pyr[i - 1].shape[0] // 2, pyr[i - 1].shape[1] // 2)
            assert pyr[i].dtype == np.uint8

    def test_downsample_is_truncated_block_mean(self):
        img = np.random.randint(0, 256, size=(31, 40)).astype(np.uint8)
        pyr = build_pyramid(img, 3)
        for i in range(1, len(pyr)):
            src = pyr[i - 1].astype(int)
            dst = pyr[i]
            for y in range(dst.shape[0]):
                for x in range(dst.shape[1]):
                    total = (src[2 * y, 2 * x] + src[2 * y, 2 * x + 1]
                             + src[2 * y + 1, 2 * x] + src[2 * y + 1, 2 * x + 1])
                    assert dst[y, x] == total // 4

    def test_finest_matches_input(self):
        """Level 0 should be a copy of the input."""
        img = np.random.randint(0, 256, size=(64, 64)).astype(np.uint8)
        pyr = build_pyramid(img, 3)
        np.testing.assert_array_equal(pyr[0], img)
        assert pyr[0] is not img

    def test_single_level(self):
        img = np.random.randint(0, 256, size=(32, 32)).astype(np.uint8)
        pyr = build_pyramid(img, 1)
        assert len(pyr) == 1

    def test_early_stop(self):
        """Stops once a level is less than 2 pixels along an axis."""
        img = np.zeros((3, 5), dtype=np.uint8)
        pyr = build_pyramid(img, 5)
        assert [p.shape for p in pyr] == [(3, 5), (1, 2)]

    def test_length_bounded_by_request(self):
        img = np.zeros((256, 256), dtype=np.uint8)
        for levels in range(1, 12):
            pyr = build_pyramid(img, levels)
            assert len(pyr) <= levels

    def test_zero_levels_raises(self):
        with pytest.raises(ValueError):
            build_pyramid(np.zeros((8, 8), dtype=np.uint8), 0)
