"""Tests for fixed-kernel gradients and the 3x3 box filter."""
import numpy as np
import pytest
from sparse_flow.utils.gradients import (
    compute_gradients, HORIZONTAL_SCHARR, VERTICAL_SCHARR
)
from sparse_flow.utils.box_filter import box_filter_3x3


class TestComputeGradients:
    """Test Scharr gradient computation."""

    def test_output_dtype_and_shape(self):
        img = np.random.randint(0, 256, size=(20, 30)).astype(np.uint8)
        gx, gy = compute_gradients(img)
        assert gx.shape == (20, 30)
        assert gy.shape == (20, 30)
        assert gx.dtype == np.int16
        assert gy.dtype == np.int16

    def test_border_is_zero(self):
        """The outermost row and column are never evaluated."""
        img = np.random.randint(0, 256, size=(16, 16)).astype(np.uint8)
        gx, gy = compute_gradients(img)
        for g in (gx, gy):
            assert not g[0, :].any()
            assert not g[-1, :].any()
            assert not g[:, 0].any()
            assert not g[:, -1].any()

    def test_horizontal_ramp(self):
        """A ramp of slope 2 along x gives 32 * 2 in the interior."""
        img = np.tile(np.arange(0, 40, 2, dtype=np.uint8), (10, 1))
        gx, gy = compute_gradients(img)
        np.testing.assert_array_equal(gx[1:-1, 1:-1], 64)
        np.testing.assert_array_equal(gy, 0)

    def test_vertical_ramp(self):
        img = np.tile(np.arange(0, 20, dtype=np.uint8)[:, np.newaxis], (1, 12))
        gx, gy = compute_gradients(img)
        np.testing.assert_array_equal(gy[1:-1, 1:-1], 32)
        np.testing.assert_array_equal(gx, 0)

    def test_kernel_is_correlated_not_convolved(self):
        """A single bright pixel reproduces the kernel mirrored around it."""
        img = np.zeros((5, 5), dtype=np.uint8)
        img[2, 2] = 1
        gx, _ = compute_gradients(img)
        np.testing.assert_array_equal(gx[1:4, 1:4], HORIZONTAL_SCHARR[::-1, ::-1])

    def test_custom_kernels(self):
        img = np.random.randint(0, 256, size=(8, 8)).astype(np.uint8)
        gx, gy = compute_gradients(img, VERTICAL_SCHARR, HORIZONTAL_SCHARR)
        gx_ref, gy_ref = compute_gradients(img)
        np.testing.assert_array_equal(gx, gy_ref)
        np.testing.assert_array_equal(gy, gx_ref)

    def test_tiny_image(self):
        gx, gy = compute_gradients(np.full((2, 2), 100, dtype=np.uint8))
        assert not gx.any() and not gy.any()


class TestBoxFilter:
    """Test the in-place 3x3 running-sum filter and the centred mean."""

    def test_constant_image_unchanged(self):
        img = np.full((12, 17), -123, dtype=np.int16)
        box_filter_3x3(img)
        np.testing.assert_array_equal(img, -123)

    def test_in_place(self):
        img = np.arange(20, dtype=np.int16).reshape(4, 5)
        out = box_filter_3x3(img)
        assert out is img

    def test_running_sum_uses_filtered_values(self):
        """The sliding sum subtracts outputs already written back."""
        img = np.tile(np.array([0, 0, 30, 0, 0], dtype=np.int16), (3, 1))
        box_filter_3x3(img)
        np.testing.assert_array_equal(img, np.tile([10, 15, 12, 8, 7], (3, 1)))

    def test_running_second_sample_divides_by_four(self):
        img = np.array([[3, 6, 9, 12]], dtype=np.int16)
        box_filter_3x3(img)
        # 18/3, (18+9)/4, (27-6+12)/4, (33-6)/3
        np.testing.assert_array_equal(img, [[6, 6, 8, 9]])

    def test_truncates_toward_zero(self):
        img = np.array([[-3, -4]], dtype=np.int16)
        box_filter_3x3(img)
        np.testing.assert_array_equal(img, [[-3, -3]])

    def test_vertical_pass(self):
        img = np.array([[0], [3], [6]], dtype=np.int16)
        box_filter_3x3(img)
        np.testing.assert_array_equal(img[:, 0], [3, 3, 4])

    def test_single_pixel_unchanged(self):
        img = np.array([[-41]], dtype=np.int16)
        box_filter_3x3(img)
        np.testing.assert_array_equal(img, [[-41]])

    def test_mean_edge_divisor_is_sample_count(self):
        """First and last samples average two values, not three."""
        img = np.array([[3, 6, 9, 12]], dtype=np.int16)
        box_filter_3x3(img, method='mean')
        np.testing.assert_array_equal(img, [[4, 6, 9, 10]])

    def test_mean_separable_matches_full_window(self):
        """Interior pixels equal the nested truncated row and column means."""
        img = np.random.randint(-500, 500, size=(9, 9)).astype(np.int16)
        src = img.astype(int)
        box_filter_3x3(img, method='mean')
        rows = np.fix((src[:, :-2] + src[:, 1:-1] + src[:, 2:]) / 3.0).astype(int)
        both = np.fix((rows[:-2] + rows[1:-1] + rows[2:]) / 3.0).astype(int)
        np.testing.assert_array_equal(img[1:-1, 1:-1], both)

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError, match="smoothing"):
            box_filter_3x3(np.zeros((3, 3), dtype=np.int16), method='gaussian')

    def test_rejects_non_array(self):
        with pytest.raises(ValueError):
            box_filter_3x3([[1, 2], [3, 4]])
