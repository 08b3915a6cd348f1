"""Image pyramid construction for coarse-to-fine tracking."""
import numpy as np


def _downsample_2x2(img):
    """Truncated mean of non-overlapping 2x2 blocks; odd edges are dropped."""
    H, W = img.shape
    h, w = H // 2, W // 2
    src = img[:2 * h, :2 * w].astype(np.uint16)
    total = src[0::2, 0::2] + src[0::2, 1::2] + src[1::2, 0::2] + src[1::2, 1::2]
    return (total // 4).astype(img.dtype)


def build_pyramid(img, levels):
    """Build a box-averaged image pyramid.

    No smoothing or interpolation: every pixel of a level is the mean of the
    four pixels it covers in the level below. Construction stops early once
    a level is narrower or shorter than 2 pixels, so the result can hold
    fewer than ``levels`` images.

    Args:
        img: Input raster (H, W), uint8.
        levels: Requested number of levels, >= 1.

    Returns:
        pyramid: List of rasters, index 0 = finest (a copy of the input),
            last = coarsest.
    """
    if levels < 1:
        raise ValueError(f"Pyramid needs at least one level, got {levels}")

    img = np.asarray(img)
    pyramid = [img.copy()]

    for _ in range(1, levels):
        current = pyramid[-1]
        H, W = current.shape
        if W < 2 or H < 2:
            break
        pyramid.append(_downsample_2x2(current))

    return pyramid
