"""Raster helpers shared by the detector and the tracker."""
import numpy as np


def trunc_divide(a, divisor):
    """Integer division rounding toward zero (C-style), elementwise.

    numpy's ``//`` floors, which differs from truncation for negative values.

    Args:
        a: Integer array.
        divisor: Positive integer scalar or array broadcastable to ``a``.

    Returns:
        Integer array with the same dtype as ``a``.
    """
    a = np.asarray(a)
    q = np.abs(a) // divisor
    return np.where(a < 0, -q, q).astype(a.dtype)


def to_gray_uint8(im):
    """Convert an image to an 8-bit single-channel intensity raster.

    uint8 grayscale input is returned unchanged. RGB(A) input is reduced to
    luma with the ITU-R 601 weights; float input is rounded half up and
    clipped to [0, 255].

    Args:
        im: (H, W) or (H, W, C) array.

    Returns:
        (H, W) uint8 array.
    """
    im = np.asarray(im)
    if im.ndim == 2 and im.dtype == np.uint8:
        return im
    if im.ndim == 3:
        if im.shape[2] < 3:
            im = im[:, :, 0]
        else:
            im = im.astype(float)
            im = 0.2989 * im[:, :, 0] + 0.5870 * im[:, :, 1] + 0.1140 * im[:, :, 2]
    elif im.ndim != 2:
        raise ValueError(f"Expected a 2-D or 3-D image, got shape {im.shape}")
    return np.clip(np.floor(np.asarray(im, dtype=float) + 0.5), 0, 255).astype(np.uint8)
