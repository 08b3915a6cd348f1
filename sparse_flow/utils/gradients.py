"""Fixed-kernel image gradients on 8-bit rasters."""
import numpy as np
from scipy.ndimage import correlate


# 3x3 Scharr kernels, row-major
HORIZONTAL_SCHARR = np.array([
    [ -3, 0,  3],
    [-10, 0, 10],
    [ -3, 0,  3],
], dtype=np.int32)

VERTICAL_SCHARR = np.array([
    [-3, -10, -3],
    [ 0,   0,  0],
    [ 3,  10,  3],
], dtype=np.int32)


def compute_gradients(img, kernel_x=HORIZONTAL_SCHARR, kernel_y=VERTICAL_SCHARR):
    """Horizontal and vertical gradients of an intensity raster.

    Each interior pixel gets the weighted sum of its 3x3 neighbourhood
    against the kernel (correlation, not convolution). The outermost
    row and column are left at zero; nothing is padded or wrapped.

    Args:
        img: (H, W) uint8 raster.
        kernel_x: 3x3 integer kernel for the x derivative.
        kernel_y: 3x3 integer kernel for the y derivative.

    Returns:
        gx: (H, W) int16 raster.
        gy: (H, W) int16 raster.
    """
    img = np.asarray(img)
    H, W = img.shape
    gx = np.zeros((H, W), dtype=np.int16)
    gy = np.zeros((H, W), dtype=np.int16)
    if H < 3 or W < 3:
        return gx, gy

    src = img.astype(np.int32)
    kx = np.asarray(kernel_x, dtype=np.int32).reshape(3, 3)
    ky = np.asarray(kernel_y, dtype=np.int32).reshape(3, 3)

    # Border values from correlate are discarded, so the mode is irrelevant
    gx[1:-1, 1:-1] = correlate(src, kx, mode='constant')[1:-1, 1:-1].astype(np.int16)
    gy[1:-1, 1:-1] = correlate(src, ky, mode='constant')[1:-1, 1:-1].astype(np.int16)
    return gx, gy
