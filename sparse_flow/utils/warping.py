"""Sub-pixel sampling of rasters."""
import numpy as np
from scipy.ndimage import map_coordinates


def bilinear_sample(img, xs, ys):
    """Bilinearly interpolate a raster at arbitrary (x, y) positions.

    Pixels outside the raster read as 0 and still take part in the
    weighting, so a sample half a pixel past the last column is half
    the edge value.

    Args:
        img: (H, W) raster of any numeric dtype.
        xs: Column coordinates (any shape).
        ys: Row coordinates, same shape as ``xs``.

    Returns:
        Float64 array shaped like ``xs``.
    """
    img = np.asarray(img, dtype=float)
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    return map_coordinates(img, [ys, xs], order=1, mode='grid-constant', cval=0.0)
