"""3x3 box filters for signed integer rasters."""
import numpy as np
from scipy.ndimage import correlate1d

from sparse_flow.utils.image_processing import trunc_divide

_ONES3 = np.array([1, 1, 1], dtype=np.int32)

SMOOTHING_METHODS = ('running', 'mean')


def _running_pass(image):
    """Sliding running sum along axis 1, written back while it slides.

    The first output averages columns 0-2. The second adds column 2 a
    second time, so interior outputs divide a 4-term sum by 4. Removing
    column x-2 subtracts its already filtered value. The last output drops
    back to 3 terms. Averages truncate toward zero.
    """
    W = image.shape[1]
    if W < 2:
        return

    total = image[:, 0].astype(np.int32) + image[:, 1]
    count = 2
    if W > 2:
        total += image[:, 2]
        count += 1
    image[:, 0] = trunc_divide(total, count)

    for x in range(1, W):
        if x > 1:
            total -= image[:, x - 2]
            count -= 1
        if x + 1 < W:
            total += image[:, x + 1]
            count += 1
        image[:, x] = trunc_divide(total, count)


def _window_counts(n):
    """Number of samples inside a 3-wide window clipped to a length-n axis."""
    return correlate1d(np.ones(n, dtype=np.int32), _ONES3, mode='constant', cval=0)


def _mean_pass(image):
    """Centred 3-tap mean along axis 1 over the values before the pass."""
    sums = correlate1d(image.astype(np.int32), _ONES3, axis=1,
                       mode='constant', cval=0)
    image[...] = trunc_divide(sums, _window_counts(image.shape[1]))


def box_filter_3x3(image, method='running'):
    """Smooth a raster in place, horizontal pass first, then vertical.

    Args:
        image: (H, W) signed integer ndarray, modified in place.
        method: 'running' for the sequential running-sum filter used by the
            corner detector (see ``_running_pass``); 'mean' for a centred
            3-tap mean whose first and last samples divide by 2.

    Returns:
        The same array, for chaining.
    """
    if not isinstance(image, np.ndarray) or image.ndim != 2:
        raise ValueError("box_filter_3x3 needs a 2-D ndarray to filter in place")
    if method == 'running':
        one_pass = _running_pass
    elif method == 'mean':
        one_pass = _mean_pass
    else:
        raise ValueError(f"Unknown smoothing method: {method}")

    if image.size == 0:
        return image
    one_pass(image)
    # The transpose is a view, so the vertical pass also writes in place
    one_pass(image.T)
    return image
