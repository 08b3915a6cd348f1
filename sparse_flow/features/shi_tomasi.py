"""
Shi-Tomasi "good features to track" corner detection.

J. Shi and C. Tomasi. "Good features to track." CVPR 1994.

Scores every pixel by the smaller eigenvalue of the box-smoothed structure
tensor, keeps local maxima above a fraction of the strongest response and
thins them greedily so that accepted corners keep a minimum distance.
"""
import numpy as np

from sparse_flow.methods.base import BaseSparseMethod
from sparse_flow.utils.box_filter import box_filter_3x3, SMOOTHING_METHODS
from sparse_flow.utils.gradients import compute_gradients
from sparse_flow.utils.image_processing import trunc_divide

# Gradients are scaled down before squaring so products fit in int16
GRADIENT_NORMALIZATION = 32

SCORE_METHODS = ('min_eigen', 'literal')


def structure_tensor(img, smoothing='running'):
    """Box-smoothed structure tensor components of an intensity raster.

    Args:
        img: (H, W) uint8 raster.
        smoothing: Box filter method, see ``box_filter_3x3``.

    Returns:
        ixx, iyy, ixy: (H, W) int16 rasters.
    """
    gx, gy = compute_gradients(img)
    ix = trunc_divide(gx, GRADIENT_NORMALIZATION)
    iy = trunc_divide(gy, GRADIENT_NORMALIZATION)

    ixx = (ix * ix).astype(np.int16)
    iyy = (iy * iy).astype(np.int16)
    ixy = (ix * iy).astype(np.int16)

    box_filter_3x3(ixx, smoothing)
    box_filter_3x3(iyy, smoothing)
    box_filter_3x3(ixy, smoothing)
    return ixx, iyy, ixy


def corner_scores(ixx, iyy, ixy, score='min_eigen'):
    """Per-pixel corner response from structure tensor components.

    Args:
        ixx, iyy, ixy: Structure tensor rasters.
        score: 'min_eigen' for (trace - sqrt(D)) / 2, the smaller eigenvalue;
            'literal' for sqrt(trace - D) / 2, which is NaN wherever
            trace < D. D = (ixx - iyy)^2 + 4 ixy^2.

    Returns:
        (H, W) float64 score map.
    """
    a = ixx.astype(np.int64)
    b = iyy.astype(np.int64)
    c = ixy.astype(np.int64)

    trace = a + b
    discriminant = (a - b) ** 2 + 4 * c ** 2

    if score == 'min_eigen':
        return (trace - np.sqrt(discriminant.astype(float))) / 2.0
    elif score == 'literal':
        with np.errstate(invalid='ignore'):
            return np.sqrt((trace - discriminant).astype(float)) / 2.0
    else:
        raise ValueError(f"Unknown score method: {score}")


def non_maximum_suppression(scores):
    """Mask of interior pixels that no 8-neighbour strictly exceeds.

    Ties survive. A NaN pixel is never beaten (comparisons with NaN are
    false) and NaN neighbours never beat anything. The outermost row and
    column are always suppressed.

    Args:
        scores: (H, W) float score map.

    Returns:
        (H, W) boolean mask.
    """
    H, W = scores.shape
    mask = np.zeros((H, W), dtype=bool)
    if H < 3 or W < 3:
        return mask

    center = scores[1:-1, 1:-1]
    beaten = np.zeros(center.shape, dtype=bool)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            neighbor = scores[1 + dy:H - 1 + dy, 1 + dx:W - 1 + dx]
            beaten |= neighbor > center
    mask[1:-1, 1:-1] = ~beaten
    return mask


def filter_by_quality(scores, quality_level):
    """Boolean mask of scores at least ``quality_level`` times the best.

    The best score never drops below 0 and ignores NaN; NaN scores fail
    the threshold.
    """
    scores = np.asarray(scores, dtype=float)
    finite = scores[~np.isnan(scores)]
    max_quality = max(0.0, float(finite.max())) if finite.size else 0.0
    threshold = quality_level * max_quality
    with np.errstate(invalid='ignore'):
        return scores >= threshold


def filter_by_distance(features, min_distance, width, height):
    """Greedily thin quality-sorted features with an occupancy grid.

    The image is split into square cells of side ``min_distance``. Each
    candidate is checked against the point recorded in the 3x3 block of
    cells around its own; it is rejected if any lies closer than
    ``min_distance``. Accepted points overwrite their cell's entry, so
    spacing is approximate when two accepted points share a cell.

    Args:
        features: (N, 3) array of (x, y, quality), best first.
        min_distance: Cell size and minimum spacing, > 0.
        width, height: Image dimensions.

    Returns:
        (M, 3) array, a subsequence of ``features`` in the same order.
    """
    if min_distance <= 0:
        raise ValueError(f"min_distance must be positive, got {min_distance}")

    cell_size = int(min_distance)
    grid_w = -(-width // cell_size)
    grid_h = -(-height // cell_size)
    grid = {}
    min_dist_sq = cell_size * cell_size
    keep = []

    for i, (x, y, _) in enumerate(features):
        x, y = int(x), int(y)
        cell_x, cell_y = x // cell_size, y // cell_size
        too_close = False

        for cx in range(max(cell_x - 1, 0), min(cell_x + 2, grid_w)):
            for cy in range(max(cell_y - 1, 0), min(cell_y + 2, grid_h)):
                occupant = grid.get((cx, cy))
                if occupant is None:
                    continue
                px, py = occupant
                if (x - px) ** 2 + (y - py) ** 2 < min_dist_sq:
                    too_close = True
                    break
            if too_close:
                break

        if not too_close:
            grid[(cell_x, cell_y)] = (x, y)
            keep.append(i)

    return features[keep]


def detect_features(img, quality_level, min_distance, score='min_eigen',
                    smoothing='running'):
    """Find well-separated corners with the Shi-Tomasi criterion.

    Args:
        img: (H, W) uint8 intensity raster.
        quality_level: Fraction of the strongest response a corner must
            reach, in (0, 1]. 0.1 is a reasonable start.
        min_distance: Minimum spacing between returned corners, > 0.
        score: Corner response, see ``corner_scores``.
        smoothing: Structure tensor smoothing, see ``box_filter_3x3``.

    Returns:
        features: (N, 3) float array of (x, y, quality) sorted by
            non-increasing quality.
    """
    if min_distance <= 0:
        raise ValueError(f"min_distance must be positive, got {min_distance}")
    if score not in SCORE_METHODS:
        raise ValueError(f"Unknown score method: {score}")
    if smoothing not in SMOOTHING_METHODS:
        raise ValueError(f"Unknown smoothing method: {smoothing}")

    img = np.asarray(img)
    H, W = img.shape
    if H < 3 or W < 3:
        return np.empty((0, 3))

    ixx, iyy, ixy = structure_tensor(img, smoothing)
    scores = corner_scores(ixx, iyy, ixy, score)

    candidates = non_maximum_suppression(scores)
    ys, xs = np.nonzero(candidates)
    quality = scores[ys, xs]

    passed = filter_by_quality(quality, quality_level)
    xs, ys, quality = xs[passed], ys[passed], quality[passed]

    # Stable sort keeps row-major order among equal scores
    order = np.argsort(-quality, kind='stable')
    features = np.column_stack([xs[order], ys[order], quality[order]]).astype(float)

    return filter_by_distance(features, min_distance, W, H)


class ShiTomasiDetector(BaseSparseMethod):
    """Configurable wrapper around ``detect_features``."""

    def __init__(self):
        super().__init__()
        self.quality_level = 0.1
        self.min_distance = 5
        self.score = 'min_eigen'
        self.smoothing = 'running'
        self.max_corners = None

    def detect(self, img):
        """Detect corners in ``img``.

        Returns:
            features: (N, 3) array of (x, y, quality), best first,
                truncated to ``max_corners`` when set.
        """
        features = detect_features(img, self.quality_level, self.min_distance,
                                   self.score, self.smoothing)
        if self.max_corners is not None:
            features = features[:self.max_corners]
        if self.display:
            print(f"Detected {len(features)} features")
        return features
