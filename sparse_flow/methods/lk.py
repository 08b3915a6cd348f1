"""
Pyramidal Lucas-Kanade sparse point tracking.

B.D. Lucas and T. Kanade. "An iterative image registration technique with an
application to stereo vision." IJCAI 1981.

J.-Y. Bouguet. "Pyramidal implementation of the Lucas Kanade feature tracker."
Intel Corporation, 2000.
"""
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from sparse_flow.methods.base import BaseSparseMethod
from sparse_flow.utils.gradients import compute_gradients
from sparse_flow.utils.pyramid import build_pyramid
from sparse_flow.utils.warping import bilinear_sample

# Matches the gradient scaling used by the corner detector
GRADIENT_NORMALIZATION = 32.0


def _as_seed_array(points):
    """Validate seeds as an (N, 2) float array.

    Detector output of shape (N, 3) is accepted and its quality column
    dropped. Any other shape is rejected rather than reinterpreted.
    """
    points = np.asarray(points, dtype=float)
    if points.size == 0:
        return np.empty((0, 2))
    if points.ndim != 2 or points.shape[1] not in (2, 3):
        raise ValueError(
            f"Seed points must have shape (N, 2) or (N, 3), got {points.shape}"
        )
    return points[:, :2].copy()


def _window_in_bounds(shape, x, y, radius):
    H, W = shape
    return radius <= x < W - radius and radius <= y < H - radius


def solve_2x2_lstsq(ata, atb, tol):
    """Solve (A^T A) d = A^T b through an SVD pseudo-inverse.

    Singular values not above ``tol`` are treated as zero, so a flat or
    edge-only window yields a zero (or edge-normal) correction instead of
    blowing up.

    Returns:
        d: Length-2 solution, or None if the SVD fails.
    """
    try:
        U, s, Vt = np.linalg.svd(ata)
    except np.linalg.LinAlgError:
        return None
    s_inv = np.zeros_like(s)
    nonzero = s > tol
    s_inv[nonzero] = 1.0 / s[nonzero]
    return Vt.T @ (s_inv * (U.T @ atb))


class _LevelContext:
    """Read-only rasters of one pyramid level, shared by all points."""

    def __init__(self, prev_img, curr_img, radius):
        self.prev_img = np.asarray(prev_img, dtype=float)
        self.curr_img = np.asarray(curr_img, dtype=float)
        grad_x, grad_y = compute_gradients(prev_img)
        self.grad_x = grad_x.astype(float) / GRADIENT_NORMALIZATION
        self.grad_y = grad_y.astype(float) / GRADIENT_NORMALIZATION
        self.radius = radius
        offsets = np.arange(-radius, radius + 1, dtype=float)
        # Row-major window: j (rows) outer, i (columns) inner
        self.off_y, self.off_x = np.meshgrid(offsets, offsets, indexing='ij')


def _refine_point(ctx, x, y, dx, dy, max_iterations, epsilon, solve_tol):
    """Refine one displacement at one level.

    Args:
        ctx: _LevelContext for the level.
        x, y: Seed position in level coordinates.
        dx, dy: Inherited displacement in level coordinates.

    Returns:
        (dx, dy, refined) where ``refined`` is False if the seed window was
        out of bounds and the level was skipped.
    """
    if not _window_in_bounds(ctx.prev_img.shape, x, y, ctx.radius):
        return dx, dy, False

    ref_x = x + ctx.off_x
    ref_y = y + ctx.off_y

    # The reference window does not move, so sample it once
    prev_patch = bilinear_sample(ctx.prev_img, ref_x, ref_y).ravel()
    ix = bilinear_sample(ctx.grad_x, ref_x, ref_y).ravel()
    iy = bilinear_sample(ctx.grad_y, ref_x, ref_y).ravel()
    A = np.column_stack([ix, iy])
    ata = A.T @ A

    for _ in range(max_iterations):
        curr_x = x + dx
        curr_y = y + dy
        if not _window_in_bounds(ctx.curr_img.shape, curr_x, curr_y, ctx.radius):
            break

        curr_patch = bilinear_sample(ctx.curr_img, curr_x + ctx.off_x,
                                     curr_y + ctx.off_y).ravel()
        b = prev_patch - curr_patch

        d = solve_2x2_lstsq(ata, A.T @ b, solve_tol)
        if d is None:
            break

        ddx, ddy = float(d[0]), float(d[1])
        dx += ddx
        dy += ddy

        if abs(ddx) < epsilon and abs(ddy) < epsilon:
            break

    return dx, dy, True


def track_points(prev_pyramid, curr_pyramid, points, window_size, max_iterations,
                 epsilon=1e-3, solve_tol=1e-6, n_workers=None, display=False):
    """Track points from one frame to the next, coarse to fine.

    Points whose window leaves the raster at some level keep the
    displacement inherited from the coarser level, so every seed yields an
    output position even when it could not be refined.

    Args:
        prev_pyramid: List of rasters of the previous frame, finest first.
        curr_pyramid: List of rasters of the current frame, same length.
        points: (N, 2) array-like of (x, y) seed positions at full resolution.
        window_size: Odd side length of the integration window.
        max_iterations: Maximum Gauss-Newton steps per level.
        epsilon: Convergence threshold on each correction component.
        solve_tol: Singular values at or below this are treated as zero.
        n_workers: Threads used to refine points of one level in parallel.
            None or 1 runs sequentially.
        display: Print per-level progress.

    Returns:
        tracked: (N, 2) float array of positions in the current frame.
    """
    if len(prev_pyramid) != len(curr_pyramid):
        raise ValueError(
            f"Pyramid lengths differ: {len(prev_pyramid)} vs {len(curr_pyramid)}"
        )
    if window_size < 1 or window_size % 2 != 1:
        raise ValueError(f"Window size must be odd, got {window_size}")

    points = _as_seed_array(points)
    n_points = points.shape[0]
    radius = window_size // 2

    displacements = np.zeros((n_points, 2))
    if n_points == 0:
        return points.copy()

    for level in range(len(prev_pyramid) - 1, -1, -1):
        scale = 2.0 ** level
        ctx = _LevelContext(prev_pyramid[level], curr_pyramid[level], radius)
        scaled_points = points / scale
        scaled_disp = displacements / scale

        def refine(k):
            return _refine_point(ctx, scaled_points[k, 0], scaled_points[k, 1],
                                 scaled_disp[k, 0], scaled_disp[k, 1],
                                 max_iterations, epsilon, solve_tol)

        if n_workers is not None and n_workers > 1:
            with ThreadPoolExecutor(max_workers=n_workers) as executor:
                results = list(executor.map(refine, range(n_points)))
        else:
            results = [refine(k) for k in range(n_points)]

        n_refined = 0
        for k, (dx, dy, refined) in enumerate(results):
            if refined:
                displacements[k] = (dx * scale, dy * scale)
                n_refined += 1

        if display:
            print(f"Pyramid level: {level + 1}  (refined {n_refined}/{n_points} points)")

    return points + displacements


class PyramidalLKTracker(BaseSparseMethod):
    """Pyramidal Lucas-Kanade tracker configured through attributes."""

    def __init__(self):
        super().__init__()
        self.pyramid_levels = 4
        self.window_size = 21
        self.max_iterations = 30
        self.epsilon = 1e-3
        self.solve_tol = 1e-6
        self.n_workers = None

    def build_pyramids(self, prev_img, curr_img):
        """Build matching pyramids for a frame pair."""
        return (build_pyramid(prev_img, self.pyramid_levels),
                build_pyramid(curr_img, self.pyramid_levels))

    def track_pyramids(self, prev_pyramid, curr_pyramid, points):
        """Track ``points`` across prebuilt pyramids."""
        return track_points(prev_pyramid, curr_pyramid, points,
                            self.window_size, self.max_iterations,
                            epsilon=self.epsilon, solve_tol=self.solve_tol,
                            n_workers=self.n_workers, display=self.display)

    def track(self, prev_img, curr_img, points):
        """Track ``points`` from ``prev_img`` into ``curr_img``.

        Args:
            prev_img, curr_img: (H, W) uint8 rasters.
            points: (N, 2) seed positions (x, y), or (N, 3) detector output
                whose quality column is ignored.

        Returns:
            tracked: (N, 2) float array.
        """
        prev_pyramid, curr_pyramid = self.build_pyramids(prev_img, curr_img)
        return self.track_pyramids(prev_pyramid, curr_pyramid, points)
