"""Feature and track visualization utilities."""
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def _prepare_axes(image, ax):
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 6))
    ax.imshow(image, cmap='gray', vmin=0, vmax=255)
    ax.axis('off')
    return ax


def plot_features(image, points, ax=None, color='red', size=36):
    """Mark feature points with crosses.

    Args:
        image: (H, W) grayscale raster.
        points: (N, 2) or (N, 3) array; only x and y are used.
        ax: matplotlib axes. If None, creates new figure.
        color: Marker color.
        size: Marker area in points^2.

    Returns:
        ax: The matplotlib axes used.
    """
    ax = _prepare_axes(image, ax)
    points = np.asarray(points, dtype=float)
    if points.size:
        ax.scatter(points[:, 0], points[:, 1], marker='+', c=color, s=size)
    ax.set_title(f'Features ({len(points)})')
    return ax


def plot_tracks(image, points, tracked, ax=None, color='lime'):
    """Draw a segment from every seed point to its tracked position.

    Args:
        image: (H, W) grayscale raster, usually the second frame.
        points: (N, 2) or (N, 3) seed positions.
        tracked: (N, 2) tracked positions.
        ax: matplotlib axes. If None, creates new figure.
        color: Segment color.

    Returns:
        ax: The matplotlib axes used.
    """
    points = np.asarray(points, dtype=float)
    tracked = np.asarray(tracked, dtype=float)
    if len(points) != len(tracked):
        raise ValueError(
            f"Point count mismatch: {len(points)} seeds vs {len(tracked)} tracked"
        )

    ax = _prepare_axes(image, ax)
    if points.size:
        for (x0, y0), (x1, y1) in zip(points[:, :2], tracked):
            ax.plot([x0, x1], [y0, y1], color=color, linewidth=1)
    ax.set_title(f'Tracks ({len(tracked)})')
    return ax
