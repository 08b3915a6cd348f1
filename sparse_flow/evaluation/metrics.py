"""Sparse tracking evaluation metrics."""
import numpy as np


def track_endpoint_error(expected, tracked):
    """Endpoint error between expected and tracked point positions.

    Args:
        expected: (N, 2) ground truth positions.
        tracked: (N, 2) estimated positions.

    Returns:
        mean_epe: Average endpoint error.
        std_epe: Standard deviation of endpoint error.
        max_epe: Largest endpoint error.
    """
    expected = np.asarray(expected, dtype=float)
    tracked = np.asarray(tracked, dtype=float)
    if expected.shape != tracked.shape:
        raise ValueError(
            f"Shape mismatch: expected {expected.shape}, tracked {tracked.shape}"
        )
    if expected.size == 0:
        return 0.0, 0.0, 0.0

    epe = np.sqrt(np.sum((expected - tracked) ** 2, axis=-1))
    return float(np.mean(epe)), float(np.std(epe)), float(np.max(epe))
