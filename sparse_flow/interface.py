"""
High-level interface for sparse feature tracking.

Detects Shi-Tomasi corners in the first frame and follows them into the
second with the pyramidal Lucas-Kanade tracker.
"""
from sparse_flow.methods.config import load_detector, load_tracker
from sparse_flow.utils.image_processing import to_gray_uint8


def track_features(im1, im2, detector='default', tracker='default', params=None):
    """Detect features in ``im1`` and track them into ``im2``.

    Args:
        im1: First frame, (H, W) grayscale or (H, W, 3) RGB, float or uint8.
        im2: Second frame, same size/format as im1.
        detector: Detector preset name (see load_detector).
        tracker: Tracker preset name (see load_tracker).
        params: Optional dict of parameter overrides. Keys are applied to
            whichever of the detector and tracker has the attribute.

    Returns:
        features: (N, 3) array of (x, y, quality) found in im1, best first.
        tracked: (N, 2) array of the corresponding positions in im2.
    """
    frame1 = to_gray_uint8(im1)
    frame2 = to_gray_uint8(im2)
    if frame1.shape != frame2.shape:
        raise ValueError(f"Frame shapes differ: {frame1.shape} vs {frame2.shape}")

    det = load_detector(detector)
    trk = load_tracker(tracker)

    if params is not None:
        det.parse_input_parameter(params)
        trk.parse_input_parameter(params)

    features = det.detect(frame1)
    tracked = trk.track(frame1, frame2, features[:, :2])

    return features, tracked
