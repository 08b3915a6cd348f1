"""
Preset factory.

Maps preset names to configured detector and tracker objects.
"""
from sparse_flow.features.shi_tomasi import ShiTomasiDetector
from sparse_flow.methods.lk import PyramidalLKTracker


def load_tracker(method):
    """Load a pre-configured tracker by name.

    Available presets:
        - 'default': 4 levels, 21x21 window, 30 iterations per level
        - 'fast': 3 levels, 15x15 window, 10 iterations per level
        - 'accurate': 5 levels, 31x31 window, 50 iterations per level

    Args:
        method: Preset name string.

    Returns:
        tracker: Configured PyramidalLKTracker.
    """
    if method == 'default':
        return PyramidalLKTracker()

    elif method == 'fast':
        tracker = PyramidalLKTracker()
        tracker.pyramid_levels = 3
        tracker.window_size = 15
        tracker.max_iterations = 10
        return tracker

    elif method == 'accurate':
        tracker = PyramidalLKTracker()
        tracker.pyramid_levels = 5
        tracker.window_size = 31
        tracker.max_iterations = 50
        return tracker

    else:
        raise ValueError(f"Unknown tracker preset: '{method}'")


def load_detector(method):
    """Load a pre-configured corner detector by name.

    Available presets:
        - 'default': quality 0.1, min distance 5, strongest 100 corners
        - 'dense': quality 0.01, min distance 3, no corner limit
        - 'literal': 'default' with the sqrt(trace - D) / 2 response
        - 'textbook': 'default' with a centred 3-tap mean in place of the
          running-sum smoothing

    Args:
        method: Preset name string.

    Returns:
        detector: Configured ShiTomasiDetector.
    """
    if method == 'default':
        detector = ShiTomasiDetector()
        detector.quality_level = 0.1
        detector.min_distance = 5
        detector.max_corners = 100
        return detector

    elif method == 'dense':
        detector = ShiTomasiDetector()
        detector.quality_level = 0.01
        detector.min_distance = 3
        detector.max_corners = None
        return detector

    elif method == 'literal':
        detector = load_detector('default')
        detector.score = 'literal'
        detector.smoothing = 'running'
        return detector

    elif method == 'textbook':
        detector = load_detector('default')
        detector.smoothing = 'mean'
        return detector

    else:
        raise ValueError(f"Unknown detector preset: '{method}'")
