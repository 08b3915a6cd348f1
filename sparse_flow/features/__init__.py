"""Feature detectors."""
from sparse_flow.features.shi_tomasi import ShiTomasiDetector, detect_features

__all__ = [
    'ShiTomasiDetector',
    'detect_features',
]
