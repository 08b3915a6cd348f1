"""Point tracking methods."""
from sparse_flow.methods.lk import PyramidalLKTracker, track_points
from sparse_flow.methods.config import load_detector, load_tracker

__all__ = [
    'PyramidalLKTracker',
    'track_points',
    'load_detector',
    'load_tracker',
]
