"""
Sparse Feature Tracking Package

Shi-Tomasi corner detection and pyramidal Lucas-Kanade point tracking on
8-bit grayscale frames.
"""

from sparse_flow.interface import track_features
from sparse_flow.features.shi_tomasi import detect_features
from sparse_flow.utils.pyramid import build_pyramid
from sparse_flow.methods.lk import track_points
from sparse_flow.methods.config import load_detector, load_tracker
from sparse_flow.io.image_io import read_gray, read_frame_pair
from sparse_flow.viz.plot_tracks import plot_features, plot_tracks
from sparse_flow.evaluation.metrics import track_endpoint_error

__all__ = [
    'track_features',
    'detect_features',
    'build_pyramid',
    'track_points',
    'load_detector',
    'load_tracker',
    'read_gray',
    'read_frame_pair',
    'plot_features',
    'plot_tracks',
    'track_endpoint_error',
]
