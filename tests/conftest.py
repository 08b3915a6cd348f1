"""Shared fixtures for sparse tracking tests."""
import numpy as np
import pytest
from scipy.ndimage import gaussian_filter


def make_texture(H, W, sigma=2.0, seed=0):
    """Smooth random texture scaled to the full uint8 range."""
    rng = np.random.RandomState(seed)
    noise = gaussian_filter(rng.rand(H, W), sigma)
    noise = (noise - noise.min()) / (noise.max() - noise.min())
    return np.floor(noise * 255 + 0.5).astype(np.uint8)


@pytest.fixture
def bright_square():
    """64x64 black image with a 5x5 white square at rows/cols 20-24."""
    img = np.zeros((64, 64), dtype=np.uint8)
    img[20:25, 20:25] = 255
    return img


@pytest.fixture
def separated_squares():
    """Four 8x8 squares far apart; corners of different squares are > 20 px apart."""
    img = np.zeros((96, 96), dtype=np.uint8)
    for r, c in [(16, 16), (16, 64), (64, 16), (64, 64)]:
        img[r:r + 8, c:c + 8] = 255
    return img


@pytest.fixture
def textured_frame():
    """128x128 smooth random texture."""
    return make_texture(128, 128)


@pytest.fixture
def shifted_pair(textured_frame):
    """Texture and a copy translated by (dx, dy) = (3, 2) pixels."""
    shift = (3, 2)
    im2 = np.roll(textured_frame, shift=(shift[1], shift[0]), axis=(0, 1))
    return textured_frame, im2, shift
