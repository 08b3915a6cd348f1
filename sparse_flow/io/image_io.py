"""Load frames from disk as 8-bit intensity rasters."""
import numpy as np


def read_gray(filename):
    """Read an image file and convert it to 8-bit luma.

    Args:
        filename: Path to any image format Pillow can decode.

    Returns:
        img: (H, W) uint8 array.

    Raises:
        FileNotFoundError: If file does not exist.
    """
    from PIL import Image

    with Image.open(filename) as im:
        return np.array(im.convert('L'), dtype=np.uint8)


def read_frame_pair(filename1, filename2):
    """Read two consecutive frames of a sequence.

    Args:
        filename1: Path to the previous frame.
        filename2: Path to the current frame.

    Returns:
        im1, im2: (H, W) uint8 arrays of equal shape.

    Raises:
        ValueError: If the frames differ in size.
    """
    im1 = read_gray(filename1)
    im2 = read_gray(filename2)
    if im1.shape != im2.shape:
        raise ValueError(
            f"Frame sizes differ: {im1.shape} ({filename1}) vs {im2.shape} ({filename2})"
        )
    return im1, im2
