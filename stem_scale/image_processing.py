"""Binary image helpers for the stem measurement pipeline.

Binary images follow the OpenCV mask convention: foreground pixels are white
(255) and background pixels are black (0).
"""

import cv2
import numpy as np

FOREGROUND = 255
BACKGROUND = 0


def to_binary(image: np.ndarray) -> np.ndarray:
    """Convert a boolean or 0/1 image to a uint8 0/255 binary image.

    Any non-zero pixel is considered foreground.

    Args:
        image: 2D array of any numeric or boolean dtype.

    Returns:
        New 2D uint8 array where foreground is 255 and background 0.
    """
    return np.where(image != 0, FOREGROUND, BACKGROUND).astype(np.uint8)


def binarize(image: np.ndarray, threshold_value: int = 127) -> np.ndarray:
    """Push every pixel of a grayscale image back to a clean binary value.

    Pixels strictly above ``threshold_value`` become foreground (255), all
    others background (0). Used after painting, where anti-aliased edges
    may leave intermediate gray levels.

    Args:
        image: 2D uint8 grayscale image.
        threshold_value: Grayscale threshold value (0-254).

    Returns:
        Binary image as a 2D uint8 NumPy array.
    """
    _, binary = cv2.threshold(image, threshold_value, FOREGROUND, cv2.THRESH_BINARY)
    return binary
