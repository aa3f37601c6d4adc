"""
Whole-image color grading filters.

Each filter rewrites every pixel of an ImageBuffer in place. Channel math
runs in floating point and is clamped to [0, 255] before being stored.
"""

import numpy as np
import logging

from .image import ImageBuffer

logger = logging.getLogger(__name__)


def _channels(image: ImageBuffer) -> np.ndarray:
    return image.data.astype(np.float64)


def _store(image: ImageBuffer, values: np.ndarray) -> None:
    image.data[:] = np.clip(values, 0, 255).astype(np.uint8)


def _intensity(values: np.ndarray) -> np.ndarray:
    return np.sqrt(np.sum(values * values, axis=1))


def negative(image: ImageBuffer) -> None:
    """Invert every channel."""
    _store(image, 255.0 - _channels(image))


def grayscale(image: ImageBuffer) -> None:
    """Replace each pixel by its intensity normalized to [0, 255]."""
    values = _channels(image)
    gray = np.sqrt(np.sum(values * values, axis=1) / 3.0)
    _store(image, np.repeat(gray[:, None], 3, axis=1))


def gamma_correction(image: ImageBuffer, gamma: float, c: float = 1.0) -> None:
    """
    Apply the power law c * p^gamma to each channel.

    Args:
        image: Image to modify
        gamma: Exponent applied to the 0-255 channel value
        c: Scale factor
    """
    if gamma <= 0:
        raise ValueError("Gamma must be positive")
    _store(image, c * np.power(_channels(image), gamma))


def contrast(image: ImageBuffer, a: float, s: int) -> None:
    """
    Scale channel distance above the pivot s by a.

    Channels below the pivot are first clamped to it, so the result is
    a * max(p - s, 0) + s.
    """
    shifted = np.clip(_channels(image) - s, 0, 255)
    _store(image, a * shifted + s)


def contrast_threshold(image: ImageBuffer, t: float) -> None:
    """Binarize: white where the pixel intensity reaches t, black elsewhere."""
    mask = _intensity(_channels(image)) >= t
    image.data[:] = 0
    image.data[mask] = 255


def contrast_stretch(image: ImageBuffer, min_in: int, max_in: int,
                     min_out: int, max_out: int) -> None:
    """Linearly map the channel range [min_in, max_in] onto [min_out, max_out]."""
    diff_in = max_in - min_in
    if diff_in == 0:
        raise ValueError("Input range must not be empty")
    diff_out = max_out - min_out
    _store(image, (_channels(image) - min_in) * diff_out / diff_in + min_out)


def log_remap(image: ImageBuffer, c: float) -> None:
    """Logarithmic remap c * ln(p + 1) of each channel."""
    _store(image, c * np.log(_channels(image) + 1.0))
