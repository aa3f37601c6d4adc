"""
Coloring models that turn evaluator output into pixels.

This module provides the gray-scale mapping of the smooth escape-time
intensity and the orbit-trap color blend.
"""

import numpy as np
from typing import Sequence, Tuple, Union
from dataclasses import dataclass
import logging

from ..core.math_functions import gaussian_falloff
from .pixel import Pixel

logger = logging.getLogger(__name__)

ColorLike = Union[Pixel, Tuple[float, float, float]]


def grayscale_pixel(intensity: float, brightness: float) -> Pixel:
    """
    Gray-scale pixel for a smooth intensity.

    Args:
        intensity: Smooth escape-time intensity (unbounded)
        brightness: Scale applied before clamping to [0, 255]

    Returns:
        Gray pixel with all channels equal
    """
    value = 255 * brightness * intensity
    return Pixel(value, value, value)


def _as_vector(color: ColorLike) -> np.ndarray:
    return np.array(tuple(color), dtype=np.float64)


@dataclass(frozen=True)
class OrbitTrapColoring:
    """
    Orbit-trap color blend.

    The base color is interpolated toward each trap color in turn, using
    the orbit's closest approach to that trap as the blend weight. The
    result is scaled by the smooth intensity, by Gaussian falloffs of the
    original pixel coordinate and by a brightness factor, and clamped once.
    """

    base_color: Tuple[float, float, float] = (0x9b, 0x5d, 0xe5)
    trap_colors: Tuple[Tuple[float, float, float], ...] = (
        (0xf1, 0x5b, 0xb5),
        (0xfe, 0x00, 0x40),
        (0x0f, 0xbb, 0xb9),
        (0xff, 0x00, 0x6e),
    )
    brightness: float = 80.0
    vignette_x: float = 4.0
    vignette_y: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, 'base_color', tuple(float(v) for v in self.base_color))
        object.__setattr__(self, 'trap_colors',
                           tuple(tuple(float(v) for v in c) for c in self.trap_colors))
        if len(self.base_color) != 3 or any(len(c) != 3 for c in self.trap_colors):
            raise ValueError("Colors must have exactly 3 channels")
        if self.vignette_x <= 0 or self.vignette_y <= 0:
            raise ValueError("Vignette widths must be positive")

    def blend(self, distances: Sequence[float]) -> np.ndarray:
        """
        Interpolate the base color toward each trap color in trap order.

        Args:
            distances: Closest approach to each trap

        Returns:
            Unclamped float RGB vector
        """
        if len(distances) != len(self.trap_colors):
            raise ValueError(f"Expected {len(self.trap_colors)} trap distances, got {len(distances)}")

        color = _as_vector(self.base_color)
        for trap_color, dist in zip(self.trap_colors, distances):
            color = color + (_as_vector(trap_color) - color) * dist
        return color

    def color(self, distances: Sequence[float], intensity: float,
              x: float, y: float) -> Pixel:
        """
        Final pixel for one orbit.

        Args:
            distances: Closest approach to each trap
            intensity: Smooth escape-time intensity
            x, y: Plane coordinate of the pixel, used for the vignette

        Returns:
            Clamped pixel
        """
        color = self.blend(distances)
        color *= intensity
        color *= gaussian_falloff(x, self.vignette_x) * gaussian_falloff(y, self.vignette_y)
        color *= self.brightness

        if not np.all(np.isfinite(color)):
            logger.debug(f"Non-finite orbit-trap color at ({x}, {y})")
            return Pixel(0, 0, 0)
        return Pixel(*color)
