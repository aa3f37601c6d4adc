"""
Chaos-game drawing of the Sierpinski triangle.
"""

import math
from typing import Optional
import logging

import numpy as np

from ..core.vector import Vector2
from .image import ImageBuffer
from .pixel import Pixel, WHITE

logger = logging.getLogger(__name__)


def draw_sierpinski_triangle(image: ImageBuffer, x: float = 0.0, y: float = 0.0,
                             width: float = 0.0, iterations: int = 100000,
                             color: Pixel = WHITE, seed: Optional[int] = None) -> None:
    """
    Plot the Sierpinski triangle with the chaos game.

    Starting from a random vertex, the current point repeatedly moves
    halfway toward a randomly chosen vertex and is plotted.

    Args:
        image: Target image, addressed in normalized [0, 1] coordinates
        x, y: Lower-left vertex
        width: Base length; 0 selects a default triangle centered in the image
        iterations: Number of plotted points after the vertices
        color: Plot color
        seed: Seed for the vertex choices
    """
    if width == 0:
        width = 0.8
        x = 0.1
        y = 0.5 - math.sqrt(2) * 0.2

    rng = np.random.default_rng(seed)

    vertices = (
        Vector2(x, y),
        Vector2(x + width, y),
        Vector2(x + width / 2.0, y + (width * math.sqrt(2) / 2.0)),
    )

    for v in vertices:
        image.overwrite(v.x, v.y, color)

    choices = rng.integers(0, 3, size=iterations + 1)
    p = vertices[choices[0]]

    for k in choices[1:]:
        p = (p + vertices[k]) / 2.0
        image.overwrite(p.x, p.y, color)

    logger.debug(f"Plotted {iterations} chaos-game points")
