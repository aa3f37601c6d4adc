"""
Recursive grid supersampling.

Anti-aliases any pixel evaluation function by averaging it over a
recursively refined 2x2 grid of jittered sub-points.
"""

from typing import Callable
import logging

from .pixel import BLACK, Pixel

logger = logging.getLogger(__name__)

DrawFunction = Callable[[float, float], Pixel]


def supersample(x: float, y: float, draw: DrawFunction, width: int,
                order: int = 2, stepsize: float = 0.0) -> Pixel:
    """
    Supersampling anti-aliasing with grid points.

    Order 1 evaluates draw(x, y) directly. Any other order must be even and
    positive; an odd or non-positive order returns the black sentinel
    pixel. Even orders sample the four points offset by stepsize and
    3 * stepsize along each axis, recursing with half the order and half
    the step, and average the four results channel-wise with integer
    truncation. A zero stepsize is
    replaced by 0.25 / width. An order of 2^k costs order^2 evaluations.

    Args:
        x, y: Sample coordinate
        draw: Pixel evaluation function
        width: Output image width, used to derive the default stepsize
        order: Samples per axis (power of two)
        stepsize: Grid offset, 0 for the width-derived default

    Returns:
        Averaged pixel
    """
    if order == 1:
        return draw(x, y)

    if order < 1 or order % 2 != 0:
        return BLACK

    if stepsize == 0:
        stepsize = 0.25 / width

    x1 = x + stepsize
    x2 = x + stepsize * 3
    y1 = y + stepsize
    y2 = y + stepsize * 3

    half_order = order // 2
    half_step = stepsize / 2.0

    p1 = supersample(x1, y1, draw, width, half_order, half_step)
    p2 = supersample(x1, y2, draw, width, half_order, half_step)
    p3 = supersample(x2, y1, draw, width, half_order, half_step)
    p4 = supersample(x2, y2, draw, width, half_order, half_step)

    return Pixel((p1.r + p2.r + p3.r + p4.r) // 4,
                 (p1.g + p2.g + p3.g + p4.g) // 4,
                 (p1.b + p2.b + p3.b + p4.b) // 4)


class Supersampler:
    """Picklable draw function wrapping another one with supersampling."""

    def __init__(self, draw: DrawFunction, width: int, order: int = 2,
                 stepsize: float = 0.0):
        """
        Initialize supersampler.

        Args:
            draw: Pixel evaluation function to anti-alias
            width: Output image width
            order: Samples per axis
            stepsize: Grid offset override
        """
        if width <= 0:
            raise ValueError("width must be positive")
        if order < 1:
            raise ValueError("order must be >= 1")

        self.draw = draw
        self.width = width
        self.order = order
        self.stepsize = stepsize

    def __call__(self, x: float, y: float) -> Pixel:
        return supersample(x, y, self.draw, self.width, self.order, self.stepsize)
