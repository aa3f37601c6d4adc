"""
Core mathematical functions for escape-time iteration.

This module provides the per-pixel iteration loop shared by every
escape-time family, the family step rules, and the smooth (continuous)
iteration-count normalization used to color the result.
"""

import math
from typing import Callable, Optional, Tuple, Union
import logging

from .vector import Vector2

logger = logging.getLogger(__name__)

StepFunction = Callable[[complex, complex], complex]
StepHook = Callable[[complex], None]
RealMap = Callable[[float, float], Union[Tuple[float, float], Vector2]]

LN2 = math.log(2.0)


def mandelbrot_step(z: complex, c: complex) -> complex:
    """Mandelbrot update rule: z = z^2 + c."""
    return z * z + c


def julia_step(z: complex, c: complex) -> complex:
    """Julia update rule: z = z^2 + c with c fixed for the whole image."""
    return z * z + c


def mandelbar_step(z: complex, c: complex) -> complex:
    """Mandelbar (Tricorn) update rule: z = conj(z)^2 + c."""
    zc = z.conjugate()
    return zc * zc + c


class IterationResult:
    """Container for the outcome of one escape-time evaluation."""

    def __init__(self, final_value: complex, iterations: int, max_iter: int):
        """
        Initialize iteration result.

        Args:
            final_value: State of the orbit when the loop stopped
            iterations: Raw iteration count (max_iter + 1 for bounded points)
            max_iter: Iteration budget the loop ran with
        """
        self.final_value = final_value
        self.iterations = iterations
        self.max_iter = max_iter

    @property
    def escaped(self) -> bool:
        """True when the orbit left the escape radius within the budget."""
        return self.iterations <= self.max_iter

    @property
    def square_modulus(self) -> float:
        z = self.final_value
        return z.real * z.real + z.imag * z.imag

    def get_smooth_intensity(self, escape_radius: float) -> float:
        """Continuous intensity for this result, see smooth_intensity()."""
        return smooth_intensity(self.square_modulus, self.iterations,
                                self.max_iter, escape_radius)

    def __repr__(self) -> str:
        return (f"IterationResult(final_value={self.final_value!r}, "
                f"iterations={self.iterations}, max_iter={self.max_iter})")


class EscapeTimeIterator:
    """Bounded iteration loop for escape-time fractals."""

    def __init__(self, max_iter: int = 1000, escape_radius: float = 2.0):
        """
        Initialize escape-time iterator.

        Args:
            max_iter: Iteration budget; the loop body runs at most max_iter + 1 times
            escape_radius: Radius of the bounded region
        """
        if max_iter < 0:
            raise ValueError("max_iter must be non-negative")
        if escape_radius <= 0:
            raise ValueError("escape_radius must be positive")

        self.max_iter = max_iter
        self.escape_radius = escape_radius
        self.escape_radius_sq = escape_radius ** 2

    def iterate(self, z0: complex, c: complex, step: StepFunction,
                on_step: Optional[StepHook] = None) -> IterationResult:
        """
        Iterate a complex step function until escape or budget exhaustion.

        The escape condition is checked before every step, so a point that
        never escapes reports max_iter + 1 iterations.

        Args:
            z0: Starting state
            c: Map parameter, constant for the whole evaluation
            step: Update rule advance(z, c) -> z
            on_step: Optional callback receiving every new state

        Returns:
            IterationResult with the final state and raw count
        """
        z = complex(z0)
        c = complex(c)
        r2 = self.escape_radius_sq
        max_iter = self.max_iter
        i = 0

        while (z.real * z.real + z.imag * z.imag) < r2 and i <= max_iter:
            z = step(z, c)
            if on_step is not None:
                on_step(z)
            i += 1

        return IterationResult(z, i, max_iter)

    def iterate_map(self, x: float, y: float, f: RealMap) -> IterationResult:
        """
        Iterate a map of the real plane with no convenient complex form.

        Args:
            x, y: Starting point
            f: Map (x, y) -> (x', y'), returning a pair or a Vector2

        Returns:
            IterationResult whose final value packs (x, y) as a complex number
        """
        a = float(x)
        b = float(y)
        r2 = self.escape_radius_sq
        max_iter = self.max_iter
        i = 0

        while (a * a + b * b) < r2 and i <= max_iter:
            a, b = f(a, b)
            i += 1

        return IterationResult(complex(a, b), i, max_iter)


def normalized_iterations(iterations: int, max_iter: int) -> float:
    """Plain iteration ratio i / max_iter."""
    if max_iter <= 0:
        raise ValueError("max_iter must be positive for normalization")
    return iterations / max_iter


def smooth_intensity(square_modulus: float, iterations: int, max_iter: int,
                     escape_radius: float = 2.0) -> float:
    """
    Continuous escape-time intensity.

    Computes (i - log2(ln|z| / ln R)) / max_iter with ln|z| taken as
    0.5 * ln(|z|^2). Points whose log argument is non-positive or whose
    intermediate values are not finite (interior points, R <= 1) fall back
    to the plain ratio i / max_iter. The result is not bounded to [0, 1].

    Args:
        square_modulus: |z|^2 of the final state
        iterations: Raw iteration count
        max_iter: Iteration budget
        escape_radius: Escape radius R

    Returns:
        Smooth intensity value
    """
    ratio = normalized_iterations(iterations, max_iter)

    if not (square_modulus > 0.0 and math.isfinite(square_modulus)):
        return ratio
    if escape_radius <= 1.0:
        return ratio

    log_ratio = (0.5 * math.log(square_modulus)) / math.log(escape_radius)
    if not (log_ratio > 0.0 and math.isfinite(log_ratio)):
        return ratio

    value = (iterations - math.log(log_ratio) / LN2) / max_iter
    if not math.isfinite(value):
        return ratio
    return value


def gaussian_falloff(value: float, width: float) -> float:
    """Gaussian-like vignette factor exp(-value^2 / width)."""
    return math.exp(-(value * value) / width)

