"""
Newton basin solver.

Colors the plane by the root of a polynomial that Newton's method
converges to from each starting point. The polynomial and its derivative
are built once from the root set and shared read-only by every pixel.
"""

import cmath
import math
from dataclasses import dataclass
from typing import Optional, Sequence
import logging

import numpy as np
from numpy.polynomial import Polynomial

from .errors import ConfigurationError
from ..rendering.pixel import BLACK, Pixel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewtonResult:
    """Outcome of Newton's method from one starting point."""
    value: complex
    iterations: int
    converged: bool
    diverged: bool = False
    root_index: Optional[int] = None


class NewtonSolver:
    """Newton's method for the monic polynomial with a given root set."""

    def __init__(self, roots: Sequence[complex], colors: Sequence[Pixel],
                 max_iter: int = 50, epsilon: float = 1e-6):
        """
        Initialize the solver and build P and P'.

        A root set whose length differs from the color set is kept as an
        inconsistent configuration: check() raises and evaluate() returns
        the black sentinel for every pixel.

        Args:
            roots: Ordered polynomial roots
            colors: Color paired with each root
            max_iter: Newton iteration budget
            epsilon: Convergence threshold on |P(z)|
        """
        if max_iter <= 0:
            raise ValueError("max_iter must be positive")
        if epsilon <= 0:
            raise ValueError("epsilon must be positive")

        self.roots = tuple(complex(r) for r in roots)
        self.colors = tuple(colors)
        self.max_iter = max_iter
        self.epsilon = epsilon

        if self.roots:
            self.polynomial = Polynomial.fromroots(np.array(self.roots, dtype=np.complex128))
        else:
            self.polynomial = Polynomial([1.0 + 0j])
        self.derivative = self.polynomial.deriv()

        if not self.is_consistent:
            logger.warning(f"Newton root/color mismatch: {len(self.roots)} roots, "
                           f"{len(self.colors)} colors")

    @property
    def is_consistent(self) -> bool:
        """True when roots and colors pair up one to one."""
        return len(self.roots) > 0 and len(self.roots) == len(self.colors)

    def check(self) -> None:
        """Raise ConfigurationError for an unusable root/color set."""
        if not self.roots:
            raise ConfigurationError("Newton fractal requires at least one root")
        if len(self.roots) != len(self.colors):
            raise ConfigurationError(
                f"Newton fractal has {len(self.roots)} roots but {len(self.colors)} colors")

    def solve(self, z0: complex) -> NewtonResult:
        """
        Run Newton's method from z0.

        Iterates z = z - P(z) / P'(z) while |P(z)| > epsilon and the budget
        is not exhausted. A vanishing derivative or a non-finite state stops
        the loop and marks the result as diverged.

        Args:
            z0: Starting guess

        Returns:
            NewtonResult with the final value and the nearest root index
        """
        P = self.polynomial
        dP = self.derivative
        z = complex(z0)
        dist = math.inf
        iterations = 0

        while dist > self.epsilon and iterations < self.max_iter:
            dp = complex(dP(z))
            if dp == 0:
                return NewtonResult(z, iterations, converged=False, diverged=True)

            z_next = z - complex(P(z)) / dp
            if not cmath.isfinite(z_next):
                return NewtonResult(z, iterations, converged=False, diverged=True)

            z = z_next
            dist = abs(complex(P(z)))
            iterations += 1

        return NewtonResult(z, iterations, converged=dist <= self.epsilon,
                            root_index=self.nearest_root(z))

    def nearest_root(self, z: complex) -> Optional[int]:
        """Index of the root closest to z, first one on ties."""
        best = None
        pick_dist = math.inf
        for i, root in enumerate(self.roots):
            d = abs(z - root)
            if d < pick_dist:
                pick_dist = d
                best = i
        return best

    def evaluate(self, x: float, y: float) -> Pixel:
        """
        Color of the basin containing the starting point x + iy.

        The nearest root's color is darkened by 1 - iterations / max_iter.
        """
        if not self.is_consistent:
            return BLACK

        result = self.solve(complex(x, y))
        if result.diverged or result.root_index is None:
            return BLACK

        intensity_factor = 1 - (result.iterations / self.max_iter)
        return self.colors[result.root_index] * intensity_factor
