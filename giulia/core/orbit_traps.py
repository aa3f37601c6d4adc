"""
Orbit-trap distance tracking.

An orbit trap records how close an iterated orbit ever came to a fixed
point of the plane. The accumulated distances feed the orbit-trap color
blend in giulia.rendering.coloring.
"""

from typing import List, Sequence
import logging

from .math_functions import EscapeTimeIterator, IterationResult, StepFunction

logger = logging.getLogger(__name__)


class OrbitTrapAccumulator:
    """Minimum distances from an orbit to an ordered set of trap points."""

    def __init__(self, traps: Sequence[complex], escape_radius: float = 2.0):
        """
        Initialize trap accumulator.

        Args:
            traps: Ordered trap positions
            escape_radius: Initial (and maximum) recorded distance
        """
        if escape_radius <= 0:
            raise ValueError("escape_radius must be positive")

        self.traps = tuple(complex(t) for t in traps)
        self.escape_radius = escape_radius
        self.distances: List[float] = [escape_radius] * len(self.traps)

    def reset(self) -> None:
        """Restore initial distances before a new evaluation."""
        self.distances = [self.escape_radius] * len(self.traps)

    def update(self, z: complex) -> None:
        """Record the distance from z to each trap, keeping the minimum."""
        distances = self.distances
        for j, trap in enumerate(self.traps):
            d = abs(z - trap)
            if d < distances[j]:
                distances[j] = d

    def __len__(self) -> int:
        return len(self.traps)


def iterate_with_traps(iterator: EscapeTimeIterator, z0: complex, c: complex,
                       step: StepFunction,
                       accumulator: OrbitTrapAccumulator) -> IterationResult:
    """
    Escape-time loop that updates an orbit-trap accumulator after every step.

    Runs EscapeTimeIterator.iterate() with the accumulator as its step hook,
    so the termination policy is shared.

    Args:
        iterator: Iterator supplying the budget and escape radius
        z0: Starting state
        c: Map parameter
        step: Update rule
        accumulator: Trap accumulator, reset before iterating

    Returns:
        IterationResult of the loop
    """
    accumulator.reset()
    return iterator.iterate(z0, c, step, on_step=accumulator.update)
