"""
RGB pixel type and pixel-level color primitives.

Channel arithmetic is carried out in floating point and clamped to
[0, 255] once, when the resulting pixel is constructed.
"""

import math
from dataclasses import dataclass
from typing import Tuple


def clamp_channel(value: float) -> int:
    """Truncate and clamp a channel value to [0, 255]."""
    if not math.isfinite(value):
        raise ValueError(f"Pixel channel must be finite, got {value}")
    if value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(value)


@dataclass(frozen=True)
class Pixel:
    """8-bit RGB pixel."""
    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self):
        """Clamp channels to the 8-bit range."""
        object.__setattr__(self, 'r', clamp_channel(self.r))
        object.__setattr__(self, 'g', clamp_channel(self.g))
        object.__setattr__(self, 'b', clamp_channel(self.b))

    def to_tuple(self) -> Tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def __iter__(self):
        return iter(self.to_tuple())

    def __add__(self, other: 'Pixel') -> 'Pixel':
        """Add two pixels component-wise."""
        return Pixel(self.r + other.r, self.g + other.g, self.b + other.b)

    def __sub__(self, other: 'Pixel') -> 'Pixel':
        """Subtract two pixels component-wise."""
        return Pixel(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, scalar: float) -> 'Pixel':
        """Multiply pixel by scalar."""
        return Pixel(self.r * scalar, self.g * scalar, self.b * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> 'Pixel':
        """Divide pixel by scalar."""
        return Pixel(self.r / scalar, self.g / scalar, self.b / scalar)

    @classmethod
    def from_hex(cls, value: str) -> 'Pixel':
        """Create a pixel from a '#rrggbb' string."""
        value = value.lstrip('#')
        if len(value) != 6:
            raise ValueError(f"Invalid hex color: {value}")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


BLACK = Pixel(0, 0, 0)
WHITE = Pixel(255, 255, 255)


def lerp(p1: Pixel, p2: Pixel, t: float) -> Pixel:
    """Linear interpolation p1 + (p2 - p1) * t, clamped once at the end."""
    return Pixel(p1.r + (p2.r - p1.r) * t,
                 p1.g + (p2.g - p1.g) * t,
                 p1.b + (p2.b - p1.b) * t)


def intensity(p: Pixel) -> float:
    """Euclidean norm of the channel vector."""
    return math.sqrt(p.r * p.r + p.g * p.g + p.b * p.b)


def contrast(p: Pixel, value: float) -> Pixel:
    """Scale a pixel by its own intensity raised to value."""
    norm = intensity(p)
    if norm == 0:
        return p
    return p * (norm ** value)
