"""
Render-wide configuration.

RenderConfig is immutable and passed explicitly to the renderer; it holds
the image dimensions, the coordinate transform from pixel index to plane
coordinates, and the sampling and parallelism settings.
"""

from typing import Dict, Any, Optional, Tuple
from dataclasses import dataclass, asdict, replace
import json
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for one render pass."""

    # Image parameters
    width: int = 1024
    height: int = 1024

    # Coordinate transform: plane = (normalized - translation) * scale
    scale_x: float = 3.5
    scale_y: float = 3.5
    translation_x: float = 0.0
    translation_y: float = 0.0

    # Anti-aliasing
    supersampling: int = 1  # Samples per axis, power of two
    stepsize: float = 0.0  # 0 derives the grid offset from the width

    # Error policy: raise on inconsistent fractal configuration instead of
    # rendering sentinel black pixels
    strict: bool = True

    # Performance
    num_processes: Optional[int] = 1
    rows_per_chunk: int = 16

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Width and height must be positive")

        if self.scale_x == 0 or self.scale_y == 0:
            raise ValueError("Scale factors must be non-zero")

        if self.supersampling < 1:
            raise ValueError("supersampling must be >= 1")

        if self.supersampling > 1 and self.supersampling % 2 != 0:
            logger.warning(f"Odd supersampling order {self.supersampling}: "
                           f"every sample will be the black sentinel pixel")

        if self.num_processes is not None and self.num_processes < 1:
            raise ValueError("num_processes must be >= 1")

        if self.rows_per_chunk < 1:
            raise ValueError("rows_per_chunk must be >= 1")

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def normalized_coordinates(self, index: int) -> Tuple[float, float]:
        """
        Centered normalized coordinates of the pixel at a linear index.

        The origin is the image center; x spans [-0.5, 0.5] and y is divided
        by the aspect ratio, increasing upward.
        """
        width = self.width
        x = ((index % width) / max(width - 1, 1)) - 0.5
        y = ((((self.size - index) / width) / self.height) - 0.5) / self.aspect_ratio
        return x, y

    def to_plane(self, x: float, y: float) -> Tuple[float, float]:
        """Apply translation and scale to normalized coordinates."""
        return ((x - self.translation_x) * self.scale_x,
                (y - self.translation_y) * self.scale_y)

    def pixel_to_plane(self, index: int) -> Tuple[float, float]:
        """Plane coordinates of the pixel at a linear index."""
        return self.to_plane(*self.normalized_coordinates(index))

    def replace(self, **changes) -> 'RenderConfig':
        """Copy of this configuration with some fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RenderConfig':
        """Create configuration from dictionary."""
        return cls(**data)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_str: str) -> 'RenderConfig':
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))
