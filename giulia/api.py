"""
Main API classes for fractal rendering.

This module ties the evaluators, the supersampler and the image buffer
together: for every pixel index the configured coordinate transform
yields plane coordinates, the fractal evaluates them, and the resulting
color is written into the buffer slot of that index.
"""

import numpy as np
from typing import Callable, Optional
import logging
import time

from .config import RenderConfig
from .core.errors import ConfigurationError
from .core.fractal_types import FractalType
from .rendering.image import ImageBuffer
from .rendering.pixel import Pixel
from .rendering.sampling import DrawFunction, Supersampler
from .acceleration.multiprocessing import MultiprocessingAccelerator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class PlaneEvaluator:
    """Draw function mapping normalized coordinates through the config transform."""

    def __init__(self, fractal: FractalType, config: RenderConfig):
        self.fractal = fractal
        self.config = config

    def __call__(self, x: float, y: float) -> Pixel:
        return self.fractal.evaluate(*self.config.to_plane(x, y))


def make_draw_function(fractal: FractalType, config: RenderConfig) -> DrawFunction:
    """
    Per-pixel draw function for a fractal under a configuration.

    Supersampling, when enabled, jitters the normalized coordinates before
    the coordinate transform.
    """
    draw = PlaneEvaluator(fractal, config)
    if config.supersampling == 1:
        return draw
    return Supersampler(draw, config.width, config.supersampling, config.stepsize)


def render_rows(fractal: FractalType, config: RenderConfig,
                row_start: int, row_stop: int) -> np.ndarray:
    """
    Render a contiguous range of image rows.

    Args:
        fractal: Fractal to evaluate
        config: Render configuration
        row_start: First row (inclusive)
        row_stop: Last row (exclusive)

    Returns:
        uint8 array of shape ((row_stop - row_start) * width, 3)
    """
    if not 0 <= row_start <= row_stop <= config.height:
        raise ValueError(f"Invalid row range {row_start}..{row_stop} for height {config.height}")

    draw = make_draw_function(fractal, config)
    start = row_start * config.width
    stop = row_stop * config.width

    rows = np.zeros((stop - start, 3), dtype=np.uint8)
    for i in range(start, stop):
        rows[i - start] = draw(*config.normalized_coordinates(i)).to_tuple()
    return rows


class FractalRenderer:
    """Main fractal rendering engine."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """
        Initialize fractal renderer.

        Args:
            config: Rendering configuration (uses defaults if None)
        """
        self.config = config or RenderConfig()
        self.config.validate()

        logger.info(f"FractalRenderer initialized: {self.config.width}x{self.config.height}, "
                    f"supersampling={self.config.supersampling}")

    def check_fractal(self, fractal: FractalType) -> bool:
        """
        Check a fractal's render-wide configuration once, before pixel work.

        Returns:
            True if the fractal can be rendered; False for an inconsistent
            configuration in non-strict mode

        Raises:
            ConfigurationError: Inconsistent configuration in strict mode
        """
        try:
            fractal.check_configuration()
        except ConfigurationError as e:
            if self.config.strict:
                logger.error(f"Invalid {fractal.name} configuration: {e}")
                raise
            logger.warning(f"Invalid {fractal.name} configuration, rendering sentinel black: {e}")
            return False
        return True

    def render(self, fractal: FractalType,
               progress_callback: Optional[ProgressCallback] = None) -> ImageBuffer:
        """
        Render fractal to an image buffer.

        Args:
            fractal: Fractal type to render
            progress_callback: Optional callback receiving progress in [0, 1]

        Returns:
            Completed image buffer
        """
        start_time = time.time()
        config = self.config

        logger.info(f"Starting render: {fractal.name} fractal")

        image = ImageBuffer(config.width, config.height)

        if not self.check_fractal(fractal):
            return image

        if config.num_processes is None or config.num_processes > 1:
            accelerator = MultiprocessingAccelerator(config.num_processes, config.rows_per_chunk)
            accelerator.render_parallel(fractal, config, image, progress_callback)
        else:
            self._render_sequential(fractal, image, progress_callback)

        total_time = time.time() - start_time
        logger.info(f"Render complete: {total_time:.2f}s")

        return image

    def _render_sequential(self, fractal: FractalType, image: ImageBuffer,
                           progress_callback: Optional[ProgressCallback]) -> None:
        """Render every pixel in row-major order on the calling thread."""
        config = self.config
        draw = make_draw_function(fractal, config)
        width = config.width

        for i in range(config.size):
            image[i] = draw(*config.normalized_coordinates(i))

            if progress_callback and (i + 1) % width == 0:
                progress_callback((i + 1) / config.size)

    def render_rows(self, fractal: FractalType, row_start: int, row_stop: int) -> np.ndarray:
        """Render rows [row_start, row_stop) with this renderer's configuration."""
        return render_rows(fractal, self.config, row_start, row_stop)

    def update_config(self, **kwargs) -> None:
        """Replace configuration fields and re-validate."""
        config = self.config.replace(**kwargs)
        config.validate()
        self.config = config
        logger.info(f"Updated configuration: {kwargs}")
