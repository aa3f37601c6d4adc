"""
Escape-time and Newton fractal rendering engine.

This library evaluates Mandelbrot, Julia, Mandelbar, generic real-plane and
Newton-basin fractals pixel by pixel, colors them with smooth iteration
counts or orbit traps, anti-aliases them with recursive grid supersampling,
and renders into a fixed-size RGB image buffer, sequentially or over
parallel row chunks.

Example usage:
    >>> from giulia import FractalRenderer, RenderConfig, JuliaSet
    >>> renderer = FractalRenderer(RenderConfig(width=512, height=512))
    >>> image = renderer.render(JuliaSet())
    >>> image.to_image().save("julia.bmp")
"""

__version__ = "1.0.0"
__author__ = "Giulia Developers"

from giulia.core.errors import ConfigurationError
from giulia.core.fractal_types import (
    FractalRegistry, FractalType, MandelbrotSet, JuliaSet, MandelbarSet,
    GenericMapFractal, OrbitTrapJulia, NewtonFractal, JULIA_PRESETS,
)
from giulia.core.math_functions import EscapeTimeIterator, smooth_intensity
from giulia.core.newton import NewtonSolver
from giulia.core.orbit_traps import OrbitTrapAccumulator
from giulia.core.vector import Vector2
from giulia.rendering.image import ImageBuffer
from giulia.rendering.pixel import Pixel, BLACK, WHITE
from giulia.rendering.sampling import Supersampler, supersample

# Main API classes
from giulia.config import RenderConfig
from giulia.api import FractalRenderer

__all__ = [
    "FractalRenderer",
    "RenderConfig",
    "ConfigurationError",
    "FractalRegistry",
    "FractalType",
    "MandelbrotSet",
    "JuliaSet",
    "MandelbarSet",
    "GenericMapFractal",
    "OrbitTrapJulia",
    "NewtonFractal",
    "JULIA_PRESETS",
    "EscapeTimeIterator",
    "smooth_intensity",
    "NewtonSolver",
    "OrbitTrapAccumulator",
    "Vector2",
    "ImageBuffer",
    "Pixel",
    "BLACK",
    "WHITE",
    "Supersampler",
    "supersample",
]
