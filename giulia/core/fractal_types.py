"""
Fractal type definitions and parameter management.

This module defines the fractal families as configurable classes, each
exposing a per-pixel evaluation entry point evaluate(x, y) -> Pixel that
reads only immutable render-wide parameters.
"""

from typing import Dict, Any, Optional, Tuple
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
import logging

from .math_functions import (
    EscapeTimeIterator, IterationResult, RealMap,
    mandelbrot_step, julia_step, mandelbar_step,
)
from .orbit_traps import OrbitTrapAccumulator, iterate_with_traps
from .newton import NewtonSolver
from ..rendering.coloring import OrbitTrapColoring, grayscale_pixel
from ..rendering.pixel import Pixel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FractalParameters:
    """Base class for fractal parameters with validation."""

    def validate(self) -> None:
        """Validate parameter values."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FractalParameters':
        """Create parameters from dictionary."""
        return cls(**data)


class FractalType(ABC):
    """Abstract base class for fractal types."""

    def __init__(self, name: str, parameters: FractalParameters):
        """
        Initialize fractal type.

        Args:
            name: Human-readable name for the fractal
            parameters: Fractal-specific parameters
        """
        self.name = name
        self.parameters = parameters
        self.parameters.validate()

    @abstractmethod
    def evaluate(self, x: float, y: float) -> Pixel:
        """
        Compute the color of the plane point (x, y).

        Args:
            x, y: Plane coordinates

        Returns:
            Pixel color
        """
        pass

    def check_configuration(self) -> None:
        """Raise ConfigurationError if the fractal cannot render any pixel correctly."""
        pass

    def get_description(self) -> str:
        """Get a description of this fractal type."""
        return f"{self.name} fractal"

    def __call__(self, x: float, y: float) -> Pixel:
        return self.evaluate(x, y)


@dataclass(frozen=True)
class EscapeTimeParameters(FractalParameters):
    """Parameters shared by escape-time families."""

    max_iter: int = 1000
    escape_radius: float = 2.0
    brightness: Optional[float] = None

    def validate(self) -> None:
        """Validate escape-time parameters."""
        if not isinstance(self.max_iter, int) or self.max_iter <= 0:
            raise ValueError("max_iter must be a positive integer")
        if not isinstance(self.escape_radius, (int, float)) or self.escape_radius <= 0:
            raise ValueError("escape_radius must be positive")
        if self.brightness is not None and not isinstance(self.brightness, (int, float)):
            raise ValueError("brightness must be numeric")


class EscapeTimeFractal(FractalType):
    """Escape-time family rendered as smooth gray-scale."""

    # Default brightness is this factor times max_iter
    brightness_factor = 0.04

    def __init__(self, name: str, parameters: EscapeTimeParameters):
        super().__init__(name, parameters)
        self.iterator = EscapeTimeIterator(parameters.max_iter, parameters.escape_radius)
        if parameters.brightness is None:
            self.brightness = self.brightness_factor * parameters.max_iter
        else:
            self.brightness = parameters.brightness
        logger.debug(f"{name}: max_iter={parameters.max_iter}, "
                     f"escape_radius={parameters.escape_radius}, brightness={self.brightness}")

    @abstractmethod
    def iterate(self, x: float, y: float) -> IterationResult:
        """Run the escape-time loop for the plane point (x, y)."""
        pass

    def smooth_intensity(self, x: float, y: float) -> float:
        """Smooth intensity of the plane point (x, y)."""
        return self.iterate(x, y).get_smooth_intensity(self.iterator.escape_radius)

    def evaluate(self, x: float, y: float) -> Pixel:
        """Gray-scale pixel from the smooth intensity."""
        return grayscale_pixel(self.smooth_intensity(x, y), self.brightness)


@dataclass(frozen=True)
class MandelbrotParameters(EscapeTimeParameters):
    """Parameters for Mandelbrot set generation."""


class MandelbrotSet(EscapeTimeFractal):
    """Mandelbrot set: c and z0 are both the pixel coordinate."""

    def __init__(self, parameters: Optional[MandelbrotParameters] = None):
        """
        Initialize Mandelbrot set.

        Args:
            parameters: Mandelbrot-specific parameters
        """
        if parameters is None:
            parameters = MandelbrotParameters()
        super().__init__("Mandelbrot", parameters)

    def iterate(self, x: float, y: float) -> IterationResult:
        c = complex(x, y)
        return self.iterator.iterate(c, c, mandelbrot_step)

    def get_description(self) -> str:
        """Get description of Mandelbrot set."""
        return "Mandelbrot set: z_{n+1} = z_n^2 + c, where c = z_0 is the complex coordinate"


@dataclass(frozen=True)
class JuliaParameters(EscapeTimeParameters):
    """Parameters for Julia set generation."""

    c_real: float = -0.76
    c_imag: float = 0.1482

    def validate(self) -> None:
        """Validate Julia parameters."""
        super().validate()
        if not isinstance(self.c_real, (int, float)):
            raise ValueError("c_real must be numeric")
        if not isinstance(self.c_imag, (int, float)):
            raise ValueError("c_imag must be numeric")

    @property
    def c(self) -> complex:
        """Get the Julia constant as a complex number."""
        return complex(self.c_real, self.c_imag)


class JuliaSet(EscapeTimeFractal):
    """Julia set: c is fixed, z0 is the pixel coordinate."""

    brightness_factor = 0.005

    def __init__(self, parameters: Optional[JuliaParameters] = None):
        """
        Initialize Julia set.

        Args:
            parameters: Julia-specific parameters
        """
        if parameters is None:
            parameters = JuliaParameters()
        super().__init__("Julia", parameters)

    def iterate(self, x: float, y: float) -> IterationResult:
        return self.iterator.iterate(complex(x, y), self.parameters.c, julia_step)

    def get_description(self) -> str:
        """Get description of Julia set."""
        return f"Julia set: z_{{n+1}} = z_n^2 + c, where c = {self.parameters.c} and z_0 is the complex coordinate"


@dataclass(frozen=True)
class MandelbarParameters(EscapeTimeParameters):
    """Parameters for the Mandelbar (Tricorn) set."""


class MandelbarSet(EscapeTimeFractal):
    """Mandelbar (Tricorn) set: z = conj(z)^2 + c."""

    def __init__(self, parameters: Optional[MandelbarParameters] = None):
        if parameters is None:
            parameters = MandelbarParameters()
        super().__init__("Mandelbar", parameters)

    def iterate(self, x: float, y: float) -> IterationResult:
        c = complex(x, y)
        return self.iterator.iterate(c, c, mandelbar_step)

    def get_description(self) -> str:
        return "Mandelbar (Tricorn): z_{n+1} = conj(z_n)^2 + c"


@dataclass(frozen=True)
class GenericMapParameters(EscapeTimeParameters):
    """Parameters for a caller-supplied real-plane map."""

    description: str = "Generic real-plane map"

    def validate(self) -> None:
        super().validate()
        if not isinstance(self.description, str):
            raise ValueError("description must be a string")


class GenericMapFractal(EscapeTimeFractal):
    """Escape-time fractal of an arbitrary map (x, y) -> (x', y')."""

    def __init__(self, map_function: RealMap,
                 parameters: Optional[GenericMapParameters] = None):
        """
        Initialize generic map fractal.

        Args:
            map_function: Map of the real plane; must be a module-level
                function for parallel rendering
            parameters: Escape-time parameters
        """
        if not callable(map_function):
            raise ValueError("map_function must be callable")
        if parameters is None:
            parameters = GenericMapParameters()
        super().__init__("Generic", parameters)
        self.map_function = map_function

    def iterate(self, x: float, y: float) -> IterationResult:
        return self.iterator.iterate_map(x, y, self.map_function)

    def get_description(self) -> str:
        return self.parameters.description


DEFAULT_TRAPS = ((0.0, 0.0), (0.1, 0.1), (0.2, 0.2), (0.3, 0.3))


@dataclass(frozen=True)
class OrbitTrapParameters(JuliaParameters):
    """Parameters for orbit-trap colored Julia sets."""

    traps: Tuple[Tuple[float, float], ...] = DEFAULT_TRAPS
    coloring: OrbitTrapColoring = OrbitTrapColoring()

    def validate(self) -> None:
        super().validate()
        if len(self.traps) == 0:
            raise ValueError("At least one orbit trap is required")
        if any(len(t) != 2 for t in self.traps):
            raise ValueError("Orbit traps must be (real, imag) pairs")
        if len(self.traps) != len(self.coloring.trap_colors):
            raise ValueError(f"{len(self.traps)} traps but "
                             f"{len(self.coloring.trap_colors)} trap colors")


class OrbitTrapJulia(JuliaSet):
    """Julia set colored by the orbit's closest approach to fixed trap points."""

    def __init__(self, parameters: Optional[OrbitTrapParameters] = None):
        if parameters is None:
            parameters = OrbitTrapParameters()
        EscapeTimeFractal.__init__(self, "Orbit Trap Julia", parameters)
        self.traps = tuple(complex(re, im) for re, im in parameters.traps)
        # brightness, when given, overrides the coloring's own scale
        coloring = parameters.coloring
        if parameters.brightness is not None:
            coloring = replace(coloring, brightness=parameters.brightness)
        self.coloring = coloring
        self.brightness = coloring.brightness

    def trap_distances(self, x: float, y: float) -> Tuple[Tuple[float, ...], IterationResult]:
        """Closest approach to every trap and the iteration result for (x, y)."""
        accumulator = OrbitTrapAccumulator(self.traps, self.iterator.escape_radius)
        result = iterate_with_traps(self.iterator, complex(x, y), self.parameters.c,
                                    julia_step, accumulator)
        return tuple(accumulator.distances), result

    def evaluate(self, x: float, y: float) -> Pixel:
        distances, result = self.trap_distances(x, y)
        intensity = result.get_smooth_intensity(self.iterator.escape_radius)
        return self.coloring.color(distances, intensity, x, y)

    def get_description(self) -> str:
        return (f"Orbit-trap Julia set with c = {self.parameters.c} "
                f"and {len(self.traps)} point traps")


@dataclass(frozen=True)
class NewtonParameters(FractalParameters):
    """Parameters for Newton basin fractals."""

    roots: Tuple[Tuple[float, float], ...] = ((1.0, 0.0), (-0.5, 0.8660254037844386), (-0.5, -0.8660254037844386))
    colors: Tuple[Tuple[int, int, int], ...] = ((0xf1, 0x5b, 0xb5), (0x0f, 0xbb, 0xb9), (0x9b, 0x5d, 0xe5))
    max_iter: int = 50
    epsilon: float = 1e-6

    def validate(self) -> None:
        """
        Validate Newton parameters.

        A root/color count mismatch is not rejected here; it is reported by
        NewtonFractal.check_configuration() before rendering.
        """
        if not isinstance(self.max_iter, int) or self.max_iter <= 0:
            raise ValueError("max_iter must be a positive integer")
        if not isinstance(self.epsilon, (int, float)) or self.epsilon <= 0:
            raise ValueError("epsilon must be positive")
        if any(len(r) != 2 for r in self.roots):
            raise ValueError("roots must be (real, imag) pairs")
        if any(len(c) != 3 for c in self.colors):
            raise ValueError("colors must be (r, g, b) triples")


class NewtonFractal(FractalType):
    """Newton basins of the monic polynomial with the given roots."""

    def __init__(self, parameters: Optional[NewtonParameters] = None):
        if parameters is None:
            parameters = NewtonParameters()
        super().__init__("Newton", parameters)
        self.solver = NewtonSolver(
            [complex(re, im) for re, im in parameters.roots],
            [Pixel(*c) for c in parameters.colors],
            max_iter=parameters.max_iter,
            epsilon=parameters.epsilon,
        )

    def evaluate(self, x: float, y: float) -> Pixel:
        return self.solver.evaluate(x, y)

    def check_configuration(self) -> None:
        self.solver.check()

    def get_description(self) -> str:
        return f"Newton fractal of the degree-{len(self.parameters.roots)} polynomial with the given roots"


class FractalRegistry:
    """Registry for managing available fractal types."""

    _fractals: Dict[str, type] = {
        'mandelbrot': MandelbrotSet,
        'julia': JuliaSet,
        'mandelbar': MandelbarSet,
        'orbit_trap': OrbitTrapJulia,
        'newton': NewtonFractal,
        'generic': GenericMapFractal,
    }

    _parameters: Dict[str, type] = {
        'mandelbrot': MandelbrotParameters,
        'julia': JuliaParameters,
        'mandelbar': MandelbarParameters,
        'orbit_trap': OrbitTrapParameters,
        'newton': NewtonParameters,
        'generic': GenericMapParameters,
    }

    @classmethod
    def register(cls, name: str, fractal_class: type, parameter_class: type) -> None:
        """
        Register a new fractal type.

        Args:
            name: Unique identifier for the fractal
            fractal_class: Class implementing the fractal
            parameter_class: Parameter dataclass accepted by the fractal
        """
        if not issubclass(fractal_class, FractalType):
            raise ValueError("Fractal class must inherit from FractalType")
        if not issubclass(parameter_class, FractalParameters):
            raise ValueError("Parameter class must inherit from FractalParameters")
        cls._fractals[name.lower()] = fractal_class
        cls._parameters[name.lower()] = parameter_class
        logger.info(f"Registered fractal type: {name}")

    @classmethod
    def get(cls, name: str) -> type:
        """
        Get a fractal class by name.

        Args:
            name: Fractal identifier

        Returns:
            Fractal class
        """
        fractal_class = cls._fractals.get(name.lower())
        if fractal_class is None:
            available = ', '.join(cls._fractals.keys())
            raise ValueError(f"Unknown fractal type '{name}'. Available: {available}")
        return fractal_class

    @classmethod
    def list_fractals(cls) -> Dict[str, str]:
        """Get a dictionary of available fractals and their descriptions."""
        result = {}
        for name, fractal_class in cls._fractals.items():
            if fractal_class is GenericMapFractal:
                continue
            result[name] = fractal_class().get_description()
        return result

    @classmethod
    def create_fractal(cls, name: str, **kwargs) -> FractalType:
        """
        Create a fractal instance with the given parameters.

        Args:
            name: Fractal type name
            **kwargs: Parameters for the fractal

        Returns:
            Configured fractal instance
        """
        fractal_class = cls.get(name)
        param_class = cls._parameters[name.lower()]

        if fractal_class is GenericMapFractal:
            map_function = kwargs.pop('map_function', None)
            if map_function is None:
                raise ValueError("Generic fractal requires 'map_function' parameter")
            return fractal_class(map_function, param_class(**kwargs))

        if kwargs:
            return fractal_class(param_class(**kwargs))
        return fractal_class()


# Predefined interesting Julia set constants
JULIA_PRESETS = {
    'giulia': JuliaParameters(c_real=-0.76, c_imag=0.1482),
    'dragon': JuliaParameters(c_real=-0.75, c_imag=0.1),
    'spiral': JuliaParameters(c_real=-0.4, c_imag=0.6),
    'dendrite': JuliaParameters(c_real=-0.235125, c_imag=0.827215),
    'rabbit': JuliaParameters(c_real=-0.123, c_imag=0.745),
    'airplane': JuliaParameters(c_real=-1.25, c_imag=0.0),
    'siegel_disk': JuliaParameters(c_real=-0.391, c_imag=-0.587),
}
