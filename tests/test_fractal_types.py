import pytest

from giulia.core.fractal_types import (
    JULIA_PRESETS,
    FractalRegistry,
    GenericMapFractal,
    GenericMapParameters,
    JuliaParameters,
    JuliaSet,
    MandelbarParameters,
    MandelbarSet,
    MandelbrotParameters,
    MandelbrotSet,
    NewtonFractal,
    OrbitTrapJulia,
    OrbitTrapParameters,
)
from giulia.core.math_functions import smooth_intensity
from giulia.rendering.coloring import OrbitTrapColoring
from giulia.rendering.pixel import BLACK, WHITE, Pixel


def square_map(x, y):
    return x * x - y * y, 2 * x * y


def test_mandelbrot_interior_and_exterior():
    fractal = MandelbrotSet(MandelbrotParameters(max_iter=100))
    assert fractal.iterate(0.0, 0.0).iterations == 101
    assert fractal.evaluate(0.0, 0.0) == WHITE
    assert fractal.iterate(3.0, 3.0).iterations == 0
    assert fractal.evaluate(3.0, 3.0) == BLACK


def test_mandelbrot_gray_scale_mapping():
    fractal = MandelbrotSet(MandelbrotParameters(max_iter=200))
    result = fractal.iterate(0.5, 0.5)
    assert result.escaped
    intensity = smooth_intensity(result.square_modulus, result.iterations, 200, 2.0)
    expected = 255 * (0.04 * 200) * intensity
    pixel = fractal.evaluate(0.5, 0.5)
    assert pixel == Pixel(expected, expected, expected)
    assert pixel.r == pixel.g == pixel.b


def test_brightness_defaults_per_family():
    assert MandelbrotSet(MandelbrotParameters(max_iter=100)).brightness == pytest.approx(4.0)
    assert JuliaSet(JuliaParameters(max_iter=100)).brightness == pytest.approx(0.5)
    assert JuliaSet(JuliaParameters(max_iter=100, brightness=2.0)).brightness == 2.0


def test_julia_uses_fixed_constant():
    fractal = JuliaSet(JuliaParameters(max_iter=50, c_real=0.0, c_imag=0.0))
    # z -> z^2 keeps the unit disk bounded
    assert not fractal.iterate(0.5, 0.5).escaped
    assert fractal.iterate(1.2, 0.0).escaped
    assert fractal.parameters.c == 0j


def test_mandelbar_differs_from_mandelbrot():
    mandelbar = MandelbarSet(MandelbarParameters(max_iter=100))
    mandelbrot = MandelbrotSet(MandelbrotParameters(max_iter=100))
    assert not mandelbar.iterate(0.0, 0.0).escaped
    assert mandelbar.iterate(3.0, 0.0).iterations == 0
    counts = [(mandelbar.iterate(x, 0.3).iterations, mandelbrot.iterate(x, 0.3).iterations)
              for x in (-1.5, -0.8, 0.3, 0.45)]
    assert any(a != b for a, b in counts)


def test_generic_map_fractal():
    fractal = GenericMapFractal(square_map, GenericMapParameters(max_iter=40))
    assert not fractal.iterate(0.5, 0.0).escaped
    assert fractal.iterate(1.5, 0.0).iterations == 1
    assert fractal.evaluate(0.5, 0.0) == WHITE
    with pytest.raises(ValueError):
        GenericMapFractal("not callable")


def test_orbit_trap_julia_distances_bounded():
    fractal = OrbitTrapJulia(OrbitTrapParameters(max_iter=200))
    distances, result = fractal.trap_distances(0.1, 0.2)
    assert len(distances) == 4
    assert all(0.0 <= d <= 2.0 for d in distances)
    assert result.iterations == JuliaSet(JuliaParameters(max_iter=200)).iterate(0.1, 0.2).iterations
    assert isinstance(fractal.evaluate(0.1, 0.2), Pixel)


def test_orbit_trap_brightness_parameter_scales_color():
    default = OrbitTrapJulia(OrbitTrapParameters(max_iter=200))
    dim = OrbitTrapJulia(OrbitTrapParameters(max_iter=200, brightness=0.001))
    bright = OrbitTrapJulia(OrbitTrapParameters(max_iter=200, brightness=1000.0))

    assert default.brightness == OrbitTrapColoring().brightness
    assert dim.brightness == 0.001

    distances, result = dim.trap_distances(0.3, 0.2)
    intensity = result.get_smooth_intensity(2.0)
    expected = OrbitTrapColoring(brightness=0.001).color(distances, intensity, 0.3, 0.2)
    assert dim.evaluate(0.3, 0.2) == expected
    assert sum(dim.evaluate(0.3, 0.2).to_tuple()) < sum(bright.evaluate(0.3, 0.2).to_tuple())


def test_orbit_trap_vignette_darkens_far_points():
    coloring = OrbitTrapColoring()
    distances = (0.5, 0.5, 0.5, 0.5)
    center = coloring.color(distances, 0.01, 0.0, 0.0)
    edge = coloring.color(distances, 0.01, 1.5, 1.5)
    assert sum(edge.to_tuple()) < sum(center.to_tuple())


def test_orbit_trap_blend_in_trap_order():
    coloring = OrbitTrapColoring(base_color=(0, 0, 0), trap_colors=((100, 0, 0), (0, 100, 0)))
    blended = coloring.blend((1.0, 0.5))
    assert tuple(blended) == pytest.approx((50.0, 50.0, 0.0))
    with pytest.raises(ValueError):
        coloring.blend((1.0,))


def test_orbit_trap_parameters_must_match_colors():
    with pytest.raises(ValueError):
        OrbitTrapJulia(OrbitTrapParameters(traps=((0.0, 0.0),)))


@pytest.mark.parametrize("params", [
    MandelbrotParameters(max_iter=0),
    MandelbrotParameters(escape_radius=-1.0),
])
def test_invalid_parameters_rejected(params):
    with pytest.raises(ValueError):
        MandelbrotSet(params)


def test_julia_parameter_validation():
    with pytest.raises(ValueError):
        JuliaSet(JuliaParameters(c_real="0.3"))


def test_parameters_round_trip():
    params = JuliaParameters(max_iter=321, c_real=0.1, c_imag=-0.2)
    assert JuliaParameters.from_dict(params.to_dict()) == params


def test_registry_creates_fractals():
    julia = FractalRegistry.create_fractal('julia', c_real=0.0, c_imag=0.5)
    assert isinstance(julia, JuliaSet)
    assert julia.parameters.c == 0.5j
    assert isinstance(FractalRegistry.create_fractal('Mandelbrot'), MandelbrotSet)
    assert isinstance(FractalRegistry.create_fractal('newton'), NewtonFractal)

    generic = FractalRegistry.create_fractal('generic', map_function=square_map, max_iter=10)
    assert isinstance(generic, GenericMapFractal)
    assert generic.parameters.max_iter == 10


def test_registry_errors():
    with pytest.raises(ValueError):
        FractalRegistry.get('burning_ship')
    with pytest.raises(ValueError):
        FractalRegistry.create_fractal('generic')
    with pytest.raises(ValueError):
        FractalRegistry.register('bad', object, JuliaParameters)


def test_registry_lists_descriptions():
    listed = FractalRegistry.list_fractals()
    assert set(listed) == {'mandelbrot', 'julia', 'mandelbar', 'orbit_trap', 'newton'}
    assert all(isinstance(d, str) and d for d in listed.values())


def test_julia_presets_are_valid():
    for name, params in JULIA_PRESETS.items():
        JuliaSet(params)
    assert JULIA_PRESETS['giulia'].c == complex(-0.76, 0.1482)
