import math

import pytest

from giulia.core.math_functions import (
    EscapeTimeIterator,
    IterationResult,
    julia_step,
    mandelbar_step,
    mandelbrot_step,
    normalized_iterations,
    smooth_intensity,
)
from giulia.core.vector import Vector2


def square_map(x, y):
    """z -> z^2 written on the real plane."""
    return x * x - y * y, 2 * x * y


def square_map_vector(x, y):
    return Vector2(x * x - y * y, 2 * x * y)


@pytest.mark.parametrize("z0", [complex(3, 0), complex(2, 0), complex(0, -2), complex(1.5, 1.5)])
def test_points_outside_radius_report_zero_iterations(z0):
    iterator = EscapeTimeIterator(max_iter=100, escape_radius=2.0)
    result = iterator.iterate(z0, z0, mandelbrot_step)
    assert result.iterations == 0
    assert result.final_value == z0
    assert result.escaped


@pytest.mark.parametrize("max_iter", [0, 1, 10, 250])
def test_origin_is_fixed_point_of_mandelbrot(max_iter):
    iterator = EscapeTimeIterator(max_iter=max_iter)
    result = iterator.iterate(0j, 0j, mandelbrot_step)
    assert result.iterations == max_iter + 1
    assert not result.escaped
    assert result.final_value == 0j


def test_zero_budget_degenerates_to_single_check():
    iterator = EscapeTimeIterator(max_iter=0)
    assert iterator.iterate(0.5j, 0.5j, mandelbrot_step).iterations == 1
    assert iterator.iterate(5 + 0j, 5 + 0j, mandelbrot_step).iterations == 0


def test_escaping_point_counts_steps():
    """c = 1: 0 -> 1 -> 2, and |2|^2 >= 4 stops the loop."""
    iterator = EscapeTimeIterator(max_iter=50)
    result = iterator.iterate(0j, 1 + 0j, mandelbrot_step)
    assert result.iterations == 2
    assert result.final_value == 2 + 0j
    assert result.square_modulus == pytest.approx(4.0)


def test_julia_step_uses_fixed_parameter():
    iterator = EscapeTimeIterator(max_iter=20)
    c = complex(-0.76, 0.1482)
    result = iterator.iterate(complex(0.1, 0.1), c, julia_step)

    z = complex(0.1, 0.1)
    i = 0
    while abs(z) ** 2 < 4 and i <= 20:
        z = z * z + c
        i += 1
    assert result.iterations == i
    assert result.final_value == pytest.approx(z)


def test_mandelbar_step_conjugates():
    assert mandelbar_step(1 + 1j, 0j) == pytest.approx(-2j)
    assert mandelbar_step(1 + 1j, 1 + 0j) == pytest.approx(1 - 2j)


def test_generic_map_accepts_tuple_or_vector():
    iterator = EscapeTimeIterator(max_iter=30)
    a = iterator.iterate_map(1.5, 0.0, square_map)
    b = iterator.iterate_map(1.5, 0.0, square_map_vector)
    assert a.iterations == b.iterations == 1
    assert a.final_value == pytest.approx(complex(2.25, 0.0))


def test_generic_map_matches_complex_iteration():
    iterator = EscapeTimeIterator(max_iter=40)
    for z0 in (complex(0.9, 0.3), complex(0.5, -0.2), complex(1.1, 0.0)):
        real = iterator.iterate_map(z0.real, z0.imag, square_map)
        cplx = iterator.iterate(z0, 0j, mandelbrot_step)
        assert real.iterations == cplx.iterations


def test_generic_map_outside_radius():
    iterator = EscapeTimeIterator(max_iter=30, escape_radius=2.0)
    assert iterator.iterate_map(0.0, 2.5, square_map).iterations == 0


@pytest.mark.parametrize("kwargs", [{"max_iter": -1}, {"escape_radius": 0.0}, {"escape_radius": -2.0}])
def test_iterator_rejects_invalid_parameters(kwargs):
    with pytest.raises(ValueError):
        EscapeTimeIterator(**kwargs)


def test_iteration_result_repr():
    result = IterationResult(1 + 0j, 3, 10)
    assert "iterations=3" in repr(result)


def test_smooth_intensity_formula():
    # |z| = 4, R = 2: ln|z| / ln R = 2 and log2(2) = 1
    assert smooth_intensity(16.0, 10, 100, 2.0) == pytest.approx(0.09)


def test_smooth_intensity_at_escape_radius_equals_ratio():
    assert smooth_intensity(4.0, 7, 100, 2.0) == pytest.approx(0.07)


@pytest.mark.parametrize("square_modulus", [4.0, 4.5, 10.0, 100.0, 1e6])
def test_smooth_intensity_monotonic_in_iterations(square_modulus):
    values = [smooth_intensity(square_modulus, i, 64, 2.0) for i in range(66)]
    assert all(b >= a for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("square_modulus", [0.0, 0.25, 1.0, float("nan"), float("inf")])
def test_smooth_intensity_falls_back_to_ratio(square_modulus):
    value = smooth_intensity(square_modulus, 101, 100, 2.0)
    assert value == pytest.approx(1.01)
    assert math.isfinite(value)


def test_smooth_intensity_degenerate_radius():
    assert smooth_intensity(9.0, 5, 10, 1.0) == pytest.approx(0.5)


def test_smooth_intensity_requires_positive_budget():
    with pytest.raises(ValueError):
        smooth_intensity(16.0, 0, 0)
    with pytest.raises(ValueError):
        normalized_iterations(1, 0)


def test_iteration_result_smooth_intensity():
    iterator = EscapeTimeIterator(max_iter=50)
    result = iterator.iterate(0j, 1 + 0j, mandelbrot_step)
    assert result.get_smooth_intensity(2.0) == pytest.approx(
        smooth_intensity(result.square_modulus, result.iterations, 50, 2.0))


def test_step_hook_sees_every_state():
    iterator = EscapeTimeIterator(max_iter=5)
    states = []
    result = iterator.iterate(0j, 0j, mandelbrot_step, on_step=states.append)
    assert len(states) == result.iterations == 6

    states.clear()
    result = iterator.iterate(1.5 + 0j, 1.5 + 0j, mandelbrot_step, on_step=states.append)
    assert len(states) == result.iterations == 1
    assert states[-1] == result.final_value
