import math

import numpy as np

from giulia.rendering.chaos_game import draw_sierpinski_triangle
from giulia.rendering.image import ImageBuffer
from giulia.rendering.pixel import WHITE, Pixel


def test_default_triangle_plots_vertices_and_points():
    image = ImageBuffer(64, 64)
    draw_sierpinski_triangle(image, iterations=2000, seed=1)

    y0 = 0.5 - math.sqrt(2) * 0.2
    assert image[image.index_of(0.1, y0)] == WHITE
    assert image[image.index_of(0.9, y0)] == WHITE
    assert np.count_nonzero(image.data.any(axis=1)) > 100


def test_seeded_drawing_is_deterministic():
    a = ImageBuffer(32, 32)
    b = ImageBuffer(32, 32)
    draw_sierpinski_triangle(a, iterations=500, seed=7, color=Pixel(255, 0, 0))
    draw_sierpinski_triangle(b, iterations=500, seed=7, color=Pixel(255, 0, 0))
    np.testing.assert_array_equal(a.data, b.data)
    assert set(map(tuple, a.data[a.data.any(axis=1)])) == {(255, 0, 0)}


def test_explicit_triangle_stays_in_bounds():
    image = ImageBuffer(20, 20)
    draw_sierpinski_triangle(image, x=0.0, y=0.0, width=0.5, iterations=300, seed=3)
    lit = np.argwhere(image.to_array().any(axis=2))
    rows, cols = lit[:, 0], lit[:, 1]
    assert cols.max() <= 10
    assert rows.min() >= 20 - 1 - int(20 * 0.5 * math.sqrt(2) / 2) - 1


def test_off_canvas_triangle_is_clipped():
    image = ImageBuffer(16, 16)
    draw_sierpinski_triangle(image, x=1.1, y=0.1, width=0.5, iterations=200, seed=5)
    assert not image.data.any()
