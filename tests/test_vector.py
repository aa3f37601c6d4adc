import pytest

from giulia.core.vector import Vector2


def test_componentwise_arithmetic():
    a = Vector2(1.0, 2.0)
    b = Vector2(0.5, -1.0)
    assert a + b == Vector2(1.5, 1.0)
    assert a - b == Vector2(0.5, 3.0)
    assert a * 2 == Vector2(2.0, 4.0)
    assert 2 * a == Vector2(2.0, 4.0)
    assert a / 2 == Vector2(0.5, 1.0)
    assert -a == Vector2(-1.0, -2.0)


def test_norms_and_unpacking():
    v = Vector2(3.0, 4.0)
    assert v.square_norm() == 25.0
    assert v.norm() == pytest.approx(5.0)
    x, y = v
    assert (x, y) == (3.0, 4.0)
    assert v[1] == 4.0
    assert len(v) == 2


def test_complex_conversion():
    v = Vector2.from_complex(1 - 2j)
    assert v == Vector2(1.0, -2.0)
    assert v.to_complex() == 1 - 2j
