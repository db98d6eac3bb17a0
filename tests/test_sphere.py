import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from blockworld.sphere import fibonacci_spiral


def test_empty():
    assert list(fibonacci_spiral(0)) == []


def test_first_point_is_pole():
    x, y, z = next(fibonacci_spiral(10))
    assert x == pytest.approx(0.0)
    assert y == pytest.approx(0.0)
    assert z == pytest.approx(1.0)


@given(st.integers(min_value=1, max_value=300))
def test_points_on_unit_sphere(n):
    points = list(fibonacci_spiral(n))
    assert len(points) == n
    for point in points:
        assert math.hypot(*point) == pytest.approx(1.0)


@given(st.integers(min_value=2, max_value=300))
def test_z_strictly_decreasing(n):
    zs = [p[2] for p in fibonacci_spiral(n)]
    assert all(a > b for a, b in zip(zs, zs[1:]))
    assert all(-1.0 <= z <= 1.0 for z in zs)


def test_centroid_near_origin():
    points = list(fibonacci_spiral(200))
    for axis in range(3):
        mean = sum(p[axis] for p in points) / len(points)
        assert abs(mean) < 0.05


def test_points_distinct():
    points = list(fibonacci_spiral(100))
    assert len({tuple(round(c, 9) for c in p) for p in points}) == 100