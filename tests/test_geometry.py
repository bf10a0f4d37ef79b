"""Tests for the canvas primitives and the cubic bounding box."""
from __future__ import annotations

import math

import pytest

from curveeditor.model.geometry_primitives import Point, Rect, Vector
from curveeditor.model.geometry_utils import bezier_min_max, cubic_bezier_value, derivative_roots


def test_point_vector_arithmetic() -> None:
    a = Point(1.0, 2.0)
    b = Point(4.0, 6.0)
    assert b - a == Vector(3.0, 4.0)
    assert (b - a).magnitude == 5.0
    assert a + Vector(1.0, 1.0) == Point(2.0, 3.0)
    assert a - Vector(1.0, 1.0) == Point(0.0, 1.0)
    assert a.distance_to(b) == 5.0
    with pytest.raises(TypeError):
        a + b


def test_polar_vector_and_angle() -> None:
    v = Vector.from_polar(2.0, math.pi / 2)
    assert v.x == pytest.approx(0.0, abs=1e-12)
    assert v.y == pytest.approx(2.0)
    assert Point(0.0, 0.0).angle_to(Point(0.0, -5.0)) == pytest.approx(-math.pi / 2)


def test_rect_clamp_and_contains() -> None:
    rect = Rect.from_size(10.0, 0.0, 0.0, 50.0)
    assert rect.width == 0.0
    assert rect.height == 50.0
    assert rect.clamp(Point(30.0, 70.0)) == Point(10.0, 50.0)
    assert rect.clamp(Point(-5.0, -5.0)) == Point(10.0, 0.0)
    assert rect.contains(Point(10.0, 25.0))
    assert not rect.contains(Point(11.0, 25.0))


def test_derivative_roots_degenerate_cases() -> None:
    # constant
    assert derivative_roots(1.0, 1.0, 1.0, 1.0) == []
    # straight line with evenly spaced controls: derivative is constant
    assert derivative_roots(0.0, 1.0, 2.0, 3.0) == []
    # quadratic-like arch: single linear root at the middle
    assert derivative_roots(0.0, 10.0, 10.0, 0.0) == [pytest.approx(0.5)]


def test_collinear_bbox() -> None:
    box = bezier_min_max(Point(0, 0), Point(2, 2), Point(8, 8), Point(10, 10))
    assert box == Rect(0.0, 0.0, 10.0, 10.0)


def test_bbox_with_interior_extremum() -> None:
    box = bezier_min_max(Point(0, 0), Point(0, 10), Point(10, 10), Point(10, 0))
    assert box.left == 0.0
    assert box.right == 10.0
    assert box.top == 0.0
    assert box.bottom == pytest.approx(7.5)


def test_bbox_contains_sampled_curve() -> None:
    p0, p1, p2, p3 = Point(0, 50), Point(-40, -30), Point(90, 120), Point(60, 40)
    box = bezier_min_max(p0, p1, p2, p3)
    for i in range(101):
        t = i / 100
        x = cubic_bezier_value(p0.x, p1.x, p2.x, p3.x, t)
        y = cubic_bezier_value(p0.y, p1.y, p2.y, p3.y, t)
        assert box.left - 1e-9 <= x <= box.right + 1e-9
        assert box.top - 1e-9 <= y <= box.bottom + 1e-9
    assert box.left < 0.0
    assert box.bottom > 50.0
