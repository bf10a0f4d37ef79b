"""
Bezier Geometry Utilities
=========================
Per-axis cubic bezier evaluation and the exact axis-aligned bounding box
of a cubic segment, found from the roots of its derivative.

Functions:
    cubic_bezier_value: Bernstein evaluation on one axis.
    derivative_roots: Interior extrema parameters on one axis.
    bezier_min_max: Bounding `Rect` of a 2D cubic.
"""
from __future__ import annotations

from math import sqrt

import numpy as np

from curveeditor.config import ROOT_EPSILON
from curveeditor.model.geometry_primitives import Point, Rect


def cubic_bezier_value(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    """Bernstein form of a cubic bezier on a single axis."""
    mt = 1.0 - t
    return mt * mt * mt * p0 + 3 * mt * mt * t * p1 + 3 * mt * t * t * p2 + t * t * t * p3


def derivative_roots(
    p0: float,
    p1: float,
    p2: float,
    p3: float,
    *,
    eps: float = ROOT_EPSILON
    ) -> list[float]:
    """
    Parameters in the open interval (0, 1) where the derivative of a
    one-axis cubic bezier vanishes.

    Args:
        p0, p1, p2, p3: Control values of the cubic on one axis.
        eps: Tolerance for the zero checks on the leading coefficient and
             the discriminant.

    Returns:
        A list containing 0, 1 or 2 parameters, each strictly inside (0, 1).

    Notes:
        - The derivative of the cubic (up to a factor) is a t^2 + b t + c with:
          a = -3 p0 + 9 p1 - 9 p2 + 3 p3
          b = 6 p0 - 12 p1 + 6 p2
          c = 3 p1 - 3 p0
        - If `a` ~ 0 the derivative is linear, root -c / b (none if `b` ~ 0 too).
        - A discriminant ~ 0 yields the single root -b / (2a).
    """
    a = -3 * p0 + 9 * p1 - 9 * p2 + 3 * p3
    b = 6 * p0 - 12 * p1 + 6 * p2
    c = 3 * p1 - 3 * p0

    # degenerate to linear
    if abs(a) < eps:
        if abs(b) < eps:
            return []
        t = -c / b
        return [t] if 0.0 < t < 1.0 else []

    disc = b * b - 4.0 * a * c

    # tangent: one (double) root
    if abs(disc) < eps:
        t = -b / (2.0 * a)
        return [t] if 0.0 < t < 1.0 else []

    # no real extremum
    if disc < 0.0:
        return []

    sqrt_disc = sqrt(disc)
    t1 = (-b + sqrt_disc) / (2.0 * a)
    t2 = (-b - sqrt_disc) / (2.0 * a)
    return [t for t in (t1, t2) if 0.0 < t < 1.0]


def bezier_min_max(p0: Point, p1: Point, p2: Point, p3: Point) -> Rect:
    """
    Exact axis-aligned bounding box of a cubic bezier.

    Each axis is searched independently for interior extrema; the curve is
    evaluated at every extremum and at both endpoints (t = 0 and t = 1),
    so extrema lying on the endpoints are never lost.

    Args:
        p0: Start point.
        p1: First control point.
        p2: Second control point.
        p3: End point.

    Returns:
        The rectangle spanning the componentwise minimum and maximum.
    """
    ts = derivative_roots(p0.x, p1.x, p2.x, p3.x) + derivative_roots(p0.y, p1.y, p2.y, p3.y)

    xs = np.array([cubic_bezier_value(p0.x, p1.x, p2.x, p3.x, t) for t in ts] + [p0.x, p3.x])
    ys = np.array([cubic_bezier_value(p0.y, p1.y, p2.y, p3.y, t) for t in ts] + [p0.y, p3.y])

    return Rect.from_bounds(float(xs.min()), float(ys.min()), float(xs.max()), float(ys.max()))
