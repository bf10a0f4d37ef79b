"""
Interpolation Helpers & Easing Combinators
==========================================
Small numeric tools to build tweens from a normalized ratio: lerps,
wrapping / repeating time, bezier blends over plain values, and
combinators that take easing functions as values and build new curves.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable, Optional, Sequence

import numpy as np

from curveeditor.model.easing import EaseFun, linear

logger = logging.getLogger(__name__)

_RNG = np.random.default_rng()

CUBIC_MAX_ITERATIONS = 64


# ==========================================
# BASIC LERPS
# ==========================================

def lerp(rate: float, start: float, end: float) -> float:
    return start * (1.0 - rate) + end * rate


def inverse_lerp(value: float, start: float, end: float) -> float:
    return (value - start) / (end - start)


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    """Clamps a `value` between `lower` and `upper`."""
    if value <= lower:
        return lower
    if value >= upper:
        return upper
    return value


def spread(rate: float, scale: float) -> float:
    return lerp(rate, -scale, scale)


def shake(rate: float, center: float = 0.0, random_callback: Optional[Callable[[], float]] = None) -> float:
    """Random offset in [-rate, rate] around `center`."""
    sample = random_callback() if random_callback is not None else float(_RNG.random())
    return center + spread(sample, rate)


def sin_rate(rate: float) -> float:
    return math.sin(rate * 2 * math.pi)


def cos_rate(rate: float) -> float:
    return math.cos(rate * 2 * math.pi)


def revert(rate: float) -> float:
    return 1.0 - clamp(rate)


def valid_lerp(rate: float) -> bool:
    return 0.0 <= rate <= 1.0


# ==========================================
# TIME WRAPPING
# ==========================================

def wrap_lerp(value: float, end: float, start: float = 0.0, clamped: bool = True) -> float:
    """
    Wrap a running value (frames, milliseconds) into a normalized ratio that
    loops every `end` units. `start` acts as a delay: the ratio stays at 0
    until the wrapped value reaches it.

    Example:
        # waits 20 frames, runs until frame 80, then loops
        t = wrap_lerp(frame, 80, 20)
    """
    result = inverse_lerp(value % end, start, end)
    return clamp(result) if clamped else result


def inverse_wrap_lerp(value: float, wrapped_rate: float, start: float, end: float, clamped: bool = True) -> float:
    """
    Sets bounds (delay `start`, duration `end`) on a ratio previously
    wrapped by `wrap_lerp` over `wrapped_rate` units.
    """
    result = inverse_lerp(value, start / wrapped_rate, end / wrapped_rate)
    return clamp(result) if clamped else result


def repeat_lerp(rate: float, times: float) -> float:
    """Repeat a normalized ratio `times` times within [0, 1]."""
    inv_repeat = 1.0 / times
    return inverse_lerp(rate % inv_repeat, 0.0, inv_repeat)


# ==========================================
# EASING COMBINATORS
# ==========================================

def mix(rate: float, easing1: EaseFun, easing2: EaseFun, easing2_weight: float = 0.5) -> float:
    """Linear blend of two easings' outputs, `easing2_weight` of the second."""
    return lerp(easing2_weight, easing1(rate), easing2(rate))


def crossfade(
    rate: float,
    easing1: EaseFun,
    easing2: EaseFun,
    weight_easing: EaseFun,
    weight_start: float = 0.0,
    weight_end: float = 1.0,
) -> float:
    """Blend of two easings where the blend weight itself is eased and remapped to [weight_start, weight_end]."""
    weight = lerp(weight_easing(rate), weight_start, weight_end)
    return lerp(weight, easing1(rate), easing2(rate))


def connect(
    rate: float,
    easing1: EaseFun,
    easing2: EaseFun,
    switch_time: float = 0.5,
    switch_value: float = 0.5,
) -> float:
    """
    Play `easing1` until `switch_time` (output in [0, switch_value]), then
    `easing2` (output in [switch_value, 1]). Each half is renormalized.
    """
    if rate < switch_time:
        return lerp(easing1(inverse_lerp(rate, 0.0, switch_time)), 0.0, switch_value)
    return lerp(easing2(inverse_lerp(rate, switch_time, 1.0)), switch_value, 1.0)


def yoyo(rate: float, ease: EaseFun = linear) -> float:
    """First half plays `ease` forward, second half plays it backward."""
    if rate < 0.5:
        return ease(rate * 2)
    return ease((1 - rate) * 2)


def reverse(rate: float, ease: EaseFun = linear) -> float:
    """First half plays `ease`, second half outputs its complement."""
    if rate < 0.5:
        return ease(rate * 2)
    return 1 - ease((rate - 0.5) * 2)


# ==========================================
# BEZIER BLENDS OVER VALUES
# ==========================================

def bezier2(rate: float, start: float, control: float, end: float) -> float:
    """Quadratic bezier through (start, control, end)."""
    return lerp(rate, lerp(rate, start, control), lerp(rate, control, end))


def bezier3(rate: float, start: float, control1: float, control2: float, end: float) -> float:
    """Cubic bezier through (start, control1, control2, end)."""
    return bezier2(
        rate,
        lerp(rate, start, control1),
        lerp(rate, control1, control2),
        lerp(rate, control2, end),
    )


def bezier(rate: float, values: Sequence[float]) -> float:
    """Bezier curve of arbitrary degree over `values` (de Casteljau)."""
    values = list(values)
    if len(values) < 2:
        raise ValueError("points length must be at least 2")
    if len(values) == 2:
        return lerp(rate, values[0], values[1])
    if len(values) == 3:
        return bezier2(rate, *values)
    if len(values) == 4:
        return bezier3(rate, *values)

    reduced = [lerp(rate, a, b) for a, b in zip(values[:-1], values[1:])]
    return bezier(rate, reduced)


def uniform_quad_bspline(rate: float, values: Sequence[float]) -> float:
    """Uniform quadratic B-spline over `values`; each span runs between midpoints of consecutive values."""
    values = list(values)
    if len(values) < 2:
        raise ValueError("points length must be at least 2")
    if len(values) == 2:
        return lerp(rate, values[0], values[1])

    max_index = len(values) - 2
    scaled = rate * max_index
    index = int(min(max(math.floor(scaled), 0), max_index - 1))
    inner = scaled - index
    p0, p1, p2 = values[index], values[index + 1], values[index + 2]
    return inner * inner * (p0 / 2 - p1 + p2 / 2) + inner * (-p0 + p1) + (p0 + p1) / 2


def polyline(rate: float, values: Sequence[float]) -> float:
    """Piecewise linear interpolation over evenly spaced `values`."""
    values = list(values)
    if len(values) < 2:
        raise ValueError("points length must be at least 2")

    max_index = len(values) - 1
    scaled = rate * max_index
    index = int(math.floor(min(max(scaled, 0), max_index - 1)))
    return lerp(scaled - index, values[index], values[index + 1])


# ==========================================
# CUBIC-BEZIER TIMING FUNCTION
# ==========================================

def _evaluate_cubic(a: float, b: float, m: float) -> float:
    return 3 * a * (1 - m) * (1 - m) * m + 3 * b * (1 - m) * m * m + m * m * m


def cubic(
    rate: float,
    a: float,
    b: float,
    c: float,
    d: float,
    resolution: float = 1e-3,
    max_iterations: int = CUBIC_MAX_ITERATIONS,
) -> float:
    """
    Cubic-bezier timing function with control points (a, b) and (c, d),
    like CSS `cubic-bezier(a, b, c, d)`.

    Bisects the parameter `m` until the x component (a, c) is within
    `resolution` of `rate`, then returns the y component (b, d) at `m`.

    Args:
        rate: Normalized time.
        a, b: First control point (x, y).
        c, d: Second control point (x, y).
        resolution: Accepted error on the x component.
        max_iterations: Bisection cap. Past it the last midpoint is used.
    """
    if rate == 0.0 or rate == 1.0:
        return rate

    start = 0.0
    end = 1.0
    midpoint = 0.5
    for _ in range(max_iterations):
        midpoint = (start + end) / 2
        estimate = _evaluate_cubic(a, c, midpoint)
        if abs(rate - estimate) < resolution:
            return _evaluate_cubic(b, d, midpoint)
        if estimate < rate:
            start = midpoint
        else:
            end = midpoint

    logger.debug(f"cubic({rate}, {a}, {b}, {c}, {d}) did not reach resolution {resolution} "
                 f"after {max_iterations} iterations.")
    return _evaluate_cubic(b, d, midpoint)


@dataclass(frozen=True)
class CubicParams:
    """
    Reusable cubic-bezier easing, callable like any other easing.

    Example:
        ease = CubicParams(0.25, 0.1, 0.25, 1.0)
        x = lerp(yoyo(t, ease), 0, 100)
    """
    a: float
    b: float
    c: float
    d: float

    def __call__(self, rate: float) -> float:
        return cubic(rate, self.a, self.b, self.c, self.d)


def ease_cubic(a: float, b: float, c: float, d: float) -> EaseFun:
    """Easing callback for the cubic-bezier timing function (a, b, c, d)."""
    return CubicParams(a, b, c, d)
