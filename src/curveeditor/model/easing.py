"""
Easing Functions
================
Deterministic remappings of normalized time [0, 1] to normalized progress.

Every family comes in four flavours: `_in`, `_out`, `_in_out` and `_out_in`.
All functions except the step (`warp_*`) family satisfy f(0) = 0 and
f(1) = 1. The `back_*` functions take an `overshoot`, the `elastic_*`
functions a `period` and an `amplitude`.

Functions are looked up by name through `EASINGS` / `get_easing`.
"""
from __future__ import annotations

import math
from typing import Callable

EaseFun = Callable[[float], float]

PI_HALF = math.pi / 2
PI2 = math.pi * 2
LN2 = 0.6931471805599453
LN2_10 = 6.931471805599453

DEFAULT_OVERSHOOT = 1.70158
DEFAULT_AMPLITUDE = 1.0
DEFAULT_PERIOD = 0.0003


def linear(t: float) -> float:
    return t


# === SINE ===

def sine_in(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    return 1 - math.cos(t * PI_HALF)


def sine_out(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    return math.sin(t * PI_HALF)


def sine_in_out(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    return -0.5 * (math.cos(math.pi * t) - 1)


def sine_out_in(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    if t < 0.5:
        return 0.5 * math.sin(t * 2 * PI_HALF)
    return -0.5 * math.cos((t * 2 - 1) * PI_HALF) + 1


# === QUAD ===

def quad_in(t: float) -> float:
    return t * t


def quad_out(t: float) -> float:
    return -t * (t - 2)


def quad_in_out(t: float) -> float:
    if t < 0.5:
        return 2 * t * t
    return -2 * t * (t - 2) - 1


def quad_out_in(t: float) -> float:
    if t < 0.5:
        t *= 2
        return -0.5 * t * (t - 2)
    t = t * 2 - 1
    return 0.5 * t * t + 0.5


# === CUBIC ===

def cubic_in(t: float) -> float:
    return t * t * t


def cubic_out(t: float) -> float:
    t -= 1
    return t * t * t + 1


def cubic_in_out(t: float) -> float:
    t *= 2
    if t < 1:
        return 0.5 * t * t * t
    t -= 2
    return 0.5 * (t * t * t + 2)


def cubic_out_in(t: float) -> float:
    t = t * 2 - 1
    return 0.5 * (t * t * t + 1)


# === QUART ===

def quart_in(t: float) -> float:
    return t ** 4


def quart_out(t: float) -> float:
    return 1 - (t - 1) ** 4


def quart_in_out(t: float) -> float:
    t *= 2
    if t < 1:
        return 0.5 * t ** 4
    return -0.5 * ((t - 2) ** 4 - 2)


def quart_out_in(t: float) -> float:
    u = (t * 2 - 1) ** 4
    if t < 0.5:
        return -0.5 * u + 0.5
    return 0.5 * u + 0.5


# === QUINT ===

def quint_in(t: float) -> float:
    return t ** 5


def quint_out(t: float) -> float:
    return (t - 1) ** 5 + 1


def quint_in_out(t: float) -> float:
    t *= 2
    if t < 1:
        return 0.5 * t ** 5
    return 0.5 * (t - 2) ** 5 + 1


def quint_out_in(t: float) -> float:
    return 0.5 * ((t * 2 - 1) ** 5 + 1)


# === EXPONENTIAL ===

def expo_in(t: float) -> float:
    return 0.0 if t == 0 else math.exp(LN2_10 * (t - 1))


def expo_out(t: float) -> float:
    return 1.0 if t == 1 else 1 - math.exp(-LN2_10 * t)


def expo_in_out(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    t *= 2
    if t < 1:
        return 0.5 * math.exp(LN2_10 * (t - 1))
    return 0.5 * (2 - math.exp(-LN2_10 * (t - 1)))


def expo_out_in(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    if t < 0.5:
        return 0.5 * (1 - math.exp(-20 * LN2 * t))
    if t == 0.5:
        return 0.5
    return 0.5 * (math.exp(20 * LN2 * (t - 1)) + 1)


# === CIRCULAR ===

def circ_in(t: float) -> float:
    if t < -1 or 1 < t:
        return 0.0
    return 1 - math.sqrt(1 - t * t)


def circ_out(t: float) -> float:
    if t < 0 or 2 < t:
        return 0.0
    return math.sqrt(t * (2 - t))


def circ_in_out(t: float) -> float:
    if t < -0.5 or 1.5 < t:
        return 0.5
    t *= 2
    if t < 1:
        return -0.5 * (math.sqrt(1 - t * t) - 1)
    t -= 2
    return 0.5 * (math.sqrt(1 - t * t) + 1)


def circ_out_in(t: float) -> float:
    if t < 0:
        return 0.0
    if 1 < t:
        return 1.0
    u = t * 2 - 1
    if t < 0.5:
        return 0.5 * math.sqrt(1 - u * u)
    return -0.5 * ((math.sqrt(1 - u * u) - 1) - 1)


# === BOUNCE ===

_BOUNCE_N = 7.5625
_BOUNCE_D = 2.75


def _bounce(t: float) -> float:
    """Plain bounce-out curve shared by the whole family."""
    if t < 1 / _BOUNCE_D:
        return _BOUNCE_N * t * t
    if t < 2 / _BOUNCE_D:
        t -= 1.5 / _BOUNCE_D
        return _BOUNCE_N * t * t + 0.75
    if t < 2.5 / _BOUNCE_D:
        t -= 2.25 / _BOUNCE_D
        return _BOUNCE_N * t * t + 0.9375
    t -= 2.625 / _BOUNCE_D
    return _BOUNCE_N * t * t + 0.984375


def bounce_in(t: float) -> float:
    return 1 - _bounce(1 - t)


def bounce_out(t: float) -> float:
    return _bounce(t)


def bounce_in_out(t: float) -> float:
    if t < 0.5:
        return (1 - _bounce(1 - t * 2)) * 0.5
    return _bounce(t * 2 - 1) * 0.5 + 0.5


def bounce_out_in(t: float) -> float:
    if t < 0.5:
        return 0.5 * _bounce(t * 2)
    return 0.5 - 0.5 * _bounce(1 - (t * 2 - 1)) + 0.5


# === BACK ===

def back_in(t: float, overshoot: float = DEFAULT_OVERSHOOT) -> float:
    return (overshoot + 1) * t * t * t - overshoot * t * t


def back_out(t: float, overshoot: float = DEFAULT_OVERSHOOT) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    t -= 1
    return t * t * ((overshoot + 1) * t + overshoot) + 1


def back_in_out(t: float, overshoot: float = DEFAULT_OVERSHOOT) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    s = overshoot * 1.525
    t *= 2
    if t < 1:
        return 0.5 * (t * t * ((s + 1) * t - s))
    t -= 2
    return 0.5 * (t * t * ((s + 1) * t + s) + 2)


def back_out_in(t: float, overshoot: float = DEFAULT_OVERSHOOT) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    u = t * 2 - 1
    if t < 0.5:
        return 0.5 * (u * u * ((overshoot + 1) * u + overshoot) + 1)
    return 0.5 * u * u * ((overshoot + 1) * u - overshoot) + 0.5


# === ELASTIC ===

def _elastic_wave(t: float, period: float) -> float:
    s = period / 4
    return math.sin((t * 0.001 - s) * PI2 / period)


def elastic_in(t: float, period: float = DEFAULT_PERIOD, amplitude: float = DEFAULT_AMPLITUDE) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    t -= 1
    return -(amplitude * math.exp(LN2_10 * t) * _elastic_wave(t, period))


def elastic_out(t: float, period: float = DEFAULT_PERIOD, amplitude: float = DEFAULT_AMPLITUDE) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    return amplitude * math.exp(-LN2_10 * t) * _elastic_wave(t, period) + 1


def elastic_in_out(t: float, period: float = DEFAULT_PERIOD, amplitude: float = DEFAULT_AMPLITUDE) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    t = t * 2 - 1
    if t < 0:
        return -0.5 * (amplitude * math.exp(LN2_10 * t) * _elastic_wave(t, period))
    return amplitude * math.exp(-LN2_10 * t) * _elastic_wave(t, period) * 0.5 + 1


def elastic_out_in(t: float, period: float = DEFAULT_PERIOD, amplitude: float = DEFAULT_AMPLITUDE) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    if t < 0.5:
        t *= 2
        return (amplitude / 2) * math.exp(-LN2_10 * t) * _elastic_wave(t, period) + 0.5
    if t == 0.5:
        return 0.5
    t = t * 2 - 2
    return -((amplitude / 2) * math.exp(LN2_10 * t) * _elastic_wave(t, period)) + 0.5


# === WARP (step) ===

def warp_in(t: float) -> float:
    return 0.0 if t < 1 else 1.0


def warp_out(t: float) -> float:
    return 0.0 if t <= 0 else 1.0


def warp_in_out(t: float) -> float:
    return 0.0 if t < 0.5 else 1.0


def warp_out_in(t: float) -> float:
    if t <= 0:
        return 0.0
    if t < 1:
        return 0.5
    return 1.0


# === REGISTRY ===

EASINGS: dict[str, EaseFun] = {
    "linear": linear,
    "sine_in": sine_in,
    "sine_out": sine_out,
    "sine_in_out": sine_in_out,
    "sine_out_in": sine_out_in,
    "quad_in": quad_in,
    "quad_out": quad_out,
    "quad_in_out": quad_in_out,
    "quad_out_in": quad_out_in,
    "cubic_in": cubic_in,
    "cubic_out": cubic_out,
    "cubic_in_out": cubic_in_out,
    "cubic_out_in": cubic_out_in,
    "quart_in": quart_in,
    "quart_out": quart_out,
    "quart_in_out": quart_in_out,
    "quart_out_in": quart_out_in,
    "quint_in": quint_in,
    "quint_out": quint_out,
    "quint_in_out": quint_in_out,
    "quint_out_in": quint_out_in,
    "expo_in": expo_in,
    "expo_out": expo_out,
    "expo_in_out": expo_in_out,
    "expo_out_in": expo_out_in,
    "circ_in": circ_in,
    "circ_out": circ_out,
    "circ_in_out": circ_in_out,
    "circ_out_in": circ_out_in,
    "bounce_in": bounce_in,
    "bounce_out": bounce_out,
    "bounce_in_out": bounce_in_out,
    "bounce_out_in": bounce_out_in,
    "back_in": back_in,
    "back_out": back_out,
    "back_in_out": back_in_out,
    "back_out_in": back_out_in,
    "elastic_in": elastic_in,
    "elastic_out": elastic_out,
    "elastic_in_out": elastic_in_out,
    "elastic_out_in": elastic_out_in,
}

STEP_EASINGS: dict[str, EaseFun] = {
    "warp_in": warp_in,
    "warp_out": warp_out,
    "warp_in_out": warp_in_out,
    "warp_out_in": warp_out_in,
}


def get_easing(name: str) -> EaseFun:
    """Look up an easing (including the step family) by name."""
    func = EASINGS.get(name) or STEP_EASINGS.get(name)
    if func is None:
        raise KeyError(f"No easing registered for name '{name}'")
    return func


def list_easings() -> list[str]:
    return list(EASINGS.keys()) + list(STEP_EASINGS.keys())
