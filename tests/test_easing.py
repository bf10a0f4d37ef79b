"""Tests for the easing families and the easing registry."""
from __future__ import annotations

import pytest

from curveeditor.model import easing
from curveeditor.model.easing import EASINGS, STEP_EASINGS, get_easing, list_easings


@pytest.mark.parametrize("name", sorted(EASINGS))
def test_endpoints(name: str) -> None:
    func = EASINGS[name]
    assert abs(func(0.0)) < 1e-9
    assert abs(func(1.0) - 1.0) < 1e-9


@pytest.mark.parametrize("name", [n for n in EASINGS if n.endswith("_in_out") or n.endswith("_out_in")])
def test_symmetric_midpoint(name: str) -> None:
    assert EASINGS[name](0.5) == pytest.approx(0.5, abs=1e-6)


def test_in_out_mirror_each_other() -> None:
    for family in ("sine", "quad", "cubic", "quart", "quint", "circ"):
        ease_in = EASINGS[f"{family}_in"]
        ease_out = EASINGS[f"{family}_out"]
        for t in (0.1, 0.35, 0.8):
            assert ease_out(t) == pytest.approx(1.0 - ease_in(1.0 - t))


def test_back_overshoots() -> None:
    assert easing.back_in(0.2) < 0.0
    assert easing.back_out(0.8) > 1.0
    assert easing.back_in(0.2, overshoot=0.0) == pytest.approx(easing.cubic_in(0.2))


def test_warp_steps() -> None:
    assert [easing.warp_in(t) for t in (0.0, 0.5, 0.999, 1.0)] == [0.0, 0.0, 0.0, 1.0]
    assert [easing.warp_out(t) for t in (0.0, 0.001, 1.0)] == [0.0, 1.0, 1.0]
    assert [easing.warp_in_out(t) for t in (0.49, 0.5)] == [0.0, 1.0]
    assert [easing.warp_out_in(t) for t in (0.0, 0.3, 1.0)] == [0.0, 0.5, 1.0]


def test_registry_lookup() -> None:
    assert get_easing("quad_in") is easing.quad_in
    assert get_easing("warp_out") is easing.warp_out
    assert set(list_easings()) == set(EASINGS) | set(STEP_EASINGS)
    with pytest.raises(KeyError):
        get_easing("does_not_exist")
