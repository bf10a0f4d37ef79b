"""Tests for the editor controller: pointer routing, signals and playback."""
from __future__ import annotations

import pytest

from curveeditor.config import EditorCurveConfig
from curveeditor.controller.editor import EditorController
from curveeditor.controller.events import Modifiers, PointerEvent
from curveeditor.model.graph import ControlPointGraph


@pytest.fixture
def controller(qapp) -> EditorController:
    return EditorController(config=EditorCurveConfig())


def test_default_graph(controller: EditorController) -> None:
    assert len(controller.graph.anchors) == 7
    assert controller.graph.width == 600.0
    assert controller.graph.height == 100.0


def test_drag_anchor_emits_curve_changed(controller: EditorController) -> None:
    emitted = []
    controller.curve_changed.connect(emitted.append)
    anchor = controller.graph.anchors[1]

    assert controller.pointer_down(PointerEvent(100, 50)) == anchor.handle
    assert controller.pointer_move(PointerEvent(120, 20)) is True
    controller.pointer_up(PointerEvent(120, 20))

    assert (anchor.x, anchor.y) == (120.0, 20.0)
    assert emitted == [controller.graph]
    assert controller.drag_handle is None
    assert controller.pointer_move(PointerEvent(0, 0)) is False


def test_pointer_down_on_empty_canvas(controller: EditorController) -> None:
    assert controller.pointer_down(PointerEvent(150, 90)) is None
    assert controller.pointer_move(PointerEvent(160, 90)) is False


def test_drag_handle_mirrors_partner(controller: EditorController) -> None:
    anchor = controller.graph.anchors[1]
    assert controller.pointer_down(PointerEvent(110, 50)) == anchor.next_control
    controller.pointer_move(PointerEvent(130, 50, Modifiers()))
    controller.pointer_up(PointerEvent(130, 50))

    prev = controller.graph.control(anchor.prev_control)
    assert prev.x == pytest.approx(130.0)
    assert prev.y == pytest.approx(50.0)


def test_drag_handle_with_shift_moves_alone(controller: EditorController) -> None:
    anchor = controller.graph.anchors[1]
    controller.pointer_down(PointerEvent(110, 50))
    controller.pointer_move(PointerEvent(130, 60, Modifiers(shift=True)))

    prev = controller.graph.control(anchor.prev_control)
    assert (prev.x, prev.y) == (90.0, 50.0)


def test_tick_follows_the_curve(controller: EditorController) -> None:
    positions = []
    controller.position_changed.connect(lambda x, y: positions.append((x, y)))

    point = controller.tick(500)
    assert point.x == pytest.approx(150.0)
    assert point.y == pytest.approx(50.0)
    assert positions == [(point.x, point.y)]

    # loops every duration
    assert controller.tick(2500).x == pytest.approx(150.0)


def test_set_duration_is_clamped(controller: EditorController) -> None:
    assert controller.set_duration(20) == 10.0
    assert controller.set_duration(0.5) == 1.0
    assert controller.set_duration(4) == 4.0
    assert controller.tick(1000).x == pytest.approx(150.0)


def test_toggle_controls_signal(controller: EditorController) -> None:
    toggled = []
    changed = []
    controller.controls_toggled.connect(toggled.append)
    controller.curve_changed.connect(changed.append)

    assert controller.toggle_controls() is False
    assert toggled == [False]
    assert len(changed) == 1


def test_set_size_rebuilds(controller: EditorController) -> None:
    changed = []
    controller.curve_changed.connect(changed.append)
    controller.set_size(300, 40)
    assert controller.graph.path_x.end == pytest.approx(300.0)
    assert len(changed) == 1


def test_set_graph_and_reset(controller: EditorController) -> None:
    other = ControlPointGraph(200, 100)
    other.create_main_controls(3)
    controller.set_graph(other)
    assert controller.graph is other
    assert other.config is controller.config

    controller.reset(4)
    assert len(controller.graph.anchors) == 4


def test_playback_timer(controller: EditorController) -> None:
    assert not controller.is_playing()
    controller.start_playback(10)
    assert controller.is_playing()
    controller.stop_playback()
    assert not controller.is_playing()


def test_set_graph_leaves_callers_config_untouched(qapp) -> None:
    shared = EditorCurveConfig(use_strength_handler=True)
    controller = EditorController(config=shared)

    loaded = ControlPointGraph(300, 100, EditorCurveConfig(use_strength_handler=False))
    loaded.create_main_controls(3)
    controller.set_graph(loaded)

    assert shared.use_strength_handler is True
    assert controller.config.use_strength_handler is False
    assert loaded.config is controller.config
