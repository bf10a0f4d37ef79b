"""Tests for HDF5 project files and the JSON path transfer format."""
from __future__ import annotations

import json

import pytest

from curveeditor.config import EditorCurveConfig
from curveeditor.model import PathDecodeError
from curveeditor.model.graph import ControlPointGraph, Modifiers
from curveeditor.model.io import IOManager


def edited_graph() -> ControlPointGraph:
    g = ControlPointGraph(400, 120)
    g.create_main_controls(5)
    a1, a2 = g.anchors[1], g.anchors[2]
    g.drag(a1.handle, 110, 30)
    g.drag(a1.next_control, 140, 10, Modifiers())
    g.drag(a2.strength_control, a2.x, 5)
    return g


def test_project_round_trip(tmp_path) -> None:
    graph = edited_graph()
    filepath = str(tmp_path / "curve.h5")

    IOManager.save_project(graph, filepath)
    loaded = IOManager.load_project(filepath)

    assert (loaded.width, loaded.height) == (400.0, 120.0)
    assert loaded.anchor_positions().tolist() == graph.anchor_positions().tolist()
    for original, restored in zip(graph.anchors, loaded.anchors):
        for attr in ("prev_control", "next_control", "strength_control"):
            h_orig, h_rest = getattr(original, attr), getattr(restored, attr)
            assert (h_orig is None) == (h_rest is None)
            if h_orig is not None:
                c_orig, c_rest = graph.control(h_orig), loaded.control(h_rest)
                assert (c_rest.x, c_rest.y) == pytest.approx((c_orig.x, c_orig.y))
    assert loaded.path_x.serialize() == pytest.approx(graph.path_x.serialize())
    assert loaded.path_y.serialize() == pytest.approx(graph.path_y.serialize())


def test_hidden_controls_are_restored(tmp_path) -> None:
    graph = edited_graph()
    graph.toggle_controls()
    filepath = str(tmp_path / "hidden.h5")

    IOManager.save_project(graph, filepath)
    loaded = IOManager.load_project(filepath, EditorCurveConfig(use_bbox=True))

    assert loaded.controls_visible is False
    assert all(not c.visible for c in loaded.controls)
    assert len(loaded.bboxes) == 4


def test_strength_handler_flag_comes_from_file(tmp_path) -> None:
    graph = ControlPointGraph(300, 100, EditorCurveConfig(use_strength_handler=False))
    graph.create_main_controls(3)
    filepath = str(tmp_path / "plain.h5")
    IOManager.save_project(graph, filepath)

    config = EditorCurveConfig(use_strength_handler=True)
    loaded = IOManager.load_project(filepath, config)

    assert all(a.strength_control is None for a in loaded.anchors)
    assert config.use_strength_handler is True


def test_load_rejects_non_hdf5(tmp_path) -> None:
    filepath = tmp_path / "not_a_project.h5"
    filepath.write_text("definitely not hdf5")
    with pytest.raises(ValueError):
        IOManager.load_project(str(filepath))


def test_paths_json_round_trip() -> None:
    graph = edited_graph()
    text = IOManager.paths_to_json(graph)
    assert set(json.loads(text)) == {"version", "x", "y"}

    path_x, path_y = IOManager.paths_from_json(text)
    assert path_x == graph.path_x
    assert path_y == graph.path_y


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        "[1, 2, 3]",
        '{"x": [0.0]}',
        '{"x": [0.0], "y": [0.0, 7, 1, 1]}',
        '{"x": 5, "y": [0.0]}',
        '{"x": [0.0], "y": null}',
    ],
)
def test_paths_from_json_errors(text: str) -> None:
    with pytest.raises(PathDecodeError):
        IOManager.paths_from_json(text)
