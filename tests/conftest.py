from __future__ import annotations

import pytest
from PySide6.QtCore import QCoreApplication

from curveeditor.config import EditorCurveConfig
from curveeditor.model.graph import ControlPointGraph


@pytest.fixture(scope="session")
def qapp() -> QCoreApplication:
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def graph() -> ControlPointGraph:
    """Default editing canvas: 7 anchors on the mid-line of a 600x100 canvas."""
    g = ControlPointGraph(600, 100, EditorCurveConfig())
    g.create_main_controls(7)
    return g


@pytest.fixture
def lone_anchor_graph() -> tuple[ControlPointGraph, int]:
    """A single middle anchor at (100, 50) with both tangent handles."""
    g = ControlPointGraph(200, 100, EditorCurveConfig())
    handle = g.add_anchor(is_first=False, is_last=False, x=100, y=50)
    return g, handle
