"""
Curve Editor
============
Interactive 2D curve editing: a control-point graph of anchors and handles
derives weighted piecewise paths for X and Y, evaluated over normalized time
for playback.
"""
from curveeditor.model import CurveError, PathDecodeError, SegmentWeightError
from curveeditor.model.curve_path import CurvePath, evaluate
from curveeditor.model.graph import ControlPointGraph, Modifiers
from curveeditor.config import EditorCurveConfig

__all__ = [
    "CurveError",
    "PathDecodeError",
    "SegmentWeightError",
    "CurvePath",
    "evaluate",
    "ControlPointGraph",
    "Modifiers",
    "EditorCurveConfig",
]
