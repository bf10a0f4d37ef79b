"""
Editor Controller
=================
Routes pointer events to the control-point graph and drives playback.

Why is this file needed?
------------------------
1. Interaction: a host view (any toolkit) forwards pointer down / move / up
   with the modifier keys; the controller picks the point under the pointer
   and applies the drag constraints through the graph.
2. Signals: views subscribe to `curve_changed` and `position_changed` and
   redraw; the controller never touches a widget.
3. Playback: a QTimer ticks the animation, mapping elapsed time to a point
   on the curve through the current X and Y paths.

Classes:
    EditorController: The QObject tying graph, config and playback together.
"""
from __future__ import annotations

from dataclasses import replace
import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, QElapsedTimer, Signal

from curveeditor import config as cfg
from curveeditor.config import EditorCurveConfig
from curveeditor.controller.events import PointerEvent
from curveeditor.model.curve_path import CurvePath
from curveeditor.model.geometry_primitives import Point
from curveeditor.model.graph import ControlPointGraph
from curveeditor.model.lerp import wrap_lerp

logger = logging.getLogger(__name__)


class EditorController(QObject):
    """
    Interactive editor state with signals for view sync.

    Signals:
        curve_changed(object): The graph after every rebuild.
        position_changed(float, float): Animated point after every tick.
        controls_toggled(bool): New handle visibility.
    """
    curve_changed = Signal(object)
    position_changed = Signal(float, float)
    controls_toggled = Signal(bool)

    def __init__(
        self,
        graph: Optional[ControlPointGraph] = None,
        config: Optional[EditorCurveConfig] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.config = config if config is not None else EditorCurveConfig()
        if graph is None:
            graph = ControlPointGraph(config=self.config)
            graph.create_main_controls(cfg.DEFAULT_ANCHOR_COUNT)
        self.graph = graph
        self._drag_handle: Optional[int] = None

        self._clock = QElapsedTimer()
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_timeout)

    # ------------------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------------------

    @property
    def paths(self) -> tuple[CurvePath, CurvePath]:
        """The current (path_x, path_y). Both are replaced, never mutated, on rebuild."""
        return self.graph.path_x, self.graph.path_y

    @property
    def drag_handle(self) -> Optional[int]:
        return self._drag_handle

    def _publish(self) -> None:
        self.curve_changed.emit(self.graph)

    def set_graph(self, graph: ControlPointGraph) -> None:
        """Swap in a new graph (e.g. after loading a project)."""
        self._drag_handle = None
        self.config = replace(self.config, use_strength_handler=graph.config.use_strength_handler)
        self.graph = graph
        self.graph.config = self.config
        self._publish()

    def reset(self, count: int = cfg.DEFAULT_ANCHOR_COUNT) -> None:
        """Replace the curve with `count` evenly spaced anchors."""
        self._drag_handle = None
        self.graph.create_main_controls(count)
        self._publish()

    # ------------------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------------------

    def pointer_down(self, event: PointerEvent) -> Optional[int]:
        """
        Start dragging the point under the pointer, if any.

        Returns:
            The handle of the grabbed point, or None.
        """
        handle = self.graph.hit_test(event.x, event.y)
        if handle is None:
            return None
        self._drag_handle = handle
        self.graph.begin_drag(handle)
        logger.debug(f"Drag started on point {handle}")
        return handle

    def pointer_move(self, event: PointerEvent) -> bool:
        """
        Move the grabbed point.

        Returns:
            True when a point was dragged and the curve changed.
        """
        if self._drag_handle is None:
            return False
        self.graph.drag(self._drag_handle, event.x, event.y, event.modifiers)
        self._publish()
        return True

    def pointer_up(self, event: PointerEvent) -> None:
        if self._drag_handle is None:
            return
        self.graph.end_drag(self._drag_handle)
        logger.debug(f"Drag ended on point {self._drag_handle} at ({event.x:.2f}, {event.y:.2f})")
        self._drag_handle = None

    # ------------------------------------------------------------------------------
    # Editor commands
    # ------------------------------------------------------------------------------

    def set_size(self, width: float, height: float) -> None:
        self.graph.set_size(width, height)
        self._publish()

    def toggle_controls(self) -> bool:
        visible = self.graph.toggle_controls()
        self.controls_toggled.emit(visible)
        self._publish()
        return visible

    def set_duration(self, seconds: float) -> float:
        """Set the playback period, clamped to the allowed range. Returns the applied value."""
        self.config.duration = min(cfg.MAX_DURATION, max(cfg.MIN_DURATION, float(seconds)))
        logger.debug(f"Playback duration set to {self.config.duration:g} s")
        return self.config.duration

    # ------------------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------------------

    def tick(self, elapsed_ms: float) -> Point:
        """
        Animated point after `elapsed_ms` milliseconds of playback.
        The normalized time loops every `config.duration` seconds.
        """
        t = wrap_lerp(elapsed_ms, self.config.duration * 1000.0)
        path_x, path_y = self.paths
        point = Point(path_x.transform(t), path_y.transform(t))
        self.position_changed.emit(point.x, point.y)
        return point

    def is_playing(self) -> bool:
        return self._timer.isActive()

    def start_playback(self, interval_ms: int = 16) -> None:
        self._clock.start()
        self._timer.start(interval_ms)
        logger.info(f"Playback started ({self.config.duration:g} s per pass).")

    def stop_playback(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
            logger.info("Playback stopped.")

    def _on_timeout(self) -> None:
        self.tick(self._clock.elapsed())
