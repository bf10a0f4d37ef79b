"""
Control-Point Graph
===================
Anchors, their tangent handles and strength handles, plus the drag
constraints that tie them together.

Why is this file needed?
------------------------
1. Ownership: the graph is the only owner of anchors and controls. Entities
   live in an arena keyed by integer handles; "owner" and "mirror partner"
   are plain handle fields, so there are no reference cycles.
2. Constraints: dragging a tangent handle mirrors its partner (length and
   direction, or direction only) depending on the modifier keys.
3. Derived paths: after every change the X and Y `CurvePath` are rebuilt
   from scratch as new objects.

Classes:
    Modifiers: Snapshot of the modifier keys for one drag call.
    Anchor: A through-point of the curve.
    Control: A tangent or strength handle owned by an anchor.
    ControlPointGraph: The graph and its constraint solver.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import itertools
import logging
import math
from typing import Iterator, Optional, Union, TYPE_CHECKING

import numpy as np

from curveeditor import config as cfg
from curveeditor.config import EditorCurveConfig
from curveeditor.model.curve_path import CurvePath
from curveeditor.model.geometry_primitives import Point, Rect, Vector
from curveeditor.model.geometry_utils import bezier_min_max

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held during a pointer event."""
    shift: bool = False
    control: bool = False

    @property
    def is_mirror_handler(self) -> bool:
        """Mirror length and direction of the partner handle (default mode)."""
        return not self.shift

    @property
    def is_mirror_direction(self) -> bool:
        """Mirror only the direction; the partner keeps its own length."""
        return self.control


@dataclass
class Anchor:
    """A point the curve passes through."""
    handle: int
    x: float
    y: float
    bounds: Rect = field(default_factory=Rect)
    visible: bool = True
    prev_control: Optional[int] = None
    next_control: Optional[int] = None
    strength_control: Optional[int] = None

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def owned_controls(self) -> list[int]:
        return [h for h in (self.prev_control, self.next_control, self.strength_control) if h is not None]


@dataclass
class Control:
    """A handle owned by one anchor, optionally paired with a mirror partner."""
    handle: int
    owner: int
    x: float
    y: float
    bounds: Rect = field(default_factory=Rect)
    visible: bool = True
    partner: Optional[int] = None

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


GraphPoint = Union[Anchor, Control]


class ControlPointGraph:
    """
    Editable anchor/handle topology that derives an X and a Y `CurvePath`.

    Usage:
        graph = ControlPointGraph(600, 100)
        graph.create_main_controls(7)
        handle = graph.hit_test(x, y)
        graph.begin_drag(handle)
        graph.drag(handle, x + 5, y, Modifiers())
        graph.end_drag(handle)
        value = graph.path_x.transform(0.5)
    """

    def __init__(
        self,
        width: float = cfg.DEFAULT_CANVAS_WIDTH,
        height: float = cfg.DEFAULT_CANVAS_HEIGHT,
        config: Optional[EditorCurveConfig] = None,
    ) -> None:
        self.width = float(width)
        self.height = float(height)
        self.config = config if config is not None else EditorCurveConfig()

        self._points: dict[int, GraphPoint] = {}
        self._order: list[int] = []
        self._handles: Iterator[int] = itertools.count(1)
        self._drag_anchor: Optional[int] = None
        self._drag_offsets: dict[int, Vector] = {}
        self._controls_visible: bool = True

        self.path_x = CurvePath(0.0)
        self.path_y = CurvePath(0.0)
        self.bboxes: list[Rect] = []

    # ------------------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------------------

    @property
    def anchors(self) -> list[Anchor]:
        return [self._points[h] for h in self._order]

    @property
    def controls(self) -> list[Control]:
        return [p for p in self._points.values() if isinstance(p, Control)]

    @property
    def controls_visible(self) -> bool:
        return self._controls_visible

    def point(self, handle: int) -> GraphPoint:
        try:
            return self._points[handle]
        except KeyError:
            raise KeyError(f"No point with handle {handle} in the graph") from None

    def anchor(self, handle: int) -> Anchor:
        point = self.point(handle)
        if not isinstance(point, Anchor):
            raise KeyError(f"Handle {handle} is not an anchor")
        return point

    def control(self, handle: int) -> Control:
        point = self.point(handle)
        if not isinstance(point, Control):
            raise KeyError(f"Handle {handle} is not a control")
        return point

    def _optional_control(self, handle: Optional[int]) -> Optional[Control]:
        return None if handle is None else self.control(handle)

    def canvas_bounds(self) -> Rect:
        return Rect.from_size(0.0, 0.0, self.width, self.height)

    def anchor_positions(self) -> npt.NDArray[np.float64]:
        """(N, 2) array with the anchor coordinates in curve order."""
        return np.array([[a.x, a.y] for a in self.anchors], dtype=np.float64).reshape(-1, 2)

    def strength(self, handle: int) -> float:
        """
        Segment weight carried by an anchor.

        Derived from the vertical distance of the strength handle above the
        anchor, floored at MIN_STRENGTH so the weight stays positive.
        """
        anchor = self.anchor(handle)
        if anchor.strength_control is None:
            return cfg.DEFAULT_STRENGTH
        strength_control = self.control(anchor.strength_control)
        return max(cfg.MIN_STRENGTH, (anchor.y - strength_control.y) / cfg.STRENGTH_UNIT)

    def hit_test(self, x: float, y: float) -> Optional[int]:
        """
        Handle of the top-most point under (x, y), or None.

        Points created later are on top. Hidden controls are ignored.
        """
        target = Point(x, y)
        for point in reversed(list(self._points.values())):
            if not point.visible:
                continue
            radius = cfg.ANCHOR_HIT_RADIUS if isinstance(point, Anchor) else cfg.CONTROL_HIT_RADIUS
            if point.position.distance_to(target) <= radius:
                return point.handle
        return None

    # ------------------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------------------

    def add_anchor(self, is_first: bool, is_last: bool, x: float = 0.0, y: float = 0.0) -> int:
        """
        Append an anchor at (x, y) and create its handles.

        Args:
            is_first: The anchor starts the curve (no previous handle).
            is_last: The anchor ends the curve (no next handle).
            x, y: Anchor position.

        Returns:
            The handle of the new anchor.
        """
        anchor = Anchor(handle=next(self._handles), x=float(x), y=float(y), bounds=self.canvas_bounds())
        self._points[anchor.handle] = anchor
        self._order.append(anchor.handle)

        if not is_first:
            anchor.prev_control = self._add_control(anchor, anchor.x - cfg.HANDLE_OFFSET, anchor.y)
        if not is_last:
            anchor.next_control = self._add_control(anchor, anchor.x + cfg.HANDLE_OFFSET, anchor.y)
        if self.config.use_strength_handler:
            anchor.strength_control = self._add_control(anchor, anchor.x, anchor.y - cfg.STRENGTH_OFFSET)
            self.update_strength_bounds(anchor.handle)

        if anchor.prev_control is not None and anchor.next_control is not None:
            self.control(anchor.prev_control).partner = anchor.next_control
            self.control(anchor.next_control).partner = anchor.prev_control

        logger.debug(f"Added anchor {anchor.handle} at ({anchor.x:.2f}, {anchor.y:.2f})")
        self.rebuild()
        return anchor.handle

    def _add_control(self, owner: Anchor, x: float, y: float) -> int:
        control = Control(
            handle=next(self._handles),
            owner=owner.handle,
            x=x,
            y=y,
            bounds=owner.bounds.copy(),
            visible=self._controls_visible,
        )
        self._points[control.handle] = control
        return control.handle

    def _remove_control(self, handle: int) -> None:
        control = self.control(handle)
        if control.partner is not None:
            self.control(control.partner).partner = None
        owner = self.anchor(control.owner)
        if owner.prev_control == handle:
            owner.prev_control = None
        if owner.next_control == handle:
            owner.next_control = None
        if owner.strength_control == handle:
            owner.strength_control = None
        del self._points[handle]
        self._drag_offsets.pop(handle, None)

    def remove_anchor(self, handle: int) -> None:
        """
        Remove an anchor together with the handles it owns.
        The new first / last anchor drops its outer tangent handle.
        """
        anchor = self.anchor(handle)
        for control_handle in anchor.owned_controls():
            self._remove_control(control_handle)
        self._order.remove(handle)
        del self._points[handle]
        if self._drag_anchor == handle:
            self._drag_anchor = None
            self._drag_offsets.clear()

        if self._order:
            first = self.anchor(self._order[0])
            if first.prev_control is not None:
                self._remove_control(first.prev_control)
            last = self.anchor(self._order[-1])
            if last.next_control is not None:
                self._remove_control(last.next_control)

        logger.debug(f"Removed anchor {handle}, {len(self._order)} anchors left")
        self.rebuild()

    def clear(self) -> None:
        self._points.clear()
        self._order.clear()
        self._drag_anchor = None
        self._drag_offsets.clear()
        self.rebuild()

    def create_main_controls(self, count: int = cfg.DEFAULT_ANCHOR_COUNT) -> list[int]:
        """
        Replace the graph with `count` anchors evenly spaced along the
        horizontal mid-line of the canvas.
        """
        if count < 2:
            raise ValueError(f"At least 2 anchors are required, got {count}.")

        self.clear()
        gap = self.width / (count - 1)
        py = self.height / 2
        handles = [self.add_anchor(i == 0, i == count - 1, i * gap, py) for i in range(count)]
        logger.info(f"Created {count} anchors on a {self.width:g}x{self.height:g} canvas.")
        return handles

    # ------------------------------------------------------------------------------
    # Positions & bounds
    # ------------------------------------------------------------------------------

    def place(self, handle: int, x: float, y: float) -> None:
        """Set a point position directly: no bounds, no constraints, no rebuild."""
        point = self.point(handle)
        point.x = float(x)
        point.y = float(y)

    def update_strength_bounds(self, handle: int) -> None:
        """
        Pin the strength handle to the anchor's vertical line, above the
        anchor, and let the tangent handles share the anchor's bounds.
        """
        anchor = self.anchor(handle)
        if anchor.strength_control is not None:
            self.control(anchor.strength_control).bounds = Rect.from_size(anchor.x, 0.0, 0.0, anchor.y)
        for control in (self._optional_control(anchor.prev_control), self._optional_control(anchor.next_control)):
            if control is not None:
                control.bounds = anchor.bounds.copy()

    def set_size(self, width: float, height: float) -> None:
        """Resize the editing canvas: update drag bounds and keep anchors inside."""
        if width == self.width and height == self.height:
            return
        self.width = float(width)
        self.height = float(height)

        bounds = self.canvas_bounds()
        for point in self._points.values():
            point.bounds = bounds.copy()
        for anchor in self.anchors:
            clamped = bounds.clamp(anchor.position)
            anchor.x, anchor.y = clamped.x, clamped.y
            self.update_strength_bounds(anchor.handle)

        logger.debug(f"Canvas resized to {self.width:g}x{self.height:g}")
        self.rebuild()

    def toggle_controls(self) -> bool:
        """
        Show / hide every handle. Always rebuilds the paths, even though
        the geometry does not change.

        Returns:
            The new visibility.
        """
        self._controls_visible = not self._controls_visible
        for control in self.controls:
            control.visible = self._controls_visible
        self.rebuild()
        return self._controls_visible

    # ------------------------------------------------------------------------------
    # Dragging
    # ------------------------------------------------------------------------------

    def begin_drag(self, handle: int) -> None:
        """Cache the anchor-relative offsets of the handles of a dragged anchor."""
        point = self.point(handle)
        if isinstance(point, Anchor):
            self._drag_anchor = handle
            self._drag_offsets = {
                h: self.control(h).position - point.position for h in point.owned_controls()
            }

    def end_drag(self, handle: int) -> None:
        self.point(handle)
        self._drag_anchor = None
        self._drag_offsets.clear()

    def drag(self, handle: int, x: float, y: float, modifiers: Optional[Modifiers] = None) -> None:
        """
        Move a point to (x, y), clamped to its drag bounds, then apply the
        constraints and rebuild the paths.

        Args:
            handle: The dragged anchor or control.
            x, y: Pointer position.
            modifiers: Modifier keys held during this move.
        """
        modifiers = modifiers if modifiers is not None else Modifiers()
        point = self.point(handle)
        target = point.bounds.clamp(Point(x, y))

        if isinstance(point, Anchor):
            if self._drag_anchor != handle:
                self.begin_drag(handle)
            point.x, point.y = target.x, target.y
            for control_handle, offset in self._drag_offsets.items():
                moved = point.position + offset
                self.place(control_handle, moved.x, moved.y)
            owner = point
        else:
            point.x, point.y = target.x, target.y
            owner = self.anchor(point.owner)
            self._apply_mirror(point, owner, modifiers)

        self.update_strength_bounds(owner.handle)
        self.rebuild()

    def _apply_mirror(self, dragged: Control, anchor: Anchor, modifiers: Modifiers) -> None:
        if dragged.partner is None:
            return
        partner = self.control(dragged.partner)

        if modifiers.is_mirror_handler:
            distance = anchor.position.distance_to(dragged.position)
        elif modifiers.is_mirror_direction:
            distance = anchor.position.distance_to(partner.position)
        else:
            return

        angle = anchor.position.angle_to(dragged.position)
        if self.config.opposite_mirror:
            angle += math.pi
        moved = anchor.position + Vector.from_polar(distance, angle)
        partner.x, partner.y = moved.x, moved.y

    # ------------------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------------------

    def rebuild(self) -> None:
        """
        Recreate the X and Y paths (and bounding boxes) from the anchors.

        Segment i runs from anchor i to anchor i+1, shaped by the next handle
        of anchor i and the previous handle of anchor i+1, weighted by the
        strength of anchor i+1. A segment missing a handle is linear.
        """
        anchors = self.anchors
        bboxes: list[Rect] = []
        if not anchors:
            self.path_x, self.path_y, self.bboxes = CurvePath(0.0), CurvePath(0.0), bboxes
            return

        path_x = CurvePath(anchors[0].x)
        path_y = CurvePath(anchors[0].y)
        for prev, anchor in zip(anchors[:-1], anchors[1:]):
            weight = self.strength(anchor.handle)
            p1 = self._optional_control(prev.next_control)
            p2 = self._optional_control(anchor.prev_control)
            if p1 is None or p2 is None:
                path_x.append_linear(anchor.x, weight)
                path_y.append_linear(anchor.y, weight)
                continue

            path_x.append_cubic(anchor.x, p1.x, p2.x, weight)
            path_y.append_cubic(anchor.y, p1.y, p2.y, weight)
            if self.config.use_bbox:
                bboxes.append(bezier_min_max(prev.position, p1.position, p2.position, anchor.position))

        self.path_x, self.path_y, self.bboxes = path_x, path_y, bboxes
        logger.debug(f"Rebuilt paths with {len(path_x)} segments")

    def evaluate(self, t: float) -> Point:
        """Point on the curve at normalized time `t` (not clamped)."""
        return Point(self.path_x.transform(t), self.path_y.transform(t))
