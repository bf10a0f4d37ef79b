"""
Geometric Primitives for the 2D editing canvas.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Union, TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass
class Vector:
    """
    A vector in the canvas plane representing direction and magnitude.
    """
    x: float
    y: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @property
    def angle(self) -> float:
        """Direction of the vector in radians, measured with atan2."""
        return math.atan2(self.y, self.x)

    @classmethod
    def from_polar(cls, length: float, angle_rad: float) -> Vector:
        return cls(length * math.cos(angle_rad), length * math.sin(angle_rad))

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])


@dataclass
class Point:
    """A point on the editing canvas."""
    x: float
    y: float

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Union[Vector, Point]) -> Union[Vector, Point]:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        # Point - Vector = Point (Inverse translation)
        if isinstance(other, Vector):
            return Point(self.x - other.x, self.y - other.y)
        raise TypeError("Can only subtract a Vector or Point from a Point.")

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def angle_to(self, other: Point) -> float:
        """Angle in radians of the direction from this point towards `other`."""
        return math.atan2(other.y - self.y, other.x - self.x)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y])


@dataclass
class Rect:
    """
    Axis-aligned rectangle given by its edges.
    Used both for bounding boxes and for drag bounds (a zero width
    rectangle pins the horizontal position).
    """
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    @classmethod
    def from_bounds(cls, left: float, top: float, right: float, bottom: float) -> Rect:
        return cls(left, top, right, bottom)

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> Rect:
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def clamp(self, point: Point) -> Point:
        """Return the closest point to `point` inside the rectangle."""
        return Point(
            min(max(point.x, self.left), self.right),
            min(max(point.y, self.top), self.bottom),
        )

    def copy(self) -> Rect:
        return Rect(self.left, self.top, self.right, self.bottom)
