"""
Path Segments
=============
A segment continues a scalar path from the end of the previous segment
(or the path start) to its own `end`. The `weight` is the share of the
normalized time domain the segment occupies, relative to the path total.

Segments are immutable once appended; the variants form a closed sum type
dispatched with `match` in `transform_segment`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union


@dataclass(frozen=True)
class LinearSegment:
    end: float
    weight: float = 1.0

    TAG: ClassVar[int] = 1

    def controls(self) -> tuple[float, ...]:
        return ()


@dataclass(frozen=True)
class QuadraticSegment:
    end: float
    weight: float
    control: float

    TAG: ClassVar[int] = 2

    def controls(self) -> tuple[float, ...]:
        return (self.control,)


@dataclass(frozen=True)
class CubicSegment:
    end: float
    weight: float
    control1: float
    control2: float

    TAG: ClassVar[int] = 3

    def controls(self) -> tuple[float, ...]:
        return (self.control1, self.control2)


Segment = Union[LinearSegment, QuadraticSegment, CubicSegment]

# wire tag -> (segment class, number of control values)
SEGMENT_TAGS: dict[int, tuple[type, int]] = {
    LinearSegment.TAG: (LinearSegment, 0),
    QuadraticSegment.TAG: (QuadraticSegment, 1),
    CubicSegment.TAG: (CubicSegment, 2),
}


def transform_segment(segment: Segment, start: float, ratio: float) -> float:
    """
    Evaluate a segment that starts at `start` at the local ratio `ratio`.

    Args:
        segment: The segment to evaluate.
        start: Value at ratio 0 (end of the previous segment).
        ratio: Local parameter, 0 at the start and 1 at `segment.end`.

    Returns:
        The interpolated value.
    """
    match segment:
        case LinearSegment(end=end):
            # lerp form keeps both endpoints exact
            return start * (1.0 - ratio) + end * ratio
        case QuadraticSegment(end=end, control=control):
            inv = 1.0 - ratio
            return inv * inv * start + 2.0 * inv * ratio * control + ratio * ratio * end
        case CubicSegment(end=end, control1=c1, control2=c2):
            inv = 1.0 - ratio
            inv2 = inv * inv
            r2 = ratio * ratio
            return inv2 * inv * start + 3.0 * inv2 * ratio * c1 + 3.0 * inv * r2 * c2 + r2 * ratio * end
        case _:
            raise TypeError(f"Unsupported segment type: {type(segment).__name__}")
