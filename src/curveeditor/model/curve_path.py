"""
Curve Path (Evaluation Engine)
==============================
A scalar path defined by a start value and an ordered list of weighted
segments. Each segment starts at the end of the previous one.

Why is this file needed?
------------------------
1. Playback: `transform(t)` maps normalized time to a value along the path.
   Two paths (X and Y) evaluated with the same `t` give a point in the plane.
2. Weighted time: a segment with a larger weight occupies proportionally more
   of [0, 1], independent of its geometric length.
3. Wire format: `serialize()` / `deserialize()` convert to and from a flat
   list of numbers, suitable for clipboard transfer and persistence.

Classes:
    CurvePath: The path container.

Functions:
    evaluate: Public entry point that clamps `t` to [0, 1].
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence, TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

from curveeditor.model import PathDecodeError, SegmentWeightError
from curveeditor.model.segments import (
    Segment,
    LinearSegment,
    QuadraticSegment,
    CubicSegment,
    SEGMENT_TAGS,
    transform_segment,
)

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class CurvePath:
    """
    Weighted piecewise path over one scalar axis.

    Usage:
        path = CurvePath(0.0).append_linear(10.0, weight=1).append_linear(50.0, weight=3)
        path.transform(0.125)  # -> 5.0, the first segment fills the first quarter
    """

    def __init__(self, start: float = 0.0, segments: Optional[Iterable[Segment]] = None) -> None:
        self.start: float = float(start)
        self._segments: list[Segment] = []
        self._total_weight: float = 0.0
        for segment in segments or ():
            self._add_segment(segment)

    # ------------------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------------------

    @classmethod
    def create_line(cls, end: float, weight: float = 1.0) -> CurvePath:
        """Starts a path at 0 with a single line to `end`."""
        return cls(0.0).append_linear(end, weight)

    def _add_segment(self, segment: Segment) -> None:
        weight = segment.weight
        if not math.isfinite(weight) or weight <= 0.0:
            raise SegmentWeightError(f"Segment weight must be a positive finite number, got {weight}.")
        self._segments.append(segment)
        self._total_weight = sum(s.weight for s in self._segments)

    def append_linear(self, end: float, weight: float = 1.0) -> CurvePath:
        """Adds a linear segment to the path."""
        self._add_segment(LinearSegment(float(end), float(weight)))
        return self

    def append_quadratic(self, end: float, control: float, weight: float = 1.0) -> CurvePath:
        """Adds a quadratic bezier segment to the path."""
        self._add_segment(QuadraticSegment(float(end), float(weight), float(control)))
        return self

    def append_cubic(self, end: float, control1: float, control2: float, weight: float = 1.0) -> CurvePath:
        """Adds a cubic bezier segment to the path."""
        self._add_segment(CubicSegment(float(end), float(weight), float(control1), float(control2)))
        return self

    def clear(self) -> None:
        """Clears the segments in the path. The start value is kept."""
        self._segments.clear()
        self._total_weight = 0.0

    def copy(self) -> CurvePath:
        """Snapshot of the path; segments are immutable so a shallow copy suffices."""
        return CurvePath(self.start, self._segments)

    # ------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def total_weight(self) -> float:
        return self._total_weight

    @property
    def end(self) -> float:
        """Last value of the path, NaN for a constant path."""
        return self._segments[-1].end if self._segments else math.nan

    def is_constant(self) -> bool:
        return not self._segments

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurvePath):
            return NotImplemented
        return self.start == other.start and self._segments == other._segments

    def __repr__(self) -> str:
        return f"CurvePath(start={self.start}, segments={self._segments!r})"

    # ------------------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------------------

    def transform(self, t: float) -> float:
        """
        Get the value of the path at normalized time `t`.

        `t` is not clamped; see `evaluate` for the clamping wrapper.

        Args:
            t: Normalized time, expected in [0, 1].

        Returns:
            The path value. A constant path always returns `start`.
        """
        if not self._segments:
            return self.start

        if len(self._segments) == 1:
            return transform_segment(self._segments[0], self.start, t)

        remainder = t * self._total_weight
        last_end = self.start
        for segment in self._segments:
            if remainder > segment.weight:
                remainder -= segment.weight
                last_end = segment.end
            else:
                return transform_segment(segment, last_end, remainder / segment.weight)

        # remainder overran every segment (t > 1 or rounding at t == 1)
        return last_end

    def sample(self, num_points: int = 100) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Sample the path at evenly spaced times in [0, 1].

        Returns:
            (times, values) arrays of shape (num_points,).
        """
        if num_points < 2:
            raise ValueError("num_points must be >= 2")
        times = np.linspace(0.0, 1.0, num_points)
        values = np.array([self.transform(t) for t in times], dtype=np.float64)
        return times, values

    def plot(self, num_points: int = 200, title: str = "Curve Path") -> None:
        """
        Plot the path value over normalized time.
        """
        times, values = self.sample(num_points)

        plt.rcParams["figure.constrained_layout.use"] = True
        plt.figure(figsize=(7, 5))

        plt.plot(times, values, 'b', lw=2)

        # mark the segment boundaries
        boundary = 0.0
        for segment in self._segments[:-1]:
            boundary += segment.weight / self._total_weight
            plt.axvline(boundary, color='gray', linestyle=':', lw=1)

        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        plt.minorticks_on()
        plt.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        plt.title(title)
        plt.xlabel("t")
        plt.ylabel("Value")
        plt.xlim(-0.02, 1.02)
        plt.show()

    # ------------------------------------------------------------------------------
    # Wire format
    # ------------------------------------------------------------------------------

    def serialize(self) -> list[float]:
        """
        Get the path data as a flat list of numbers:
        [start, tag, end, weight, controls..., tag, ...]
        """
        out: list[float] = [self.start]
        for segment in self._segments:
            out.extend((segment.TAG, segment.end, segment.weight, *segment.controls()))
        return out

    def load(self, data: Sequence[float]) -> None:
        """
        Replace the content of this path with the decoded `data`.

        Raises:
            PathDecodeError: Not a sequence, empty data, unknown tag or truncated segment record.
            SegmentWeightError: A decoded segment has a non-positive weight.
        """
        try:
            size = len(data)
        except TypeError:
            raise PathDecodeError(f"Expected a sequence of numbers, got {type(data).__name__}.", offset=0) from None
        if size == 0:
            raise PathDecodeError("Cannot decode an empty path sequence.", offset=0)

        segments: list[Segment] = []
        i = 1
        while i < size:
            tag = data[i]
            entry = SEGMENT_TAGS.get(int(tag)) if _is_integral(tag) else None
            if entry is None:
                raise PathDecodeError(f"Unknown segment tag {tag!r} at offset {i}.", offset=i, tag=tag)

            segment_cls, n_controls = entry
            record_end = i + 3 + n_controls
            if record_end > size:
                raise PathDecodeError(
                    f"Truncated segment (tag {tag!r}) at offset {i}: expected {3 + n_controls} values, "
                    f"got {size - i}.",
                    offset=i,
                    tag=tag,
                )
            end, weight, *controls = (_as_float(v, j) for j, v in enumerate(data[i + 1:record_end], start=i + 1))
            segments.append(segment_cls(end, weight, *controls))
            i = record_end

        decoded = CurvePath(_as_float(data[0], 0), segments)
        self.start = decoded.start
        self._segments = decoded._segments
        self._total_weight = decoded._total_weight
        logger.debug(f"Decoded path with {len(segments)} segments.")

    @classmethod
    def deserialize(cls, data: Sequence[float]) -> CurvePath:
        """Create a path from its flat numeric representation."""
        path = cls()
        path.load(data)
        return path


def _is_integral(value: object) -> bool:
    try:
        return float(value).is_integer()
    except (TypeError, ValueError):
        return False


def _as_float(value: object, offset: int) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise PathDecodeError(f"Non-numeric value {value!r} at offset {offset}.", offset=offset) from None


def evaluate(path: CurvePath, t: float) -> float:
    """
    Evaluate `path` at `t`, clamping `t` to [0, 1] first.
    """
    return path.transform(min(1.0, max(0.0, t)))
