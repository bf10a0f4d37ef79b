"""
The MODEL layer contains pure data structures and the curve mathematics.
It has NO knowledge of Qt or of any rendering.
It deals with Paths, Easing, Geometry, the Control-Point Graph and I/O.
"""


class CurveError(ValueError):
    """Base class for errors raised by the curve model."""


class PathDecodeError(CurveError):
    """A serialized path could not be decoded."""

    def __init__(self, message: str, offset: int, tag: object = None) -> None:
        super().__init__(message)
        self.offset = offset
        self.tag = tag


class SegmentWeightError(CurveError):
    """A segment was appended with a weight that is not strictly positive."""
