"""
Pointer events delivered to the editor controller by a host view.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from curveeditor.model.graph import Modifiers


@dataclass(frozen=True)
class PointerEvent:
    """A pointer position in canvas coordinates plus the held modifier keys."""
    x: float
    y: float
    modifiers: Modifiers = field(default_factory=Modifiers)


__all__ = ["Modifiers", "PointerEvent"]
