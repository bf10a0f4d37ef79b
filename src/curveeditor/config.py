"""
Configuration & Editor Constants
================================
This module serves as the central registry for the editor's constants and
the user-tunable editor configuration.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (handle offsets, strength scale,
   hit radii) being scattered through the graph and controller code.
2. Persistence: `EditorCurveConfig` can be stored and restored through
   `QSettings`, so the editor remembers its modes between sessions.

Exports:
    EditorCurveConfig: Dataclass with the editor switches.
    load_settings / save_settings: QSettings round trip for the config.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

ORG_ID = "curveeditor"
APP_ID = "curve-editor"

# Handle placement relative to the owning anchor (canvas units)
HANDLE_OFFSET: float = 10.0
STRENGTH_OFFSET: float = 20.0

# Segment weight derived from the strength handle: (anchor.y - handle.y) / STRENGTH_UNIT
STRENGTH_UNIT: float = 20.0
MIN_STRENGTH: float = 0.1
DEFAULT_STRENGTH: float = 1.0

# Pointer hit radii
ANCHOR_HIT_RADIUS: float = 10.0
CONTROL_HIT_RADIUS: float = 8.0

# Default editing canvas
DEFAULT_ANCHOR_COUNT: int = 7
DEFAULT_CANVAS_WIDTH: float = 600.0
DEFAULT_CANVAS_HEIGHT: float = 100.0

# Playback
DEFAULT_DURATION: float = 2.0  # seconds for one pass over the path
MIN_DURATION: float = 1.0
MAX_DURATION: float = 10.0

# Numerical tolerance for the bounding-box root search
ROOT_EPSILON: float = 1e-12


@dataclass
class EditorCurveConfig:
    """
    Editor switches.

    Attributes:
        use_strength_handler: Create a strength handle for every anchor.
        use_bbox: Collect a bounding box per cubic segment on every rebuild.
        opposite_mirror: Mirror partner handles onto the opposite side of the
            anchor instead of along the dragged handle's own angle.
        duration: Seconds for one playback pass over the path.
    """
    use_strength_handler: bool = True
    use_bbox: bool = False
    opposite_mirror: bool = False
    duration: float = DEFAULT_DURATION


def _default_settings() -> QSettings:
    return QSettings(QSettings.Format.IniFormat, QSettings.Scope.UserScope, ORG_ID, APP_ID)


def load_settings(settings: Optional[QSettings] = None) -> EditorCurveConfig:
    """
    Read the editor configuration from QSettings.

    Missing keys fall back to the dataclass defaults.
    """
    settings = settings if settings is not None else _default_settings()
    defaults = EditorCurveConfig()

    config = EditorCurveConfig(
        use_strength_handler=settings.value("editor/use_strength_handler", defaults.use_strength_handler, type=bool),
        use_bbox=settings.value("editor/use_bbox", defaults.use_bbox, type=bool),
        opposite_mirror=settings.value("editor/opposite_mirror", defaults.opposite_mirror, type=bool),
        duration=settings.value("playback/duration", defaults.duration, type=float),
    )
    # keep the duration inside the range the playback slider allows
    config.duration = min(MAX_DURATION, max(MIN_DURATION, config.duration))
    logger.debug(f"Loaded editor settings: {config}")
    return config


def save_settings(config: EditorCurveConfig, settings: Optional[QSettings] = None) -> None:
    """Write the editor configuration to QSettings."""
    settings = settings if settings is not None else _default_settings()
    settings.setValue("editor/use_strength_handler", config.use_strength_handler)
    settings.setValue("editor/use_bbox", config.use_bbox)
    settings.setValue("editor/opposite_mirror", config.opposite_mirror)
    settings.setValue("playback/duration", config.duration)
    settings.sync()
    logger.debug(f"Saved editor settings to: {settings.fileName()}")
