"""Tests for the persisted editor configuration and the logging setup."""
from __future__ import annotations

import logging

import pytest
from PySide6.QtCore import QSettings

from curveeditor.config import EditorCurveConfig, MAX_DURATION, load_settings, save_settings
from curveeditor.logging_config import setup_logging


@pytest.fixture
def settings(qapp, tmp_path) -> QSettings:
    return QSettings(str(tmp_path / "editor.ini"), QSettings.Format.IniFormat)


def test_defaults_when_empty(settings: QSettings) -> None:
    assert load_settings(settings) == EditorCurveConfig()


def test_round_trip(settings: QSettings) -> None:
    config = EditorCurveConfig(use_strength_handler=False, use_bbox=True, opposite_mirror=True, duration=4.5)
    save_settings(config, settings)
    assert load_settings(settings) == config


def test_duration_is_clamped(settings: QSettings) -> None:
    settings.setValue("playback/duration", 50.0)
    assert load_settings(settings).duration == MAX_DURATION


def test_setup_logging_replaces_handlers(tmp_path) -> None:
    log_file = tmp_path / "editor.log"
    setup_logging(level=logging.DEBUG)
    logger = setup_logging(level=logging.DEBUG, log_file=str(log_file))

    assert logger.name == "curveeditor"
    assert len(logger.handlers) == 2
    logging.getLogger("curveeditor.model.graph").debug("rebuilt")
    for handler in logger.handlers:
        handler.flush()
    assert "curveeditor.model.graph - DEBUG - rebuilt" in log_file.read_text(encoding="utf-8")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
