"""Tests for settings and engine configuration."""

import pytest

from collage.config import Settings, configure_logging
from collage.elements import text_element
from collage.engine import ApproximateTextMeasurer, EngineConfig, create_pipeline
from collage.models.text import TextStyle


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("COLLAGE_DEFAULT_TEXT_HEIGHT", "20")
    monkeypatch.setenv("COLLAGE_LOG_LEVEL", "debug")
    config = Settings()
    assert config.default_text_height == 20
    assert config.log_level == "debug"


def test_engine_config_from_settings():
    config = EngineConfig.from_settings(Settings(default_text_height=10, char_width_ratio=0.5))
    assert config.default_text_height == 10
    assert config.char_width_ratio == 0.5
    assert config.min_shape_points == 3


def test_approximate_measurer_monospace():
    measurer = ApproximateTextMeasurer(EngineConfig(char_width_ratio=0.4))
    assert measurer.measure("ab", TextStyle(height=10)).width == pytest.approx(8)
    assert measurer.measure("ab", TextStyle(height=10, monospace=True)).width == pytest.approx(12)


def test_configure_logging_accepts_settings():
    configure_logging(Settings(log_level="warning"))


def test_default_pipeline_reads_environment(monkeypatch):
    monkeypatch.setenv("COLLAGE_DEFAULT_TEXT_HEIGHT", "40")
    pipeline = create_pipeline()
    assert pipeline.config.default_text_height == 40
    # Unsized text picks up the configured height
    assert pipeline.measure(text_element("a")).height == pytest.approx(48)


def test_explicit_config_wins_over_environment(monkeypatch):
    monkeypatch.setenv("COLLAGE_DEFAULT_TEXT_HEIGHT", "40")
    assert create_pipeline(config=EngineConfig()).config.default_text_height == 16
