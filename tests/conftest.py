"""Shared test fixtures."""

from __future__ import annotations

import pytest

from collage.engine import ApproximateTextMeasurer, EngineConfig, Pipeline
from collage.forms import filled, path, rect, traced
from collage.models.color import BLUE, RED
from collage.models.style import solid_line


@pytest.fixture
def engine_config() -> EngineConfig:
    # Plain defaults, independent of any COLLAGE_* environment
    return EngineConfig()


@pytest.fixture
def measurer(engine_config: EngineConfig) -> ApproximateTextMeasurer:
    return ApproximateTextMeasurer(engine_config)


@pytest.fixture
def pipeline(engine_config: EngineConfig, measurer: ApproximateTextMeasurer) -> Pipeline:
    return Pipeline(config=engine_config, measurer=measurer)


@pytest.fixture
def red_square():
    return filled(RED, rect(10, 10))


@pytest.fixture
def blue_stroke():
    return traced(solid_line(BLUE), path([(0, 0), (5, 5)]))
