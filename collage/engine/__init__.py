"""Collage layout and flattening engine."""

from collage.engine import arrange, flatten, measure  # noqa: F401  (registers handlers)
from collage.engine.config import EngineConfig
from collage.engine.context import Accumulator, LayoutNode, Measured, RenderContext
from collage.engine.metrics import ApproximateTextMeasurer
from collage.engine.pipeline import Pipeline, create_pipeline
from collage.engine.registry import Stage, get_registry, handler

get_registry().verify()

__all__ = [
    "handler",
    "Stage",
    "get_registry",
    "EngineConfig",
    "Accumulator",
    "LayoutNode",
    "Measured",
    "RenderContext",
    "ApproximateTextMeasurer",
    "Pipeline",
    "create_pipeline",
]
