"""collage — functional 2D form and element composition.

Build immutable trees of forms (vector drawings) and elements (layout
boxes), then flatten them into a ``Scene``: an ordered tuple of positioned,
styled primitives ready for any renderer.

    from collage import render
    from collage.elements import above, text_element, collage
    from collage.forms import filled, circle
    from collage.models.color import RED

    scene = render(above(text_element("Hello"), collage(40, 40, [filled(RED, circle(15))])))
"""

from __future__ import annotations

from collage.engine import Pipeline, create_pipeline
from collage.errors import (
    CollageError,
    DuplicateHandler,
    InvalidGradientStops,
    InvalidLayoutSpec,
    MissingHandler,
    SingularTransform,
)
from collage.interfaces import ImageResolver, PrimitiveSink, TextMeasurer, TextMetrics, draw
from collage.models.nodes import Element, Form
from collage.models.scene import Primitive, Scene

__version__ = "0.1.0"


def render(element: Element, size: tuple[float, float] | None = None) -> Scene:
    """Lay out and flatten ``element`` with the default pipeline."""
    return create_pipeline().render(element, size)


def flatten(form: Form) -> tuple[Primitive, ...]:
    """Flatten a free-standing form with the default pipeline."""
    return create_pipeline().flatten_form(form)


__all__ = [
    "render",
    "flatten",
    "draw",
    "Pipeline",
    "create_pipeline",
    "Scene",
    "Primitive",
    "TextMeasurer",
    "TextMetrics",
    "PrimitiveSink",
    "ImageResolver",
    "CollageError",
    "SingularTransform",
    "InvalidLayoutSpec",
    "InvalidGradientStops",
    "MissingHandler",
    "DuplicateHandler",
]
