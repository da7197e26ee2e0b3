"""Measure — intrinsic sizes, resolved bottom-up.

Leaf sizes come from the payload unless set explicitly. Containers take
their requested size or wrap the child plus padding. Flows add child
extents along their axis and take the largest across it.
"""

from __future__ import annotations

import numpy as np

from collage.engine.context import Accumulator, Measured, RenderContext
from collage.engine.metrics import measure_text
from collage.engine.registry import Stage, handler
from collage.models.geometry import Rect, bounding_box
from collage.models.nodes import (
    Container,
    ElementKind,
    Flow,
    FormPayload,
    ImagePayload,
    Leaf,
    PayloadKind,
    SpacerPayload,
    TextPayload,
)

PayloadSize = tuple[float, float, Rect | None]


def _flattened_points(forms, ctx: RenderContext) -> np.ndarray:
    chunks = [
        p.absolute_points() for form in forms for p in ctx.flatten_form(form, Accumulator())
    ]
    return np.vstack(chunks) if chunks else np.empty((0, 2))


def form_bounds(form, ctx: RenderContext) -> Rect:
    """Bounding rectangle of everything ``form`` flattens to, stroke widths excluded."""
    return bounding_box(_flattened_points((form,), ctx))


# =============================================================================
# Elements
# =============================================================================


@handler(stage=Stage.MEASURE_ELEMENT, kind=ElementKind.LEAF, description="Size a leaf")
def measure_leaf(leaf: Leaf, ctx: RenderContext) -> Measured:
    natural_w, natural_h, content_bounds = ctx.measure_payload(leaf.payload)
    width, height = leaf.width, leaf.height

    # Images keep their natural aspect ratio when only one side is pinned
    if isinstance(leaf.payload, ImagePayload):
        if width is not None and height is None and natural_w > 0:
            height = width * natural_h / natural_w
        elif height is not None and width is None and natural_h > 0:
            width = height * natural_w / natural_h

    return Measured(
        element=leaf,
        width=natural_w if width is None else width,
        height=natural_h if height is None else height,
        content_bounds=content_bounds,
    )


@handler(stage=Stage.MEASURE_ELEMENT, kind=ElementKind.CONTAINER, description="Size a container")
def measure_container(container: Container, ctx: RenderContext) -> Measured:
    child = ctx.measure(container.child)
    pad = container.padding
    width = container.width if container.width is not None else child.width + pad.horizontal
    height = container.height if container.height is not None else child.height + pad.vertical
    return Measured(element=container, width=width, height=height, children=(child,))


@handler(stage=Stage.MEASURE_ELEMENT, kind=ElementKind.FLOW, description="Size a flow")
def measure_flow(flow: Flow, ctx: RenderContext) -> Measured:
    children = tuple(ctx.measure(child) for child in flow.children)
    widths = [c.width for c in children]
    heights = [c.height for c in children]

    if flow.direction.is_horizontal:
        width, height = sum(widths), max(heights, default=0.0)
    elif flow.direction.is_vertical:
        width, height = max(widths, default=0.0), sum(heights)
    else:
        width, height = max(widths, default=0.0), max(heights, default=0.0)

    return Measured(element=flow, width=width, height=height, children=children)


# =============================================================================
# Payloads
# =============================================================================


@handler(stage=Stage.MEASURE_PAYLOAD, kind=PayloadKind.FORM, description="Bounding box of forms")
def measure_forms(payload: FormPayload, ctx: RenderContext) -> PayloadSize:
    points = _flattened_points(payload.forms, ctx)
    bounds = bounding_box(points)
    if payload.centred:
        # Drawn around the box centre: the box spans the farthest point on each side
        if len(points) == 0:
            return 0.0, 0.0, bounds
        reach = np.abs(points).max(axis=0)
        return 2 * float(reach[0]), 2 * float(reach[1]), bounds
    return bounds.width, bounds.height, bounds


@handler(stage=Stage.MEASURE_PAYLOAD, kind=PayloadKind.TEXT, description="Text metrics")
def measure_text_payload(payload: TextPayload, ctx: RenderContext) -> PayloadSize:
    metrics = measure_text(payload.text, ctx.measurer, ctx.config)
    return metrics.width, metrics.height, None


@handler(stage=Stage.MEASURE_PAYLOAD, kind=PayloadKind.IMAGE, description="Natural image size")
def measure_image(payload: ImagePayload, ctx: RenderContext) -> PayloadSize:
    return payload.natural_width, payload.natural_height, None


@handler(stage=Stage.MEASURE_PAYLOAD, kind=PayloadKind.SPACER, description="Spacers are empty")
def measure_spacer(payload: SpacerPayload, ctx: RenderContext) -> PayloadSize:
    return 0.0, 0.0, None
