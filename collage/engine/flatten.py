"""Flatten — resolve arranged trees into primitives in paint order.

One pre-order, left-to-right walk. The ``Accumulator`` carries the
composed transform, the product of every ancestor's alpha and the clip
regions of overflowing containers. Each drawable emits exactly one
primitive; groups, flows and containers emit their children in order, so
emission order is paint order (back to front).

Fully transparent subtrees are still emitted, with alpha 0.
"""

from __future__ import annotations

from collections.abc import Iterator

from collage.engine.context import Accumulator, LayoutNode, RenderContext
from collage.engine.metrics import measure_text, with_default_height
from collage.engine.registry import Stage, handler
from collage.models.geometry import Rect
from collage.models.nodes import (
    Container,
    ElementForm,
    Direction,
    ElementKind,
    Flow,
    FormKind,
    FormPayload,
    GroupForm,
    ImageFit,
    ImageForm,
    ImagePayload,
    Leaf,
    PathForm,
    PayloadKind,
    ShapeForm,
    SpacerPayload,
    TextForm,
    TextPayload,
)
from collage.models.scene import (
    Geometry,
    ImageGeometry,
    PolygonGeometry,
    PolylineGeometry,
    Primitive,
    ResolvedStyle,
    TextGeometry,
)
from collage.models.style import FillStyle, NoFill, SolidFill, fade_fill
from collage.models.text import Text, TextAnchor, TextSpan
from collage.utils.geometry import as_points, distinct_count

Primitives = Iterator[Primitive]


# =============================================================================
# Helpers
# =============================================================================


def _emit(acc: Accumulator, geometry: Geometry, style: ResolvedStyle | None = None) -> Primitive:
    return Primitive(
        transform=acc.transform,
        alpha=acc.alpha,
        style=style or ResolvedStyle(),
        geometry=geometry,
        clips=acc.clips,
    )


def resolve_fill(fill: FillStyle, alpha: float) -> FillStyle | None:
    """``NoFill`` resolves to no fill at all; colors are multiplied by ``alpha``."""
    if isinstance(fill, NoFill):
        return None
    return fade_fill(fill, alpha)


def _text_spans(text: Text, alpha: float, ctx: RenderContext) -> tuple[TextSpan, ...]:
    # Spans leave the engine with a concrete height and faded color
    spans = []
    for span in text.spans:
        style = with_default_height(span.style, ctx.config)
        style = style.model_copy(update={"color": style.color.fade(alpha)})
        spans.append(TextSpan(string=span.string, style=style))
    return tuple(spans)


def _anchored_bounds(anchor: TextAnchor, width: float, height: float) -> Rect:
    if anchor is TextAnchor.TO_LEFT:
        x = -width
    elif anchor is TextAnchor.TO_RIGHT:
        x = 0.0
    else:
        x = -width / 2
    return Rect(x=x, y=-height / 2, width=width, height=height)


def image_source_rect(payload: ImagePayload, width: float, height: float) -> Rect | None:
    """Part of the image shown in a ``width`` x ``height`` box. ``None`` means all of it."""
    nw, nh = payload.natural_width, payload.natural_height

    if payload.fit is ImageFit.CROPPED:
        cx, cy = payload.crop_origin
        return Rect(x=cx, y=cy, width=width, height=height)

    if payload.fit is ImageFit.FITTED:
        if width <= 0 or height <= 0 or nw <= 0 or nh <= 0:
            return None
        # Cover the box, then cut the overhang evenly from both sides
        scale = max(width / nw, height / nh)
        sw, sh = width / scale, height / scale
        return Rect(x=(nw - sw) / 2, y=(nh - sh) / 2, width=sw, height=sh)

    return None


# =============================================================================
# Forms
# =============================================================================


@handler(stage=Stage.FLATTEN_FORM, kind=FormKind.PATH, description="Trace a polyline")
def flatten_path(form: PathForm, acc: Accumulator, ctx: RenderContext) -> Primitives:
    if len(form.points) < ctx.config.min_path_points:
        return
    acc = acc.push(form.transform, form.alpha)
    style = ResolvedStyle(stroke=form.line_style.faded(acc.alpha))
    yield _emit(acc, PolylineGeometry(points=form.points), style)


@handler(stage=Stage.FLATTEN_FORM, kind=FormKind.SHAPE, description="Fill and outline a polygon")
def flatten_shape(form: ShapeForm, acc: Accumulator, ctx: RenderContext) -> Primitives:
    if distinct_count(as_points(form.points)) < ctx.config.min_shape_points:
        return
    acc = acc.push(form.transform, form.alpha)
    outline = form.style.outline
    style = ResolvedStyle(
        fill=resolve_fill(form.style.fill, acc.alpha),
        stroke=outline.faded(acc.alpha) if outline is not None else None,
    )
    yield _emit(acc, PolygonGeometry(points=form.points), style)


@handler(stage=Stage.FLATTEN_FORM, kind=FormKind.TEXT, description="Place text by its anchor")
def flatten_text_form(form: TextForm, acc: Accumulator, ctx: RenderContext) -> Primitives:
    acc = acc.push(form.transform, form.alpha)
    metrics = measure_text(form.text, ctx.measurer, ctx.config)
    bounds = _anchored_bounds(form.text.anchor, metrics.width, metrics.height)
    geometry = TextGeometry(
        spans=_text_spans(form.text, acc.alpha, ctx),
        bounds=bounds,
        baseline=metrics.baseline,
    )
    stroke = form.outline.faded(acc.alpha) if form.outline is not None else None
    yield _emit(acc, geometry, ResolvedStyle(stroke=stroke))


@handler(stage=Stage.FLATTEN_FORM, kind=FormKind.IMAGE, description="Centre an image")
def flatten_image_form(form: ImageForm, acc: Accumulator, ctx: RenderContext) -> Primitives:
    acc = acc.push(form.transform, form.alpha)
    bounds = Rect(x=-form.width / 2, y=-form.height / 2, width=form.width, height=form.height)
    geometry = ImageGeometry(reference=form.reference, bounds=bounds, source_rect=form.source_rect)
    yield _emit(acc, geometry)


@handler(stage=Stage.FLATTEN_FORM, kind=FormKind.ELEMENT, description="Lay out an embedded element")
def flatten_element_form(form: ElementForm, acc: Accumulator, ctx: RenderContext) -> Primitives:
    acc = acc.push(form.transform, form.alpha)
    node = ctx.layout(form.element)
    yield from ctx.flatten_node(node, acc.translate(-node.width / 2, -node.height / 2))


@handler(stage=Stage.FLATTEN_FORM, kind=FormKind.GROUP, description="Flatten sub-forms in order")
def flatten_group(form: GroupForm, acc: Accumulator, ctx: RenderContext) -> Primitives:
    acc = acc.push(form.transform, form.alpha)
    for child in form.forms:
        yield from ctx.flatten_form(child, acc)


# =============================================================================
# Elements
# =============================================================================


def _background(node: LayoutNode, acc: Accumulator, ctx: RenderContext) -> Primitives:
    color = node.element.background
    if color is None or not ctx.config.emit_backgrounds:
        return
    style = ResolvedStyle(fill=SolidFill(color=color.fade(acc.alpha)))
    yield _emit(acc, PolygonGeometry(points=node.box.corners()), style)


@handler(stage=Stage.FLATTEN_ELEMENT, kind=ElementKind.LEAF, description="Background then payload")
def flatten_leaf(leaf: Leaf, node: LayoutNode, acc: Accumulator, ctx: RenderContext) -> Primitives:
    yield from _background(node, acc, ctx)
    yield from ctx.flatten_payload(leaf.payload, node, acc)


@handler(stage=Stage.FLATTEN_ELEMENT, kind=ElementKind.CONTAINER, description="Clip overflow")
def flatten_container(
    container: Container, node: LayoutNode, acc: Accumulator, ctx: RenderContext
) -> Primitives:
    yield from _background(node, acc, ctx)
    if node.overflows():
        acc = acc.clip(node.box)
    for child in node.children:
        yield from ctx.flatten_node(child, acc)


@handler(stage=Stage.FLATTEN_ELEMENT, kind=ElementKind.FLOW, description="Children in order")
def flatten_flow(flow: Flow, node: LayoutNode, acc: Accumulator, ctx: RenderContext) -> Primitives:
    yield from _background(node, acc, ctx)
    children = node.children
    if flow.direction is Direction.INWARD:
        children = reversed(children)
    for child in children:
        yield from ctx.flatten_node(child, acc)


# =============================================================================
# Payloads
# =============================================================================


@handler(stage=Stage.FLATTEN_PAYLOAD, kind=PayloadKind.FORM, description="Forms inside a leaf")
def flatten_form_payload(
    payload: FormPayload, node: LayoutNode, acc: Accumulator, ctx: RenderContext
) -> Primitives:
    if payload.centred:
        acc = acc.translate(node.width / 2, node.height / 2)
    elif node.content_bounds is not None:
        acc = acc.translate(-node.content_bounds.x, -node.content_bounds.y)
    for form in payload.forms:
        yield from ctx.flatten_form(form, acc)


@handler(stage=Stage.FLATTEN_PAYLOAD, kind=PayloadKind.TEXT, description="Text at the leaf origin")
def flatten_text_payload(
    payload: TextPayload, node: LayoutNode, acc: Accumulator, ctx: RenderContext
) -> Primitives:
    metrics = measure_text(payload.text, ctx.measurer, ctx.config)
    geometry = TextGeometry(
        spans=_text_spans(payload.text, acc.alpha, ctx),
        bounds=Rect(width=metrics.width, height=metrics.height),
        baseline=metrics.baseline,
    )
    yield _emit(acc, geometry)


@handler(stage=Stage.FLATTEN_PAYLOAD, kind=PayloadKind.IMAGE, description="Image per fit mode")
def flatten_image_payload(
    payload: ImagePayload, node: LayoutNode, acc: Accumulator, ctx: RenderContext
) -> Primitives:
    geometry = ImageGeometry(
        reference=payload.reference,
        bounds=node.box,
        source_rect=image_source_rect(payload, node.width, node.height),
        tiled=payload.fit is ImageFit.TILED,
    )
    yield _emit(acc, geometry)


@handler(stage=Stage.FLATTEN_PAYLOAD, kind=PayloadKind.SPACER, description="Spacers draw nothing")
def flatten_spacer(
    payload: SpacerPayload, node: LayoutNode, acc: Accumulator, ctx: RenderContext
) -> Primitives:
    return iter(())
