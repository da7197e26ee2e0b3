"""Element combinators — layout boxes built from text, images, forms and other elements.

    page = above(
        text_element("Title"),
        beside(image(64, 64, "logo.png"), spacer(8, 0)),
    )

Setters re-validate, so a negative size raises ``InvalidLayoutSpec`` at the
call site rather than during layout.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from collage.engine import Pipeline, create_pipeline
from collage.models.color import Color
from collage.models.nodes import (
    NO_PADDING,
    TOP_LEFT,
    Container,
    Direction,
    Element,
    Flow,
    Form,
    FormPayload,
    ImageFit,
    ImagePayload,
    Leaf,
    Padding,
    Position,
    TextPayload,
)
from collage.models.text import Text, from_string

Size = tuple[float, float]


def _replace(model: BaseModel, **changes: Any) -> Any:
    # Rebuild instead of model_copy so validators run on the new values
    return type(model)(**{**dict(model), **changes})


# =============================================================================
# Leaves
# =============================================================================


def spacer(width: float, height: float) -> Leaf:
    return Leaf(width=width, height=height)


def empty() -> Leaf:
    return spacer(0.0, 0.0)


def text_element(text: Text | str) -> Leaf:
    if isinstance(text, str):
        text = from_string(text)
    return Leaf(payload=TextPayload(text=text))


def collage(width: float, height: float, forms: Sequence[Form]) -> Leaf:
    """A ``width`` x ``height`` drawing surface. Forms are placed relative to its centre."""
    return Leaf(width=width, height=height, payload=FormPayload(forms=tuple(forms), centred=True))


def fitted_form(form: Form) -> Leaf:
    """A leaf sized to the form's bounding box, with the box's corner at the leaf origin."""
    return Leaf(payload=FormPayload(forms=(form,), centred=False))


def _image_leaf(
    width: float,
    height: float,
    reference: str,
    fit: ImageFit,
    natural_size: Size | None,
    crop_origin: tuple[float, float] = (0.0, 0.0),
) -> Leaf:
    natural_w, natural_h = natural_size if natural_size is not None else (width, height)
    payload = ImagePayload(
        reference=reference,
        natural_width=natural_w,
        natural_height=natural_h,
        fit=fit,
        crop_origin=crop_origin,
    )
    return Leaf(width=width, height=height, payload=payload)


def image(width: float, height: float, reference: str) -> Leaf:
    """The whole image stretched over a ``width`` x ``height`` box."""
    return _image_leaf(width, height, reference, ImageFit.PLAIN, None)


def fitted_image(
    width: float, height: float, reference: str, natural_size: Size | None = None
) -> Leaf:
    """Fill the box without distortion, cropping the overhang evenly from both sides.

    The crop is computed from ``natural_size``; without it the image is
    assumed to already have the box's proportions.
    """
    return _image_leaf(width, height, reference, ImageFit.FITTED, natural_size)


def cropped_image(
    x: float,
    y: float,
    width: float,
    height: float,
    reference: str,
    natural_size: Size | None = None,
) -> Leaf:
    """A ``width`` x ``height`` window of the image starting at ``(x, y)``."""
    natural_size = natural_size or (x + width, y + height)
    return _image_leaf(width, height, reference, ImageFit.CROPPED, natural_size, (x, y))


def tiled_image(
    width: float, height: float, reference: str, natural_size: Size | None = None
) -> Leaf:
    """Repeat the image at ``natural_size`` across the box."""
    return _image_leaf(width, height, reference, ImageFit.TILED, natural_size)


# =============================================================================
# Composition
# =============================================================================


def container(
    width: float | None,
    height: float | None,
    position: Position,
    element: Element,
    padding: Padding | float | None = None,
) -> Container:
    if isinstance(padding, (int, float)):
        padding = Padding.uniform(padding)
    return Container(
        child=element,
        width=width,
        height=height,
        position=position,
        padding=padding or NO_PADDING,
    )


def padded(padding: Padding | float, element: Element) -> Container:
    """Wrap ``element`` with space around it."""
    return container(None, None, TOP_LEFT, element, padding)


def flow(
    direction: Direction,
    elements: Sequence[Element],
    align: float | Sequence[float] = 0.0,
) -> Flow:
    """Place elements edge to edge. ``align`` is one cross-axis fraction for all, or one per element."""
    elements = tuple(elements)
    if isinstance(align, (int, float)):
        cross = (float(align),) * len(elements)
    else:
        cross = tuple(align)
    return Flow(direction=direction, children=elements, cross_align=cross)


def layers(elements: Sequence[Element]) -> Flow:
    """Stack elements on top of each other. The first is at the bottom."""
    return flow(Direction.OUTWARD, elements)


def above(top: Element, bottom: Element) -> Flow:
    return flow(Direction.DOWN, [top, bottom])


def below(bottom: Element, top: Element) -> Flow:
    """``bottom`` placed below ``top``."""
    return flow(Direction.DOWN, [top, bottom])


def beside(left: Element, right: Element) -> Flow:
    return flow(Direction.RIGHT, [left, right])


# =============================================================================
# Sizing and appearance
# =============================================================================


def width(w: float, element: Element) -> Element:
    """Set the box width.

    Image leaves drop their height so it follows the natural aspect ratio.
    Flows have no requested size of their own and are wrapped in a container.
    """
    if isinstance(element, Leaf):
        if isinstance(element.payload, ImagePayload):
            return _replace(element, width=w, height=None)
        return _replace(element, width=w)
    if isinstance(element, Container):
        return _replace(element, width=w)
    return Container(child=element, width=w)


def height(h: float, element: Element) -> Element:
    """Set the box height. See ``width``."""
    if isinstance(element, Leaf):
        if isinstance(element.payload, ImagePayload):
            return _replace(element, width=None, height=h)
        return _replace(element, height=h)
    if isinstance(element, Container):
        return _replace(element, height=h)
    return Container(child=element, height=h)


def size(w: float, h: float, element: Element) -> Element:
    if isinstance(element, (Leaf, Container)):
        return _replace(element, width=w, height=h)
    return Container(child=element, width=w, height=h)


def opacity(o: float, element: Element) -> Element:
    return _replace(element, opacity=o)


def color(c: Color | None, element: Element) -> Element:
    """Paint ``c`` behind the element's box."""
    return _replace(element, background=c)


# =============================================================================
# Intrinsic size
# =============================================================================


def size_of(element: Element, pipeline: Pipeline | None = None) -> Size:
    """Intrinsic ``(width, height)``, measured with ``pipeline`` (default pipeline if omitted)."""
    measured = (pipeline or create_pipeline()).measure(element)
    return measured.width, measured.height


def width_of(element: Element, pipeline: Pipeline | None = None) -> float:
    return size_of(element, pipeline)[0]


def height_of(element: Element, pipeline: Pipeline | None = None) -> float:
    return size_of(element, pipeline)[1]
