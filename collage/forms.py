"""Form algebra — builders and combinators for freeform vector drawings.

Every combinator returns a new form. Transform combinators fold the new
transform in front of the form's own (``compose(new, local)``), so it acts
in the parent's coordinate space about the parent origin, exactly as if the
form were wrapped in a group carrying that transform.

Shapes and paths are plain point tuples until styled:

    filled(RED, rect(40, 20))
    traced(dashed(BLUE), path([(0, 0), (10, 10), (20, 0)]))
"""

from __future__ import annotations

from collections.abc import Sequence

from collage.models.color import Color, Gradient
from collage.models.geometry import (
    Point,
    Rect,
    Transform2D,
    compose,
    rotation,
    scaling,
    translation,
)
from collage.models.nodes import (
    Element,
    ElementForm,
    Form,
    GroupForm,
    ImageForm,
    PathForm,
    ShapeForm,
    TextForm,
)
from collage.models.style import (
    FillStyle,
    LineStyle,
    ShapeStyle,
    SolidFill,
    gradient_fill,
    texture,
)
from collage.models.text import Text
from collage.utils.geometry import ellipse_points, regular_polygon_points, to_point_tuple
from collage.utils.math_helpers import clamp01

Shape = tuple[Point, ...]
Path = tuple[Point, ...]


# =============================================================================
# Shapes and paths
# =============================================================================


def polygon(points: Sequence[Point]) -> Shape:
    return tuple((float(x), float(y)) for x, y in points)


def rect(width: float, height: float) -> Shape:
    """Rectangle centred on the origin."""
    hw, hh = width / 2, height / 2
    return ((-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh))


def square(n: float) -> Shape:
    return rect(n, n)


def oval(width: float, height: float, segments: int = 50) -> Shape:
    return to_point_tuple(ellipse_points(width, height, segments))


def circle(radius: float, segments: int = 50) -> Shape:
    return oval(2 * radius, 2 * radius, segments)


def ngon(sides: int, radius: float) -> Shape:
    """Regular polygon with one vertex on the +x axis."""
    return to_point_tuple(regular_polygon_points(sides, radius))


def path(points: Sequence[Point]) -> Path:
    return tuple((float(x), float(y)) for x, y in points)


def segment(a: Point, b: Point) -> Path:
    return path([a, b])


# =============================================================================
# Styling shapes and paths into forms
# =============================================================================


def trace_outline(line_style: LineStyle, points: Path) -> PathForm:
    return PathForm(points=points, line_style=line_style)


traced = trace_outline


def line(line_style: LineStyle, x1: float, y1: float, x2: float, y2: float) -> PathForm:
    return trace_outline(line_style, segment((x1, y1), (x2, y2)))


def fill_shape(style: FillStyle | ShapeStyle, shape: Shape) -> ShapeForm:
    """Fill ``shape``. A bare fill style gets no outline."""
    if not isinstance(style, ShapeStyle):
        style = ShapeStyle(fill=style)
    return ShapeForm(points=shape, style=style)


def filled(color: Color, shape: Shape) -> ShapeForm:
    return fill_shape(SolidFill(color=color), shape)


def textured(reference: str, shape: Shape) -> ShapeForm:
    return fill_shape(texture(reference), shape)


def gradient_filled(grad: Gradient, shape: Shape) -> ShapeForm:
    return fill_shape(gradient_fill(grad), shape)


def outline_shape(line_style: LineStyle, shape: Shape) -> ShapeForm:
    return ShapeForm(points=shape, style=ShapeStyle(outline=line_style))


def text(t: Text) -> TextForm:
    return TextForm(text=t)


def outlined_text(line_style: LineStyle, t: Text) -> TextForm:
    return TextForm(text=t, outline=line_style)


def image_form(reference: str, width: float, height: float) -> ImageForm:
    return ImageForm(reference=reference, width=width, height=height)


def sprite(
    width: float, height: float, source_x: float, source_y: float, reference: str
) -> ImageForm:
    """A ``width`` x ``height`` window of the image starting at ``(source_x, source_y)``."""
    source = Rect(x=source_x, y=source_y, width=width, height=height)
    return ImageForm(reference=reference, width=width, height=height, source_rect=source)


def to_form(element: Element) -> ElementForm:
    """Embed an element in a collage, centred on the form origin."""
    return ElementForm(element=element)


# =============================================================================
# Grouping and transforms
# =============================================================================


def group(forms: Sequence[Form]) -> GroupForm:
    """Later forms paint over earlier ones."""
    return GroupForm(forms=tuple(forms))


def group_transform(t: Transform2D, forms: Sequence[Form]) -> GroupForm:
    return GroupForm(forms=tuple(forms), transform=t)


def transform(t: Transform2D, form: Form) -> Form:
    return form.model_copy(update={"transform": compose(t, form.transform)})


def move(dx: float, dy: float, form: Form) -> Form:
    return transform(translation(dx, dy), form)


def move_x(dx: float, form: Form) -> Form:
    return move(dx, 0.0, form)


def move_y(dy: float, form: Form) -> Form:
    return move(0.0, dy, form)


def rotate(theta: float, form: Form) -> Form:
    """Rotate by ``theta`` radians. With y down, positive angles turn clockwise on screen."""
    return transform(rotation(theta), form)


def scale(sx: float, sy: float, form: Form) -> Form:
    return transform(scaling(sx, sy), form)


def scale_uniform(s: float, form: Form) -> Form:
    return transform(scaling(s), form)


def alpha(a: float, form: Form) -> Form:
    """Multiply the form's opacity by ``a``."""
    # model_copy skips validation, so clamp here
    return form.model_copy(update={"alpha": clamp01(form.alpha * a)})
