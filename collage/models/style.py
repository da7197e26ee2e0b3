"""Line, fill and shape styles."""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from collage.errors import InvalidLayoutSpec
from collage.models.color import BLACK, Color, Gradient, GradientStop, fade_gradient, linear
from collage.models.geometry import Point


class LineCap(str, enum.Enum):
    FLAT = "flat"
    ROUND = "round"
    PADDED = "padded"


class LineJoin(str, enum.Enum):
    SMOOTH = "smooth"
    SHARP = "sharp"
    CLIPPED = "clipped"


class LineStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: Color = BLACK
    width: float = 1.0
    cap: LineCap = LineCap.FLAT
    join: LineJoin = LineJoin.SHARP
    miter_limit: float = 10.0  # only meaningful for SHARP joins
    dashing: tuple[float, ...] = ()
    dash_offset: float = 0.0

    @field_validator("width", "miter_limit")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise InvalidLayoutSpec(f"Line width and miter limit must be non-negative, got {v}")
        return v

    @field_validator("dashing")
    @classmethod
    def _dashes_non_negative(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        if any(d < 0 for d in v):
            raise InvalidLayoutSpec(f"Dash lengths must be non-negative, got {v}")
        return v

    def with_width(self, width: float) -> LineStyle:
        return LineStyle(**{**dict(self), "width": width})

    def faded(self, factor: float) -> LineStyle:
        return self.model_copy(update={"color": self.color.fade(factor)})


def default_line() -> LineStyle:
    """Black, 1 wide, flat caps, sharp joins (miter limit 10), no dashing."""
    return LineStyle()


def solid_line(color: Color) -> LineStyle:
    return LineStyle(color=color)


def dashed(color: Color) -> LineStyle:
    """Dashing of 8 on, 4 off."""
    return LineStyle(color=color, dashing=(8.0, 4.0))


def dotted(color: Color) -> LineStyle:
    """Dashing of 3 on, 3 off."""
    return LineStyle(color=color, dashing=(3.0, 3.0))


# ---------------------------------------------------------------------------
# Fill styles
# ---------------------------------------------------------------------------


class FillKind(str, enum.Enum):
    NONE = "none"
    SOLID = "solid"
    GRADIENT = "gradient"
    TEXTURE = "texture"


class NoFill(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[FillKind.NONE] = FillKind.NONE


class SolidFill(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[FillKind.SOLID] = FillKind.SOLID
    color: Color


class GradientFill(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[FillKind.GRADIENT] = FillKind.GRADIENT
    gradient: Gradient


class TextureFill(BaseModel):
    """A texture tiled over the shape. ``reference`` is resolved by the renderer."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[FillKind.TEXTURE] = FillKind.TEXTURE
    reference: str


FillStyle = Annotated[
    Union[NoFill, SolidFill, GradientFill, TextureFill],
    Field(discriminator="kind"),
]

NO_FILL = NoFill()


def fade_fill(fill: FillStyle, factor: float) -> FillStyle:
    """Blend ``factor`` into every color the fill carries.

    Textures have no color of their own; their opacity travels on the
    primitive's ``alpha``.
    """
    if isinstance(fill, SolidFill):
        return SolidFill(color=fill.color.fade(factor))
    if isinstance(fill, GradientFill):
        return GradientFill(gradient=fade_gradient(fill.gradient, factor))
    return fill


def no_fill() -> NoFill:
    return NO_FILL


def solid(color: Color) -> SolidFill:
    return SolidFill(color=color)


def gradient(
    stops: list[GradientStop],
    start: Point = (0.0, 0.0),
    end: Point = (1.0, 0.0),
) -> GradientFill:
    """Linear gradient fill. Raises ``InvalidGradientStops`` on bad stops."""
    return GradientFill(gradient=linear(start, end, stops))


def gradient_fill(grad: Gradient) -> GradientFill:
    return GradientFill(gradient=grad)


def texture(reference: str) -> TextureFill:
    return TextureFill(reference=reference)


# ---------------------------------------------------------------------------
# Shape styles
# ---------------------------------------------------------------------------


class ShapeStyle(BaseModel):
    """How a closed shape is painted: a fill, optionally with an outline on top."""

    model_config = ConfigDict(frozen=True)

    fill: FillStyle = NO_FILL
    outline: LineStyle | None = None


def filled_style(fill: FillStyle) -> ShapeStyle:
    return ShapeStyle(fill=fill)


def outlined(line_style: LineStyle, base: ShapeStyle | None = None) -> ShapeStyle:
    """Add an outline to ``base`` (an unfilled style when omitted)."""
    base = base or ShapeStyle()
    return base.model_copy(update={"outline": line_style})
