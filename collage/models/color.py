"""Colors and gradients.

Colors are stored as RGBA floats in [0, 1]. Out-of-range channels are
clamped, never rejected. ``rgb``/``rgba`` take the familiar 0-255 channel
values; HSL constructors take the hue in radians.
"""

from __future__ import annotations

import enum
import math
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from collage.errors import InvalidGradientStops
from collage.models.geometry import Point
from collage.utils.math_helpers import clamp01, degrees, fmod, wrap_angle


class Color(BaseModel):
    model_config = ConfigDict(frozen=True)

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    @field_validator("r", "g", "b", "a", mode="before")
    @classmethod
    def _clamp(cls, v: float) -> float:
        return clamp01(float(v))

    def with_alpha(self, a: float) -> Color:
        return Color(r=self.r, g=self.g, b=self.b, a=a)

    def fade(self, factor: float) -> Color:
        """Multiply the alpha channel by ``factor``."""
        return self.with_alpha(self.a * clamp01(factor))

    def to_rgb255(self) -> tuple[int, int, int, float]:
        return (
            int(round(self.r * 255)),
            int(round(self.g * 255)),
            int(round(self.b * 255)),
            self.a,
        )

    def to_hsl(self) -> tuple[float, float, float, float]:
        """(hue in radians, saturation, lightness, alpha)."""
        h, s, l = rgb_to_hsl(self.r, self.g, self.b)
        return (h, s, l, self.a)

    def complement(self) -> Color:
        """Rotate the hue by 180 degrees."""
        h, s, l, a = self.to_hsl()
        return hsla(h + degrees(180.0), s, l, a)

    def to_hex(self) -> str:
        r, g, b, _ = self.to_rgb255()
        return f"#{r:02x}{g:02x}{b:02x}"


def rgba(r: float, g: float, b: float, a: float) -> Color:
    """RGB channels in 0-255, alpha in 0-1."""
    return Color(r=r / 255.0, g=g / 255.0, b=b / 255.0, a=a)


def rgb(r: float, g: float, b: float) -> Color:
    return rgba(r, g, b, 1.0)


def hsla(hue: float, saturation: float, lightness: float, alpha: float) -> Color:
    r, g, b = hsl_to_rgb(wrap_angle(hue), clamp01(saturation), clamp01(lightness))
    return Color(r=r, g=g, b=b, a=alpha)


def hsl(hue: float, saturation: float, lightness: float) -> Color:
    return hsla(hue, saturation, lightness, 1.0)


def grayscale(p: float) -> Color:
    """A gray from 0 (white) to 1 (black)."""
    return hsla(0.0, 0.0, 1.0 - clamp01(p), 1.0)


greyscale = grayscale


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    chroma = c_max - c_min
    if chroma == 0:
        hue = 0.0
    elif c_max == r:
        hue = degrees(60.0) * fmod((g - b) / chroma, 6)
    elif c_max == g:
        hue = degrees(60.0) * ((b - r) / chroma + 2.0)
    else:
        hue = degrees(60.0) * ((r - g) / chroma + 4.0)
    lightness = (c_max + c_min) / 2.0
    if lightness in (0.0, 1.0):
        saturation = 0.0
    else:
        saturation = chroma / (1.0 - abs(2.0 * lightness - 1.0))
    return hue, saturation, lightness


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> tuple[float, float, float]:
    chroma = (1.0 - abs(2.0 * lightness - 1.0)) * saturation
    sector = hue / degrees(60.0)
    x = chroma * (1.0 - abs(fmod(sector, 2) - 1.0))
    if sector < 1.0:
        r, g, b = chroma, x, 0.0
    elif sector < 2.0:
        r, g, b = x, chroma, 0.0
    elif sector < 3.0:
        r, g, b = 0.0, chroma, x
    elif sector < 4.0:
        r, g, b = 0.0, x, chroma
    elif sector < 5.0:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x
    m = lightness - chroma / 2.0
    return r + m, g + m, b + m


# ---------------------------------------------------------------------------
# Gradients
# ---------------------------------------------------------------------------

GradientStop = tuple[float, Color]


def validate_stops(stops: tuple[GradientStop, ...]) -> tuple[GradientStop, ...]:
    """Stops must be non-empty, within [0, 1] and strictly increasing."""
    if not stops:
        raise InvalidGradientStops("A gradient needs at least one color stop")
    previous = -math.inf
    for offset, _ in stops:
        if not 0.0 <= offset <= 1.0:
            raise InvalidGradientStops(f"Stop offset {offset} outside [0, 1]")
        if offset <= previous:
            raise InvalidGradientStops(
                f"Stop offsets must be strictly increasing ({previous} then {offset})"
            )
        previous = offset
    return stops


class GradientKind(str, enum.Enum):
    LINEAR = "linear"
    RADIAL = "radial"


class LinearGradient(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[GradientKind.LINEAR] = GradientKind.LINEAR
    start: Point
    end: Point
    stops: tuple[GradientStop, ...]

    @field_validator("stops")
    @classmethod
    def _check_stops(cls, v: tuple[GradientStop, ...]) -> tuple[GradientStop, ...]:
        return validate_stops(v)


class RadialGradient(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[GradientKind.RADIAL] = GradientKind.RADIAL
    start: Point
    start_radius: float
    end: Point
    end_radius: float
    stops: tuple[GradientStop, ...]

    @field_validator("stops")
    @classmethod
    def _check_stops(cls, v: tuple[GradientStop, ...]) -> tuple[GradientStop, ...]:
        return validate_stops(v)


Gradient = Annotated[Union[LinearGradient, RadialGradient], Field(discriminator="kind")]


def linear(start: Point, end: Point, stops: list[GradientStop]) -> LinearGradient:
    """Linear gradient between two points."""
    return LinearGradient(start=start, end=end, stops=tuple(stops))


def radial(
    start: Point,
    start_radius: float,
    end: Point,
    end_radius: float,
    stops: list[GradientStop],
) -> RadialGradient:
    """Radial gradient interpolating between an inner and an outer circle."""
    return RadialGradient(
        start=start,
        start_radius=start_radius,
        end=end,
        end_radius=end_radius,
        stops=tuple(stops),
    )


def fade_gradient(gradient: Gradient, factor: float) -> Gradient:
    """Multiply the alpha of every stop by ``factor``."""
    stops = tuple((offset, color.fade(factor)) for offset, color in gradient.stops)
    return gradient.model_copy(update={"stops": stops})


# ---------------------------------------------------------------------------
# Built-in colors (Tango palette)
# ---------------------------------------------------------------------------

LIGHT_RED = rgb(239, 41, 41)
RED = rgb(204, 0, 0)
DARK_RED = rgb(164, 0, 0)

LIGHT_ORANGE = rgb(252, 175, 62)
ORANGE = rgb(245, 121, 0)
DARK_ORANGE = rgb(206, 92, 0)

LIGHT_YELLOW = rgb(255, 233, 79)
YELLOW = rgb(237, 212, 0)
DARK_YELLOW = rgb(196, 160, 0)

LIGHT_GREEN = rgb(138, 226, 52)
GREEN = rgb(115, 210, 22)
DARK_GREEN = rgb(78, 154, 6)

LIGHT_BLUE = rgb(114, 159, 207)
BLUE = rgb(52, 101, 164)
DARK_BLUE = rgb(32, 74, 135)

LIGHT_PURPLE = rgb(173, 127, 168)
PURPLE = rgb(117, 80, 123)
DARK_PURPLE = rgb(92, 53, 102)

LIGHT_BROWN = rgb(233, 185, 110)
BROWN = rgb(193, 125, 17)
DARK_BROWN = rgb(143, 89, 2)

BLACK = rgb(0, 0, 0)
WHITE = rgb(255, 255, 255)
TRANSPARENT = rgba(0, 0, 0, 0.0)

LIGHT_GRAY = LIGHT_GREY = rgb(238, 238, 236)
GRAY = GREY = rgb(211, 215, 207)
DARK_GRAY = DARK_GREY = rgb(186, 189, 182)

LIGHT_CHARCOAL = rgb(136, 138, 133)
CHARCOAL = rgb(85, 87, 83)
DARK_CHARCOAL = rgb(46, 52, 54)
