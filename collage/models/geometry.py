"""Geometry value types — points, 2D affine transforms, rectangles.

A ``Transform2D`` is the 3x3 homogeneous matrix

    / a  b  tx \\
    | c  d  ty |
    \\ 0  0  1  /

so a point maps as ``x' = a*x + b*y + tx``, ``y' = c*x + d*y + ty``.
Composition is matrix multiplication: ``compose(A, B)`` applies ``B`` first.

Coordinates are screen-style: the y axis points down and a box's origin is
its top-left corner. ``rotation(theta)`` therefore turns clockwise on
screen for positive ``theta``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, field_validator

from collage.errors import InvalidLayoutSpec, SingularTransform
from collage.utils.geometry import bbox
from collage.utils.math_helpers import EPSILON

Point = tuple[float, float]


class Transform2D(BaseModel):
    """Immutable 2D affine transform."""

    model_config = ConfigDict(frozen=True)

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def is_identity(self) -> bool:
        return self.almost_equal(IDENTITY, 0.0)

    def almost_equal(self, other: Transform2D, eps: float = EPSILON) -> bool:
        return all(
            abs(x - y) <= eps
            for x, y in zip(
                (self.a, self.b, self.c, self.d, self.tx, self.ty),
                (other.a, other.b, other.c, other.d, other.tx, other.ty),
            )
        )

    def as_array(self) -> NDArray[np.float64]:
        """The full 3x3 homogeneous matrix."""
        return np.array(
            [
                [self.a, self.b, self.tx],
                [self.c, self.d, self.ty],
                [0.0, 0.0, 1.0],
            ]
        )

    def then(self, other: Transform2D) -> Transform2D:
        """Apply ``self`` first, then ``other``."""
        return compose(other, self)


IDENTITY = Transform2D()


def identity() -> Transform2D:
    return IDENTITY


def matrix(a: float, b: float, c: float, d: float, tx: float, ty: float) -> Transform2D:
    return Transform2D(a=a, b=b, c=c, d=d, tx=tx, ty=ty)


def translation(x: float, y: float) -> Transform2D:
    return Transform2D(tx=x, ty=y)


def rotation(theta: float) -> Transform2D:
    """Rotation by ``theta`` radians about the origin."""
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    return Transform2D(a=cos_t, b=-sin_t, c=sin_t, d=cos_t)


def scaling(sx: float, sy: float | None = None) -> Transform2D:
    """Scale about the origin. ``sy`` defaults to ``sx``."""
    return Transform2D(a=sx, d=sx if sy is None else sy)


def scale_x(s: float) -> Transform2D:
    return Transform2D(a=s)


def scale_y(s: float) -> Transform2D:
    return Transform2D(d=s)


def compose(m: Transform2D, n: Transform2D) -> Transform2D:
    """Matrix product ``m · n``: apply ``n``, then ``m``."""
    return Transform2D(
        a=m.a * n.a + m.b * n.c,
        b=m.a * n.b + m.b * n.d,
        c=m.c * n.a + m.d * n.c,
        d=m.c * n.b + m.d * n.d,
        tx=m.a * n.tx + m.b * n.ty + m.tx,
        ty=m.c * n.tx + m.d * n.ty + m.ty,
    )


def invert(t: Transform2D) -> Transform2D:
    """Inverse transform. Raises ``SingularTransform`` when ``|det| < EPSILON``."""
    det = t.determinant
    if abs(det) < EPSILON:
        raise SingularTransform(f"Cannot invert transform with determinant {det:.3g}")
    inv_a = t.d / det
    inv_b = -t.b / det
    inv_c = -t.c / det
    inv_d = t.a / det
    return Transform2D(
        a=inv_a,
        b=inv_b,
        c=inv_c,
        d=inv_d,
        tx=-(inv_a * t.tx + inv_b * t.ty),
        ty=-(inv_c * t.tx + inv_d * t.ty),
    )


def apply(t: Transform2D, point: Point) -> Point:
    x, y = point
    return (t.a * x + t.b * y + t.tx, t.c * x + t.d * y + t.ty)


class Rect(BaseModel):
    """Axis-aligned rectangle: top-left corner plus non-negative size."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @field_validator("width", "height")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise InvalidLayoutSpec(f"Rect dimensions must be non-negative, got {v}")
        return v

    @property
    def min(self) -> Point:
        return (self.x, self.y)

    @property
    def max(self) -> Point:
        return (self.x + self.width, self.y + self.height)

    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Clockwise on screen, starting top-left."""
        x0, y0 = self.min
        x1, y1 = self.max
        return ((x0, y0), (x1, y0), (x1, y1), (x0, y1))

    def translate(self, dx: float, dy: float) -> Rect:
        return self.model_copy(update={"x": self.x + dx, "y": self.y + dy})

    def union(self, other: Rect) -> Rect:
        x0 = min(self.x, other.x)
        y0 = min(self.y, other.y)
        x1 = max(self.max[0], other.max[0])
        y1 = max(self.max[1], other.max[1])
        return Rect(x=x0, y=y0, width=x1 - x0, height=y1 - y0)


def bounding_box(points: Iterable[Point]) -> Rect:
    """Smallest rectangle containing every point. Empty input gives a zero rect."""
    xmin, ymin, xmax, ymax = bbox(np.asarray(list(points), dtype=np.float64).reshape(-1, 2))
    return Rect(x=xmin, y=ymin, width=xmax - xmin, height=ymax - ymin)
