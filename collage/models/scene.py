"""Flattened scene — the only artifact that crosses the render boundary.

A ``Scene`` is an ordered tuple of ``Primitive`` values in back-to-front
paint order. Each primitive is self-describing:

- ``transform`` maps the geometry's local coordinates to scene coordinates
  (y down, origin at the top-left of the root box);
- ``style`` carries fill/stroke with every color already multiplied by the
  accumulated alpha;
- ``alpha`` is that accumulated alpha, for content without a color of its
  own (images, textures);
- ``clips`` lists regions that all bound the primitive's visible area.

Nothing here references the source tree.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Union

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field

from collage.models.geometry import IDENTITY, Point, Rect, Transform2D
from collage.models.style import FillStyle, LineStyle
from collage.models.text import TextSpan
from collage.utils.geometry import as_points, transform_points


class GeometryKind(str, enum.Enum):
    POLYLINE = "polyline"
    POLYGON = "polygon"
    TEXT = "text"
    IMAGE = "image"


class PolylineGeometry(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[GeometryKind.POLYLINE] = GeometryKind.POLYLINE
    points: tuple[Point, ...]

    def outline(self) -> tuple[Point, ...]:
        return self.points


class PolygonGeometry(BaseModel):
    """Closed polygon; the closing edge is implicit."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[GeometryKind.POLYGON] = GeometryKind.POLYGON
    points: tuple[Point, ...]

    def outline(self) -> tuple[Point, ...]:
        return self.points


class TextGeometry(BaseModel):
    """Measured text. ``bounds`` is the local layout box, ``baseline`` its offset from the top."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[GeometryKind.TEXT] = GeometryKind.TEXT
    spans: tuple[TextSpan, ...]
    bounds: Rect
    baseline: float

    def outline(self) -> tuple[Point, ...]:
        return self.bounds.corners()


class ImageGeometry(BaseModel):
    """An image drawn into ``bounds``. ``source_rect`` of ``None`` means the whole image."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[GeometryKind.IMAGE] = GeometryKind.IMAGE
    reference: str
    bounds: Rect
    source_rect: Rect | None = None
    tiled: bool = False

    def outline(self) -> tuple[Point, ...]:
        return self.bounds.corners()


Geometry = Annotated[
    Union[PolylineGeometry, PolygonGeometry, TextGeometry, ImageGeometry],
    Field(discriminator="kind"),
]


class ResolvedStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    fill: FillStyle | None = None
    stroke: LineStyle | None = None


class Clip(BaseModel):
    """``rect`` in the local space of ``transform``."""

    model_config = ConfigDict(frozen=True)

    transform: Transform2D = IDENTITY
    rect: Rect


class Primitive(BaseModel):
    model_config = ConfigDict(frozen=True)

    transform: Transform2D = IDENTITY
    alpha: float = 1.0
    style: ResolvedStyle = ResolvedStyle()
    geometry: Geometry
    clips: tuple[Clip, ...] = ()

    def absolute_points(self) -> NDArray[np.float64]:
        """Geometry outline mapped into scene coordinates (Nx2)."""
        return transform_points(self.transform, as_points(self.geometry.outline()))


class Scene(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: float = 0.0
    height: float = 0.0
    primitives: tuple[Primitive, ...] = ()

    @property
    def count(self) -> int:
        return len(self.primitives)
