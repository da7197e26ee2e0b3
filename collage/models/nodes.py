"""Form and Element trees — the closed node variants of the composition model.

Forms are freeform vector nodes. Each carries a local ``transform`` and an
``alpha`` that the flattener composes with its ancestors'.

Elements are layout boxes. A ``Leaf`` wraps a payload (forms, text, an
image or plain space), a ``Container`` positions one child inside a box, and
a ``Flow`` lines children up along one axis.

Forms and Elements nest in both directions (``ElementForm`` embeds an
element in a collage; ``FormPayload`` embeds forms in a layout), so both
unions live in this module.

Every variant is a frozen pydantic model tagged by ``kind``. Structural
errors (negative sizes, alignment fractions outside [0, 1]) raise at
construction; purely visual degeneracies (empty point lists, zero alpha) are
accepted.
"""

from __future__ import annotations

import enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from collage.errors import InvalidLayoutSpec
from collage.models.color import Color
from collage.models.geometry import IDENTITY, Point, Rect, Transform2D
from collage.models.style import LineStyle, ShapeStyle
from collage.models.text import Text
from collage.utils.math_helpers import clamp01


def _check_size(value: float | None, what: str) -> float | None:
    if value is not None and value < 0:
        raise InvalidLayoutSpec(f"{what} must be non-negative, got {value}")
    return value


def _check_fraction(value: float, what: str) -> float:
    if not 0.0 <= value <= 1.0:
        raise InvalidLayoutSpec(f"{what} must be within [0, 1], got {value}")
    return value


# =============================================================================
# Forms
# =============================================================================


class FormKind(str, enum.Enum):
    PATH = "path"
    SHAPE = "shape"
    TEXT = "text"
    IMAGE = "image"
    ELEMENT = "element"
    GROUP = "group"


class _FormBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    transform: Transform2D = IDENTITY
    alpha: float = 1.0

    @field_validator("alpha", mode="before")
    @classmethod
    def _clamp_alpha(cls, v: float) -> float:
        return clamp01(float(v))


class PathForm(_FormBase):
    """An open polyline traced with a line style."""

    kind: Literal[FormKind.PATH] = FormKind.PATH
    points: tuple[Point, ...] = ()
    line_style: LineStyle = LineStyle()


class ShapeForm(_FormBase):
    """A closed polygon. The last point joins back to the first implicitly."""

    kind: Literal[FormKind.SHAPE] = FormKind.SHAPE
    points: tuple[Point, ...] = ()
    style: ShapeStyle = ShapeStyle()


class TextForm(_FormBase):
    kind: Literal[FormKind.TEXT] = FormKind.TEXT
    text: Text
    outline: LineStyle | None = None


class ImageForm(_FormBase):
    """An image (or a sprite cut from one), centred on the form origin."""

    kind: Literal[FormKind.IMAGE] = FormKind.IMAGE
    reference: str
    width: float
    height: float
    source_rect: Rect | None = None

    @field_validator("width", "height")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        return _check_size(v, "Image size")


class ElementForm(_FormBase):
    """An element laid out at its intrinsic size, centred on the form origin."""

    kind: Literal[FormKind.ELEMENT] = FormKind.ELEMENT
    element: Element


class GroupForm(_FormBase):
    """Ordered sub-forms sharing a transform. Later forms paint over earlier ones."""

    kind: Literal[FormKind.GROUP] = FormKind.GROUP
    forms: tuple[Form, ...] = ()


Form = Annotated[
    Union[PathForm, ShapeForm, TextForm, ImageForm, ElementForm, GroupForm],
    Field(discriminator="kind"),
]


# =============================================================================
# Element payloads
# =============================================================================


class PayloadKind(str, enum.Enum):
    FORM = "form"
    TEXT = "text"
    IMAGE = "image"
    SPACER = "spacer"


class ImageFit(str, enum.Enum):
    PLAIN = "plain"  # stretch the whole image over the box
    FITTED = "fitted"  # centred crop that fills the box, aspect kept
    CROPPED = "cropped"  # box-sized window starting at ``crop_origin``
    TILED = "tiled"  # repeat the image at natural size


class FormPayload(BaseModel):
    """Forms drawn inside a leaf.

    ``centred`` leaves (collages) put the form origin at the box centre.
    Otherwise the forms are shifted so their bounding box starts at the
    box's top-left corner.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal[PayloadKind.FORM] = PayloadKind.FORM
    forms: tuple[Form, ...] = ()
    centred: bool = True


class TextPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[PayloadKind.TEXT] = PayloadKind.TEXT
    text: Text


class ImagePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[PayloadKind.IMAGE] = PayloadKind.IMAGE
    reference: str
    natural_width: float
    natural_height: float
    fit: ImageFit = ImageFit.PLAIN
    crop_origin: Point = (0.0, 0.0)

    @field_validator("natural_width", "natural_height")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        return _check_size(v, "Image size")


class SpacerPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[PayloadKind.SPACER] = PayloadKind.SPACER


Payload = Annotated[
    Union[FormPayload, TextPayload, ImagePayload, SpacerPayload],
    Field(discriminator="kind"),
]


# =============================================================================
# Positioning
# =============================================================================


class Padding(BaseModel):
    model_config = ConfigDict(frozen=True)

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @field_validator("top", "right", "bottom", "left")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        return _check_size(v, "Padding")

    @classmethod
    def uniform(cls, amount: float) -> Padding:
        return cls(top=amount, right=amount, bottom=amount, left=amount)

    @classmethod
    def symmetric(cls, horizontal: float, vertical: float) -> Padding:
        return cls(top=vertical, right=horizontal, bottom=vertical, left=horizontal)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


NO_PADDING = Padding()


class PosKind(str, enum.Enum):
    ABSOLUTE = "absolute"
    RELATIVE = "relative"


class AbsolutePos(BaseModel):
    """An offset in layout units."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[PosKind.ABSOLUTE] = PosKind.ABSOLUTE
    amount: float = 0.0

    def resolve(self, extent: float) -> float:
        return self.amount


class RelativePos(BaseModel):
    """An offset as a fraction of the container's inner extent."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[PosKind.RELATIVE] = PosKind.RELATIVE
    fraction: float = 0.0

    def resolve(self, extent: float) -> float:
        return self.fraction * extent


Pos = Annotated[Union[AbsolutePos, RelativePos], Field(discriminator="kind")]


def absolute(amount: float) -> AbsolutePos:
    return AbsolutePos(amount=amount)


def relative(fraction: float) -> RelativePos:
    return RelativePos(fraction=fraction)


def _as_pos(v):
    if isinstance(v, (int, float)):
        return AbsolutePos(amount=v)
    return v


def _inward(fraction: float) -> float:
    # Right/bottom anchors measure their offset back towards the left/top
    return -1.0 if fraction > 0.5 else 1.0


class Position(BaseModel):
    """Where a child sits in a container's free space.

    ``x``/``y`` are fractions of the free space (0 = left/top, 1 =
    right/bottom). ``dx``/``dy`` move the child inward from the anchored
    edge, or along +x/+y when centred. Plain numbers are absolute offsets.
    """

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    dx: Pos = AbsolutePos()
    dy: Pos = AbsolutePos()

    @field_validator("x", "y")
    @classmethod
    def _fraction(cls, v: float) -> float:
        return _check_fraction(v, "Alignment fraction")

    @field_validator("dx", "dy", mode="before")
    @classmethod
    def _offset(cls, v):
        return _as_pos(v)

    def at(self, dx: Pos | float, dy: Pos | float) -> Position:
        return Position(x=self.x, y=self.y, dx=dx, dy=dy)

    def offset(self, inner_width: float, inner_height: float) -> Point:
        """The ``(dx, dy)`` shift in layout units, signed towards the box interior."""
        return (
            _inward(self.x) * self.dx.resolve(inner_width),
            _inward(self.y) * self.dy.resolve(inner_height),
        )


def aligned(x: float, y: float) -> Position:
    """Explicit fractional alignment."""
    return Position(x=x, y=y)


TOP_LEFT = Position(x=0.0, y=0.0)
MID_TOP = Position(x=0.5, y=0.0)
TOP_RIGHT = Position(x=1.0, y=0.0)
MID_LEFT = Position(x=0.0, y=0.5)
CENTER = MIDDLE = Position(x=0.5, y=0.5)
MID_RIGHT = Position(x=1.0, y=0.5)
BOTTOM_LEFT = Position(x=0.0, y=1.0)
MID_BOTTOM = Position(x=0.5, y=1.0)
BOTTOM_RIGHT = Position(x=1.0, y=1.0)


def top_left_at(dx: Pos | float, dy: Pos | float) -> Position:
    return TOP_LEFT.at(dx, dy)


def mid_top_at(dx: Pos | float, dy: Pos | float) -> Position:
    return MID_TOP.at(dx, dy)


def top_right_at(dx: Pos | float, dy: Pos | float) -> Position:
    return TOP_RIGHT.at(dx, dy)


def mid_left_at(dx: Pos | float, dy: Pos | float) -> Position:
    return MID_LEFT.at(dx, dy)


def middle_at(dx: Pos | float, dy: Pos | float) -> Position:
    return MIDDLE.at(dx, dy)


def mid_right_at(dx: Pos | float, dy: Pos | float) -> Position:
    return MID_RIGHT.at(dx, dy)


def bottom_left_at(dx: Pos | float, dy: Pos | float) -> Position:
    return BOTTOM_LEFT.at(dx, dy)


def mid_bottom_at(dx: Pos | float, dy: Pos | float) -> Position:
    return MID_BOTTOM.at(dx, dy)


def bottom_right_at(dx: Pos | float, dy: Pos | float) -> Position:
    return BOTTOM_RIGHT.at(dx, dy)


class Direction(str, enum.Enum):
    RIGHT = "right"
    LEFT = "left"
    DOWN = "down"
    UP = "up"
    OUTWARD = "outward"  # overlay: every child at the origin, first at the bottom
    INWARD = "inward"  # overlay painted in reverse: first child on top

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.RIGHT, Direction.LEFT)

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.DOWN, Direction.UP)


# =============================================================================
# Elements
# =============================================================================


class ElementKind(str, enum.Enum):
    LEAF = "leaf"
    CONTAINER = "container"
    FLOW = "flow"


class _ElementBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    opacity: float = 1.0
    background: Color | None = None

    @field_validator("opacity", mode="before")
    @classmethod
    def _clamp_opacity(cls, v: float) -> float:
        return clamp01(float(v))


class Leaf(_ElementBase):
    """A box with content. Unset sides are measured from the payload."""

    kind: Literal[ElementKind.LEAF] = ElementKind.LEAF
    width: float | None = None
    height: float | None = None
    payload: Payload = SpacerPayload()

    @field_validator("width", "height")
    @classmethod
    def _non_negative(cls, v: float | None) -> float | None:
        return _check_size(v, "Element size")


class Container(_ElementBase):
    """One child positioned inside a box of (optionally) requested size.

    A requested side wins over the child's extent. When it is smaller, the
    child overflows and is cropped to the container box; ``position``
    decides which part stays visible.
    """

    kind: Literal[ElementKind.CONTAINER] = ElementKind.CONTAINER
    child: Element
    width: float | None = None
    height: float | None = None
    position: Position = TOP_LEFT
    padding: Padding = NO_PADDING

    @field_validator("width", "height")
    @classmethod
    def _non_negative(cls, v: float | None) -> float | None:
        return _check_size(v, "Requested size")


class Flow(_ElementBase):
    """Children placed edge to edge along ``direction``.

    ``cross_align`` holds one cross-axis fraction per child; an empty tuple
    means every child hugs the start edge.
    """

    kind: Literal[ElementKind.FLOW] = ElementKind.FLOW
    direction: Direction = Direction.DOWN
    children: tuple[Element, ...] = ()
    cross_align: tuple[float, ...] = ()

    @field_validator("cross_align")
    @classmethod
    def _fractions(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        for fraction in v:
            _check_fraction(fraction, "Cross-axis alignment")
        return v

    @model_validator(mode="after")
    def _one_alignment_per_child(self) -> Flow:
        if self.cross_align and len(self.cross_align) != len(self.children):
            raise InvalidLayoutSpec(
                f"Flow has {len(self.children)} children but "
                f"{len(self.cross_align)} cross-axis alignments"
            )
        return self

    def alignment_of(self, index: int) -> float:
        return self.cross_align[index] if self.cross_align else 0.0


Element = Annotated[Union[Leaf, Container, Flow], Field(discriminator="kind")]


for _model in (ElementForm, GroupForm, FormPayload, Leaf, Container, Flow):
    _model.model_rebuild()
del _model
