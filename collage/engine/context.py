"""Engine state — the staged layout trees and the flattening accumulator.

measure  : Element      -> Measured    (sizes, bottom-up)
arrange  : Measured     -> LayoutNode  (offsets, top-down)
flatten  : LayoutNode   -> Primitive*  (absolute transforms, pre-order)

Every structure here is frozen; the handlers build new values and never
update old ones, so the same tree can be measured, arranged or flattened
from any number of threads.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Any

from collage.engine.config import EngineConfig
from collage.engine.registry import HandlerRegistry, Stage
from collage.interfaces import TextMeasurer
from collage.models.geometry import IDENTITY, Point, Rect, Transform2D, compose, translation
from collage.models.scene import Clip, Primitive


@dataclass(frozen=True)
class Measured:
    """An element with its intrinsic size resolved."""

    element: Any
    width: float
    height: float
    children: tuple[Measured, ...] = ()
    # Bounding box of fitted form content, in form coordinates
    content_bounds: Rect | None = None


@dataclass(frozen=True)
class LayoutNode:
    """An element with its final box.

    ``offset`` is relative to the parent's box origin, ``origin`` to the
    layout root.
    """

    element: Any
    width: float
    height: float
    offset: Point = (0.0, 0.0)
    origin: Point = (0.0, 0.0)
    children: tuple[LayoutNode, ...] = ()
    content_bounds: Rect | None = None

    @property
    def box(self) -> Rect:
        return Rect(x=0.0, y=0.0, width=self.width, height=self.height)

    def overflows(self) -> bool:
        """True when any child box reaches outside this node's box."""
        eps = 1e-9
        for child in self.children:
            x, y = child.offset
            if (
                x < -eps
                or y < -eps
                or x + child.width > self.width + eps
                or y + child.height > self.height + eps
            ):
                return True
        return False


@dataclass(frozen=True)
class Accumulator:
    """Transform, alpha and clip state carried down the tree during flattening."""

    transform: Transform2D = IDENTITY
    alpha: float = 1.0
    clips: tuple[Clip, ...] = ()

    def push(self, local: Transform2D, alpha: float = 1.0) -> Accumulator:
        return replace(self, transform=compose(self.transform, local), alpha=self.alpha * alpha)

    def translate(self, dx: float, dy: float) -> Accumulator:
        if dx == 0 and dy == 0:
            return self
        return replace(self, transform=compose(self.transform, translation(dx, dy)))

    def fade(self, alpha: float) -> Accumulator:
        return replace(self, alpha=self.alpha * alpha)

    def clip(self, rect: Rect) -> Accumulator:
        return replace(self, clips=self.clips + (Clip(transform=self.transform, rect=rect),))


@dataclass(frozen=True)
class RenderContext:
    """What every handler can see: configuration, the measurer and the registry.

    The helper methods dispatch through the registry so handlers recurse
    without importing each other.
    """

    registry: HandlerRegistry
    measurer: TextMeasurer
    config: EngineConfig = field(default_factory=EngineConfig)

    def measure(self, element: Any) -> Measured:
        return self.registry.dispatch(Stage.MEASURE_ELEMENT, element, self)

    def measure_payload(self, payload: Any) -> tuple[float, float, Rect | None]:
        return self.registry.dispatch(Stage.MEASURE_PAYLOAD, payload, self)

    def arrange(
        self,
        measured: Measured,
        width: float,
        height: float,
        offset: Point = (0.0, 0.0),
        parent_origin: Point = (0.0, 0.0),
    ) -> LayoutNode:
        origin = (parent_origin[0] + offset[0], parent_origin[1] + offset[1])
        return self.registry.dispatch(
            Stage.ARRANGE, measured.element, measured, width, height, offset, origin, self
        )

    def layout(self, element: Any, size: tuple[float, float] | None = None) -> LayoutNode:
        """Measure then arrange. ``size`` defaults to the intrinsic size."""
        measured = self.measure(element)
        width, height = size if size is not None else (measured.width, measured.height)
        return self.arrange(measured, width, height)

    def flatten_form(self, form: Any, acc: Accumulator) -> Iterator[Primitive]:
        return self.registry.dispatch(Stage.FLATTEN_FORM, form, acc, self)

    def flatten_node(self, node: LayoutNode, acc: Accumulator) -> Iterator[Primitive]:
        """Fold the node's placement and opacity into ``acc``, then emit its subtree."""
        acc = acc.translate(*node.offset).fade(node.element.opacity)
        return self.registry.dispatch(Stage.FLATTEN_ELEMENT, node.element, node, acc, self)

    def flatten_payload(
        self, payload: Any, node: LayoutNode, acc: Accumulator
    ) -> Iterator[Primitive]:
        return self.registry.dispatch(Stage.FLATTEN_PAYLOAD, payload, node, acc, self)
