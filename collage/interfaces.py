"""Boundary contracts with external collaborators.

- ``TextMeasurer`` — font metrics, supplied by whoever owns the fonts.
  Treated as a pure query; it may be called from several threads.
- ``PrimitiveSink`` — the renderer. It receives a whole ``Scene`` per draw
  and must keep the primitive order.
- ``ImageResolver`` — turns image/texture references into renderer
  resources at draw time. The engine never calls it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from collage.models.scene import Scene
from collage.models.text import TextStyle


@dataclass(frozen=True)
class TextMetrics:
    width: float
    height: float
    baseline: float  # distance from the top of the line box


@runtime_checkable
class TextMeasurer(Protocol):
    def measure(self, text: str, style: TextStyle) -> TextMetrics: ...


@runtime_checkable
class PrimitiveSink(Protocol):
    def consume(self, scene: Scene) -> None: ...


@runtime_checkable
class ImageResolver(Protocol):
    def resolve(self, reference: str) -> Any: ...


def draw(sink: PrimitiveSink, scene: Scene) -> None:
    """Hand a finished scene to a renderer."""
    sink.consume(scene)
