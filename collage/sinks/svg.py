"""Write SVG markup from a flattened scene.

Meant for previews and debugging. Each primitive becomes one element with
its transform as ``matrix(...)``; gradients and clip regions go to
``<defs>``. Clips wrap the element in nested groups so their rectangles
stay in scene space.

Images are emitted whole: a source rect or tiling is recorded as a
``data-*`` attribute for the consumer to act on.
"""

from __future__ import annotations

import math
from typing import Any
from xml.sax.saxutils import escape, quoteattr

from collage.models.color import Color, LinearGradient
from collage.models.geometry import Point, Rect, Transform2D
from collage.models.scene import (
    Clip,
    ImageGeometry,
    PolygonGeometry,
    PolylineGeometry,
    Primitive,
    Scene,
    TextGeometry,
)
from collage.models.style import GradientFill, LineCap, LineJoin, LineStyle, SolidFill, TextureFill
from collage.models.text import TextLine, TextSpan

_CAPS = {LineCap.FLAT: "butt", LineCap.ROUND: "round", LineCap.PADDED: "square"}
_JOINS = {LineJoin.SMOOTH: "round", LineJoin.SHARP: "miter", LineJoin.CLIPPED: "bevel"}
_DECORATIONS = {
    TextLine.UNDER: "underline",
    TextLine.OVER: "overline",
    TextLine.THROUGH: "line-through",
}


def _num(v: float) -> str:
    if not math.isfinite(v):
        raise ValueError(f"Cannot write non-finite coordinate {v!r} to SVG")
    return f"{v:.4f}".rstrip("0").rstrip(".") if v != int(v) else str(int(v))


def _points(points: tuple[Point, ...]) -> str:
    return " ".join(f"{_num(x)},{_num(y)}" for x, y in points)


def _matrix(t: Transform2D) -> str:
    # SVG's matrix(a b c d e f) is column-major
    return f"matrix({' '.join(_num(v) for v in (t.a, t.c, t.b, t.d, t.tx, t.ty))})"


def _attr_str(attrs: dict[str, Any]) -> str:
    return " ".join(f"{k}={quoteattr(str(v))}" for k, v in attrs.items())


class _Defs:
    """Collects gradient and clip definitions, handing out ids."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self._count = 0

    def _next_id(self, prefix: str) -> str:
        self._count += 1
        return f"{prefix}{self._count}"

    def gradient(self, fill: GradientFill) -> str:
        grad = fill.gradient
        gid = self._next_id("grad")
        if isinstance(grad, LinearGradient):
            (x1, y1), (x2, y2) = grad.start, grad.end
            head = (
                f'    <linearGradient id="{gid}" gradientUnits="userSpaceOnUse" '
                f'x1="{_num(x1)}" y1="{_num(y1)}" x2="{_num(x2)}" y2="{_num(y2)}">'
            )
            tail = "    </linearGradient>"
        else:
            (fx, fy), (cx, cy) = grad.start, grad.end
            head = (
                f'    <radialGradient id="{gid}" gradientUnits="userSpaceOnUse" '
                f'fx="{_num(fx)}" fy="{_num(fy)}" fr="{_num(grad.start_radius)}" '
                f'cx="{_num(cx)}" cy="{_num(cy)}" r="{_num(grad.end_radius)}">'
            )
            tail = "    </radialGradient>"
        self.lines.append(head)
        for offset, color in grad.stops:
            self.lines.append(
                f'      <stop offset="{_num(offset)}" stop-color="{color.to_hex()}" '
                f'stop-opacity="{_num(color.a)}" />'
            )
        self.lines.append(tail)
        return gid

    def clip(self, clip: Clip) -> str:
        cid = self._next_id("clip")
        r = clip.rect
        self.lines.append(f'    <clipPath id="{cid}" clipPathUnits="userSpaceOnUse">')
        self.lines.append(
            f'      <rect x="{_num(r.x)}" y="{_num(r.y)}" width="{_num(r.width)}" '
            f'height="{_num(r.height)}" transform="{_matrix(clip.transform)}" />'
        )
        self.lines.append("    </clipPath>")
        return cid


def _paint(prefix: str, color: Color) -> dict[str, Any]:
    return {prefix: color.to_hex(), f"{prefix}-opacity": _num(color.a)}


def _fill_attrs(prim: Primitive, defs: _Defs) -> dict[str, Any]:
    fill = prim.style.fill
    if isinstance(fill, SolidFill):
        return _paint("fill", fill.color)
    if isinstance(fill, GradientFill):
        return {"fill": f"url(#{defs.gradient(fill)})"}
    if isinstance(fill, TextureFill):
        return {"fill": "none", "data-texture": fill.reference, "opacity": _num(prim.alpha)}
    return {"fill": "none"}


def _stroke_attrs(line: LineStyle | None) -> dict[str, Any]:
    if line is None:
        return {}
    attrs = _paint("stroke", line.color)
    attrs["stroke-width"] = _num(line.width)
    attrs["stroke-linecap"] = _CAPS[line.cap]
    attrs["stroke-linejoin"] = _JOINS[line.join]
    if line.join is LineJoin.SHARP:
        attrs["stroke-miterlimit"] = _num(line.miter_limit)
    if line.dashing:
        attrs["stroke-dasharray"] = " ".join(_num(d) for d in line.dashing)
        if line.dash_offset:
            attrs["stroke-dashoffset"] = _num(line.dash_offset)
    return attrs


def _span(span: TextSpan) -> str:
    s = span.style
    attrs: dict[str, Any] = {}
    if s.typeface:
        attrs["font-family"] = s.typeface
    elif s.monospace:
        attrs["font-family"] = "monospace"
    if s.height is not None:
        attrs["font-size"] = _num(s.height)
    attrs.update(_paint("fill", s.color))
    if s.bold:
        attrs["font-weight"] = "bold"
    if s.italic:
        attrs["font-style"] = "italic"
    if s.line is not None:
        attrs["text-decoration"] = _DECORATIONS[s.line]
    return f"<tspan {_attr_str(attrs)}>{escape(span.string)}</tspan>"


def _rect_attrs(r: Rect) -> dict[str, Any]:
    return {"x": _num(r.x), "y": _num(r.y), "width": _num(r.width), "height": _num(r.height)}


def serialize_primitive(prim: Primitive, defs: _Defs) -> str:
    """One SVG element for ``prim`` (without its clips)."""
    geom = prim.geometry
    attrs: dict[str, Any] = {}
    if not prim.transform.is_identity:
        attrs["transform"] = _matrix(prim.transform)

    if isinstance(geom, PolylineGeometry):
        attrs["points"] = _points(geom.points)
        attrs["fill"] = "none"
        attrs.update(_stroke_attrs(prim.style.stroke))
        return f"<polyline {_attr_str(attrs)} />"

    if isinstance(geom, PolygonGeometry):
        attrs["points"] = _points(geom.points)
        attrs.update(_fill_attrs(prim, defs))
        attrs.update(_stroke_attrs(prim.style.stroke))
        return f"<polygon {_attr_str(attrs)} />"

    if isinstance(geom, TextGeometry):
        attrs["x"] = _num(geom.bounds.x)
        attrs["y"] = _num(geom.bounds.y + geom.baseline)
        attrs.update(_stroke_attrs(prim.style.stroke))
        spans = "".join(_span(s) for s in geom.spans)
        return f"<text {_attr_str(attrs)}>{spans}</text>"

    if isinstance(geom, ImageGeometry):
        attrs["href"] = geom.reference
        attrs.update(_rect_attrs(geom.bounds))
        attrs["preserveAspectRatio"] = "none"
        attrs["opacity"] = _num(prim.alpha)
        if geom.source_rect is not None:
            r = geom.source_rect
            attrs["data-source-rect"] = " ".join(_num(v) for v in (r.x, r.y, r.width, r.height))
        if geom.tiled:
            attrs["data-tiled"] = "true"
        return f"<image {_attr_str(attrs)} />"

    raise TypeError(f"Unsupported geometry {geom.kind!r}")


def serialize_scene(scene: Scene, title: str = "", description: str = "") -> str:
    """Generate SVG markup for ``scene``, primitives in paint order."""
    defs = _Defs()
    body: list[str] = []

    for prim in scene.primitives:
        element = serialize_primitive(prim, defs)
        # Innermost clip wraps the element first
        for clip in reversed(prim.clips):
            element = f'<g clip-path="url(#{defs.clip(clip)})">{element}</g>'
        body.append(f"  {element}")

    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {_num(scene.width)} {_num(scene.height)}" '
        f'width="{_num(scene.width)}" height="{_num(scene.height)}" '
        f'xmlns="http://www.w3.org/2000/svg" role="img">',
    ]
    if title:
        lines.append(f"  <title>{escape(title)}</title>")
    if description:
        lines.append(f"  <desc>{escape(description)}</desc>")
    if defs.lines:
        lines.append("  <defs>")
        lines.extend(defs.lines)
        lines.append("  </defs>")
    lines.extend(body)
    lines.append("</svg>")
    return "\n".join(lines)


class SvgSink:
    """Serialises every consumed scene. The latest markup is in ``svg``."""

    def __init__(self, title: str = "") -> None:
        self.title = title
        self.documents: list[str] = []

    def consume(self, scene: Scene) -> None:
        self.documents.append(serialize_scene(scene, title=self.title))

    @property
    def svg(self) -> str:
        return self.documents[-1] if self.documents else ""
