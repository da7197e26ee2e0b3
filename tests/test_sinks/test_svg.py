"""Tests for SVG serialisation of scenes."""

import math

import pytest

from collage.elements import container, color, spacer, text_element
from collage.interfaces import draw
from collage.models.color import BLUE, RED, linear
from collage.models.geometry import translation
from collage.models.nodes import CENTER
from collage.models.scene import PolygonGeometry, PolylineGeometry, Primitive, ResolvedStyle, Scene
from collage.models.style import GradientFill, LineCap, LineStyle, SolidFill, dashed
from collage.sinks.svg import SvgSink, serialize_scene

SQUARE = ((0, 0), (4, 0), (4, 4), (0, 4))


def _scene(*prims: Primitive) -> Scene:
    return Scene(width=10, height=10, primitives=prims)


def test_document_shell():
    svg = serialize_scene(_scene(), title="Preview")
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert 'viewBox="0 0 10 10"' in svg
    assert "<title>Preview</title>" in svg
    assert svg.rstrip().endswith("</svg>")


def test_solid_polygon_with_transform():
    prim = Primitive(
        transform=translation(10, 5),
        geometry=PolygonGeometry(points=SQUARE),
        style=ResolvedStyle(fill=SolidFill(color=RED)),
    )
    svg = serialize_scene(_scene(prim))
    assert "<polygon" in svg
    assert 'fill="#cc0000"' in svg
    assert 'transform="matrix(1 0 0 1 10 5)"' in svg


def test_stroke_attributes():
    line = LineStyle(color=BLUE, width=2, cap=LineCap.PADDED)
    prim = Primitive(geometry=PolylineGeometry(points=SQUARE), style=ResolvedStyle(stroke=line))
    svg = serialize_scene(_scene(prim))
    assert "<polyline" in svg
    assert 'stroke-linecap="square"' in svg
    assert 'stroke-width="2"' in svg
    assert 'stroke-miterlimit="10"' in svg

    dashed_prim = prim.model_copy(update={"style": ResolvedStyle(stroke=dashed(RED))})
    assert 'stroke-dasharray="8 4"' in serialize_scene(_scene(dashed_prim))


def test_gradient_goes_to_defs():
    fill = GradientFill(gradient=linear((0, 0), (4, 0), [(0.0, RED), (1.0, BLUE)]))
    prim = Primitive(geometry=PolygonGeometry(points=SQUARE), style=ResolvedStyle(fill=fill))
    svg = serialize_scene(_scene(prim))
    assert "<defs>" in svg
    assert "<linearGradient" in svg
    assert 'fill="url(#grad1)"' in svg


def test_clipped_primitive_is_wrapped(pipeline):
    scene = pipeline.render(container(10, 10, CENTER, color(RED, spacer(30, 30))))
    svg = serialize_scene(scene)
    assert "<clipPath" in svg
    assert 'clip-path="url(#clip1)"' in svg


def test_text_is_escaped(pipeline):
    svg = serialize_scene(pipeline.render(text_element("a<b")))
    assert "<text" in svg
    assert "a&lt;b" in svg


def test_svg_sink_keeps_documents():
    sink = SvgSink(title="t")
    assert sink.svg == ""
    draw(sink, _scene())
    assert len(sink.documents) == 1
    assert "<title>t</title>" in sink.svg


@pytest.mark.parametrize("bad", [math.inf, -math.inf, math.nan])
def test_non_finite_coordinates_raise(bad):
    prim = Primitive(
        transform=translation(bad, 0),
        geometry=PolygonGeometry(points=SQUARE),
        style=ResolvedStyle(fill=SolidFill(color=RED)),
    )
    with pytest.raises(ValueError, match="non-finite"):
        serialize_scene(_scene(prim))
