"""Tests for form builders and combinators."""

import math

import pytest

from collage.forms import (
    alpha,
    circle,
    filled,
    fill_shape,
    line,
    move,
    ngon,
    oval,
    rect,
    rotate,
    scale,
    sprite,
    square,
    to_form,
    transform,
)
from collage.elements import spacer
from collage.models.color import RED
from collage.models.geometry import Rect, apply, translation
from collage.models.nodes import ElementForm, PathForm
from collage.models.style import ShapeStyle, solid, solid_line


def test_rect_is_centred():
    assert rect(4, 2) == ((-2, -1), (2, -1), (2, 1), (-2, 1))
    assert square(2) == rect(2, 2)


def test_oval_and_circle():
    pts = circle(10)
    assert len(pts) == 50
    assert all(math.hypot(x, y) == pytest.approx(10) for x, y in pts)
    assert len(oval(4, 2, segments=8)) == 8


def test_ngon_first_vertex_on_x_axis():
    pts = ngon(4, 1)
    assert len(pts) == 4
    assert pts[0] == pytest.approx((1, 0))


def test_transform_acts_in_parent_space():
    form = move(1, 0, rotate(math.pi / 2, filled(RED, square(1))))
    assert apply(form.transform, (1, 0)) == pytest.approx((1, 1))
    form = move(10, 0, scale(2, 2, filled(RED, square(1))))
    assert apply(form.transform, (1, 1)) == pytest.approx((12, 2))


def test_transform_prepends():
    form = transform(translation(3, 4), filled(RED, square(1)))
    assert (form.transform.tx, form.transform.ty) == (3, 4)


def test_alpha_multiplies_and_clamps():
    form = alpha(0.5, alpha(0.5, filled(RED, square(1))))
    assert form.alpha == pytest.approx(0.25)
    assert alpha(4, filled(RED, square(1))).alpha == 1.0


def test_fill_shape_accepts_fill_or_shape_style():
    assert fill_shape(solid(RED), square(1)).style == ShapeStyle(fill=solid(RED))
    style = ShapeStyle(fill=solid(RED), outline=solid_line(RED))
    assert fill_shape(style, square(1)).style == style


def test_line_and_sprite():
    seg = line(solid_line(RED), 0, 0, 3, 4)
    assert isinstance(seg, PathForm)
    assert seg.points == ((0, 0), (3, 4))
    s = sprite(16, 16, 32, 0, "sheet.png")
    assert s.source_rect == Rect(x=32, y=0, width=16, height=16)


def test_to_form():
    assert isinstance(to_form(spacer(1, 1)), ElementForm)
