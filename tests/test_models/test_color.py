"""Tests for colors and gradients."""

import math

import pytest

from collage.errors import InvalidGradientStops
from collage.models.color import (
    BLUE,
    RED,
    Color,
    grayscale,
    hsl,
    linear,
    radial,
    rgb,
    rgba,
)


def test_rgb_takes_byte_channels():
    c = rgb(255, 0, 51)
    assert (c.r, c.g, c.b, c.a) == pytest.approx((1.0, 0.0, 0.2, 1.0))


def test_channels_are_clamped():
    c = Color(r=2.0, g=-1.0, b=0.5, a=7)
    assert (c.r, c.g, c.b, c.a) == (1.0, 0.0, 0.5, 1.0)
    assert rgba(300, 0, 0, -1).r == 1.0


def test_hsl_primary_colors():
    red = hsl(0, 1, 0.5)
    assert (red.r, red.g, red.b) == pytest.approx((1, 0, 0))
    green = hsl(2 * math.pi / 3, 1, 0.5)
    assert (green.r, green.g, green.b) == pytest.approx((0, 1, 0))


def test_hue_wraps():
    a = hsl(-math.pi / 3, 1, 0.5)
    b = hsl(5 * math.pi / 3, 1, 0.5)
    assert (a.r, a.g, a.b) == pytest.approx((b.r, b.g, b.b))


def test_to_hsl_round_trip():
    h, s, l, a = RED.to_hsl()
    back = hsl(h, s, l)
    assert (back.r, back.g, back.b) == pytest.approx((RED.r, RED.g, RED.b))


def test_complement_of_red_is_cyan():
    c = hsl(0, 1, 0.5).complement()
    assert (c.r, c.g, c.b) == pytest.approx((0, 1, 1))


def test_grayscale_ends():
    assert grayscale(0).to_hex() == "#ffffff"
    assert grayscale(1).to_hex() == "#000000"


def test_fade_multiplies_alpha():
    assert RED.with_alpha(0.5).fade(0.5).a == pytest.approx(0.25)


def test_gradient_stops_must_increase():
    with pytest.raises(InvalidGradientStops):
        linear((0, 0), (1, 0), [(0.5, RED), (0.2, BLUE)])


def test_gradient_stops_equal_offsets_rejected():
    with pytest.raises(InvalidGradientStops):
        linear((0, 0), (1, 0), [(0.5, RED), (0.5, BLUE)])


def test_gradient_stops_out_of_range_or_empty():
    with pytest.raises(InvalidGradientStops):
        radial((0, 0), 0, (0, 0), 10, [(1.5, RED)])
    with pytest.raises(InvalidGradientStops):
        linear((0, 0), (1, 0), [])


def test_valid_gradient():
    g = linear((0, 0), (10, 0), [(0.0, RED), (1.0, BLUE)])
    assert len(g.stops) == 2
