"""Tests for transforms, rectangles and point helpers."""

import math

import numpy as np
import pytest

from collage.errors import InvalidLayoutSpec, SingularTransform
from collage.models.geometry import (
    IDENTITY,
    Rect,
    apply,
    bounding_box,
    compose,
    invert,
    matrix,
    rotation,
    scaling,
    translation,
)
from collage.utils.geometry import as_points, bbox, distinct_count, transform_points


SAMPLED = [
    rotation(0.3),
    translation(3, -2),
    scaling(2, 0.5),
    matrix(1, 0.75, 0, 1, 0, 0),  # shear
    scaling(-1, 1),  # reflection
    compose(translation(5, 7), compose(rotation(1.1), scaling(2, 3))),
    matrix(0.2, -1.3, 2.5, 0.4, -8, 11),
]


@pytest.mark.parametrize("a", SAMPLED)
@pytest.mark.parametrize("b", SAMPLED[::2])
@pytest.mark.parametrize("c", SAMPLED[1::2])
def test_compose_is_associative(a, b, c):
    assert compose(compose(a, b), c).almost_equal(compose(a, compose(b, c)), 1e-6)


def test_compose_is_not_commutative():
    a = rotation(0.3)
    b = translation(3, -2)
    assert not compose(a, b).almost_equal(compose(b, a))


def test_identity_is_two_sided_unit():
    t = matrix(1, 2, 3, 4, 5, 6)
    assert compose(IDENTITY, t).almost_equal(t)
    assert compose(t, IDENTITY).almost_equal(t)


@pytest.mark.parametrize("t", SAMPLED)
def test_inverse_round_trip(t):
    assert compose(t, invert(t)).almost_equal(IDENTITY, 1e-6)
    assert compose(invert(t), t).almost_equal(IDENTITY, 1e-6)


def test_invert_singular_raises():
    with pytest.raises(SingularTransform):
        invert(scaling(0, 1))


def test_compose_applies_right_operand_first():
    t = compose(translation(10, 0), scaling(2))
    assert apply(t, (1, 1)) == pytest.approx((12, 2))


def test_then_reads_left_to_right():
    t = translation(1, 0).then(scaling(2))
    assert apply(t, (0, 0)) == pytest.approx((2, 0))


def test_rotation_quarter_turn():
    x, y = apply(rotation(math.pi / 2), (1, 0))
    assert x == pytest.approx(0, abs=1e-12)
    assert y == pytest.approx(1)


def test_as_array_matches_apply():
    t = compose(translation(4, -1), rotation(0.7))
    p = t.as_array() @ np.array([2.0, 3.0, 1.0])
    assert tuple(p[:2]) == pytest.approx(apply(t, (2, 3)))


def test_transform_points_matches_apply():
    t = compose(translation(4, -1), scaling(2, 3))
    pts = [(0, 0), (1, 2), (-3, 5)]
    out = transform_points(t, as_points(pts))
    for row, p in zip(out, pts):
        assert tuple(row) == pytest.approx(apply(t, p))


def test_rect_rejects_negative_size():
    with pytest.raises(InvalidLayoutSpec):
        Rect(width=-1, height=2)


def test_rect_corners_and_union():
    r = Rect(x=1, y=2, width=3, height=4)
    assert r.corners() == ((1, 2), (4, 2), (4, 6), (1, 6))
    u = r.union(Rect(x=-1, y=0, width=1, height=1))
    assert (u.x, u.y, u.width, u.height) == (-1, 0, 5, 6)


def test_bounding_box():
    box = bounding_box([(1, 2), (-3, 5), (4, 0)])
    assert (box.x, box.y, box.width, box.height) == (-3, 0, 7, 5)


def test_bounding_box_empty():
    assert bounding_box([]) == Rect()
    assert bbox(as_points([])) == (0.0, 0.0, 0.0, 0.0)


def test_distinct_count():
    assert distinct_count(as_points([(0, 0), (0, 0), (1, 1)])) == 2
    assert distinct_count(as_points([])) == 0


def test_rect_translate():
    r = Rect(x=1, y=2, width=3, height=4).translate(10, -2)
    assert (r.min, r.max) == ((11, 0), (14, 4))
