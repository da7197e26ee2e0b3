"""Tests for box placement."""

import pytest

from collage.elements import above, container, flow, layers, spacer
from collage.models.nodes import (
    BOTTOM_RIGHT,
    CENTER,
    TOP_LEFT,
    Direction,
    absolute,
    bottom_left_at,
    bottom_right_at,
    mid_bottom_at,
    mid_left_at,
    mid_right_at,
    mid_top_at,
    middle_at,
    relative,
    top_left_at,
    top_right_at,
)


def _offsets(node):
    return [child.offset for child in node.children]


@pytest.mark.parametrize(
    "position, expected",
    [(CENTER, (25, 25)), (TOP_LEFT, (0, 0)), (BOTTOM_RIGHT, (50, 50))],
)
def test_container_alignment(pipeline, position, expected):
    node = pipeline.layout(container(100, 100, position, spacer(50, 50)))
    assert node.children[0].offset == pytest.approx(expected)


def test_container_padding_and_offset(pipeline):
    node = pipeline.layout(container(100, 100, BOTTOM_RIGHT, spacer(50, 50), padding=10))
    assert node.children[0].offset == pytest.approx((40, 40))
    node = pipeline.layout(container(100, 100, CENTER.at(3, -2), spacer(50, 50)))
    assert node.children[0].offset == pytest.approx((28, 23))


def test_overflowing_child_is_aligned_not_scaled(pipeline):
    node = pipeline.layout(container(10, 10, CENTER, spacer(30, 30)))
    child = node.children[0]
    assert child.offset == pytest.approx((-10, -10))
    assert (child.width, child.height) == (30, 30)
    assert node.overflows()


def test_flow_right_and_left(pipeline):
    kids = [spacer(10, 10), spacer(20, 10)]
    right = pipeline.layout(flow(Direction.RIGHT, kids))
    assert [x for x, _ in _offsets(right)] == [0, 10]
    left = pipeline.layout(flow(Direction.LEFT, kids))
    assert left.width == 30
    assert [x for x, _ in _offsets(left)] == [20, 0]


def test_flow_down_and_up(pipeline):
    kids = [spacer(10, 10), spacer(10, 20)]
    down = pipeline.layout(flow(Direction.DOWN, kids))
    assert [y for _, y in _offsets(down)] == [0, 10]
    up = pipeline.layout(flow(Direction.UP, kids))
    assert [y for _, y in _offsets(up)] == [20, 0]


def test_flow_cross_alignment(pipeline):
    node = pipeline.layout(flow(Direction.RIGHT, [spacer(10, 10), spacer(10, 30)], align=0.5))
    assert _offsets(node) == [(0, 10), (10, 0)]


def test_layers_share_the_origin(pipeline):
    node = pipeline.layout(layers([spacer(10, 10), spacer(20, 20)]))
    assert _offsets(node) == [(0, 0), (0, 0)]
    assert (node.width, node.height) == (20, 20)


def test_absolute_origins(pipeline):
    node = pipeline.layout(above(spacer(10, 10), container(20, 20, CENTER, spacer(10, 10))))
    inner = node.children[1].children[0]
    assert inner.origin == pytest.approx((5, 15))


def test_root_size_is_caller_supplied(pipeline):
    node = pipeline.layout(spacer(10, 10), size=(40, 30))
    assert (node.width, node.height) == (40, 30)


def test_layout_is_idempotent(pipeline):
    tree = above(spacer(10, 10), flow(Direction.LEFT, [spacer(5, 5), spacer(7, 3)], align=1.0))
    assert pipeline.layout(tree) == pipeline.layout(tree)


@pytest.mark.parametrize(
    "position, expected",
    [
        (top_left_at(10, 10), (10, 10)),
        (mid_top_at(10, 10), (50, 10)),
        (top_right_at(10, 10), (70, 10)),
        (mid_left_at(10, 10), (10, 50)),
        (middle_at(10, 10), (50, 50)),
        (mid_right_at(10, 10), (70, 50)),
        (bottom_left_at(10, 10), (10, 70)),
        (mid_bottom_at(10, 10), (50, 70)),
        (bottom_right_at(10, 10), (70, 70)),
    ],
)
def test_anchored_offset_stays_inside(pipeline, position, expected):
    node = pipeline.layout(container(100, 100, position, spacer(20, 20)))
    child = node.children[0]
    assert child.offset == pytest.approx(expected)
    assert not node.overflows()


def test_relative_offset_uses_inner_extent(pipeline):
    position = bottom_right_at(relative(0.1), absolute(5))
    node = pipeline.layout(container(100, 60, position, spacer(20, 20), padding=10))
    # inner box is 80 x 40
    assert node.children[0].offset == pytest.approx((62, 25))
