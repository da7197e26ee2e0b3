"""Arrange — final boxes, resolved top-down.

Every node is given its box size by its parent (the root by the caller)
and places its children inside it. Offsets are relative to the parent box's
top-left corner, y down.
"""

from __future__ import annotations

from collage.engine.context import LayoutNode, Measured, RenderContext
from collage.engine.registry import Stage, handler
from collage.models.geometry import Point
from collage.models.nodes import Container, Direction, ElementKind, Flow, Leaf


@handler(stage=Stage.ARRANGE, kind=ElementKind.LEAF, description="Leaves fill their box")
def arrange_leaf(
    leaf: Leaf,
    measured: Measured,
    width: float,
    height: float,
    offset: Point,
    origin: Point,
    ctx: RenderContext,
) -> LayoutNode:
    return LayoutNode(
        element=leaf,
        width=width,
        height=height,
        offset=offset,
        origin=origin,
        content_bounds=measured.content_bounds,
    )


@handler(stage=Stage.ARRANGE, kind=ElementKind.CONTAINER, description="Position the child")
def arrange_container(
    container: Container,
    measured: Measured,
    width: float,
    height: float,
    offset: Point,
    origin: Point,
    ctx: RenderContext,
) -> LayoutNode:
    (child,) = measured.children
    pad = container.padding
    pos = container.position

    # Free space can go negative; the child then overflows on the side
    # opposite its alignment.
    inner_w = width - pad.horizontal
    inner_h = height - pad.vertical
    dx, dy = pos.offset(inner_w, inner_h)
    x = pad.left + pos.x * (inner_w - child.width) + dx
    y = pad.top + pos.y * (inner_h - child.height) + dy

    node = ctx.arrange(child, child.width, child.height, (x, y), origin)
    return LayoutNode(
        element=container,
        width=width,
        height=height,
        offset=offset,
        origin=origin,
        children=(node,),
    )


@handler(stage=Stage.ARRANGE, kind=ElementKind.FLOW, description="Line children up")
def arrange_flow(
    flow: Flow,
    measured: Measured,
    width: float,
    height: float,
    offset: Point,
    origin: Point,
    ctx: RenderContext,
) -> LayoutNode:
    direction = flow.direction
    nodes: list[LayoutNode] = []

    # Cursor along the flow axis. LEFT and UP start at the far edge.
    if direction is Direction.LEFT:
        cursor = width
    elif direction is Direction.UP:
        cursor = height
    else:
        cursor = 0.0

    for i, child in enumerate(measured.children):
        align = flow.alignment_of(i)
        cross_x = align * (width - child.width)
        cross_y = align * (height - child.height)

        if direction is Direction.RIGHT:
            x, y = cursor, cross_y
            cursor += child.width
        elif direction is Direction.LEFT:
            cursor -= child.width
            x, y = cursor, cross_y
        elif direction is Direction.DOWN:
            x, y = cross_x, cursor
            cursor += child.height
        elif direction is Direction.UP:
            cursor -= child.height
            x, y = cross_x, cursor
        else:
            x, y = cross_x, cross_y

        nodes.append(ctx.arrange(child, child.width, child.height, (x, y), origin))

    return LayoutNode(
        element=flow,
        width=width,
        height=height,
        offset=offset,
        origin=origin,
        children=tuple(nodes),
    )


def arrange_root(
    measured: Measured, ctx: RenderContext, size: tuple[float, float] | None = None
) -> LayoutNode:
    """Arrange a measured tree into a box of ``size`` (default: its intrinsic size)."""
    width, height = size if size is not None else (measured.width, measured.height)
    return ctx.arrange(measured, width, height)
