"""Leaf-node geometry helpers over Nx2 point arrays. No engine imports."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from collage.models.geometry import Point, Transform2D


def as_points(points: "list[Point] | tuple[Point, ...]") -> NDArray[np.float64]:
    """Pack a point sequence into an Nx2 float array (0x2 when empty)."""
    return np.asarray(points, dtype=np.float64).reshape(-1, 2)


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def transform_points(t: "Transform2D", points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Map every row of an Nx2 array through ``t``."""
    if len(points) == 0:
        return points.reshape(0, 2)
    linear = np.array([[t.a, t.b], [t.c, t.d]])
    return points @ linear.T + np.array([t.tx, t.ty])


def distinct_count(points: NDArray[np.float64], eps: float = 1e-9) -> int:
    """Number of distinct points, treating points closer than ``eps`` as equal."""
    if len(points) == 0:
        return 0
    # Snap to an eps grid so near-equal coordinates collapse together.
    snapped = np.round(points / eps) if eps > 0 else points
    return int(len(np.unique(snapped, axis=0)))


def ellipse_points(width: float, height: float, segments: int) -> NDArray[np.float64]:
    """``segments`` points evenly spaced around an axis-aligned ellipse centred on the origin."""
    if segments <= 0:
        return np.empty((0, 2))
    t = 2.0 * np.pi * np.arange(segments) / segments
    return np.column_stack([width / 2 * np.cos(t), height / 2 * np.sin(t)])


def regular_polygon_points(sides: int, radius: float) -> NDArray[np.float64]:
    """Vertices of a regular polygon, first vertex on the +x axis."""
    if sides <= 0:
        return np.empty((0, 2))
    t = 2.0 * np.pi * np.arange(sides) / sides
    return np.column_stack([radius * np.cos(t), radius * np.sin(t)])


def to_point_tuple(points: NDArray[np.float64]) -> "tuple[Point, ...]":
    return tuple((float(x), float(y)) for x, y in points)
