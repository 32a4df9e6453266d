"""
Surface patches filling the region around a point and its neighbours.

Two styles are available:
- CURVED: each (center, neighbour, next neighbour) spherical triangle is
  subdivided on a barycentric grid and every grid vertex is pushed back
  onto the sphere, so the patch hugs the surface.
- FLAT: a plain triangle fan across the chords.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np
import structlog

from .buffers import GeometryBuffer, PrimitiveType, compute_vertex_normals
from .color import RGB

logger = structlog.get_logger()

MIN_PATCH_NEIGHBORS = 3


class PatchStyle(str, Enum):
    """Patch triangulation style."""

    CURVED = "curved"
    FLAT = "flat"

    @classmethod
    def parse(cls, value) -> "PatchStyle":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown patch style {value!r} (expected one of: {valid})") from None


@dataclass(frozen=True, eq=False)
class Patch:
    """Triangle list for one point's neighbourhood plus its colour."""
    center_index: int
    geometry: GeometryBuffer
    color: RGB


def sort_by_angle(center: np.ndarray, neighbors: Sequence[np.ndarray]) -> List[np.ndarray]:
    """
    Order neighbours by atan2(|n x c|, n . c), the angle each makes with
    the center. Equal angles keep their original order.
    """
    angles = [
        math.atan2(float(np.linalg.norm(np.cross(n, center))), float(np.dot(n, center)))
        for n in neighbors
    ]
    order = sorted(range(len(neighbors)), key=lambda k: angles[k])
    return [neighbors[k] for k in order]


def _project(points: np.ndarray, radius: float) -> np.ndarray:
    # Zero-length combinations (antipodal corners) stay at the origin
    lengths = np.linalg.norm(points, axis=-1, keepdims=True)
    unit = np.divide(points, lengths, out=np.zeros_like(points), where=lengths > 0)
    return unit * radius


def subdivide_spherical_triangle(a: np.ndarray, b: np.ndarray, c: np.ndarray,
                                 subdivisions: int, radius: float):
    """
    Subdivide triangle (a, b, c) on a barycentric grid.

    For grid cell (u, v) with u + v < S the corners are at (u, v),
    (u + 1, v) and (u, v + 1) over S, weighted (1 - u - v) on ``a``,
    u on ``b`` and v on ``c``. Only these upward cells are emitted,
    S(S + 1)/2 triangles in total.

    Returns:
        Tuple of (positions (n*3, 3), uvs (n*3, 2))
    """
    s = subdivisions
    cells = np.array([(u, v) for u in range(s) for v in range(s - u)], dtype=np.float64)
    if cells.size == 0:
        return np.empty((0, 3)), np.empty((0, 2))

    # Three corners per cell, in grid units
    corners = np.stack([
        cells,
        cells + np.array([1.0, 0.0]),
        cells + np.array([0.0, 1.0]),
    ], axis=1).reshape(-1, 2) / s

    u = corners[:, 0:1]
    v = corners[:, 1:2]
    w = 1.0 - u - v
    positions = _project(w * a + u * b + v * c, radius)
    return positions, corners


def build_curved_patch(center: np.ndarray, neighbors: Sequence[np.ndarray],
                       color: RGB, radius: float,
                       subdivisions: int = 16) -> GeometryBuffer:
    """
    Build the subdivided spherical patch around ``center``.

    Neighbours are sorted by angle, then every adjacent pair (wrapping
    around) forms a spherical triangle with the center.

    Args:
        center: Center point position
        neighbors: Neighbour positions
        color: Colour applied to every vertex
        radius: Sphere radius
        subdivisions: Barycentric grid resolution

    Returns:
        Triangle-list buffer with colours, UVs and normals
    """
    center = np.asarray(center, dtype=np.float64)
    ordered = sort_by_angle(center, [np.asarray(n, dtype=np.float64) for n in neighbors])

    positions = []
    uvs = []
    for i, first in enumerate(ordered):
        second = ordered[(i + 1) % len(ordered)]
        triangle_positions, triangle_uvs = subdivide_spherical_triangle(
            center, first, second, subdivisions, radius
        )
        positions.append(triangle_positions)
        uvs.append(triangle_uvs)

    flat_positions = np.concatenate(positions).reshape(-1)
    vertex_count = flat_positions.size // 3
    return GeometryBuffer(
        primitive=PrimitiveType.TRIANGLES,
        positions=flat_positions,
        colors=np.tile(np.asarray(color, dtype=np.float64), vertex_count),
        uvs=np.concatenate(uvs).reshape(-1),
        normals=compute_vertex_normals(flat_positions),
    )


def build_flat_fan(center: np.ndarray, neighbors: Sequence[np.ndarray],
                   color: RGB) -> GeometryBuffer:
    """
    Triangle fan (center, n[j], n[j+1]) over neighbours in the given order.
    """
    center = np.asarray(center, dtype=np.float64)
    triangles = []
    for j in range(len(neighbors)):
        triangles.append(center)
        triangles.append(np.asarray(neighbors[j], dtype=np.float64))
        triangles.append(np.asarray(neighbors[(j + 1) % len(neighbors)], dtype=np.float64))

    flat_positions = np.concatenate(triangles)
    vertex_count = len(triangles)
    return GeometryBuffer(
        primitive=PrimitiveType.TRIANGLES,
        positions=flat_positions,
        colors=np.tile(np.asarray(color, dtype=np.float64), vertex_count),
        normals=compute_vertex_normals(flat_positions),
    )


def build_patch(center_index: int, points, radius: float,
                style: PatchStyle = PatchStyle.CURVED,
                subdivisions: int = 16) -> Optional[Patch]:
    """
    Build the patch for ``points[center_index]``.

    Returns None when the point has fewer than three neighbours, since
    no closed fan can be formed.
    """
    point = points[center_index]
    if len(point.neighbor_indices) < MIN_PATCH_NEIGHBORS:
        return None

    neighbors = [points[j].position for j in point.neighbor_indices]
    style = PatchStyle.parse(style)
    if style is PatchStyle.CURVED:
        geometry = build_curved_patch(point.position, neighbors, point.color, radius, subdivisions)
    else:
        geometry = build_flat_fan(point.position, neighbors, point.color)

    return Patch(center_index=center_index, geometry=geometry, color=point.color)
