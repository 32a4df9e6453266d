"""Flat vertex buffers handed to the renderer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np


class PrimitiveType(str, Enum):
    """How consecutive vertices are grouped into primitives."""

    LINES = "lines"
    TRIANGLES = "triangles"

    @property
    def vertices_per_primitive(self) -> int:
        return 2 if self is PrimitiveType.LINES else 3


def _frozen(values, name: str) -> np.ndarray:
    array = np.array(values, dtype=np.float64).reshape(-1)
    if not np.all(np.isfinite(array)):
        raise ValueError(f"{name} contains non-finite values")
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class GeometryBuffer:
    """
    Immutable vertex data for a line-segment list or a triangle list.

    All arrays are flat: positions and colors have stride 3, uvs stride 2,
    normals stride 3. Arrays are copied on construction and made read-only.
    """

    primitive: PrimitiveType
    positions: np.ndarray
    colors: np.ndarray
    uvs: Optional[np.ndarray] = field(default=None)
    normals: Optional[np.ndarray] = field(default=None)

    def __post_init__(self):
        primitive = PrimitiveType(self.primitive)
        object.__setattr__(self, "primitive", primitive)

        positions = _frozen(self.positions, "positions")
        colors = _frozen(self.colors, "colors")
        object.__setattr__(self, "positions", positions)
        object.__setattr__(self, "colors", colors)

        stride = 3 * primitive.vertices_per_primitive
        if positions.size % stride != 0:
            raise ValueError(
                f"positions length {positions.size} is not a multiple of {stride} "
                f"for {primitive.value}"
            )
        if colors.size != positions.size:
            raise ValueError(
                f"colors length {colors.size} does not match positions length {positions.size}"
            )

        vertex_count = positions.size // 3
        if self.uvs is not None:
            uvs = _frozen(self.uvs, "uvs")
            if uvs.size != vertex_count * 2:
                raise ValueError(f"uvs length {uvs.size} does not match {vertex_count} vertices")
            object.__setattr__(self, "uvs", uvs)
        if self.normals is not None:
            normals = _frozen(self.normals, "normals")
            if normals.size != positions.size:
                raise ValueError(
                    f"normals length {normals.size} does not match positions length {positions.size}"
                )
            object.__setattr__(self, "normals", normals)

    @classmethod
    def empty(cls, primitive: PrimitiveType) -> "GeometryBuffer":
        return cls(primitive=primitive, positions=[], colors=[])

    @property
    def vertex_count(self) -> int:
        return self.positions.size // 3

    @property
    def primitive_count(self) -> int:
        return self.vertex_count // self.primitive.vertices_per_primitive

    @property
    def is_empty(self) -> bool:
        return self.positions.size == 0

    def vertices(self) -> np.ndarray:
        """Positions as an (n, 3) array view."""
        return self.positions.reshape(-1, 3)

    def to_dict(self) -> Dict[str, Any]:
        """Plain lists for JSON serialisation."""
        data: Dict[str, Any] = {
            "primitive": self.primitive.value,
            "positions": self.positions.tolist(),
            "colors": self.colors.tolist(),
        }
        data["uvs"] = self.uvs.tolist() if self.uvs is not None else None
        data["normals"] = self.normals.tolist() if self.normals is not None else None
        return data


def compute_vertex_normals(positions) -> np.ndarray:
    """
    Per-vertex normals for a non-indexed triangle list.

    Every vertex of a triangle receives the triangle's face normal
    ``(c - b) x (a - b)``, normalised. Degenerate triangles get a zero
    normal.

    Args:
        positions: Flat or (n, 3) triangle-list positions

    Returns:
        Flat normals array, same length as the flattened positions
    """
    triangles = np.asarray(positions, dtype=np.float64).reshape(-1, 3, 3)
    a, b, c = triangles[:, 0], triangles[:, 1], triangles[:, 2]
    face = np.cross(c - b, a - b)
    lengths = np.linalg.norm(face, axis=1, keepdims=True)
    face = np.divide(face, lengths, out=np.zeros_like(face), where=lengths > 0)
    return np.repeat(face, 3, axis=0).reshape(-1)


def concatenate(buffers: List[GeometryBuffer], primitive: PrimitiveType) -> GeometryBuffer:
    """Join buffers of one primitive type into a single buffer."""
    if not buffers:
        return GeometryBuffer.empty(primitive)
    for buffer in buffers:
        if buffer.primitive is not primitive:
            raise ValueError(f"cannot join {buffer.primitive.value} into {primitive.value}")
    with_uvs = all(b.uvs is not None for b in buffers)
    with_normals = all(b.normals is not None for b in buffers)
    return GeometryBuffer(
        primitive=primitive,
        positions=np.concatenate([b.positions for b in buffers]),
        colors=np.concatenate([b.colors for b in buffers]),
        uvs=np.concatenate([b.uvs for b in buffers]) if with_uvs else None,
        normals=np.concatenate([b.normals for b in buffers]) if with_normals else None,
    )
