"""Great-circle curves between points on the sphere."""

import math
from typing import Optional

import numpy as np

# Below this |sin(angle)| the great circle through two points is undefined
DEGENERATE_SINE = 1e-6


def angle_between(a: np.ndarray, b: np.ndarray) -> float:
    """
    Angle in radians between two vectors.

    Returns pi/2 when either vector has zero length.
    """
    denominator = math.sqrt(float(np.dot(a, a)) * float(np.dot(b, b)))
    if denominator == 0:
        return math.pi / 2
    cosine = float(np.dot(a, b)) / denominator
    return math.acos(min(max(cosine, -1.0), 1.0))


def trace_geodesic(point1, point2, segments: int = 20,
                   radius: Optional[float] = None) -> np.ndarray:
    """
    Sample the shorter great-circle arc from ``point1`` to ``point2``.

    Samples come from spherical linear interpolation and are projected
    back onto the sphere. Coincident and antipodal endpoints have no
    unique great circle; every sample is then ``point1``.

    Args:
        point1: Start point on the sphere
        point2: End point on the sphere
        segments: Number of arc segments (output has segments + 1 points)
        radius: Sphere radius (defaults to |point1|)

    Returns:
        (segments + 1, 3) array of points along the arc
    """
    p1 = np.asarray(point1, dtype=np.float64)
    p2 = np.asarray(point2, dtype=np.float64)
    if radius is None:
        radius = float(np.linalg.norm(p1))

    angle = angle_between(p1, p2)
    sin_angle = math.sin(angle)

    curve = np.empty((segments + 1, 3))
    if abs(sin_angle) < DEGENERATE_SINE:
        curve[:] = p1
        return curve

    for i in range(segments + 1):
        t = i / segments
        a = math.sin((1 - t) * angle) / sin_angle
        b = math.sin(t * angle) / sin_angle
        interpolated = a * p1 + b * p2
        curve[i] = interpolated / np.linalg.norm(interpolated) * radius

    return curve
