"""Point placement on the sphere surface."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np
import structlog

from .color import RGB, point_color

logger = structlog.get_logger()

GOLDEN_RATIO = (1 + math.sqrt(5)) / 2


class SamplingMode(str, Enum):
    """Point placement strategy."""

    RANDOM = "random"
    FIBONACCI = "fibonacci"

    @classmethod
    def parse(cls, value) -> "SamplingMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown sampling mode {value!r} (expected one of: {valid})") from None


@dataclass(frozen=True, eq=False)
class Point:
    """A network point on the sphere surface."""

    position: np.ndarray
    color: RGB
    neighbor_indices: Tuple[int, ...] = field(default=())

    def __post_init__(self):
        position = np.array(self.position, dtype=np.float64).reshape(3)
        position.flags.writeable = False
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "neighbor_indices", tuple(int(i) for i in self.neighbor_indices))

    def with_neighbors(self, neighbor_indices) -> "Point":
        return Point(self.position, self.color, tuple(neighbor_indices))


def spherical_to_cartesian(radius: float, polar: float, azimuth: float) -> np.ndarray:
    """Position for polar angle ``polar`` (from +z) and azimuth ``azimuth``."""
    return radius * np.array([
        math.sin(polar) * math.cos(azimuth),
        math.sin(polar) * math.sin(azimuth),
        math.cos(polar),
    ])


def fibonacci_sphere(point_count: int, radius: float) -> List[Point]:
    """
    Deterministic near-uniform points along a golden-ratio spiral.

    Point i sits at azimuth 2*pi*i/phi and polar angle
    acos(1 - 2(i + 0.5)/N); hues are spaced evenly by index.

    Args:
        point_count: Number of points
        radius: Sphere radius

    Returns:
        Points with empty neighbour lists
    """
    points = []
    for i in range(point_count):
        azimuth = 2 * math.pi * i / GOLDEN_RATIO
        polar = math.acos(1 - 2 * (i + 0.5) / point_count)
        points.append(Point(
            position=spherical_to_cartesian(radius, polar, azimuth),
            color=point_color(i / point_count),
        ))
    return points


def random_sphere(point_count: int, radius: float, rng: np.random.Generator) -> List[Point]:
    """
    Uniformly distributed random points with random hues.

    The polar angle is acos(1 - 2u) rather than uniform so points do not
    bunch at the poles. Each point draws azimuth, u and hue in that order.
    """
    points = []
    for _ in range(point_count):
        azimuth = rng.random() * 2 * math.pi
        polar = math.acos(1 - 2 * rng.random())
        hue = rng.random()
        points.append(Point(
            position=spherical_to_cartesian(radius, polar, azimuth),
            color=point_color(hue),
        ))
    return points


def sample_points(point_count: int, radius: float,
                  mode: SamplingMode = SamplingMode.FIBONACCI,
                  rng: Optional[np.random.Generator] = None) -> List[Point]:
    """
    Place points on a sphere.

    Args:
        point_count: Number of points
        radius: Sphere radius
        mode: RANDOM or FIBONACCI
        rng: Random source for RANDOM mode (fresh generator if None)

    Returns:
        List of points, every position at distance ``radius`` from the origin
    """
    mode = SamplingMode.parse(mode)
    if mode is SamplingMode.FIBONACCI:
        points = fibonacci_sphere(point_count, radius)
    else:
        points = random_sphere(point_count, radius, rng if rng is not None else np.random.default_rng())

    logger.debug("Points sampled", mode=mode.value, count=len(points), radius=radius)
    return points
