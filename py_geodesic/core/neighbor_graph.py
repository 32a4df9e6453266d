"""Nearest-neighbour connectivity between network points."""

import math
from typing import List, NamedTuple, Optional, Sequence, Set, Tuple

import numpy as np
import structlog
from scipy.spatial.distance import cdist

from .point_sampler import Point

logger = structlog.get_logger()


class NeighborCountRange(NamedTuple):
    """Inclusive bounds for how many neighbours each point links to."""
    minimum: int
    maximum: int

    @property
    def is_fixed(self) -> bool:
        return self.minimum == self.maximum


VARIED_NEIGHBORS = NeighborCountRange(3, 5)
FIXED_NEIGHBORS = NeighborCountRange(3, 3)


def draw_neighbor_count(count_range: NeighborCountRange, rng: np.random.Generator) -> int:
    """
    Pick K for one point.

    A fixed range returns its only value without consuming randomness;
    otherwise K = minimum + floor(span * u) with span = maximum - minimum + 1,
    i.e. 3 + floor(3u) for the default 3..5 range.
    """
    if count_range.is_fixed:
        return count_range.minimum
    span = count_range.maximum - count_range.minimum + 1
    return count_range.minimum + int(math.floor(span * rng.random()))


def nearest_neighbors(distances: np.ndarray, index: int, count: int) -> List[int]:
    """
    Indices of the ``count`` closest points to ``index``.

    Uses a stable sort so equal distances keep index order.
    """
    order = np.argsort(distances[index], kind="stable")
    return [int(j) for j in order if j != index][:count]


def build_neighbor_graph(points: Sequence[Point],
                         count_range: NeighborCountRange = VARIED_NEIGHBORS,
                         rng: Optional[np.random.Generator] = None) -> List[Point]:
    """
    Attach nearest-neighbour lists to every point.

    The relation is directed: A may list B without B listing A. K is drawn
    independently for each point and capped at ``len(points) - 1``.

    Args:
        points: Sampled points
        count_range: Bounds for K
        rng: Random source for varied K (fresh generator if None)

    Returns:
        New points carrying their neighbour indices
    """
    if rng is None:
        rng = np.random.default_rng()

    if not points:
        return []

    positions = np.vstack([p.position for p in points])
    distances = cdist(positions, positions)

    linked = []
    for i, point in enumerate(points):
        count = min(draw_neighbor_count(count_range, rng), len(points) - 1)
        linked.append(point.with_neighbors(nearest_neighbors(distances, i, count)))

    logger.debug("Neighbor graph built", points=len(linked),
                 links=sum(len(p.neighbor_indices) for p in linked))
    return linked


def unique_edges(points: Sequence[Point]) -> List[Tuple[int, int]]:
    """
    Undirected edges to draw, each as ``(i, j)`` with ``i < j``.

    Only a listing from the lower index produces an edge, so a pair listed
    solely by its higher-index point is not drawn.
    """
    edges = []
    seen: Set[Tuple[int, int]] = set()
    for i, point in enumerate(points):
        for j in point.neighbor_indices:
            if i < j and (i, j) not in seen:
                seen.add((i, j))
                edges.append((i, j))
    return edges
