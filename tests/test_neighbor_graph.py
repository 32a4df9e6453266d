"""Tests for nearest-neighbour connectivity."""

import pytest
import numpy as np
from py_geodesic.core.point_sampler import Point, fibonacci_sphere
from py_geodesic.core.neighbor_graph import (
    FIXED_NEIGHBORS, VARIED_NEIGHBORS, NeighborCountRange,
    build_neighbor_graph, draw_neighbor_count, nearest_neighbors, unique_edges
)
from scipy.spatial.distance import cdist


@pytest.fixture
def points():
    return fibonacci_sphere(12, 1.5)


class TestNeighborCount:
    """Test drawing K per point."""

    def test_fixed_range(self):
        rng = np.random.default_rng(0)
        assert all(draw_neighbor_count(FIXED_NEIGHBORS, rng) == 3 for _ in range(20))

    def test_varied_range_bounds(self):
        rng = np.random.default_rng(0)
        counts = {draw_neighbor_count(VARIED_NEIGHBORS, rng) for _ in range(500)}
        assert counts == {3, 4, 5}

    def test_formula(self):
        """K = 3 + floor(3u)."""
        class FixedSource:
            def __init__(self, value):
                self.value = value

            def random(self):
                return self.value

        assert draw_neighbor_count(VARIED_NEIGHBORS, FixedSource(0.0)) == 3
        assert draw_neighbor_count(VARIED_NEIGHBORS, FixedSource(0.34)) == 4
        assert draw_neighbor_count(VARIED_NEIGHBORS, FixedSource(0.999)) == 5


class TestNeighborGraph:
    """Test graph construction."""

    def test_no_self_neighbors(self, points):
        graph = build_neighbor_graph(points, VARIED_NEIGHBORS, np.random.default_rng(5))
        for i, point in enumerate(graph):
            assert i not in point.neighbor_indices

    def test_lengths_within_range(self, points):
        graph = build_neighbor_graph(points, VARIED_NEIGHBORS, np.random.default_rng(5))
        for point in graph:
            assert 3 <= len(point.neighbor_indices) <= 5

    def test_fixed_lengths(self, points):
        graph = build_neighbor_graph(points, FIXED_NEIGHBORS, np.random.default_rng(5))
        assert all(len(p.neighbor_indices) == 3 for p in graph)

    def test_neighbors_are_nearest(self, points):
        """Listed neighbours are the closest points, nearest first."""
        graph = build_neighbor_graph(points, FIXED_NEIGHBORS)
        positions = np.vstack([p.position for p in points])
        distances = cdist(positions, positions)

        for i, point in enumerate(graph):
            listed = [distances[i, j] for j in point.neighbor_indices]
            assert listed == sorted(listed)
            others = [distances[i, j] for j in range(len(points))
                      if j != i and j not in point.neighbor_indices]
            assert max(listed) <= min(others)

    def test_positions_unchanged(self, points):
        graph = build_neighbor_graph(points, FIXED_NEIGHBORS)
        for before, after in zip(points, graph):
            np.testing.assert_array_equal(before.position, after.position)
            assert before.color == after.color

    def test_seeded_reproducibility(self, points):
        graph1 = build_neighbor_graph(points, VARIED_NEIGHBORS, np.random.default_rng(9))
        graph2 = build_neighbor_graph(points, VARIED_NEIGHBORS, np.random.default_rng(9))
        assert [p.neighbor_indices for p in graph1] == [p.neighbor_indices for p in graph2]

    def test_capped_by_point_count(self):
        points = fibonacci_sphere(3, 1.0)
        graph = build_neighbor_graph(points, NeighborCountRange(5, 5))
        assert all(len(p.neighbor_indices) == 2 for p in graph)

    def test_empty(self):
        assert build_neighbor_graph([], VARIED_NEIGHBORS) == []


class TestTieBreaking:
    """Equal distances keep index order."""

    def test_stable_order(self):
        distances = np.array([
            [0.0, 1.0, 1.0, 1.0],
            [1.0, 0.0, 2.0, 2.0],
            [1.0, 2.0, 0.0, 2.0],
            [1.0, 2.0, 2.0, 0.0],
        ])
        assert nearest_neighbors(distances, 0, 2) == [1, 2]
        assert nearest_neighbors(distances, 3, 3) == [0, 1, 2]


class TestUniqueEdges:
    """Test edge deduplication."""

    def _points(self, neighbor_lists):
        return [Point(position=(0.0, 0.0, 1.0), color=(1.0, 1.0, 1.0), neighbor_indices=n)
                for n in neighbor_lists]

    def test_mutual_edge_once(self):
        points = self._points([[1], [0]])
        assert unique_edges(points) == [(0, 1)]

    def test_lower_index_listing_draws_edge(self):
        points = self._points([[2], [], []])
        assert unique_edges(points) == [(0, 2)]

    def test_higher_index_listing_only_is_not_drawn(self):
        """Only a point listing a higher index produces the edge."""
        points = self._points([[], [], [0]])
        assert unique_edges(points) == []

    def test_edges_ordered(self, points):
        graph = build_neighbor_graph(points, VARIED_NEIGHBORS, np.random.default_rng(2))
        edges = unique_edges(graph)
        assert all(i < j for i, j in edges)
        assert len(edges) == len(set(edges))
