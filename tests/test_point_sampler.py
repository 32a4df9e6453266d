"""Tests for point sampling on the sphere."""

import math

import pytest
import numpy as np
from py_geodesic.core.color import hsl_to_rgb
from py_geodesic.core.point_sampler import (
    SamplingMode, sample_points, fibonacci_sphere, random_sphere
)


class TestFibonacciSphere:
    """Test deterministic spiral placement."""

    def test_point_count(self):
        points = fibonacci_sphere(12, 1.5)
        assert len(points) == 12

    def test_points_on_sphere(self):
        """Every point lies on the sphere surface."""
        for point in fibonacci_sphere(12, 1.5):
            assert abs(np.linalg.norm(point.position) - 1.5) < 1e-6

    def test_deterministic(self):
        """Two runs give identical positions."""
        points1 = sample_points(12, 1.5, SamplingMode.FIBONACCI)
        points2 = sample_points(12, 1.5, SamplingMode.FIBONACCI)

        for p1, p2 in zip(points1, points2):
            np.testing.assert_array_equal(p1.position, p2.position)
            assert p1.color == p2.color

    def test_first_point_polar_angle(self):
        """First point sits at polar angle acos(1 - 1/N) with zero azimuth."""
        point = fibonacci_sphere(12, 1.5)[0]
        polar = math.acos(1 - 1 / 12)

        np.testing.assert_allclose(
            point.position,
            [1.5 * math.sin(polar), 0.0, 1.5 * math.cos(polar)],
            atol=1e-12,
        )

    def test_evenly_spaced_hues(self):
        points = fibonacci_sphere(4, 1.0)
        for i, point in enumerate(points):
            assert point.color == pytest.approx(hsl_to_rgb(i / 4, 0.7, 0.6))

    def test_neighbors_start_empty(self):
        assert all(p.neighbor_indices == () for p in fibonacci_sphere(12, 1.5))

    def test_hemisphere_balance(self):
        """The spiral covers both hemispheres equally."""
        z = np.array([p.position[2] for p in fibonacci_sphere(12, 1.5)])
        assert np.sum(z > 0) == np.sum(z < 0) == 6


class TestRandomSphere:
    """Test uniform random placement."""

    def test_points_on_sphere(self):
        rng = np.random.default_rng(42)
        for point in random_sphere(50, 2.0, rng):
            assert abs(np.linalg.norm(point.position) - 2.0) < 1e-6

    def test_seeded_reproducibility(self):
        points1 = sample_points(12, 1.5, SamplingMode.RANDOM, np.random.default_rng(7))
        points2 = sample_points(12, 1.5, SamplingMode.RANDOM, np.random.default_rng(7))

        for p1, p2 in zip(points1, points2):
            np.testing.assert_array_equal(p1.position, p2.position)

    def test_different_seeds(self):
        points1 = sample_points(12, 1.5, SamplingMode.RANDOM, np.random.default_rng(1))
        points2 = sample_points(12, 1.5, SamplingMode.RANDOM, np.random.default_rng(2))

        assert not np.array_equal(points1[0].position, points2[0].position)

    def test_unseeded_runs_differ(self):
        points1 = sample_points(12, 1.5, SamplingMode.RANDOM)
        points2 = sample_points(12, 1.5, SamplingMode.RANDOM)

        positions1 = np.vstack([p.position for p in points1])
        positions2 = np.vstack([p.position for p in points2])
        assert not np.array_equal(positions1, positions2)

    def test_colors_use_fixed_saturation_and_lightness(self):
        import colorsys

        rng = np.random.default_rng(3)
        for point in random_sphere(20, 1.0, rng):
            _, lightness, saturation = colorsys.rgb_to_hls(*point.color)
            assert lightness == pytest.approx(0.6)
            assert saturation == pytest.approx(0.7)

    def test_roughly_uniform(self):
        """Mean position of many samples is close to the origin."""
        rng = np.random.default_rng(123)
        positions = np.vstack([p.position for p in random_sphere(4000, 1.0, rng)])
        assert np.all(np.abs(positions.mean(axis=0)) < 0.05)


class TestPoint:
    """Test the point value object."""

    def test_position_read_only(self):
        point = fibonacci_sphere(3, 1.0)[0]
        with pytest.raises(ValueError):
            point.position[0] = 5.0

    def test_with_neighbors_returns_new_point(self):
        point = fibonacci_sphere(3, 1.0)[0]
        linked = point.with_neighbors([2, 1])

        assert linked.neighbor_indices == (2, 1)
        assert point.neighbor_indices == ()
        np.testing.assert_array_equal(linked.position, point.position)


def test_parse_sampling_mode():
    assert SamplingMode.parse("RANDOM") is SamplingMode.RANDOM
    assert SamplingMode.parse(SamplingMode.FIBONACCI) is SamplingMode.FIBONACCI
    with pytest.raises(ValueError):
        SamplingMode.parse("grid")


@pytest.mark.parametrize("mode", [SamplingMode.RANDOM, SamplingMode.FIBONACCI])
@pytest.mark.parametrize("radius", [0.5, 1.5, 10.0])
def test_all_modes_on_sphere(mode, radius):
    points = sample_points(12, radius, mode, np.random.default_rng(0))
    magnitudes = np.linalg.norm(np.vstack([p.position for p in points]), axis=1)
    np.testing.assert_allclose(magnitudes, radius, atol=1e-6)
