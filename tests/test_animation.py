"""Tests for rotation state and scene hints."""

import pytest
from py_geodesic.core.animation import DEFAULT_ROTATION_STEP, NetworkRotation
from py_geodesic.core.scene import describe_scene


class TestNetworkRotation:
    """Test per-frame rotation."""

    def test_starts_at_zero(self):
        assert NetworkRotation().as_dict() == {"points": 0.0, "lines": 0.0, "patches": 0.0, "sphere": 0.0}

    def test_tick(self):
        rotation = NetworkRotation()
        rotation.tick()
        assert rotation.points == pytest.approx(0.002)

    def test_groups_stay_in_sync(self):
        rotation = NetworkRotation()
        rotation.advance(60)
        values = set(rotation.as_dict().values())
        assert len(values) == 1
        assert rotation.lines == pytest.approx(60 * DEFAULT_ROTATION_STEP)

    def test_custom_step(self):
        rotation = NetworkRotation()
        rotation.advance(3, step=0.1)
        assert rotation.patches == pytest.approx(0.3)


class TestSceneDescription:
    """Test render hints."""

    def test_defaults(self):
        scene = describe_scene()
        assert scene.sphere.radius == 1.5
        assert scene.markers.radius == 0.08
        assert scene.patches.opacity == 0.8
        assert scene.patches.double_sided
        assert scene.orbit.enable_pan is False
        assert (scene.orbit.min_distance, scene.orbit.max_distance) == (2, 8)
        assert scene.rotation_step == DEFAULT_ROTATION_STEP

    def test_radius(self):
        assert describe_scene(radius=3.0).sphere.radius == 3.0
