"""Render hints for the host scene that mounts the network."""

from typing import Tuple

from pydantic import BaseModel, Field

from .animation import DEFAULT_ROTATION_STEP

Vector3 = Tuple[float, float, float]


class BaseSphereHints(BaseModel):
    radius: float = 1.5
    width_segments: int = 64
    height_segments: int = 64
    color: str = "#4f46e5"
    roughness: float = 0.3
    metalness: float = 0.7
    opacity: float = 0.7


class MarkerHints(BaseModel):
    """Small spheres drawn at each network point."""
    radius: float = 0.08
    width_segments: int = 16
    height_segments: int = 16


class LineHints(BaseModel):
    vertex_colors: bool = True
    line_width: float = 4


class PatchHints(BaseModel):
    vertex_colors: bool = True
    transparent: bool = True
    opacity: float = 0.8
    double_sided: bool = True


class LightHints(BaseModel):
    ambient_intensity: float = 0.4
    directional_position: Vector3 = (5.0, 5.0, 5.0)
    directional_intensity: float = 1.0
    point_position: Vector3 = (-5.0, -5.0, 5.0)
    point_intensity: float = 0.5
    point_color: str = "#ffffff"


class CameraHints(BaseModel):
    position: Vector3 = (0.0, 0.0, 5.0)
    fov: float = 75
    near: float = 0.1
    far: float = 1000


class OrbitHints(BaseModel):
    """Camera orbit limits; orbit and zoom are the only interaction."""
    enable_pan: bool = False
    enable_zoom: bool = True
    enable_rotate: bool = True
    min_distance: float = 2
    max_distance: float = 8
    rotate_speed: float = 0.8
    zoom_speed: float = 0.6
    damping_factor: float = 0.05


class SceneDescription(BaseModel):
    """Everything the view layer needs besides the generated buffers."""

    sphere: BaseSphereHints = Field(default_factory=BaseSphereHints)
    markers: MarkerHints = Field(default_factory=MarkerHints)
    lines: LineHints = Field(default_factory=LineHints)
    patches: PatchHints = Field(default_factory=PatchHints)
    lights: LightHints = Field(default_factory=LightHints)
    camera: CameraHints = Field(default_factory=CameraHints)
    orbit: OrbitHints = Field(default_factory=OrbitHints)
    rotation_step: float = Field(default=DEFAULT_ROTATION_STEP, description="Radians per frame")


def describe_scene(radius: float = 1.5, rotation_step: float = DEFAULT_ROTATION_STEP) -> SceneDescription:
    """Scene hints for a network generated at ``radius``."""
    return SceneDescription(
        sphere=BaseSphereHints(radius=radius),
        rotation_step=rotation_step,
    )
