"""
Geodesic network assembly.

Runs point sampling, the neighbour graph, patch building and curve tracing
in one synchronous pass and packs the result into renderer buffers.
"""

import math
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

import numpy as np
import structlog

from .buffers import GeometryBuffer, PrimitiveType, concatenate
from .color import average_rgb, offset_hsl
from .geodesic import trace_geodesic
from .neighbor_graph import (
    NeighborCountRange,
    VARIED_NEIGHBORS,
    build_neighbor_graph,
    unique_edges,
)
from .patches import Patch, PatchStyle, build_patch
from .point_sampler import Point, SamplingMode, sample_points
from ..utils.random import Seed, make_rng

logger = structlog.get_logger()

# Lightness shimmer along each curve
SHIMMER_AMPLITUDE = 0.1
SHIMMER_FREQUENCY = 0.5


@dataclass(frozen=True)
class NetworkConfig:
    """Network generation options."""

    radius: float = 1.5
    point_count: int = 12
    neighbor_count_range: NeighborCountRange = VARIED_NEIGHBORS
    curve_segments: int = 15
    patch_subdivision: int = 16
    sampling_mode: SamplingMode = SamplingMode.FIBONACCI
    patch_style: PatchStyle = PatchStyle.CURVED
    include_patches: bool = True

    def __post_init__(self):
        object.__setattr__(self, "neighbor_count_range", NeighborCountRange(*self.neighbor_count_range))
        object.__setattr__(self, "sampling_mode", SamplingMode.parse(self.sampling_mode))
        object.__setattr__(self, "patch_style", PatchStyle.parse(self.patch_style))

    @classmethod
    def from_settings(cls, settings, **overrides) -> "NetworkConfig":
        """Build a config from application settings, with keyword overrides."""
        config = cls(
            radius=settings.sphere_radius,
            point_count=settings.point_count,
            curve_segments=settings.curve_segments,
            patch_subdivision=settings.patch_subdivision,
            sampling_mode=settings.sampling_mode,
            patch_style=settings.patch_style,
        )
        return replace(config, **overrides) if overrides else config


@dataclass(eq=False)
class GeodesicNetwork:
    """One generated network: point markers, curve segments and patches."""

    config: NetworkConfig
    seed: Seed
    points: List[Point]
    edges: List[Tuple[int, int]]
    lines: GeometryBuffer
    patches: List[Patch] = field(default_factory=list)

    def should_regenerate(self, config: NetworkConfig, seed: Seed) -> bool:
        """
        Check whether the network must be rebuilt for new parameters.

        Two unseeded requests count as the same seed, so the network is
        computed once and reused until the configuration changes.
        """
        return self.config != config or self.seed != seed

    def marker_positions(self) -> np.ndarray:
        return np.vstack([p.position for p in self.points]) if self.points else np.empty((0, 3))

    def marker_colors(self) -> np.ndarray:
        return np.array([p.color for p in self.points]) if self.points else np.empty((0, 3))

    def patch_mesh(self) -> GeometryBuffer:
        """All patches joined into one triangle list."""
        return concatenate([p.geometry for p in self.patches], PrimitiveType.TRIANGLES)


def curve_segment_colors(color_a, color_b, segment_count: int) -> np.ndarray:
    """
    Colour of each segment along a curve.

    The endpoints' average colour, with lightness shifted by
    0.1 * sin(0.5 * k) for segment k.

    Returns:
        (segment_count, 3) RGB array
    """
    base = average_rgb(color_a, color_b)
    return np.array([
        offset_hsl(base, d_lightness=SHIMMER_AMPLITUDE * math.sin(k * SHIMMER_FREQUENCY))
        for k in range(segment_count)
    ]).reshape(-1, 3)


def build_curve_lines(points: List[Point], edges: List[Tuple[int, int]],
                      radius: float, segments: int) -> GeometryBuffer:
    """
    Line-segment buffer holding every edge's geodesic curve.

    Each curve of S segments contributes S line segments, two vertices
    each, both coloured with that segment's shimmer colour.
    """
    positions = []
    colors = []
    for i, j in edges:
        curve = trace_geodesic(points[i].position, points[j].position, segments, radius)
        segment_colors = curve_segment_colors(points[i].color, points[j].color, len(curve) - 1)

        # Segment k runs from curve[k] to curve[k + 1]
        positions.append(np.stack([curve[:-1], curve[1:]], axis=1).reshape(-1))
        colors.append(np.repeat(segment_colors, 2, axis=0).reshape(-1))

    if not positions:
        return GeometryBuffer.empty(PrimitiveType.LINES)
    return GeometryBuffer(
        primitive=PrimitiveType.LINES,
        positions=np.concatenate(positions),
        colors=np.concatenate(colors),
    )


class NetworkAssembler:
    """Builds a complete geodesic network from a configuration."""

    def __init__(self, config: Optional[NetworkConfig] = None,
                 rng: Optional[np.random.Generator] = None, seed: Seed = None):
        """
        Initialize the assembler.

        Args:
            config: Generation options
            rng: Random source; created from ``seed`` when omitted
            seed: Seed recorded on the network and used to create ``rng``
        """
        self.config = config or NetworkConfig()
        self.seed = seed
        self.rng = rng if rng is not None else make_rng(seed)

    def assemble(self) -> GeodesicNetwork:
        """
        Run every generation stage.

        Returns:
            GeodesicNetwork with points, line buffer and patches
        """
        config = self.config
        logger.info("Generating geodesic network",
                    radius=config.radius, points=config.point_count,
                    mode=config.sampling_mode.value, seed=self.seed)

        points = sample_points(config.point_count, config.radius, config.sampling_mode, self.rng)
        points = build_neighbor_graph(points, config.neighbor_count_range, self.rng)

        patches = []
        if config.include_patches:
            for i in range(len(points)):
                patch = build_patch(i, points, config.radius,
                                    config.patch_style, config.patch_subdivision)
                if patch is not None:
                    patches.append(patch)

        edges = unique_edges(points)
        lines = build_curve_lines(points, edges, config.radius, config.curve_segments)

        logger.info("Geodesic network generated",
                    points=len(points), edges=len(edges),
                    line_segments=lines.primitive_count, patches=len(patches))

        return GeodesicNetwork(
            config=config,
            seed=self.seed,
            points=points,
            edges=edges,
            lines=lines,
            patches=patches,
        )


def generate_network(config: Optional[NetworkConfig] = None, seed: Seed = None,
                     rng: Optional[np.random.Generator] = None) -> GeodesicNetwork:
    """Generate a network in one call."""
    return NetworkAssembler(config, rng=rng, seed=seed).assemble()


def generate_or_reuse_network(existing: Optional[GeodesicNetwork],
                              config: NetworkConfig, seed: Seed = None) -> GeodesicNetwork:
    """
    Generate a new network or reuse an existing one.

    Any change to the configuration (the radius included) or the seed forces a
    full regeneration; the old buffers are discarded, never patched.

    Args:
        existing: Previously generated network (can be None)
        config: Generation options
        seed: Random seed

    Returns:
        GeodesicNetwork - either new or reused
    """
    if existing is None or existing.should_regenerate(config, seed):
        return generate_network(config, seed=seed)

    logger.info("Reusing existing network", seed=existing.seed, radius=existing.config.radius)
    return existing
