"""
Core geodesic network generation.
"""

from .point_sampler import Point, SamplingMode, sample_points
from .neighbor_graph import NeighborCountRange, build_neighbor_graph, unique_edges
from .geodesic import trace_geodesic
from .patches import Patch, PatchStyle, build_patch
from .buffers import GeometryBuffer, PrimitiveType
from .network import GeodesicNetwork, NetworkAssembler, NetworkConfig, generate_network, generate_or_reuse_network
from .animation import NetworkRotation

__all__ = ['Point', 'SamplingMode', 'sample_points',
           'NeighborCountRange', 'build_neighbor_graph', 'unique_edges',
           'trace_geodesic', 'Patch', 'PatchStyle', 'build_patch',
           'GeometryBuffer', 'PrimitiveType',
           'GeodesicNetwork', 'NetworkAssembler', 'NetworkConfig',
           'generate_network', 'generate_or_reuse_network', 'NetworkRotation']
