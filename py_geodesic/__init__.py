"""
Procedural geodesic network generator.

Builds points on a sphere, their nearest-neighbour graph, great-circle
curves and surface patches, packed as renderer-ready buffers.
"""

__version__ = "0.1.0"
