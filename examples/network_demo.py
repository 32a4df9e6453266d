"""
Example rendering a geodesic network with matplotlib.
"""

import sys

import matplotlib.pyplot as plt
import numpy as np
from mpl_toolkits.mplot3d.art3d import Line3DCollection, Poly3DCollection

from py_geodesic.core import NetworkConfig, NetworkRotation, PatchStyle, generate_network


def rotate_y(positions, angle):
    """Rotate (n, 3) positions about the y axis."""
    c, s = np.cos(angle), np.sin(angle)
    rotation = np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]])
    return positions @ rotation.T


def main():
    seed = sys.argv[1] if len(sys.argv) > 1 else "network_demo"
    style = PatchStyle.parse(sys.argv[2]) if len(sys.argv) > 2 else PatchStyle.CURVED

    config = NetworkConfig(radius=1.5, patch_style=style)
    network = generate_network(config, seed=seed)

    print(f"Points: {len(network.points)}")
    print(f"Edges: {len(network.edges)}")
    print(f"Line segments: {network.lines.primitive_count}")
    print(f"Patches: {len(network.patches)}")

    # Show the network as it looks after two seconds of animation at 60 fps
    rotation = NetworkRotation()
    rotation.advance(120)

    fig = plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(111, projection="3d")

    mesh = network.patch_mesh()
    if not mesh.is_empty:
        triangles = rotate_y(mesh.vertices(), rotation.patches).reshape(-1, 3, 3)
        face_colors = mesh.colors.reshape(-1, 3, 3)[:, 0]
        ax.add_collection3d(Poly3DCollection(
            triangles, facecolors=face_colors, alpha=0.35, linewidths=0
        ))

    segments = rotate_y(network.lines.vertices(), rotation.lines).reshape(-1, 2, 3)
    segment_colors = network.lines.colors.reshape(-1, 2, 3)[:, 0]
    ax.add_collection3d(Line3DCollection(segments, colors=segment_colors, linewidths=2))

    markers = rotate_y(network.marker_positions(), rotation.points)
    ax.scatter(markers[:, 0], markers[:, 1], markers[:, 2],
               c=network.marker_colors(), s=60, depthshade=False)

    limit = config.radius * 1.1
    ax.set_xlim(-limit, limit)
    ax.set_ylim(-limit, limit)
    ax.set_zlim(-limit, limit)
    ax.set_box_aspect((1, 1, 1))
    ax.set_title(f"Geodesic network (seed={seed}, {style.value} patches)")

    plt.tight_layout()
    plt.savefig("geodesic_network.png", dpi=150)
    print("Saved visualization to geodesic_network.png")


if __name__ == "__main__":
    main()
