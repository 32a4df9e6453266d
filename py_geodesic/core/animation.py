"""Per-frame rotation state shared with the renderer's frame loop."""

from dataclasses import dataclass

# Radians per frame about the y axis
DEFAULT_ROTATION_STEP = 0.002


@dataclass
class NetworkRotation:
    """
    Y rotation of each independently rotatable group.

    Written only by the frame callback, read by the renderer. All groups
    advance by the same step so they stay in sync with the base sphere.
    """

    points: float = 0.0
    lines: float = 0.0
    patches: float = 0.0
    sphere: float = 0.0

    def tick(self, step: float = DEFAULT_ROTATION_STEP) -> None:
        self.points += step
        self.lines += step
        self.patches += step
        self.sphere += step

    def advance(self, frames: int, step: float = DEFAULT_ROTATION_STEP) -> None:
        """Apply ``frames`` ticks."""
        for _ in range(frames):
            self.tick(step)

    def as_dict(self) -> dict:
        return {
            "points": self.points,
            "lines": self.lines,
            "patches": self.patches,
            "sphere": self.sphere,
        }
