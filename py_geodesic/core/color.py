"""HSL colour helpers for point, edge and patch colours."""

import colorsys
from typing import Tuple

import numpy as np

RGB = Tuple[float, float, float]

# Point colour parameters
POINT_SATURATION = 0.7
POINT_LIGHTNESS = 0.6


def _clamp01(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """
    Convert HSL to RGB.

    Hue wraps into [0, 1); saturation and lightness are clamped to [0, 1].
    """
    r, g, b = colorsys.hls_to_rgb(hue % 1.0, _clamp01(lightness), _clamp01(saturation))
    return (r, g, b)


def rgb_to_hsl(rgb) -> Tuple[float, float, float]:
    """Convert RGB to an (hue, saturation, lightness) triple."""
    r, g, b = (float(c) for c in rgb)
    h, l, s = colorsys.rgb_to_hls(r, g, b)
    return (h, s, l)


def offset_hsl(rgb, d_hue: float = 0.0, d_saturation: float = 0.0,
               d_lightness: float = 0.0) -> RGB:
    """Shift a colour in HSL space and convert back to RGB."""
    h, s, l = rgb_to_hsl(rgb)
    return hsl_to_rgb(h + d_hue, s + d_saturation, l + d_lightness)


def average_rgb(rgb_a, rgb_b) -> RGB:
    """Blend two colours by averaging each RGB channel."""
    mixed = (np.asarray(rgb_a, dtype=float) + np.asarray(rgb_b, dtype=float)) * 0.5
    return (float(mixed[0]), float(mixed[1]), float(mixed[2]))


def point_color(hue: float) -> RGB:
    """Colour of a network point with the given hue."""
    return hsl_to_rgb(hue, POINT_SATURATION, POINT_LIGHTNESS)
