"""
Utility functions for game mechanics and randomized spawning
"""

from __future__ import annotations
import math
from typing import Tuple, Optional
import numpy as np


Color = Tuple[int, ...]


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def circle_gap(a, b) -> float:
    """Distance between two circle edges (negative when they overlap)"""
    return distance(a.x, a.y, b.x, b.y) - a.radius - b.radius


def circles_collide(a, b) -> bool:
    """Check if two circles touch, allowing one unit of slack"""
    return circle_gap(a, b) < 1


def aim_angle(x: float, y: float, target_x: float, target_y: float) -> float:
    """
    Angle from (x, y) toward a target point.

    Measured with atan2(dx, dy) so that movement along it is
    (sin(angle), cos(angle)) in y-down screen coordinates.
    """
    return math.atan2(target_x - x, target_y - y)


def random_radius(rng: np.random.Generator, lo: float, hi: float) -> float:
    """Uniform radius in [lo, hi]"""
    return float(rng.uniform(lo, hi))


def random_color(rng: np.random.Generator) -> Color:
    """Random opaque RGB color"""
    r, g, b = rng.integers(0, 256, size=3)
    return int(r), int(g), int(b)


def random_edge_coordinate(
    rng: np.random.Generator,
    radius: float,
    extent: float,
    band: float = 100.0,
) -> float:
    """
    One coordinate just outside [0, extent].

    Half the time it lands in the band before the low edge, otherwise in the
    band past the high edge. The radius keeps the circle fully off-screen.
    """
    if rng.random() > 0.5:
        lo = -radius - band
        hi = -radius
    else:
        lo = extent + radius
        hi = lo + band
    return float(rng.uniform(lo, hi))


def random_edge_position(
    rng: np.random.Generator,
    radius: float,
    width: float,
    height: float,
    band: float = 100.0,
) -> Tuple[float, float]:
    """Spawn point outside the viewport, each axis picking its side independently"""
    x = random_edge_coordinate(rng, radius, width, band)
    y = random_edge_coordinate(rng, radius, height, band)
    return x, y


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Random source injected into spawn helpers"""
    return np.random.default_rng(seed)
