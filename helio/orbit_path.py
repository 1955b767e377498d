#!/usr/bin/env python3
"""
Orbit path construction for HelioSim.

Responsibilities
- Validate the shape parameters of an orbit (semi-major axis, eccentricity).
- Turn five Keplerian elements into a dense, closed sequence of 3D points.

Construction
1) b = a * sqrt(1 - e^2), then both semi-axes are upscaled by ORBIT_SCALE.
2) Sample the ellipse (centred on the origin) at sample_count angles spanning
   [0, 2π] inclusive, counter-clockwise, rotated in its own plane by the
   argument of periapsis.
3) Lift into 3D with z = 0, rotate about X by (inclination - π/2) so a zero
   inclination orbit lies in the horizontal XZ plane, then rotate about Y by the
   longitude of the ascending node.

The ellipse is centred on the Sun rather than focused on it and progress along
it is linear in time; see orbital_clock for how positions are sampled.
"""
import logging
import math
from typing import TYPE_CHECKING, Tuple

import numpy as np

from .constants import DEFAULT_SAMPLE_COUNT, ORBIT_SCALE
from .errors import InvalidOrbitError

if TYPE_CHECKING:
    from .data_models import OrbitalElements

logger = logging.getLogger(__name__)


def check_shape(a: float, e: float) -> None:
    """Raise InvalidOrbitError unless a > 0 and 0 <= e < 1."""
    if not (math.isfinite(a) and a > 0):
        raise InvalidOrbitError(f"semi-major axis must be a positive number, got {a!r}")
    if not (math.isfinite(e) and 0.0 <= e < 1.0):
        raise InvalidOrbitError(f"eccentricity must be in [0, 1), got {e!r}")


def check_sample_count(sample_count: int) -> None:
    if int(sample_count) != sample_count or sample_count <= 1:
        raise InvalidOrbitError(f"sample count must be an integer greater than 1, got {sample_count!r}")


def rotation_x(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [1.0, 0.0, 0.0],
        [0.0, c, -s],
        [0.0, s, c],
    ])


def rotation_y(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([
        [c, 0.0, s],
        [0.0, 1.0, 0.0],
        [-s, 0.0, c],
    ])


class OrbitPath:
    """
    Read-only, ordered point sequence for one full revolution of an orbit.

    points[0] and points[-1] are the same location on the ellipse (θ = 0 and
    θ = 2π), so index arithmetic wraps without a seam.
    """

    __slots__ = ("_points",)

    def __init__(self, points: np.ndarray):
        pts = np.array(points, dtype=float)
        if pts.ndim != 2 or pts.shape[1] != 3:
            raise InvalidOrbitError(f"orbit points must have shape (N, 3), got {pts.shape}")
        check_sample_count(pts.shape[0])
        pts.setflags(write=False)
        self._points = pts

    @property
    def points(self) -> np.ndarray:
        return self._points

    @property
    def sample_count(self) -> int:
        return self._points.shape[0]

    def __len__(self) -> int:
        return self._points.shape[0]

    def point(self, index: int) -> Tuple[float, float, float]:
        x, y, z = self._points[index]
        return (float(x), float(y), float(z))

    def decimated(self, max_points: int) -> np.ndarray:
        """Return at most max_points points for drawing, keeping both endpoints."""
        n = self.sample_count
        if max_points >= n:
            return self._points
        max_points = max(2, int(max_points))
        idx = np.linspace(0, n - 1, max_points).round().astype(int)
        return self._points[idx]

    def radius_range(self) -> Tuple[float, float]:
        """Closest and farthest distance from the origin along the path."""
        r = np.linalg.norm(self._points, axis=1)
        return float(r.min()), float(r.max())

    def __repr__(self):
        return f"OrbitPath({self.sample_count} points)"


def build_orbit(a: float, e: float, inclination: float, lan: float, ap: float,
                sample_count: int = DEFAULT_SAMPLE_COUNT) -> OrbitPath:
    """
    Build the orbit path for one body.

    Args:
        a: semi-major axis in AU
        e: eccentricity, 0 <= e < 1
        inclination: inclination to the ecliptic in degrees
        lan: longitude of the ascending node in degrees
        ap: argument of periapsis in degrees
        sample_count: number of points in the returned path (> 1)

    Returns:
        OrbitPath with exactly sample_count points, in scene units.
    """
    a = float(a)
    e = float(e)
    check_shape(a, e)
    check_sample_count(sample_count)
    for label, val in (("inclination", inclination), ("longitude of ascending node", lan),
                       ("argument of periapsis", ap)):
        if not math.isfinite(val):
            raise InvalidOrbitError(f"{label} must be finite, got {val!r}")

    b = a * math.sqrt(1.0 - e * e)
    a_s = a * ORBIT_SCALE
    b_s = b * ORBIT_SCALE

    theta = np.linspace(0.0, 2.0 * math.pi, int(sample_count))
    ex = a_s * np.cos(theta)
    ey = b_s * np.sin(theta)

    # In-plane rotation by the argument of periapsis
    rot = math.radians(ap)
    cr, sr = math.cos(rot), math.sin(rot)
    px = ex * cr - ey * sr
    py = ex * sr + ey * cr

    pts = np.column_stack([px, py, np.zeros_like(px)])
    pts = pts @ rotation_x(math.radians(inclination) - math.pi / 2).T
    pts = pts @ rotation_y(math.radians(lan)).T

    logger.debug("Built orbit: a=%.3f b=%.3f (scene units), %d samples", a_s, b_s, sample_count)
    return OrbitPath(pts)


def build_orbit_from_elements(elements: "OrbitalElements",
                              sample_count: int = DEFAULT_SAMPLE_COUNT) -> OrbitPath:
    return build_orbit(elements.a, elements.e, elements.i, elements.lan, elements.ap, sample_count)
