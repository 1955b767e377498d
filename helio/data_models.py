#!/usr/bin/env python3
"""
Data models for HelioSim.

This module defines the records shared between the orbit builder, the position
sampler, the registry and the viewer.

Units and usage
- Orbital elements: semi-major axis in AU, angles in degrees.
- Periods are in days; a negative rotation period means retrograde spin.
- position is in scene units (AU * ORBIT_SCALE), spin_angle and tilt in radians.
- Body.position and Body.spin_angle are written only by the position sampler
  (Body.advance) and read by the viewer after the update, within the same frame.
"""
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .constants import DEFAULT_BODY_COLOR, DEFAULT_SAMPLE_COUNT, SUN_COLOR, TIME_SCALE
from .errors import InvalidOrbitError
from .orbit_path import OrbitPath, check_sample_count, check_shape
from .orbital_clock import update_position
from .vector_utils import Vec3, deg_to_rad

Color = Tuple[int, int, int]


def _require_finite(label: str, val: float) -> float:
    try:
        f = float(val)
    except (TypeError, ValueError):
        raise InvalidOrbitError(f"{label} must be a number, got {val!r}") from None
    if not math.isfinite(f):
        raise InvalidOrbitError(f"{label} must be finite, got {val!r}")
    return f


@dataclass(frozen=True)
class OrbitalElements:
    """
    Keplerian elements describing one orbit.

    Fields:
    - a: semi-major axis in AU (> 0)
    - e: eccentricity in [0, 1)
    - i: inclination to the ecliptic in degrees
    - lan: longitude of the ascending node in degrees
    - ap: argument of periapsis in degrees
    """
    a: float
    e: float
    i: float = 0.0
    lan: float = 0.0
    ap: float = 0.0

    def __post_init__(self):
        for name in ("a", "e", "i", "lan", "ap"):
            object.__setattr__(self, name, _require_finite(name, getattr(self, name)))
        check_shape(self.a, self.e)

    @property
    def semi_minor_axis(self) -> float:
        return self.a * math.sqrt(1.0 - self.e * self.e)


@dataclass(frozen=True)
class RingSpec:
    """Inner and outer radius of a planetary ring, in scene units."""
    inner_radius: float
    outer_radius: float

    def __post_init__(self):
        inner = _require_finite("ring inner radius", self.inner_radius)
        outer = _require_finite("ring outer radius", self.outer_radius)
        if not 0 < inner < outer:
            raise InvalidOrbitError(f"ring radii must satisfy 0 < inner < outer, got {inner} / {outer}")
        object.__setattr__(self, "inner_radius", inner)
        object.__setattr__(self, "outer_radius", outer)


@dataclass
class Ring:
    """A ring owned by one body; its position mirrors the body's."""
    spec: RingSpec
    tilt: float  # radians about X
    position: Vec3 = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Transform:
    """Per-frame output consumed by the viewer."""
    position: Vec3
    spin_angle: float
    tilt: float
    ring_position: Optional[Vec3] = None


@dataclass
class SimulationSettings:
    """
    Launch-time knobs shared by every body.

    - time_scale: artistic speed-up between simulated days and clock time
    - sample_count: points per orbit path
    - double_ring_spin: apply the spin increment twice for ringed bodies
    """
    time_scale: float = TIME_SCALE
    sample_count: int = DEFAULT_SAMPLE_COUNT
    double_ring_spin: bool = True

    def __post_init__(self):
        self.time_scale = _require_finite("time scale", self.time_scale)
        if self.time_scale <= 0:
            raise InvalidOrbitError(f"time scale must be positive, got {self.time_scale}")
        check_sample_count(self.sample_count)
        self.sample_count = int(self.sample_count)


@dataclass
class Sun:
    """Static light source at the origin; never advanced."""
    radius: float = 5.0
    color: Color = SUN_COLOR
    position: Vec3 = (0.0, 0.0, 0.0)


@dataclass
class Body:
    """
    Represents one celestial body.

    Fields:
    - name: unique key within a registry
    - radius: visual radius in scene units
    - elements: orbital elements the orbit path was built from
    - axial_tilt: spin axis tilt in degrees; tilt holds it in radians
    - orbital_period: days per revolution (non-zero)
    - rotation_period: days per spin (non-zero, negative = retrograde)
    - orbit: precomputed OrbitPath
    - ring: optional Ring tracking this body's position
    - position / spin_angle: mutable state written by advance()
    """
    name: str
    radius: float
    elements: OrbitalElements
    axial_tilt: float
    orbital_period: float
    rotation_period: float
    orbit: OrbitPath
    ring: Optional[Ring] = None
    color: Color = DEFAULT_BODY_COLOR
    spin_angle: float = 0.0
    position: Vec3 = field(default=(0.0, 0.0, 0.0))
    tilt: float = field(init=False)

    def __post_init__(self):
        self.radius = _require_finite("radius", self.radius)
        self.axial_tilt = _require_finite("axial tilt", self.axial_tilt)
        self.orbital_period = _require_finite("orbital period", self.orbital_period)
        self.rotation_period = _require_finite("rotation period", self.rotation_period)
        if self.orbital_period == 0:
            raise InvalidOrbitError(f"{self.name}: orbital period must be non-zero")
        if self.rotation_period == 0:
            raise InvalidOrbitError(f"{self.name}: rotation period must be non-zero")
        self.tilt = deg_to_rad(self.axial_tilt)
        self.position = self.orbit.point(0)
        if self.ring is not None:
            self.ring.position = self.position

    @property
    def has_ring(self) -> bool:
        return self.ring is not None

    def advance(self, time_ms: float, settings: Optional[SimulationSettings] = None) -> Transform:
        """Move to the position for time_ms and accumulate one frame of spin."""
        if settings is None:
            return update_position(self, time_ms)
        return update_position(self, time_ms, settings.time_scale, settings.double_ring_spin)

    def transform(self) -> Transform:
        return Transform(
            position=self.position,
            spin_angle=self.spin_angle,
            tilt=self.tilt,
            ring_position=self.ring.position if self.ring is not None else None,
        )


def make_ring(spec: RingSpec, axial_tilt: float) -> Ring:
    """Lay the ring flat in the orbital plane, then tilt it with the body."""
    return Ring(spec=spec, tilt=0.5 * math.pi + deg_to_rad(axial_tilt))
