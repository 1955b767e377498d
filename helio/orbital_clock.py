#!/usr/bin/env python3
"""
Position sampler: maps elapsed wall-clock time to where each body is.

Orbital position is a pure function of absolute time. The fraction of the
current revolution is (t * rate) mod 1, and that fraction indexes straight into
the body's precomputed OrbitPath. Replaying a timestamp always yields the same
point, regardless of frame rate or call history.

Spin is the opposite: every call adds a fixed increment to the body's spin
angle, so spin speed depends on the frame rate. A negative rotation period
gives a negative increment (retrograde spin).

Progress is linear in time around a uniformly sampled ellipse. Bodies do not
speed up at periapsis; there is no Kepler equation solve.
"""
import math
from typing import TYPE_CHECKING

from .constants import DEG_TO_RAD, SECONDS_PER_DAY, SPIN_RATE_FACTOR, TIME_SCALE

if TYPE_CHECKING:
    from .data_models import Body, Transform


def angular_rate(orbital_period: float, time_scale: float = TIME_SCALE) -> float:
    """Revolutions-per-millisecond factor applied to the clock reading."""
    return (2.0 * math.pi / (orbital_period * SECONDS_PER_DAY)) * time_scale


def orbit_fraction(time_ms: float, orbital_period: float, time_scale: float = TIME_SCALE) -> float:
    """Progress around the orbit in [0, 1)."""
    return (time_ms * angular_rate(orbital_period, time_scale)) % 1.0


def sample_index(fraction: float, sample_count: int) -> int:
    index = int(math.floor(fraction * (sample_count - 1)))
    # float round-up can land on n - 1, which is point 0 again
    return min(index, sample_count - 1)


def orbit_cycle_ms(orbital_period: float, time_scale: float = TIME_SCALE) -> float:
    """Clock milliseconds for one full revolution (sign follows the period)."""
    return 1.0 / angular_rate(orbital_period, time_scale)


def spin_increment(rotation_period: float) -> float:
    """Spin added per update, in radians."""
    spin_rate = (2.0 * math.pi / rotation_period) * SPIN_RATE_FACTOR
    return spin_rate * DEG_TO_RAD


def update_position(body: "Body", current_time_ms: float, time_scale: float = TIME_SCALE,
                    double_ring_spin: bool = True) -> "Transform":
    """
    Advance one body to current_time_ms.

    Writes the body's position (and its ring's, if any) from the orbit path and
    accumulates spin. With double_ring_spin, ringed bodies receive the spin
    increment twice per call.
    """
    fraction = orbit_fraction(current_time_ms, body.orbital_period, time_scale)
    index = sample_index(fraction, body.orbit.sample_count)
    point = body.orbit.point(index)
    body.position = point

    delta = spin_increment(body.rotation_period)
    body.spin_angle += delta

    if body.ring is not None:
        body.ring.position = point
        if double_ring_spin:
            body.spin_angle += delta

    return body.transform()
