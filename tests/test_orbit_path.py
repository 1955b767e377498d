import math

import numpy as np
import pytest

from helio.constants import DEFAULT_SAMPLE_COUNT, ORBIT_SCALE
from helio.data_models import OrbitalElements
from helio.errors import InvalidOrbitError
from helio.orbit_path import OrbitPath, build_orbit, build_orbit_from_elements


@pytest.mark.parametrize("a,e,i,lan,ap,n", [
    (1.0, 0.0, 0.0, 0.0, 0.0, 2),
    (0.387098, 0.205630, 7.005, 48.331, 29.124, 1000),
    (39.482, 0.2488, 17.16, 110.299, 113.834, 5001),
    (2.0, 0.99, 89.0, -30.0, 400.0, 17),
])
def test_sample_count_and_closed_curve(a, e, i, lan, ap, n):
    orbit = build_orbit(a, e, i, lan, ap, n)
    assert orbit.sample_count == n
    assert orbit.points.shape == (n, 3)
    assert np.allclose(orbit.points[0], orbit.points[-1], atol=1e-9)


def test_default_sample_count():
    orbit = build_orbit(1.0, 0.0167, 0.0, 0.0, 0.0)
    assert len(orbit) == DEFAULT_SAMPLE_COUNT


def test_reference_plane_orbit_is_horizontal():
    orbit = build_orbit(1.0, 0.0, 0.0, 0.0, 0.0, 1000)
    assert np.allclose(orbit.points[:, 1], 0.0, atol=1e-9)
    radii = np.linalg.norm(orbit.points, axis=1)
    assert np.allclose(radii, ORBIT_SCALE)


def test_four_point_circle_coordinates():
    orbit = build_orbit(1.0, 0.0, 0.0, 0.0, 0.0, 4)
    half_root3 = 100.0 * math.sqrt(3) / 2
    expected = np.array([
        [100.0, 0.0, 0.0],
        [-50.0, 0.0, -half_root3],
        [-50.0, 0.0, half_root3],
        [100.0, 0.0, 0.0],
    ])
    assert np.allclose(orbit.points, expected, atol=1e-6)


def test_argument_of_periapsis_rotates_in_plane():
    orbit = build_orbit(1.0, 0.0, 0.0, 0.0, 90.0, 4)
    assert orbit.point(0) == pytest.approx((0.0, 0.0, -100.0), abs=1e-9)


def test_ascending_node_rotates_about_y():
    orbit = build_orbit(1.0, 0.0, 0.0, 90.0, 0.0, 4)
    assert orbit.point(0) == pytest.approx((0.0, 0.0, -100.0), abs=1e-9)


def test_right_angle_inclination_is_vertical():
    orbit = build_orbit(1.0, 0.3, 90.0, 0.0, 0.0, 500)
    assert np.allclose(orbit.points[:, 2], 0.0, atol=1e-9)


def test_eccentric_semi_axes_are_rescaled():
    orbit = build_orbit(1.0, 0.5, 12.0, 40.0, 0.0, 4001)
    nearest, farthest = orbit.radius_range()
    assert farthest == pytest.approx(100.0, rel=1e-6)
    assert nearest == pytest.approx(100.0 * math.sqrt(1 - 0.25), rel=1e-6)


def test_counter_clockwise_traversal():
    orbit = build_orbit(1.0, 0.0, 0.0, 0.0, 0.0, 9)
    # in the XY construction plane the second point has positive y, which maps to -z
    assert orbit.point(1)[2] < 0
    assert orbit.point(1)[0] > 0


def test_path_is_read_only():
    orbit = build_orbit(1.0, 0.1, 0.0, 0.0, 0.0, 10)
    with pytest.raises(ValueError):
        orbit.points[0, 0] = 5.0


def test_from_elements_matches_positional():
    el = OrbitalElements(a=1.52368055, e=0.0934, i=1.85, lan=49.57854, ap=296.5)
    a = build_orbit_from_elements(el, 300)
    b = build_orbit(el.a, el.e, el.i, el.lan, el.ap, 300)
    assert np.array_equal(a.points, b.points)


def test_decimated_keeps_endpoints():
    orbit = build_orbit(1.0, 0.2, 5.0, 10.0, 15.0, 10001)
    lite = orbit.decimated(100)
    assert lite.shape == (100, 3)
    assert np.array_equal(lite[0], orbit.points[0])
    assert np.array_equal(lite[-1], orbit.points[-1])
    assert orbit.decimated(20000) is orbit.points


@pytest.mark.parametrize("e", [1.0, 1.5, -0.01, float("nan")])
def test_rejects_bad_eccentricity(e):
    with pytest.raises(InvalidOrbitError):
        build_orbit(1.0, e, 0.0, 0.0, 0.0, 10)


@pytest.mark.parametrize("a", [0.0, -1.0, float("inf")])
def test_rejects_bad_semi_major_axis(a):
    with pytest.raises(InvalidOrbitError):
        build_orbit(a, 0.1, 0.0, 0.0, 0.0, 10)


@pytest.mark.parametrize("n", [1, 0, -5, 2.5])
def test_rejects_degenerate_sample_count(n):
    with pytest.raises(InvalidOrbitError):
        build_orbit(1.0, 0.1, 0.0, 0.0, 0.0, n)


def test_invalid_orbit_error_is_value_error():
    with pytest.raises(ValueError):
        build_orbit(1.0, 2.0, 0.0, 0.0, 0.0, 10)


def test_orbit_path_shape_checked():
    with pytest.raises(InvalidOrbitError):
        OrbitPath(np.zeros((5, 2)))
