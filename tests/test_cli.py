from click.testing import CliRunner

from helio_sim import cli, ring_outline, spin_marker
from helio.data_models import Transform


def test_presets_command_lists_shipped_files():
    result = CliRunner().invoke(cli, ["presets"])
    assert result.exit_code == 0
    assert "solar_system.json" in result.output
    assert "dwarf_planets.json" in result.output


def test_inspect_ringed_body():
    result = CliRunner().invoke(cli, ["inspect", "saturn", "--samples", "101"])
    assert result.exit_code == 0, result.output
    assert "samples:        101" in result.output
    assert "ring:" in result.output


def test_inspect_retrograde_spin_sign():
    result = CliRunner().invoke(cli, ["inspect", "venus", "-n", "11"])
    assert result.exit_code == 0, result.output
    assert "spin per frame: -" in result.output


def test_inspect_unknown_body_fails():
    result = CliRunner().invoke(cli, ["inspect", "vulcan"])
    assert result.exit_code != 0
    assert "vulcan" in result.output


def test_inspect_bad_sample_count_fails():
    result = CliRunner().invoke(cli, ["inspect", "earth", "-n", "1"])
    assert result.exit_code != 0
    assert "sample count" in result.output


def test_ring_outline_lies_in_tilted_plane():
    pts = ring_outline((10.0, 0.0, 0.0), 5.0, 0.5 * 3.141592653589793, segments=8)
    assert pts.shape == (9, 3)
    # a flat ring (tilt = π/2) has no y extent
    assert abs(pts[:, 1]).max() < 1e-9
    assert abs(pts[:, 0] - 10.0).max() <= 5.0 + 1e-9


def test_spin_marker_on_body_surface():
    t = Transform(position=(1.0, 2.0, 3.0), spin_angle=0.7, tilt=0.4)
    m = spin_marker(t, 2.0)
    dist = sum((a - b) ** 2 for a, b in zip(m, t.position)) ** 0.5
    assert abs(dist - 2.0) < 1e-9
