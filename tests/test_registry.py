import pytest

from helio.data_models import OrbitalElements, SimulationSettings
from helio.errors import DuplicateBodyError, InvalidOrbitError, UnknownBodyError
from helio.orbital_clock import spin_increment
from helio.presets_loader import load_template
from helio.registry import BodyRegistry


def test_create_body_builds_orbit_eagerly(registry, settings):
    earth = registry.get("earth")
    assert earth.orbit.sample_count == settings.sample_count
    assert earth.position == earth.orbit.point(0)
    assert earth.spin_angle == 0.0


def test_creation_order_is_kept(registry):
    assert registry.names() == ["earth", "venus", "saturn"]
    assert [b.name for b in registry] == ["earth", "venus", "saturn"]
    assert len(registry) == 3
    assert "venus" in registry
    assert "pluto" not in registry


def test_every_body_updated_once_per_frame(registry):
    seen = []
    registry.for_each_body(lambda b: seen.append(b.name))
    assert seen == ["earth", "venus", "saturn"]

    transforms = registry.advance_all(2500.0)
    assert list(transforms) == ["earth", "venus", "saturn"]
    for body in registry:
        assert transforms[body.name].position == body.position


def test_advance_all_spins_each_body_once(registry):
    registry.settings.double_ring_spin = False
    registry.advance_all(100.0)
    registry.advance_all(200.0)
    for body in registry:
        assert body.spin_angle == pytest.approx(2 * spin_increment(body.rotation_period))


def test_ring_follows_in_registry(registry):
    for t in (0.0, 123.0, 99999.0):
        transforms = registry.advance_all(t)
        assert transforms["saturn"].ring_position == transforms["saturn"].position
        assert transforms["earth"].ring_position is None


def test_duplicate_names_rejected(registry, earth_elements):
    with pytest.raises(DuplicateBodyError):
        registry.create_body("earth", 1.0, earth_elements, 0.0, 365.0, 1.0)
    with pytest.raises(DuplicateBodyError):
        registry.add_body(registry.get("venus"))


def test_unknown_body(registry):
    with pytest.raises(UnknownBodyError):
        registry.get("vulcan")
    with pytest.raises(KeyError):
        registry.get("vulcan")


def test_zero_period_rejected_by_registry(settings, earth_elements):
    reg = BodyRegistry(settings)
    with pytest.raises(InvalidOrbitError):
        reg.create_body("earth", 6.371, earth_elements, 23.44, 0.0, 1.0)
    assert len(reg) == 0


def test_settings_validation():
    with pytest.raises(InvalidOrbitError):
        SimulationSettings(sample_count=1)
    with pytest.raises(InvalidOrbitError):
        SimulationSettings(time_scale=0)


def test_elements_validation():
    with pytest.raises(InvalidOrbitError):
        OrbitalElements(a=1.0, e=1.0)
    with pytest.raises(InvalidOrbitError):
        OrbitalElements(a=-2.0, e=0.1)
    assert OrbitalElements(a=2.0, e=0.0).semi_minor_axis == 2.0


def test_from_template(settings):
    template = load_template("solar_system.json")
    reg = BodyRegistry.from_template(template, settings)
    assert len(reg) == len(template.bodies) == 10
    assert reg.sun is not None and reg.sun.radius == 5
    assert reg.get("saturn").has_ring
    assert not reg.get("earth").has_ring
    assert reg.get("venus").rotation_period == -243


def test_from_template_uses_template_time_scale():
    template = load_template("dwarf_planets.json")
    template.time_scale = 150.0
    reg = BodyRegistry.from_template(template)
    assert reg.settings.time_scale == 150.0
