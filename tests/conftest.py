import pytest

from helio.data_models import OrbitalElements, RingSpec, SimulationSettings
from helio.registry import BodyRegistry


@pytest.fixture
def settings():
    # small paths keep the suite fast; the math does not depend on N
    return SimulationSettings(sample_count=1001)


@pytest.fixture
def earth_elements():
    return OrbitalElements(a=1.0, e=0.0167086, i=0.0, lan=-11.26064, ap=114.20783)


@pytest.fixture
def saturn_ring():
    return RingSpec(inner_radius=66.9, outer_radius=136.775)


@pytest.fixture
def registry(settings, earth_elements, saturn_ring):
    reg = BodyRegistry(settings)
    reg.create_body("earth", 6.371, earth_elements, 23.44, 365.26, 1)
    reg.create_body("venus", 6.0518,
                    OrbitalElements(a=0.723332, e=0.006772, i=3.39458, lan=76.680, ap=54.884),
                    177.36, 224.70, -243)
    reg.create_body("saturn", 58.232,
                    OrbitalElements(a=9.5826, e=0.0565, i=2.485, lan=113.665, ap=339.392),
                    26.73, 10855.7, 0.44, ring=saturn_ring)
    return reg
