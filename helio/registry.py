#!/usr/bin/env python3
"""
Body registry for HelioSim.

Owns every Body of a session in creation order. Orbit paths are built eagerly
in create_body, before any frame is drawn; advance_all then updates each body
exactly once per frame. The registry is passed explicitly to the frame loop and
to the viewer.
"""
import logging
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Optional

from .constants import DEFAULT_BODY_COLOR
from .data_models import (
    Body,
    Color,
    OrbitalElements,
    RingSpec,
    SimulationSettings,
    Sun,
    Transform,
    make_ring,
)
from .errors import DuplicateBodyError, UnknownBodyError
from .orbit_path import build_orbit_from_elements

if TYPE_CHECKING:
    from .presets_loader import Template

logger = logging.getLogger(__name__)


class BodyRegistry:
    """Ordered collection of bodies plus the shared simulation settings."""

    def __init__(self, settings: Optional[SimulationSettings] = None, sun: Optional[Sun] = None):
        self.settings = settings or SimulationSettings()
        self.sun = sun
        self._bodies: Dict[str, Body] = {}

    def create_body(self, name: str, radius: float, elements: OrbitalElements, axial_tilt: float,
                    orbital_period: float, rotation_period: float, ring: Optional[RingSpec] = None,
                    color: Color = DEFAULT_BODY_COLOR) -> Body:
        """Build the orbit path for a new body and register it."""
        if name in self._bodies:
            raise DuplicateBodyError(f"body {name!r} is already registered")
        orbit = build_orbit_from_elements(elements, self.settings.sample_count)
        body = Body(
            name=name,
            radius=radius,
            elements=elements,
            axial_tilt=axial_tilt,
            orbital_period=orbital_period,
            rotation_period=rotation_period,
            orbit=orbit,
            ring=make_ring(ring, axial_tilt) if ring is not None else None,
            color=color,
        )
        self._bodies[name] = body
        logger.debug("Registered %s (%d orbit samples%s)", name, orbit.sample_count,
                     ", ringed" if body.has_ring else "")
        return body

    def add_body(self, body: Body) -> None:
        if body.name in self._bodies:
            raise DuplicateBodyError(f"body {body.name!r} is already registered")
        self._bodies[body.name] = body

    def get(self, name: str) -> Body:
        try:
            return self._bodies[name]
        except KeyError:
            raise UnknownBodyError(name) from None

    def names(self) -> List[str]:
        return list(self._bodies)

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self) -> Iterator[Body]:
        return iter(list(self._bodies.values()))

    def __contains__(self, name) -> bool:
        return name in self._bodies

    def for_each_body(self, fn: Callable[[Body], None]) -> None:
        for body in self:
            fn(body)

    def advance_all(self, time_ms: float) -> Dict[str, Transform]:
        """Run the position sampler once for every body, in creation order."""
        return {body.name: body.advance(time_ms, self.settings) for body in self}

    @classmethod
    def from_template(cls, template: "Template",
                      settings: Optional[SimulationSettings] = None) -> "BodyRegistry":
        if settings is None:
            if template.time_scale is not None:
                settings = SimulationSettings(time_scale=template.time_scale)
            else:
                settings = SimulationSettings()
        registry = cls(settings, sun=template.sun)
        for spec in template.bodies:
            registry.create_body(
                spec.name,
                spec.radius,
                spec.elements,
                spec.axial_tilt,
                spec.orbital_period,
                spec.rotation_period,
                ring=spec.ring,
                color=spec.color,
            )
        logger.info("Built %d orbits for %r", len(registry), template.display_name)
        return registry
