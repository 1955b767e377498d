#!/usr/bin/env python3
"""
Preset JSON loading utilities.

A preset (templates/*.json) is the fixed body table a session starts from.

Schema
======
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "time_scale": 300,                     # optional, default TIME_SCALE
  "sun": {"radius": 5, "color": [255, 255, 255]},   # optional
  "bodies": [
    {
      "name": "saturn",
      "radius": 58.232,
      "elements": {"a": 9.5826, "e": 0.0565, "i": 2.485, "lAN": 113.665, "aP": 339.392},
      "axial_tilt": 26.73,               # degrees
      "orbital_period": 10855.7,         # days
      "rotation_period": 0.44,           # days, negative for retrograde
      "ring": {"inner_radius": 66.9, "outer_radius": 136.775},   # optional
      "color": [210, 190, 140]           # optional
    }
  ]
}

Users can add their own JSON files into templates/ and they'll be picked up by
list_templates. Any malformed entry raises PresetError naming the file and body.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .constants import DEFAULT_BODY_COLOR, SUN_COLOR
from .data_models import Color, OrbitalElements, RingSpec, Sun
from .errors import InvalidOrbitError, PresetError
from .utils import is_finite_number

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates")
DEFAULT_TEMPLATE = "solar_system.json"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodySpec:
    """One row of a preset's body table."""
    name: str
    radius: float
    elements: OrbitalElements
    axial_tilt: float
    orbital_period: float
    rotation_period: float
    ring: Optional[RingSpec] = None
    color: Color = DEFAULT_BODY_COLOR


@dataclass
class Template:
    display_name: str
    description: str = ""
    time_scale: Optional[float] = None
    sun: Optional[Sun] = None
    bodies: List[BodySpec] = field(default_factory=list)


def _read_json(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise PresetError(f"cannot read preset {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise PresetError(f"invalid JSON in preset {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise PresetError(f"preset {path} must contain a JSON object")
    return data


def _coerce_color(c, default: Color) -> Color:
    if c is None:
        return default
    try:
        r, g, b = int(c[0]), int(c[1]), int(c[2])
    except (TypeError, ValueError, IndexError, KeyError) as exc:
        raise PresetError(f"color must be [r, g, b], got {c!r}") from exc
    r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
    return (r, g, b)


def _number(d: dict, key: str, default=None) -> float:
    val = d.get(key, default)
    if val is None:
        raise PresetError(f"missing required field {key!r}")
    if isinstance(val, bool) or not is_finite_number(val):
        raise PresetError(f"field {key!r} must be a finite number, got {val!r}")
    return float(val)


def parse_body(b: dict) -> BodySpec:
    """Turn one body entry into a BodySpec; raises PresetError on bad input."""
    if not isinstance(b, dict):
        raise PresetError(f"body entry must be an object, got {b!r}")
    name = b.get("name")
    if not name or not isinstance(name, str):
        raise PresetError("body entry is missing a name")
    try:
        el = b.get("elements")
        if not isinstance(el, dict):
            raise PresetError("missing 'elements' object")
        elements = OrbitalElements(
            a=_number(el, "a"),
            e=_number(el, "e"),
            i=_number(el, "i", 0.0),
            lan=_number(el, "lAN", 0.0),
            ap=_number(el, "aP", 0.0),
        )
        ring = None
        if b.get("ring") is not None:
            r = b["ring"]
            if not isinstance(r, dict):
                raise PresetError("'ring' must be an object")
            ring = RingSpec(_number(r, "inner_radius"), _number(r, "outer_radius"))
        orbital_period = _number(b, "orbital_period")
        rotation_period = _number(b, "rotation_period")
        if orbital_period == 0:
            raise PresetError("orbital period must be non-zero")
        if rotation_period == 0:
            raise PresetError("rotation period must be non-zero")
        return BodySpec(
            name=name,
            radius=_number(b, "radius"),
            elements=elements,
            axial_tilt=_number(b, "axial_tilt", 0.0),
            orbital_period=orbital_period,
            rotation_period=rotation_period,
            ring=ring,
            color=_coerce_color(b.get("color"), DEFAULT_BODY_COLOR),
        )
    except (PresetError, InvalidOrbitError) as exc:
        raise PresetError(f"body {name!r}: {exc}") from exc


def parse_template(data: dict, fallback_name: str = "Preset") -> Template:
    display_name = data.get("name") or fallback_name
    time_scale = data.get("time_scale")
    if time_scale is not None:
        time_scale = _number(data, "time_scale")
        if time_scale <= 0:
            raise PresetError(f"time_scale must be positive, got {time_scale}")
    sun = None
    if data.get("sun") is not None:
        s = data["sun"]
        if not isinstance(s, dict):
            raise PresetError("'sun' must be an object")
        sun = Sun(radius=_number(s, "radius", 5.0), color=_coerce_color(s.get("color"), SUN_COLOR))
    raw_bodies = data.get("bodies", [])
    if not isinstance(raw_bodies, list):
        raise PresetError("'bodies' must be a list")
    bodies = [parse_body(b) for b in raw_bodies]
    seen = set()
    for spec in bodies:
        if spec.name in seen:
            raise PresetError(f"duplicate body name {spec.name!r}")
        seen.add(spec.name)
    return Template(
        display_name=display_name,
        description=data.get("description", ""),
        time_scale=time_scale,
        sun=sun,
        bodies=bodies,
    )


def list_templates(templates_dir: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
    """Return list of (file_name, display_name) for available templates."""
    items: List[Tuple[str, str]] = []
    if not os.path.isdir(templates_dir):
        return items
    for fn in sorted(os.listdir(templates_dir)):
        if not fn.lower().endswith(".json"):
            continue
        try:
            data = _read_json(os.path.join(templates_dir, fn))
        except PresetError as exc:
            logger.warning("Skipping unreadable preset %s: %s", fn, exc)
            continue
        display = data.get("name") or os.path.splitext(fn)[0]
        items.append((fn, display))
    return items


def load_template(file_name: str = DEFAULT_TEMPLATE, templates_dir: str = TEMPLATES_DIR) -> Template:
    """
    Load a template JSON by file name (or path).
    Raises PresetError when the file or any body in it is invalid.
    """
    path = file_name if os.path.isabs(file_name) or os.path.exists(file_name) else os.path.join(templates_dir, file_name)
    data = _read_json(path)
    try:
        template = parse_template(data, os.path.splitext(os.path.basename(path))[0])
    except PresetError as exc:
        raise PresetError(f"{path}: {exc}") from exc
    logger.info("Loaded preset %r with %d bodies", template.display_name, len(template.bodies))
    return template
