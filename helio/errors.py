#!/usr/bin/env python3
"""
Exception types for HelioSim.

The inputs are a fixed body table known at startup, so every error here is a
configuration problem surfaced at construction time rather than a runtime fault.
"""


class HelioError(Exception):
    """Base class for all HelioSim errors."""


class InvalidOrbitError(HelioError, ValueError):
    """Orbital elements, periods, ring radii or sample counts out of range."""


class DuplicateBodyError(HelioError, ValueError):
    """A body with the same name is already registered."""


class UnknownBodyError(HelioError, KeyError):
    """No body with the requested name is registered."""


class PresetError(HelioError):
    """A preset JSON file is missing, unreadable or malformed."""
