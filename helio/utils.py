#!/usr/bin/env python3
"""
General utilities for HelioSim.
"""
import logging
import math
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def try_float(val) -> Optional[float]:
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def is_finite_number(val) -> bool:
    f = try_float(val)
    return f is not None and math.isfinite(f)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging once for the application entry point."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
