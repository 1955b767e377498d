#!/usr/bin/env python3
"""
Shared constants for HelioSim.

Distances are in astronomical units before the orbit upscale, periods are in
days, clock readings are in milliseconds. Keeping the tunables in one place
makes the artistic scale factors easy to adjust without touching the math.
"""
import math

# Orbit geometry
ORBIT_SCALE = 100.0  # scene units per AU; identical for every body
DEFAULT_SAMPLE_COUNT = 50001  # points per orbit path (50,000 divisions, closed)

# Time mapping
SECONDS_PER_DAY = 86400.0
TIME_SCALE = 300.0  # artistic speed-up: simulated years per real second
SPIN_RATE_FACTOR = 0.1  # damping applied to the per-frame spin increment
DEG_TO_RAD = math.pi / 180.0

# Rendering (viewport)
VIEW_WIDTH = 1280
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (4, 5, 12)
ORBIT_COLOR = (128, 128, 128)  # white at 50% opacity on black
SUN_COLOR = (255, 255, 255)
DEFAULT_BODY_COLOR = (200, 200, 255)
RING_COLOR = (190, 170, 130)
HUD_COLOR = (200, 200, 200)
ORBIT_DRAW_POINTS = 2000  # decimated points per orbit handed to the line drawer

# Camera (free-flying, perspective)
CAMERA_FOV_DEG = 80.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 100000.0
CAMERA_START = (0.0, 0.0, 50.0)
CAMERA_MOVE_SPEED = 100.0  # scene units per second
CAMERA_ROLL_SPEED = 0.2  # radians per second for keyboard turns
CAMERA_MOUSE_SENSITIVITY = 0.003  # radians per pixel while drag-looking
CAMERA_BOOST = 5.0  # movement multiplier while Shift is held

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
