#!/usr/bin/env python3
"""
Free-flying perspective camera for world-to-screen transforms.

The camera keeps an orthonormal basis (forward, up, right) and a position. It
starts at CAMERA_START looking down -Z with +Y up. Movement is along the local
axes, turning rotates the basis about its own axes, so there is no fixed
"world up" and the camera can roll freely.
"""
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .constants import (
    CAMERA_FAR,
    CAMERA_FOV_DEG,
    CAMERA_NEAR,
    CAMERA_START,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import Vec3, clamp, vec_add, vec_cross, vec_dot, vec_len, vec_norm, vec_scale, vec_sub


def _rotate(v: Vec3, axis: Vec3, angle: float) -> Vec3:
    """Rotate v about a unit axis (Rodrigues)."""
    c, s = math.cos(angle), math.sin(angle)
    k_dot_v = vec_dot(axis, v)
    k_cross_v = vec_cross(axis, v)
    return (
        v[0] * c + k_cross_v[0] * s + axis[0] * k_dot_v * (1 - c),
        v[1] * c + k_cross_v[1] * s + axis[1] * k_dot_v * (1 - c),
        v[2] * c + k_cross_v[2] * s + axis[2] * k_dot_v * (1 - c),
    )


class Camera3D:
    """
    Perspective camera mapping scene coordinates to screen pixels.

    Attributes:
        position: camera location in scene units.
        forward / up / right: orthonormal view basis.
        fov_deg: vertical field of view.
        viewport_size: (width, height) in pixels.
    """

    def __init__(self, position: Vec3 = CAMERA_START, fov_deg: float = CAMERA_FOV_DEG,
                 near: float = CAMERA_NEAR, far: float = CAMERA_FAR):
        self.position: Vec3 = tuple(float(c) for c in position)
        self.forward: Vec3 = (0.0, 0.0, -1.0)
        self.up: Vec3 = (0.0, 1.0, 0.0)
        self.right: Vec3 = (1.0, 0.0, 0.0)
        self.fov_deg = clamp(fov_deg, 1.0, 170.0)
        self.near = near
        self.far = far
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (max(1, int(w)), max(1, int(h)))

    @property
    def focal_length(self) -> float:
        """Pixels per unit of (lateral offset / depth)."""
        return (self.viewport_size[1] / 2) / math.tan(math.radians(self.fov_deg) / 2)

    def _orthonormalize(self) -> None:
        self.forward = vec_norm(self.forward)
        self.right = vec_norm(vec_cross(self.forward, self.up))
        self.up = vec_cross(self.right, self.forward)

    # -----------------------
    # Movement
    # -----------------------

    def move(self, forward: float = 0.0, right: float = 0.0, up: float = 0.0) -> None:
        """Translate along the local axes by the given distances."""
        delta = vec_add(vec_add(vec_scale(self.forward, forward), vec_scale(self.right, right)),
                        vec_scale(self.up, up))
        self.position = vec_add(self.position, delta)

    def yaw(self, angle: float) -> None:
        """Turn left (positive) or right about the local up axis."""
        self.forward = _rotate(self.forward, self.up, angle)
        self._orthonormalize()

    def pitch(self, angle: float) -> None:
        """Look up (positive) or down about the local right axis."""
        self.forward = _rotate(self.forward, self.right, angle)
        self.up = _rotate(self.up, self.right, angle)
        self._orthonormalize()

    def roll(self, angle: float) -> None:
        """Roll counter-clockwise (positive) about the view direction."""
        self.up = _rotate(self.up, self.forward, -angle)
        self._orthonormalize()

    def look_at(self, target: Vec3) -> None:
        direction = vec_sub(target, self.position)
        if vec_len(direction) == 0:
            return
        self.forward = vec_norm(direction)
        if abs(vec_dot(self.forward, self.up)) > 0.999:
            # looking straight along up; borrow another axis to keep the basis valid
            self.up = vec_norm(vec_cross(self.right, self.forward))
        self._orthonormalize()

    def frame(self, points: Sequence[Vec3], margin: float = 1.3) -> None:
        """Back away from the centre of points until they all fit in view."""
        if not points:
            return
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        zs = [p[2] for p in points]
        center = ((min(xs) + max(xs)) / 2, (min(ys) + max(ys)) / 2, (min(zs) + max(zs)) / 2)
        extent = max(vec_len(vec_sub(p, center)) for p in points) * margin + 1.0
        # bounding sphere of radius extent fits inside the vertical view cone
        distance = extent / math.sin(math.radians(self.fov_deg) / 2)
        self.position = vec_sub(center, vec_scale(self.forward, distance))

    # -----------------------
    # Projection
    # -----------------------

    def to_camera(self, point: Vec3) -> Vec3:
        """Scene point in camera space: (right, up, depth)."""
        rel = vec_sub(point, self.position)
        return (vec_dot(rel, self.right), vec_dot(rel, self.up), vec_dot(rel, self.forward))

    def project(self, point: Vec3) -> Optional[Tuple[float, float, float]]:
        """Return (screen_x, screen_y, depth), or None when outside the depth range."""
        x, y, depth = self.to_camera(point)
        if depth <= self.near or depth > self.far:
            return None
        f = self.focal_length
        w, h = self.viewport_size
        return (w / 2 + x * f / depth, h / 2 - y * f / depth, depth)

    def project_many(self, points: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Vectorised project for an (N, 3) array.

        Returns (screen, visible): screen is (N, 2) pixel coordinates and visible
        is a boolean mask of points inside the depth range. Screen coordinates of
        culled points are meaningless.
        """
        rel = np.asarray(points, dtype=float) - np.asarray(self.position)
        basis = np.array([self.right, self.up, self.forward])
        cam = rel @ basis.T
        depth = cam[:, 2]
        visible = (depth > self.near) & (depth <= self.far)
        safe_depth = np.where(visible, depth, 1.0)
        f = self.focal_length
        w, h = self.viewport_size
        screen = np.column_stack([
            w / 2 + cam[:, 0] * f / safe_depth,
            h / 2 - cam[:, 1] * f / safe_depth,
        ])
        return screen, visible

    def pixel_radius(self, radius: float, depth: float) -> float:
        """Apparent radius in pixels of a sphere at the given depth."""
        if depth <= 0:
            return 0.0
        return radius * self.focal_length / depth
