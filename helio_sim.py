#!/usr/bin/env python3
"""
HelioSim application entry point: command line and Pygame viewer.

What this module does
- Loads a body table (templates/*.json), builds every orbit path up front and
  registers the bodies in a BodyRegistry.
- Runs a single-threaded Pygame loop: input, advance every body from the clock,
  draw, tick. Bodies are only written by the advance step and only read by the
  draw step that follows it.
- Provides a small click CLI to list presets and inspect a body's orbit without
  opening a window.

Units and conventions
- Scene units are AU * ORBIT_SCALE; periods are days; the clock is milliseconds.
- Colors are RGB tuples in 0..255.

Running
1) Install: `pip install -e .`
2) Run: `python helio_sim.py run` (or `helio-sim run`)

Controls (viewport)
- W/S forward/back, A/D strafe, R/F up/down, Q/E roll, arrows turn, Shift boost
- Left-drag: look around | Wheel: movement speed | Space: pause | Home: frame all
"""

import logging
import math
import sys
from typing import Dict, List, Optional, Tuple

import click
import numpy as np
import pygame
from pygame import gfxdraw

from helio.camera import Camera3D
from helio.clock import SimulationClock
from helio.constants import (
    BACKGROUND_COLOR,
    CAMERA_BOOST,
    CAMERA_MOUSE_SENSITIVITY,
    CAMERA_MOVE_SPEED,
    CAMERA_ROLL_SPEED,
    DEFAULT_SAMPLE_COUNT,
    HUD_COLOR,
    ORBIT_COLOR,
    ORBIT_DRAW_POINTS,
    RING_COLOR,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
    TIME_SCALE,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from helio.data_models import Body, SimulationSettings, Transform
from helio.errors import HelioError
from helio.orbit_path import build_orbit_from_elements
from helio.orbital_clock import orbit_cycle_ms, spin_increment
from helio.presets_loader import DEFAULT_TEMPLATE, list_templates, load_template
from helio.registry import BodyRegistry
from helio.utils import configure_logging
from helio.vector_utils import Vec3, vec_add

logger = logging.getLogger("helio_sim")

RING_SEGMENTS = 64

# ============================================================
# Drawing helpers
# ============================================================

_cached_font = None


def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        try:
            _cached_font = pygame.font.SysFont("consolas", 16)
        except (pygame.error, OSError):
            _cached_font = pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt) -> Optional[Tuple[int, int]]:
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def _visible_runs(screen: np.ndarray, visible: np.ndarray) -> List[List[Tuple[int, int]]]:
    """Split a projected polyline into runs of consecutive drawable points."""
    in_range = visible & np.all(np.abs(screen) <= SAFE_COORD_LIMIT, axis=1)
    runs: List[List[Tuple[int, int]]] = []
    current: List[Tuple[int, int]] = []
    for ok, (x, y) in zip(in_range, screen):
        if ok:
            current.append((int(x), int(y)))
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return [r for r in runs if len(r) > 1]


def ring_outline(center: Vec3, radius: float, tilt: float, segments: int = RING_SEGMENTS) -> np.ndarray:
    """Circle of the given radius in the ring plane (XY rotated about X by tilt)."""
    angles = np.linspace(0.0, 2.0 * math.pi, segments + 1)
    c, s = math.cos(tilt), math.sin(tilt)
    x = radius * np.cos(angles)
    y = radius * np.sin(angles)
    pts = np.column_stack([x, y * c, y * s])
    return pts + np.asarray(center)


def spin_marker(body_transform: Transform, radius: float) -> Vec3:
    """Point on the body's equator at its current spin angle, tilted with the axis."""
    ex = radius * math.cos(body_transform.spin_angle)
    ez = -radius * math.sin(body_transform.spin_angle)
    c, s = math.cos(body_transform.tilt), math.sin(body_transform.tilt)
    return vec_add(body_transform.position, (ex, -ez * s, ez * c))


# ============================================================
# Pygame viewer
# ============================================================

class PygameViewer:
    """
    Pygame loop: draws orbit paths, the sun, bodies, rings and a HUD.
    Handles free-flying camera input and pause.
    """

    def __init__(self, registry: BodyRegistry, clock: Optional[SimulationClock] = None,
                 fps: int = TARGET_FPS):
        self.registry = registry
        self.clock = clock or SimulationClock()
        self.fps = fps
        self.camera = Camera3D()
        self.surface = None
        self.frame_clock = None
        self.move_speed = CAMERA_MOVE_SPEED
        self.dragging = False
        self.running = True
        self.transforms: Dict[str, Transform] = {}
        # startup-time output: the orbit lines, decimated once for drawing
        self.orbit_lines = {b.name: b.orbit.decimated(ORBIT_DRAW_POINTS) for b in registry}

    def frame_all(self):
        points = [b.position for b in self.registry]
        if self.registry.sun is not None:
            points.append(self.registry.sun.position)
        self.camera.frame(points)

    def run(self):
        pygame.init()
        pygame.display.set_caption("HelioSim - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.frame_clock = pygame.time.Clock()
        logger.info("Viewer started with %d bodies", len(self.registry))

        try:
            while self.running:
                real_dt = self.frame_clock.get_time() / 1000.0

                self.handle_events(real_dt)

                # Sample before render
                if not self.clock.paused:
                    self.transforms = self.registry.advance_all(self.clock.now_ms())

                self.draw()
                self.frame_clock.tick(self.fps)
        finally:
            pygame.quit()
            logger.info("Viewer stopped")

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        boost = CAMERA_BOOST if keys[pygame.K_LSHIFT] or keys[pygame.K_RSHIFT] else 1.0
        step = self.move_speed * boost * real_dt
        turn = CAMERA_ROLL_SPEED * real_dt

        if keys[pygame.K_w]:
            self.camera.move(forward=step)
        if keys[pygame.K_s]:
            self.camera.move(forward=-step)
        if keys[pygame.K_d]:
            self.camera.move(right=step)
        if keys[pygame.K_a]:
            self.camera.move(right=-step)
        if keys[pygame.K_r]:
            self.camera.move(up=step)
        if keys[pygame.K_f]:
            self.camera.move(up=-step)
        if keys[pygame.K_q]:
            self.camera.roll(turn)
        if keys[pygame.K_e]:
            self.camera.roll(-turn)
        if keys[pygame.K_LEFT]:
            self.camera.yaw(turn)
        if keys[pygame.K_RIGHT]:
            self.camera.yaw(-turn)
        if keys[pygame.K_UP]:
            self.camera.pitch(turn)
        if keys[pygame.K_DOWN]:
            self.camera.pitch(-turn)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_SPACE:
                    paused = self.clock.toggle()
                    logger.info("Simulation %s", "paused" if paused else "resumed")
                elif event.key == pygame.K_HOME:
                    self.frame_all()

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.25 if event.y > 0 else 1.0 / 1.25
                self.move_speed = max(1.0, min(self.move_speed * factor, 1e5))

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.dragging = True
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.dragging = False

            elif event.type == pygame.MOUSEMOTION and self.dragging:
                dx, dy = event.rel
                self.camera.yaw(-dx * CAMERA_MOUSE_SENSITIVITY)
                self.camera.pitch(-dy * CAMERA_MOUSE_SENSITIVITY)

    def draw_orbits(self, surf):
        for name, line in self.orbit_lines.items():
            screen, visible = self.camera.project_many(line)
            for run in _visible_runs(screen, visible):
                pygame.draw.aalines(surf, ORBIT_COLOR, False, run)

    def draw_ring(self, surf, body: Body, transform: Transform):
        ring = body.ring
        for radius in (ring.spec.inner_radius, ring.spec.outer_radius):
            outline = ring_outline(transform.ring_position, radius, ring.tilt)
            screen, visible = self.camera.project_many(outline)
            for run in _visible_runs(screen, visible):
                pygame.draw.aalines(surf, RING_COLOR, False, run)

    def draw_sphere(self, surf, center: Vec3, radius: float, color) -> Optional[Tuple[int, int, int]]:
        projected = self.camera.project(center)
        if projected is None:
            return None
        sp = _safe_point(projected)
        if sp is None:
            return None
        vis_r = int(max(2, min(self.camera.pixel_radius(radius, projected[2]), 400)))
        gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r, color)
        gfxdraw.aacircle(surf, sp[0], sp[1], vis_r, color)
        return (sp[0], sp[1], vis_r)

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        self.draw_orbits(surf)

        # Painter's order: far to near
        drawables = []
        sun = self.registry.sun
        if sun is not None:
            drawables.append((self.camera.to_camera(sun.position)[2], None))
        for body in self.registry:
            transform = self.transforms.get(body.name) or body.transform()
            drawables.append((self.camera.to_camera(transform.position)[2], (body, transform)))
        drawables.sort(key=lambda d: d[0], reverse=True)

        for _, item in drawables:
            if item is None:
                self.draw_sphere(surf, sun.position, sun.radius, sun.color)
                continue
            body, transform = item
            disc = self.draw_sphere(surf, transform.position, body.radius, body.color)
            if disc is not None and disc[2] >= 4:
                marker = self.camera.project(spin_marker(transform, body.radius))
                mp = _safe_point(marker) if marker is not None else None
                if mp is not None:
                    pygame.draw.line(surf, BACKGROUND_COLOR, disc[:2], mp, 1)
            if transform.ring_position is not None:
                self.draw_ring(surf, body, transform)

        draw_text(surf, "WASD/RF: move | Q/E: roll | Arrows or left-drag: look | Wheel: speed | Space: pause | Home: frame",
                  10, 10, HUD_COLOR)
        status = "Paused" if self.clock.paused else "Playing"
        draw_text(surf, f"Time scale: {self.registry.settings.time_scale:.0f}x  Move speed: {self.move_speed:.0f}  [{status}]",
                  10, 30, HUD_COLOR)

        pygame.display.flip()


# ============================================================
# Command line
# ============================================================

def build_registry(preset: str, samples: Optional[int], time_scale: Optional[float],
                   double_ring_spin: bool) -> BodyRegistry:
    template = load_template(preset)
    settings = SimulationSettings(
        time_scale=time_scale if time_scale is not None else (template.time_scale or TIME_SCALE),
        sample_count=samples if samples is not None else DEFAULT_SAMPLE_COUNT,
        double_ring_spin=double_ring_spin,
    )
    return BodyRegistry.from_template(template, settings)


@click.group(invoke_without_command=True)
@click.option('--log-level', '-l', default='INFO', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging verbosity')
@click.pass_context
def cli(ctx, log_level):
    """HelioSim - a simplified heliocentric solar-system viewer."""
    configure_logging(log_level)
    if ctx.invoked_subcommand is None:
        ctx.invoke(cmd_run)


@cli.command('run')
@click.option('--preset', '-p', default=DEFAULT_TEMPLATE, show_default=True,
              help='Preset file name in templates/ or a path to a JSON file')
@click.option('--samples', '-n', type=int, default=None,
              help=f'Points per orbit path [default: {DEFAULT_SAMPLE_COUNT}]')
@click.option('--time-scale', '-t', type=float, default=None,
              help="Speed-up factor [default: the preset's, else 300]")
@click.option('--double-ring-spin/--single-ring-spin', default=True, show_default=True,
              help='Apply the spin increment twice per frame for ringed bodies')
@click.option('--fps', type=int, default=TARGET_FPS, show_default=True, help='Frame rate cap')
def cmd_run(preset=DEFAULT_TEMPLATE, samples=None, time_scale=None, double_ring_spin=True, fps=TARGET_FPS):
    """Open the viewer."""
    try:
        registry = build_registry(preset, samples, time_scale, double_ring_spin)
    except HelioError as exc:
        logger.error("%s", exc)
        raise click.ClickException(str(exc)) from exc
    viewer = PygameViewer(registry, fps=fps)
    viewer.frame_all()
    viewer.run()


@cli.command('presets')
def cmd_presets():
    """List available presets."""
    items = list_templates()
    if not items:
        click.echo("No presets found (add JSON files to templates/).")
        return
    for fn, display in items:
        click.echo(f"  {fn:25} {display}")


@cli.command('inspect')
@click.argument('name')
@click.option('--preset', '-p', default=DEFAULT_TEMPLATE, show_default=True)
@click.option('--samples', '-n', type=int, default=DEFAULT_SAMPLE_COUNT, show_default=True)
@click.option('--time-scale', '-t', type=float, default=None)
def cmd_inspect(name, preset, samples, time_scale):
    """Print the orbit summary of one body."""
    try:
        template = load_template(preset)
        matches = [b for b in template.bodies if b.name == name]
        if not matches:
            known = ", ".join(b.name for b in template.bodies)
            raise click.ClickException(f"no body named {name!r} in {preset} (known: {known})")
        spec = matches[0]
        settings = SimulationSettings(
            time_scale=time_scale if time_scale is not None else (template.time_scale or TIME_SCALE),
            sample_count=samples,
        )
        orbit = build_orbit_from_elements(spec.elements, settings.sample_count)
    except HelioError as exc:
        logger.error("%s", exc)
        raise click.ClickException(str(exc)) from exc

    nearest, farthest = orbit.radius_range()
    el = spec.elements
    click.echo(f"{spec.name}")
    click.echo(f"  elements:       a={el.a} AU  e={el.e}  i={el.i}  lAN={el.lan}  aP={el.ap}")
    click.echo(f"  samples:        {orbit.sample_count}")
    click.echo(f"  distance:       {nearest:.3f} .. {farthest:.3f} scene units")
    click.echo(f"  revolution:     {orbit_cycle_ms(spec.orbital_period, settings.time_scale) / 1000.0:.2f} s real time")
    click.echo(f"  spin per frame: {spin_increment(spec.rotation_period):+.6f} rad")
    if spec.ring is not None:
        click.echo(f"  ring:           {spec.ring.inner_radius} .. {spec.ring.outer_radius}")


def main():
    cli(prog_name="helio-sim")


if __name__ == '__main__':
    sys.exit(main())
