# src/game/camera.py
from __future__ import annotations
import math
from typing import Optional, Tuple
import pygame
from .config import (
    ZOOM_START_FRAC, ZOOM_END_FRAC, MAX_ZOOM_OUT, ZOOM_SMOOTHING, ZOOM_REFERENCE_FPS,
    FOLLOW_LERP,
)

ZOOM_FIXED = "fixed"
ZOOM_DYNAMIC = "dynamic"


# --- Zoom controller ---

def zoom_window(viewport_h: float) -> Tuple[float, float]:
    """(zoom_start, zoom_end) in world y. Smaller y = higher up."""
    return ZOOM_START_FRAC * viewport_h, ZOOM_END_FRAC * viewport_h

def zoom_target(player_y: float, viewport_h: float) -> float:
    """player_y >= zoom_start -> 1.0; player_y <= zoom_end -> MAX_ZOOM_OUT; linear in between."""
    start, end = zoom_window(viewport_h)
    if player_y >= start:
        return 1.0
    progress = (start - player_y) / (start - end)
    progress = max(0.0, min(1.0, progress))
    return 1.0 - progress * (1.0 - MAX_ZOOM_OUT)

def smoothing_factor(dt: Optional[float] = None) -> float:
    """
    Fraction of the gap closed per update.
    dt=None -> the plain per-frame factor (depends on frame rate).
    dt given -> same decay per second as ZOOM_SMOOTHING at ZOOM_REFERENCE_FPS.
    """
    if dt is None:
        return ZOOM_SMOOTHING
    return 1.0 - math.pow(1.0 - ZOOM_SMOOTHING, dt * ZOOM_REFERENCE_FPS)

def step_zoom(player_y: float, viewport_h: float, current_zoom: float,
              dt: Optional[float] = None) -> float:
    target = zoom_target(player_y, viewport_h)
    return current_zoom + (target - current_zoom) * smoothing_factor(dt)


# --- Camera ---

class Camera:
    """
    Follows a target with per-frame lerp, clamps to bounds, scales by zoom.
    The camera is stored by its centre in world coordinates.
    """
    def __init__(self, viewport_w: int, viewport_h: int):
        self.viewport_w = int(viewport_w)
        self.viewport_h = int(viewport_h)
        self.cx = self.viewport_w / 2
        self.cy = self.viewport_h / 2
        self.zoom = 1.0
        self.bounds: Optional[pygame.Rect] = None
        self.target = None
        self.lerp = (FOLLOW_LERP, FOLLOW_LERP)
        self.round_pixels = True

    def set_viewport(self, viewport_w: int, viewport_h: int):
        self.viewport_w = int(viewport_w)
        self.viewport_h = int(viewport_h)
        self._clamp()

    def set_bounds(self, x: int, y: int, w: int, h: int):
        self.bounds = pygame.Rect(x, y, w, h)
        self._clamp()

    def set_zoom(self, zoom: float):
        self.zoom = float(zoom)
        self._clamp()

    def start_follow(self, target, round_pixels: bool = True,
                     lerp_x: float = FOLLOW_LERP, lerp_y: float = FOLLOW_LERP):
        """`target` is anything with x/y attributes (centre, world coords)."""
        self.target = target
        self.round_pixels = round_pixels
        self.lerp = (lerp_x, lerp_y)
        self.snap_to_target()

    def snap_to_target(self):
        if self.target is None:
            return
        self.cx, self.cy = float(self.target.x), float(self.target.y)
        self._clamp()

    def update(self):
        if self.target is not None:
            lx, ly = self.lerp
            self.cx += (self.target.x - self.cx) * lx
            self.cy += (self.target.y - self.cy) * ly
        self._clamp()

    def view_size(self) -> Tuple[float, float]:
        z = max(1e-6, self.zoom)
        return self.viewport_w / z, self.viewport_h / z

    def view_rect(self) -> pygame.Rect:
        """Visible world area (integer rect, grown by one pixel on each side)."""
        vw, vh = self.view_size()
        left, top = self._origin()
        return pygame.Rect(int(math.floor(left)) - 1, int(math.floor(top)) - 1,
                           int(math.ceil(vw)) + 2, int(math.ceil(vh)) + 2)

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        left, top = self._origin()
        return (x - left) * self.zoom, (y - top) * self.zoom

    def rect_to_screen(self, r: pygame.Rect) -> pygame.Rect:
        sx, sy = self.world_to_screen(r.left, r.top)
        sx2, sy2 = self.world_to_screen(r.right, r.bottom)
        x0, y0 = int(round(sx)), int(round(sy))
        return pygame.Rect(x0, y0, max(1, int(round(sx2)) - x0), max(1, int(round(sy2)) - y0))

    def _origin(self) -> Tuple[float, float]:
        vw, vh = self.view_size()
        left, top = self.cx - vw / 2, self.cy - vh / 2
        if self.round_pixels:
            left, top = float(round(left)), float(round(top))
        return left, top

    def _clamp(self):
        if self.bounds is None:
            return
        vw, vh = self.view_size()
        b = self.bounds
        if vw >= b.width:
            self.cx = b.centerx
        else:
            self.cx = max(b.left + vw / 2, min(b.right - vw / 2, self.cx))
        if vh >= b.height:
            self.cy = b.centery
        else:
            self.cy = max(b.top + vh / 2, min(b.bottom - vh / 2, self.cy))
