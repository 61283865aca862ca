# src/env/observations.py
from __future__ import annotations
from typing import Iterable, Optional
import numpy as np
import pygame
from ..game.config import MAX_VX, JUMP_VY

OBS_SIZE = 8
NO_BRANCH = 1.0      # sentinel when nothing is overhead
ON_BRANCH_EPS = 1    # px slack between feet and a branch top

OBS_LOW = np.array([0.0, -1.0, -1.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)

def _branch_above(body, branch_rects: Iterable[pygame.Rect], viewport_h: int) -> float:
    """Normalized gap from the player's feet up to the nearest branch over its x-span."""
    best: Optional[float] = None
    for r in branch_rects:
        if r.right <= body.left or r.left >= body.right:
            continue
        gap = body.bottom - r.top
        if gap > ON_BRANCH_EPS and (best is None or gap < best):
            best = gap
    if best is None:
        return NO_BRANCH
    return _clamp(best / max(1, viewport_h), 0.0, 1.0)

def _on_branch(body, branch_rects: Iterable[pygame.Rect]) -> float:
    if not body.touching_down:
        return 0.0
    for r in branch_rects:
        if r.right <= body.left or r.left >= body.right:
            continue
        if abs(body.bottom - r.top) <= ON_BRANCH_EPS:
            return 1.0
    return 0.0

def build_observation(scene) -> np.ndarray:
    """
    [x_norm, y_norm, vx_norm, vy_norm, touching_down, zoom, branch_above, on_branch]
    - x_norm: x / world width, in [0,1]
    - y_norm: y / viewport height, clipped to [-1,1] (negative above the viewport)
    - vx_norm: vx / MAX_VX; vy_norm: vy / |JUMP_VY|, clipped
    - branch_above: gap to the nearest overhead branch / viewport height (1 = none)
    """
    body = scene.player.body
    layout = scene.level.layout
    vw, vh = scene.viewport
    branch_rects = [b.rect for b in scene.level.branches]

    obs = np.array([
        _clamp(body.x / max(1, layout.world_width), 0.0, 1.0),
        _clamp(body.y / max(1, vh), -1.0, 1.0),
        _clamp(body.vx / MAX_VX, -1.0, 1.0),
        _clamp(body.vy / abs(JUMP_VY), -1.0, 1.0),
        1.0 if body.touching_down else 0.0,
        _clamp(scene.camera.zoom, 0.0, 1.0),
        _branch_above(body, branch_rects, vh),
        _on_branch(body, branch_rects),
    ], dtype=np.float32)
    return obs
