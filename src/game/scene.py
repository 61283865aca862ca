# src/game/scene.py
from __future__ import annotations
import random
from typing import Optional
import pygame
from .config import (
    PLAYER_SPAWN_X, PLAYER_SPAWN_ABOVE_GROUND, COLOR_BG, VARIANT_COLUMNS, VARIANT_ZOOM, VARIANTS,
)
from .camera import Camera, ZOOM_FIXED, ZOOM_DYNAMIC, step_zoom
from .level import LevelState, camera_bounds
from .physics import ArcadeWorld, one_way_from_above
from .player import KeyState, Player


class GameScene:
    """
    The single scene of the prototype. Plain object with the host hooks
    preload / create / update / handle_resize; the host drives it, nothing here
    owns a window or a clock.

    variant "columns": columns + one-way branches, zoom fixed at 1.0
    variant "zoom":    bare striped ground, zoom widens as the player climbs
    """
    key = "GameScene"

    def __init__(self, variant: str = VARIANT_COLUMNS, seed: Optional[int] = None,
                 smooth_dt: bool = False):
        assert variant in VARIANTS, f"Unknown variant {variant!r}"
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.variant = variant
        self.seed = seed
        self.rng = random.Random(seed)
        self.zoom_mode = ZOOM_DYNAMIC if variant == VARIANT_ZOOM else ZOOM_FIXED
        self.smooth_dt = smooth_dt     # frame-rate independent zoom smoothing

        self.world = ArcadeWorld()
        self.level = LevelState(variant, self.rng)
        self.player: Optional[Player] = None
        self.camera: Optional[Camera] = None
        self.viewport = (0, 0)

    # --- host hooks ---

    def preload(self):
        pass  # nothing to load, everything is drawn with rectangles

    def create(self, viewport_w: int, viewport_h: int):
        self.viewport = (int(viewport_w), int(viewport_h))
        layout = self.level.regenerate(viewport_w, viewport_h)

        self.player = Player.spawn(PLAYER_SPAWN_X, layout.ground_y - PLAYER_SPAWN_ABOVE_GROUND)
        self.world.add_body(self.player.body)
        self.world.add_collider(self.player.body, self.level.ground)
        self.world.add_collider(self.player.body, self.level.branches,
                                process=one_way_from_above, one_way=True)

        self.camera = Camera(viewport_w, viewport_h)
        self.camera.set_bounds(*camera_bounds(viewport_w, viewport_h))
        self.camera.start_follow(self.player, round_pixels=True)
        self.camera.set_zoom(1.0)

    def handle_resize(self, viewport_w: int, viewport_h: int):
        """Rebuild the layout for the new size; the player and its colliders survive."""
        assert self.player is not None and self.camera is not None, "create() first"
        self.viewport = (int(viewport_w), int(viewport_h))
        self.level.regenerate(viewport_w, viewport_h)
        self.camera.set_viewport(viewport_w, viewport_h)
        self.camera.set_bounds(*camera_bounds(viewport_w, viewport_h))

    def update(self, keys: KeyState, dt: float):
        assert self.player is not None and self.camera is not None, "create() first"
        self.player.apply_controls(keys)
        self.world.step(dt)
        self.camera.update()

        if self.zoom_mode == ZOOM_DYNAMIC:
            self.camera.set_zoom(step_zoom(self.player.y, self.viewport[1], self.camera.zoom,
                                           dt if self.smooth_dt else None))
        else:
            self.camera.set_zoom(1.0)

    # --- helpers ---

    def respawn_player(self):
        assert self.player is not None and self.level.layout is not None
        self.player.respawn(PLAYER_SPAWN_X, self.level.layout.ground_y - PLAYER_SPAWN_ABOVE_GROUND)
        self.camera.snap_to_target()

    def draw(self, surf: pygame.Surface):
        surf.fill(COLOR_BG)
        if self.camera is None:
            return
        self.level.draw(surf, self.camera)
        self.player.draw(surf, self.camera)
