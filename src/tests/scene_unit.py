# src/tests/scene_unit.py
"""
Scene lifecycle checks: create -> update -> resize, both variants, headless.

Usage (from repo root):
  python -m src.tests.scene_unit
"""
from __future__ import annotations
import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
import pygame

from src.game.config import (
    GROUND_THICKNESS, PLAYER_H, PLAYER_SPAWN_X, VARIANT_COLUMNS, VARIANT_ZOOM, COLOR_PLAYER,
)
from src.game.level import stripe_count
from src.game.player import KeyState
from src.game.scene import GameScene

DT = 1.0 / 60.0
W, H = 960, 540
IDLE = KeyState()


def _settled(variant: str = VARIANT_ZOOM, seed: int = 1, **kw) -> GameScene:
    scene = GameScene(variant=variant, seed=seed, **kw)
    scene.preload()
    scene.create(W, H)
    for _ in range(120):
        scene.update(IDLE, DT)
    return scene


def test_create_spawns_player_above_ground():
    scene = GameScene(variant=VARIANT_COLUMNS, seed=3)
    scene.create(W, H)
    layout = scene.level.layout
    assert len(layout.stripes) == stripe_count(W)
    assert layout.columns and layout.branches
    assert scene.player.x == PLAYER_SPAWN_X
    assert scene.player.y == layout.ground_y - 200
    assert scene.camera.zoom == 1.0


def test_player_lands_and_rests_on_ground():
    scene = _settled()
    ground_top = H - GROUND_THICKNESS
    assert scene.player.body.touching_down
    assert scene.player.body.bottom == ground_top
    assert scene.player.y == ground_top - PLAYER_H / 2


def test_jump_and_land_again():
    scene = _settled()
    y0 = scene.player.y
    scene.update(KeyState(up=True), DT)
    assert scene.player.body.vy < 0 and scene.player.y < y0
    assert not scene.player.body.touching_down

    lowest_zoom = 1.0
    for _ in range(400):
        scene.update(IDLE, DT)
        lowest_zoom = min(lowest_zoom, scene.camera.zoom)
    assert scene.player.body.touching_down, "should be back on the ground"
    assert lowest_zoom < 0.9, "zoom variant widens the view during a high jump"


def test_holding_jump_midair_does_nothing():
    scene = _settled()
    scene.update(KeyState(up=True), DT)
    vy_after_takeoff = scene.player.body.vy
    scene.update(KeyState(up=True), DT)
    assert scene.player.body.vy > vy_after_takeoff, "gravity only, no second jump"


def test_running_right_is_capped():
    scene = _settled()
    for _ in range(120):
        scene.update(KeyState(right=True), DT)
    assert scene.player.body.vx == 300.0
    assert scene.player.x > PLAYER_SPAWN_X


def test_dynamic_zoom_first_step():
    scene = _settled(variant=VARIANT_ZOOM)
    assert scene.camera.zoom == 1.0
    scene.player.body.y = 50.0
    scene.player.body.vy = 0.0
    scene.update(IDLE, DT)
    assert abs(scene.camera.zoom - 0.93) < 1e-9


def test_columns_variant_keeps_fixed_zoom():
    scene = _settled(variant=VARIANT_COLUMNS)
    scene.player.body.y = -2000.0
    scene.player.body.vy = 0.0
    for _ in range(10):
        scene.update(IDLE, DT)
        assert scene.camera.zoom == 1.0


def test_resize_rebuilds_layout_and_keeps_player():
    scene = _settled(variant=VARIANT_COLUMNS, seed=9)
    player = scene.player
    old_stripes = {id(s) for s in scene.level.layout.stripes}

    scene.handle_resize(800, 600)
    layout = scene.level.layout
    assert scene.player is player
    assert len(layout.stripes) == len(scene.level.ground) == stripe_count(800)
    assert all(id(b.source) not in old_stripes for b in scene.level.ground)
    assert {id(b.source) for b in scene.level.ground} == {id(s) for s in layout.stripes}
    assert tuple(scene.camera.bounds) == (0, -30000, 80000, 60000)
    assert scene.viewport == (800, 600)

    # the new ground is 60 px lower, the player falls onto it
    for _ in range(120):
        scene.update(IDLE, DT)
    assert scene.player.body.touching_down
    assert scene.player.body.bottom == 600 - GROUND_THICKNESS


def test_shorter_window_lifts_player_onto_new_ground():
    scene = _settled(variant=VARIANT_COLUMNS, seed=9)
    assert scene.player.x == PLAYER_SPAWN_X   # straddles the first two stripes

    # ground moves 40 px up, into the resting player
    scene.handle_resize(960, 500)
    scene.update(IDLE, DT)
    assert scene.player.x == PLAYER_SPAWN_X, "no sideways shove from the stripe edges"
    assert scene.player.body.bottom == 500 - GROUND_THICKNESS
    assert scene.player.body.touching_down

    scene.player.body.x = 150.0
    scene.handle_resize(960, 460)
    for _ in range(30):
        scene.update(IDLE, DT)
    assert scene.player.x == 150.0
    assert scene.player.body.bottom == 460 - GROUND_THICKNESS


def test_same_seed_same_level():
    a = GameScene(variant=VARIANT_COLUMNS, seed=77)
    b = GameScene(variant=VARIANT_COLUMNS, seed=77)
    a.create(W, H)
    b.create(W, H)
    assert a.level.layout == b.level.layout


def test_respawn_returns_to_start():
    scene = _settled()
    for _ in range(60):
        scene.update(KeyState(right=True), DT)
    scene.respawn_player()
    assert scene.player.x == PLAYER_SPAWN_X
    assert scene.player.body.vx == 0.0


def test_draw_renders_player_and_ground():
    scene = _settled(variant=VARIANT_COLUMNS, seed=5)
    surf = pygame.Surface((W, H))
    scene.draw(surf)
    px, py = scene.camera.world_to_screen(scene.player.x, scene.player.y)
    assert tuple(surf.get_at((int(px), int(py))))[:3] == COLOR_PLAYER
    gx, gy = scene.camera.world_to_screen(scene.player.x, H - GROUND_THICKNESS / 2)
    assert tuple(surf.get_at((int(gx), int(gy))))[:3] != (0, 0, 0), "ground must be drawn"


def main():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 scene checks passed")


if __name__ == "__main__":
    main()
