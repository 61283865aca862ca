# src/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional, Union
import pygame
from .config import (
    PLAYER_W, PLAYER_H, ACCEL_X, DRAG_X, MAX_VX, PLAYER_GRAVITY, JUMP_VY, BOUNCE, COLOR_PLAYER
)
from .physics import ArcadeBody


@dataclass
class KeyState:
    """Snapshot of the four WASD keys for one frame."""
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def from_pressed(cls, pressed: Union[Mapping[int, bool], "pygame.key.ScancodeWrapper"]) -> "KeyState":
        """Build from pygame.key.get_pressed() (or any key-code indexable)."""
        return cls(
            up=bool(pressed[pygame.K_w]),
            down=bool(pressed[pygame.K_s]),
            left=bool(pressed[pygame.K_a]),
            right=bool(pressed[pygame.K_d]),
        )


def horizontal_acceleration(left: bool, right: bool) -> float:
    """
    -ACCEL_X for left only, +ACCEL_X for right only.
    Both held cancel out to 0, same as neither.
    """
    if left and not right:
        return -ACCEL_X
    if right and not left:
        return ACCEL_X
    return 0.0

def jump_velocity(up: bool, touching_down: bool) -> Optional[float]:
    """New vertical velocity for a jump, or None when the velocity must stay untouched."""
    if up and touching_down:
        return JUMP_VY
    return None


@dataclass
class Player:
    """
    The red rectangle. One per session; respawned, never destroyed.
    Position is the body centre in world coords.
    """
    body: ArcadeBody

    @classmethod
    def spawn(cls, x: float, y: float) -> "Player":
        body = ArcadeBody(x=float(x), y=float(y), w=PLAYER_W, h=PLAYER_H)
        body.set_bounce(BOUNCE)
        body.set_drag_x(DRAG_X)
        body.set_max_velocity_x(MAX_VX)
        body.set_gravity_y(PLAYER_GRAVITY)
        return cls(body=body)

    @property
    def x(self) -> float: return self.body.x
    @property
    def y(self) -> float: return self.body.y

    @property
    def rect(self) -> pygame.Rect:
        return self.body.rect

    def apply_controls(self, keys: KeyState):
        self.body.set_acceleration_x(horizontal_acceleration(keys.left, keys.right))
        vy = jump_velocity(keys.up, self.body.touching_down)
        if vy is not None:
            self.body.set_velocity_y(vy)

    def respawn(self, x: float, y: float):
        self.body.reset(x, y)

    def draw(self, surf: pygame.Surface, camera):
        pygame.draw.rect(surf, COLOR_PLAYER, camera.rect_to_screen(self.rect))
