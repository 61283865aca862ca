# src/game/physics.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union
import pygame
from .config import WORLD_GRAVITY, ONE_WAY_TOLERANCE

MAX_VELOCITY_DEFAULT = 10000.0
OVERLAP_BIAS = 4.0     # px of x penetration allowed beyond this step's own move


@dataclass
class StaticBody:
    """Immovable collision box. `source` points back at the layout item it was built from."""
    rect: pygame.Rect
    source: Any = None

    @property
    def top(self) -> int: return self.rect.top
    @property
    def bottom(self) -> int: return self.rect.bottom
    @property
    def left(self) -> int: return self.rect.left
    @property
    def right(self) -> int: return self.rect.right


class StaticGroup:
    """A bag of static bodies sharing one collider."""
    def __init__(self):
        self.members: List[StaticBody] = []

    def add(self, rect: pygame.Rect, source: Any = None) -> StaticBody:
        body = StaticBody(rect=rect, source=source)
        self.members.append(body)
        return body

    def clear(self):
        self.members = []

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self):
        return iter(self.members)


@dataclass
class ArcadeBody:
    """
    Centre-based dynamic box, integrated with arcade rules:
    - acceleration on x, drag only when not accelerating, clamped |vx|
    - world gravity + per-body extra gravity on y
    - bounce reflects velocity on contact
    """
    x: float
    y: float
    w: int
    h: int
    vx: float = 0.0
    vy: float = 0.0
    ax: float = 0.0
    drag_x: float = 0.0
    max_vx: float = MAX_VELOCITY_DEFAULT
    gravity_y: float = 0.0
    bounce: float = 0.0
    touching_down: bool = False
    prev_bottom: float = field(default=0.0, init=False)

    def __post_init__(self):
        self.prev_bottom = self.bottom

    # --- host-style setters ---
    def set_acceleration_x(self, ax: float): self.ax = float(ax)
    def set_velocity_x(self, vx: float): self.vx = float(vx)
    def set_velocity_y(self, vy: float): self.vy = float(vy)
    def set_drag_x(self, drag: float): self.drag_x = float(drag)
    def set_max_velocity_x(self, vmax: float): self.max_vx = float(vmax)
    def set_gravity_y(self, g: float): self.gravity_y = float(g)
    def set_bounce(self, bounce: float): self.bounce = float(bounce)

    def reset(self, x: float, y: float):
        self.x, self.y = float(x), float(y)
        self.vx = self.vy = self.ax = 0.0
        self.touching_down = False
        self.prev_bottom = self.bottom

    @property
    def left(self) -> float: return self.x - self.w / 2
    @property
    def right(self) -> float: return self.x + self.w / 2
    @property
    def top(self) -> float: return self.y - self.h / 2
    @property
    def bottom(self) -> float: return self.y + self.h / 2

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(round(self.left)), int(round(self.top)), self.w, self.h)

    def overlaps(self, other: StaticBody) -> bool:
        return (self.right > other.left and self.left < other.right and
                self.bottom > other.top and self.top < other.bottom)

    def integrate_velocity(self, dt: float, world_gravity: float):
        if self.ax != 0.0:
            self.vx += self.ax * dt
        elif self.drag_x > 0.0:
            # drag pulls toward zero without overshooting
            d = self.drag_x * dt
            if self.vx - d > 0.0:
                self.vx -= d
            elif self.vx + d < 0.0:
                self.vx += d
            else:
                self.vx = 0.0
        self.vx = max(-self.max_vx, min(self.max_vx, self.vx))

        self.vy += (world_gravity + self.gravity_y) * dt


ProcessCallback = Callable[[ArcadeBody, StaticBody], bool]


@dataclass
class Collider:
    body: ArcadeBody
    target: Union[StaticGroup, StaticBody]
    process: Optional[ProcessCallback] = None
    one_way: bool = False   # only separate on y, never on x

    def statics(self) -> List[StaticBody]:
        if isinstance(self.target, StaticGroup):
            return self.target.members
        return [self.target]


def one_way_from_above(body: ArcadeBody, platform: StaticBody) -> bool:
    """Collide only while falling and coming from above the platform top."""
    return body.vy > 0 and body.prev_bottom <= platform.top + ONE_WAY_TOLERANCE


class ArcadeWorld:
    """Steps every dynamic body and separates it from the statics it collides with."""
    def __init__(self, gravity_y: float = WORLD_GRAVITY):
        self.gravity_y = float(gravity_y)
        self.bodies: List[ArcadeBody] = []
        self.colliders: List[Collider] = []

    def add_body(self, body: ArcadeBody) -> ArcadeBody:
        if body not in self.bodies:
            self.bodies.append(body)
        return body

    def add_collider(self, body: ArcadeBody, target: Union[StaticGroup, StaticBody],
                     process: Optional[ProcessCallback] = None, one_way: bool = False) -> Collider:
        col = Collider(body=body, target=target, process=process, one_way=one_way)
        self.colliders.append(col)
        return col

    def step(self, dt: float):
        for body in self.bodies:
            body.touching_down = False
            body.prev_bottom = body.bottom
            body.integrate_velocity(dt, self.gravity_y)

            x0 = body.x
            body.x += body.vx * dt
            self._separate_x(body, x0)
            body.y += body.vy * dt
            self._separate_y(body, dt)

    def _contacts(self, body: ArcadeBody, axis: str):
        for col in self.colliders:
            if col.body is not body or (axis == "x" and col.one_way):
                continue
            for st in col.statics():
                if body.overlaps(st) and (col.process is None or col.process(body, st)):
                    yield st

    def _separate_x(self, body: ArcadeBody, x0: float):
        """Only a body that moved on x this step can hit a side; the side is its move direction."""
        dx = body.x - x0
        if dx == 0.0:
            return
        for st in self._contacts(body, "x"):
            if not body.overlaps(st):
                continue
            if dx > 0:
                if body.right - st.left > dx + OVERLAP_BIAS:
                    continue  # already inside before the move, leave it to the y pass
                body.x = st.left - body.w / 2
            else:
                if st.right - body.left > -dx + OVERLAP_BIAS:
                    continue
                body.x = st.right + body.w / 2
            body.vx = -body.vx * body.bounce

    def _separate_y(self, body: ArcadeBody, dt: float):
        rest_speed = (self.gravity_y + body.gravity_y) * dt
        for st in self._contacts(body, "y"):
            if not body.overlaps(st):
                continue
            falling = body.vy > 0 or (body.vy == 0 and body.y < st.rect.centery)
            if falling:
                body.y = st.top - body.h / 2
                body.touching_down = True
            else:
                body.y = st.bottom + body.h / 2
            body.vy = -body.vy * body.bounce
            # a rebound smaller than one frame of gravity is resting contact
            if abs(body.vy) < rest_speed:
                body.vy = 0.0
