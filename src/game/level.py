# src/game/level.py
from __future__ import annotations
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import pygame
from .config import (
    WORLD_WIDTH_FACTOR, STRIPE_W, GROUND_THICKNESS, COLOR_STRIPE_A, COLOR_STRIPE_B,
    COLUMN_W, COLUMN_SPACING, COLUMN_MIN_H_FRAC, COLUMN_MAX_H_FRAC,
    COLUMN_SHADE_MIN, COLUMN_SHADE_MAX, BRANCHES_MIN, BRANCHES_MAX,
    BRANCH_MIN_LEN, BRANCH_MAX_LEN, BRANCH_THICKNESS, BRANCH_MIN_Y_FRAC, COLOR_BRANCH,
    BOUNDS_TOP_FACTOR, BOUNDS_HEIGHT_FACTOR, VARIANT_COLUMNS, VARIANTS, DEBUG_LAYOUT,
)
from .physics import StaticGroup

Color = Tuple[int, int, int]


def _centred_rect(cx: float, cy: float, w: int, h: int) -> pygame.Rect:
    r = pygame.Rect(0, 0, int(w), int(h))
    r.center = (int(round(cx)), int(round(cy)))
    return r


@dataclass(frozen=True)
class Stripe:
    """One tile of the ground strip (centre-based, like every layout item)."""
    index: int
    x: float
    y: float
    w: int
    h: int
    color: Color

    @property
    def rect(self) -> pygame.Rect:
        return _centred_rect(self.x, self.y, self.w, self.h)


@dataclass(frozen=True)
class Column:
    """Decorative pillar, no physics."""
    index: int
    x: float
    y: float
    w: int
    h: int
    color: Color

    @property
    def rect(self) -> pygame.Rect:
        return _centred_rect(self.x, self.y, self.w, self.h)


@dataclass(frozen=True)
class Branch:
    """One-way platform hanging off a column."""
    column: int         # index of the parent column
    x: float
    y: float
    length: int
    side: int           # -1 left, +1 right
    offset_y: int       # height above the ground line
    thickness: int = BRANCH_THICKNESS
    color: Color = COLOR_BRANCH

    @property
    def rect(self) -> pygame.Rect:
        return _centred_rect(self.x, self.y, self.length, self.thickness)


@dataclass
class LevelLayout:
    viewport_w: int
    viewport_h: int
    variant: str
    stripes: List[Stripe] = field(default_factory=list)
    columns: List[Column] = field(default_factory=list)
    branches: List[Branch] = field(default_factory=list)

    @property
    def world_width(self) -> int:
        return world_width(self.viewport_w)

    @property
    def ground_y(self) -> float:
        return ground_line(self.viewport_h)

    @property
    def ground_top(self) -> float:
        return self.ground_y - GROUND_THICKNESS / 2


# --- Derived quantities ---

def world_width(viewport_w: int) -> int:
    return int(viewport_w * WORLD_WIDTH_FACTOR)

def stripe_count(viewport_w: int) -> int:
    return math.ceil(world_width(viewport_w) / STRIPE_W)

def ground_line(viewport_h: int) -> float:
    """Centre y of the ground strip, bottom-anchored to the viewport."""
    return viewport_h - GROUND_THICKNESS / 2

def camera_bounds(viewport_w: int, viewport_h: int) -> Tuple[int, int, int, int]:
    """(x, y, w, h) of the camera bounds: full world width, tall enough for big jumps."""
    return (0, int(BOUNDS_TOP_FACTOR * viewport_h), world_width(viewport_w),
            int(BOUNDS_HEIGHT_FACTOR * viewport_h))

def _between(rng: random.Random, lo: float, hi: float) -> int:
    """Inclusive integer draw in [lo, hi]."""
    a, b = math.ceil(lo), math.floor(hi)
    if b < a:
        b = a
    return rng.randint(a, b)


# --- Generation ---

def generate_ground(viewport_w: int, viewport_h: int) -> List[Stripe]:
    gy = ground_line(viewport_h)
    stripes = []
    for i in range(stripe_count(viewport_w)):
        color = COLOR_STRIPE_A if i % 2 == 0 else COLOR_STRIPE_B
        stripes.append(Stripe(index=i, x=i * STRIPE_W + STRIPE_W / 2, y=gy,
                              w=STRIPE_W, h=GROUND_THICKNESS, color=color))
    return stripes

def generate_decorations(viewport_w: int, viewport_h: int,
                         rng: random.Random) -> Tuple[List[Column], List[Branch]]:
    gy = ground_line(viewport_h)
    n_cols = math.ceil(world_width(viewport_w) / COLUMN_SPACING)
    columns: List[Column] = []
    branches: List[Branch] = []

    for i in range(n_cols):
        x = i * COLUMN_SPACING + COLUMN_W / 2
        col_h = _between(rng, viewport_h * COLUMN_MIN_H_FRAC, viewport_h * COLUMN_MAX_H_FRAC)
        shade = rng.randint(COLUMN_SHADE_MIN, COLUMN_SHADE_MAX)
        columns.append(Column(index=i, x=x, y=gy - col_h / 2, w=COLUMN_W, h=col_h,
                              color=(shade, shade, shade)))

        for _ in range(rng.randint(BRANCHES_MIN, BRANCHES_MAX)):
            offset_y = _between(rng, viewport_h * BRANCH_MIN_Y_FRAC, viewport_h - col_h)
            length = rng.randint(BRANCH_MIN_LEN, BRANCH_MAX_LEN)
            side = -1 if rng.randint(0, 1) == 0 else 1
            branches.append(Branch(
                column=i,
                x=x + side * (COLUMN_W / 2 + length / 2),
                y=gy - offset_y,
                length=length,
                side=side,
                offset_y=offset_y,
            ))
    return columns, branches

def generate_layout(viewport_w: int, viewport_h: int, variant: str = VARIANT_COLUMNS,
                    rng: Optional[random.Random] = None) -> LevelLayout:
    """
    Deterministic for a given rng state:
    ground stripes always, columns + branches only for the "columns" variant.
    """
    assert variant in VARIANTS, f"Unknown variant {variant!r}"
    rng = rng if rng is not None else random.Random()
    layout = LevelLayout(viewport_w=int(viewport_w), viewport_h=int(viewport_h), variant=variant)
    layout.stripes = generate_ground(layout.viewport_w, layout.viewport_h)
    if variant == VARIANT_COLUMNS:
        layout.columns, layout.branches = generate_decorations(layout.viewport_w, layout.viewport_h, rng)
    return layout


class LevelState:
    """
    Owns the current layout and the static groups the physics world collides against.
    The groups are long-lived (colliders keep pointing at them); their members are
    replaced wholesale on every regeneration.
    """
    def __init__(self, variant: str, rng: random.Random):
        assert variant in VARIANTS, f"Unknown variant {variant!r}"
        self.variant = variant
        self.rng = rng
        self.layout: Optional[LevelLayout] = None
        self.ground = StaticGroup()
        self.branches = StaticGroup()

    def dispose(self):
        self.ground.clear()
        self.branches.clear()
        self.layout = None

    def regenerate(self, viewport_w: int, viewport_h: int) -> LevelLayout:
        # old set must be gone before the new one goes in
        self.dispose()
        layout = generate_layout(viewport_w, viewport_h, self.variant, self.rng)
        for s in layout.stripes:
            self.ground.add(s.rect, source=s)
        for b in layout.branches:
            self.branches.add(b.rect, source=b)
        self.layout = layout

        if DEBUG_LAYOUT:
            print(f"[layout] {layout.viewport_w}x{layout.viewport_h} variant={self.variant} "
                  f"stripes={len(layout.stripes)} columns={len(layout.columns)} "
                  f"branches={len(layout.branches)}")
        return layout

    def draw(self, surf: pygame.Surface, camera):
        """Draw columns, branches then ground, culled to the camera view."""
        if self.layout is None:
            return
        view = camera.view_rect()
        for c in self.layout.columns:
            r = c.rect
            if r.colliderect(view):
                pygame.draw.rect(surf, c.color, camera.rect_to_screen(r))
        for b in self.layout.branches:
            r = b.rect
            if r.colliderect(view):
                pygame.draw.rect(surf, b.color, camera.rect_to_screen(r))
        # stripes are sorted by x, so only a slice can be visible
        first = max(0, int(view.left // STRIPE_W))
        last = min(len(self.layout.stripes), int(view.right // STRIPE_W) + 1)
        for s in self.layout.stripes[first:last]:
            pygame.draw.rect(surf, s.color, camera.rect_to_screen(s.rect))
