# src/tests/level_unit.py
"""
Layout generator + LevelState checks.

Usage (from repo root):
  python -m src.tests.level_unit
"""
from __future__ import annotations
import math
import random

from src.game.config import (
    STRIPE_W, GROUND_THICKNESS, COLOR_STRIPE_A, COLOR_STRIPE_B, COLUMN_W, COLUMN_SPACING,
    BRANCH_MIN_LEN, BRANCH_MAX_LEN, BRANCHES_MIN, BRANCHES_MAX, VARIANT_COLUMNS, VARIANT_ZOOM,
)
from src.game.level import (
    LevelState, generate_layout, stripe_count, ground_line, world_width, camera_bounds,
)


def test_stripe_count_equals_viewport_width():
    for w in (1, 7, 320, 960, 1921):
        assert stripe_count(w) == w, f"stripe count for width {w}"
        layout = generate_layout(w, 540, VARIANT_ZOOM, random.Random(0))
        assert len(layout.stripes) == math.ceil(world_width(w) / STRIPE_W)


def test_stripes_alternate_and_sit_on_ground_line():
    layout = generate_layout(64, 540, VARIANT_ZOOM, random.Random(1))
    gy = ground_line(540)
    assert gy == 540 - GROUND_THICKNESS / 2
    for i, s in enumerate(layout.stripes):
        assert s.index == i
        assert s.color == (COLOR_STRIPE_A if i % 2 == 0 else COLOR_STRIPE_B), f"colour at {i}"
        assert s.x == i * STRIPE_W + STRIPE_W / 2
        assert s.y == gy
        assert (s.w, s.h) == (STRIPE_W, GROUND_THICKNESS)
    # rects tile the strip without gaps or overlaps
    for a, b in zip(layout.stripes, layout.stripes[1:]):
        assert a.rect.right == b.rect.left
    assert layout.stripes[0].rect.bottom == 540


def test_zoom_variant_has_no_decorations():
    layout = generate_layout(300, 400, VARIANT_ZOOM, random.Random(2))
    assert layout.columns == [] and layout.branches == []


def test_columns_and_branches_ranges():
    w, h = 90, 540
    layout = generate_layout(w, h, VARIANT_COLUMNS, random.Random(3))
    assert len(layout.columns) == math.ceil(world_width(w) / COLUMN_SPACING)

    gy = ground_line(h)
    per_column = {}
    for c in layout.columns:
        assert c.x == c.index * COLUMN_SPACING + COLUMN_W / 2
        assert math.ceil(0.3 * h) <= c.h <= math.floor(0.7 * h), f"column height {c.h}"
        assert c.y == gy - c.h / 2
        r, g, b = c.color
        assert r == g == b and 0x33 <= r <= 0x99, "column shade must be grey"

    for br in layout.branches:
        col = layout.columns[br.column]
        per_column[br.column] = per_column.get(br.column, 0) + 1
        assert BRANCH_MIN_LEN <= br.length <= BRANCH_MAX_LEN
        assert br.side in (-1, 1)
        assert br.x == col.x + br.side * (COLUMN_W / 2 + br.length / 2)
        assert math.ceil(0.3 * h) <= br.offset_y <= max(math.ceil(0.3 * h), h - col.h)
        assert br.y == gy - br.offset_y

    assert set(per_column) == {c.index for c in layout.columns}
    assert all(BRANCHES_MIN <= n <= BRANCHES_MAX for n in per_column.values())


def test_same_seed_same_layout():
    a = generate_layout(50, 480, VARIANT_COLUMNS, random.Random(42))
    b = generate_layout(50, 480, VARIANT_COLUMNS, random.Random(42))
    c = generate_layout(50, 480, VARIANT_COLUMNS, random.Random(43))
    assert a == b, "same seed must reproduce the layout"
    assert a.columns != c.columns, "different seeds should differ"


def test_regenerate_replaces_everything():
    state = LevelState(VARIANT_COLUMNS, random.Random(7))
    first = state.regenerate(120, 540)
    old_ids = {id(s) for s in first.stripes} | {id(b) for b in first.branches}
    assert len(state.ground) == 120
    assert len(state.branches) == len(first.branches)

    second = state.regenerate(80, 600)
    assert state.layout is second
    assert len(state.ground) == stripe_count(80) == len(second.stripes)
    assert len(state.branches) == len(second.branches)
    for body in list(state.ground) + list(state.branches):
        assert id(body.source) not in old_ids, "stale layout item left in a static group"
    assert all(body.rect.centery == ground_line(600) for body in state.ground)


def test_dispose_empties_groups():
    state = LevelState(VARIANT_ZOOM, random.Random(0))
    state.regenerate(10, 300)
    state.dispose()
    assert state.layout is None and len(state.ground) == 0 and len(state.branches) == 0


def test_camera_bounds():
    assert camera_bounds(960, 540) == (0, -27000, 96000, 54000)


def main():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 level checks passed")


if __name__ == "__main__":
    main()
