"""Whole-grid rewrites used by the editor: color shuffle, glyph variation, color variation.

All three return a new Grid and leave the input untouched. The layout skeleton
(which cells are occupied, which carry letters) never changes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.engine.config import EngineConfig
from app.engine.context import CELL_COUNT, Grid
from app.engine.glyphs import ERASE_GLYPH_ID, GlyphPool, TypographyTable
from app.engine.random_source import RandomSource

logger = logging.getLogger(__name__)


def _distinct(values: list[int | None]) -> list[int]:
    """Distinct non-null values in first-seen order."""
    seen: list[int] = []
    for v in values:
        if v is not None and v not in seen:
            seen.append(v)
    return seen


def _cycle_until_different(current: int, pool: list[int], avoid: int) -> int:
    idx = pool.index(current) if current in pool else -1
    candidate = current
    for _ in range(len(pool)):
        idx = (idx + 1) % len(pool)
        candidate = pool[idx]
        if candidate != avoid:
            return candidate
    return candidate


def shuffle_colors(grid: Grid, rng: RandomSource) -> Grid:
    """Permute the foreground palette and the background palette independently.

    Afterwards no cell shows its glyph in its own background color, unless the
    grid only ever used one color.
    """
    fg_pool = _distinct(grid.fg_colors)
    bg_pool = _distinct(grid.bg_colors)
    fg_map = dict(zip(fg_pool, rng.shuffle(fg_pool)))
    bg_map = dict(zip(bg_pool, rng.shuffle(bg_pool)))

    out = grid.copy()
    out.fg_colors = [fg_map.get(c, c) if c is not None else None for c in grid.fg_colors]
    out.bg_colors = [bg_map.get(c, c) if c is not None else None for c in grid.bg_colors]

    repaired = 0
    for i in range(CELL_COUNT):
        fg, bg = out.fg_colors[i], out.bg_colors[i]
        if fg is None or bg is None or fg != bg:
            continue
        out.bg_colors[i] = _cycle_until_different(bg, bg_pool, fg)
        if out.bg_colors[i] == fg:
            out.fg_colors[i] = _cycle_until_different(fg, fg_pool, bg)
        repaired += 1

    logger.debug(
        "Shuffled %d foreground / %d background colors, repaired %d cells",
        len(fg_pool),
        len(bg_pool),
        repaired,
    )
    return out


def generate_variation(
    grid: Grid,
    glyph_pool: GlyphPool,
    typography: TypographyTable,
    rng: RandomSource,
    config: EngineConfig | None = None,
) -> tuple[Grid, int]:
    """Swap every graphic glyph id for another one, and every letter for another variation.

    One mapping per distinct graphic id, applied uniformly. Returns the new grid
    and the target variation index.
    """
    cfg = config or EngineConfig()
    graphic_ids = glyph_pool.graphic_ids(cfg)
    target = rng.next_int(typography.variation_count)

    present = _distinct(
        [
            g
            for i, g in enumerate(grid.fg_glyphs)
            if grid.is_occupied(i) and cfg.is_graphic(g)
        ]
    )
    glyph_map: dict[int, int] = {}
    for glyph_id in present:
        candidates = [g for g in graphic_ids if g != glyph_id]
        glyph_map[glyph_id] = rng.choice(candidates) if candidates else glyph_id

    out = grid.copy()
    for i, glyph_id in enumerate(grid.fg_glyphs):
        if glyph_id is None or glyph_id == ERASE_GLYPH_ID or not grid.is_occupied(i):
            continue
        pos = typography.lookup(glyph_id)
        if pos is not None:
            out.fg_glyphs[i] = typography.glyph_at(target, pos.letter)
        elif glyph_id in glyph_map:
            out.fg_glyphs[i] = glyph_map[glyph_id]

    logger.debug("Glyph variation: map=%s, letters → variation %d", glyph_map, target)
    return out, target


def generate_color_variation(
    grid: Grid,
    rng: RandomSource,
    palette_size: int = 9,
    reserved: Sequence[int] = (),
) -> tuple[Grid, dict[int, int]]:
    """Bring previously unused palette colors into the artwork.

    Colors in ``reserved`` are never drawn as replacements, even when the grid
    does not show them. With no fresh color left the used colors are permuted;
    otherwise ``min(used, unused)`` used colors are each replaced by a fresh
    unused one. Returns the new grid and the old → new color mapping.
    """
    used = sorted(grid.used_colors())
    if not used:
        return grid.copy(), {}

    blocked = set(used) | set(reserved)
    unused = [c for c in range(1, palette_size + 1) if c not in blocked]
    if not unused:
        mapping = dict(zip(used, rng.shuffle(used)))
    else:
        k = min(len(used), len(unused))
        mapping = dict(zip(rng.sample(used, k), rng.sample(unused, k)))

    out = grid.copy()
    out.bg_colors = [mapping.get(c, c) if c is not None else None for c in grid.bg_colors]
    out.fg_colors = [mapping.get(c, c) if c is not None else None for c in grid.fg_colors]

    logger.debug("Color variation mapping: %s", mapping)
    return out, mapping
