"""Rasterization utilities — grid to RGBA pixels, RGBA pixels to PNG.

Rendering is best-effort: a glyph id missing from the pool, or a color value
outside the palette, leaves that layer unpainted instead of raising.
"""

from __future__ import annotations

import io

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from app.engine.context import CELL_COUNT, GRID_SIZE, Grid, cell_position
from app.engine.glyphs import ERASE_GLYPH_ID, Glyph, GlyphPool
from app.engine.palette import DEFAULT_PALETTE, RGB, rgb_for

# ── Named constants ──

# Light grey (#D3D3D3) under every cell, visible wherever nothing is painted
CANVAS_RGBA = (211, 211, 211, 255)

# Glyph bitmaps are 8×8
GLYPH_SIZE = 8

_OPAQUE = 255

# Bit index of pixel (x, y) is 63 - (y*8 + x): row-major from the top bit
_BIT_SHIFTS = np.arange(GLYPH_SIZE * GLYPH_SIZE - 1, -1, -1, dtype=np.uint64).reshape(
    GLYPH_SIZE, GLYPH_SIZE
)


def glyph_mask(glyph: Glyph) -> NDArray[np.bool_]:
    """8×8 boolean mask, ``mask[y, x]`` true where the glyph paints."""
    bits = np.right_shift(np.uint64(glyph.bitmap), _BIT_SHIFTS) & np.uint64(1)
    return bits.astype(bool)


def _paint_cell(
    image: NDArray[np.uint8],
    row: int,
    col: int,
    cell: int,
    rgb: RGB,
    mask: NDArray[np.bool_] | None = None,
) -> None:
    y0, x0 = row * cell, col * cell
    color = np.array([*rgb, _OPAQUE], dtype=np.uint8)
    if mask is None:
        image[y0 : y0 + cell, x0 : x0 + cell] = color
        return

    sub = cell // GLYPH_SIZE
    offset = (cell - GLYPH_SIZE * sub) // 2
    scaled = np.repeat(np.repeat(mask, sub, axis=0), sub, axis=1)
    span = GLYPH_SIZE * sub
    region = image[y0 + offset : y0 + offset + span, x0 + offset : x0 + offset + span]
    region[scaled] = color


def render(
    grid: Grid,
    glyph_pool: GlyphPool,
    palette: tuple[RGB, ...] = DEFAULT_PALETTE,
    cell_pixel_size: int = 48,
) -> NDArray[np.uint8]:
    """Paint the grid into an (H, W, 4) uint8 RGBA array.

    Backgrounds fill the whole cell in the background color. Foreground glyphs
    are drawn as an 8×8 grid of ``cell_pixel_size // 8`` sub-pixels, centred.
    """
    if cell_pixel_size < GLYPH_SIZE:
        raise ValueError(f"cell_pixel_size must be at least {GLYPH_SIZE}, got {cell_pixel_size}")

    side = GRID_SIZE * cell_pixel_size
    image = np.empty((side, side, 4), dtype=np.uint8)
    image[:, :] = CANVAS_RGBA

    masks: dict[int, NDArray[np.bool_]] = {}
    for i in range(CELL_COUNT):
        row, col = cell_position(i)

        bg_rgb = rgb_for(grid.bg_colors[i], palette)
        if grid.bg_glyphs[i] is not None and bg_rgb is not None:
            _paint_cell(image, row, col, cell_pixel_size, bg_rgb)

        glyph_id = grid.fg_glyphs[i]
        if glyph_id is None or glyph_id == ERASE_GLYPH_ID:
            continue
        glyph = glyph_pool.get(glyph_id)
        fg_rgb = rgb_for(grid.fg_colors[i], palette)
        if glyph is None or fg_rgb is None:
            continue
        if glyph_id not in masks:
            masks[glyph_id] = glyph_mask(glyph)
        _paint_cell(image, row, col, cell_pixel_size, fg_rgb, masks[glyph_id])

    return image


def render_png(
    grid: Grid,
    glyph_pool: GlyphPool,
    palette: tuple[RGB, ...] = DEFAULT_PALETTE,
    cell_pixel_size: int = 48,
) -> bytes:
    """Render and encode as PNG bytes."""
    pixels = render(grid, glyph_pool, palette, cell_pixel_size)
    buf = io.BytesIO()
    Image.fromarray(pixels).save(buf, format="PNG")
    return buf.getvalue()
