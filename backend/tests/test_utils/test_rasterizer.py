"""Tests for grid rasterization."""

import io

import numpy as np
import pytest
from PIL import Image

from app.engine.composer import Composer
from app.engine.context import Grid, cell_index
from app.engine.glyphs import Glyph, GlyphPool
from app.engine.palette import DEFAULT_PALETTE
from app.engine.random_source import RandomSource
from app.utils.rasterizer import CANVAS_RGBA, glyph_mask, render, render_png

# Top-left pixel only
_DOT = Glyph(id=2, bitmap=1 << 63)


def _single_cell_grid(bg_color=1, fg_glyph=None, fg_color=None, index=0):
    grid = Grid()
    grid.bg_glyphs[index] = 1
    grid.bg_colors[index] = bg_color
    grid.fg_glyphs[index] = fg_glyph
    grid.fg_colors[index] = fg_color
    return grid


def test_glyph_mask_bit_order():
    mask = glyph_mask(_DOT)
    assert mask[0, 0]
    assert mask.sum() == 1
    last = glyph_mask(Glyph(id=3, bitmap=1))
    assert last[7, 7]


def test_empty_grid_is_canvas_grey():
    image = render(Grid(), GlyphPool(), cell_pixel_size=8)
    assert image.shape == (72, 72, 4)
    assert image.dtype == np.uint8
    assert (image == np.array(CANVAS_RGBA, dtype=np.uint8)).all()


def test_background_fills_cell():
    image = render(_single_cell_grid(bg_color=3), GlyphPool(), cell_pixel_size=16)
    assert tuple(image[0, 0]) == (*DEFAULT_PALETTE[2], 255)
    assert tuple(image[15, 15]) == (*DEFAULT_PALETTE[2], 255)
    assert tuple(image[16, 16]) == CANVAS_RGBA


def test_foreground_subpixels_are_centred():
    # 20px cell → 2px sub-pixels, 2px inset
    grid = _single_cell_grid(bg_color=1, fg_glyph=2, fg_color=5)
    image = render(grid, GlyphPool([_DOT]), cell_pixel_size=20)
    red = (*DEFAULT_PALETTE[4], 255)
    black = (*DEFAULT_PALETTE[0], 255)
    assert tuple(image[2, 2]) == red
    assert tuple(image[3, 3]) == red
    assert tuple(image[1, 1]) == black
    assert tuple(image[4, 4]) == black


def test_missing_glyph_paints_nothing():
    grid = _single_cell_grid(bg_color=2, fg_glyph=77, fg_color=5)
    image = render(grid, GlyphPool([_DOT]), cell_pixel_size=8)
    assert (image[:8, :8] == np.array((*DEFAULT_PALETTE[1], 255), dtype=np.uint8)).all()


@pytest.mark.parametrize("color", [0, 10, None])
def test_invalid_background_color_paints_nothing(color):
    image = render(_single_cell_grid(bg_color=color), GlyphPool(), cell_pixel_size=8)
    assert tuple(image[0, 0]) == CANVAS_RGBA


def test_erase_glyph_paints_nothing():
    grid = _single_cell_grid(bg_color=4, fg_glyph=0, fg_color=5)
    image = render(grid, GlyphPool([Glyph(id=0, bitmap=(1 << 64) - 1)]), cell_pixel_size=8)
    assert tuple(image[4, 4]) == (*DEFAULT_PALETTE[3], 255)


def test_cell_position_follows_row_major_index():
    grid = _single_cell_grid(bg_color=9, index=cell_index(1, 2))
    image = render(grid, GlyphPool(), cell_pixel_size=8)
    assert tuple(image[8, 16]) == (*DEFAULT_PALETTE[8], 255)
    assert tuple(image[16, 8]) == CANVAS_RGBA


def test_cell_size_too_small():
    with pytest.raises(ValueError):
        render(Grid(), GlyphPool(), cell_pixel_size=7)


def test_render_is_pure(glyph_pool):
    grid, _ = Composer().generate([0, 3, 5, 8], 6, glyph_pool, RandomSource(2))
    before = grid.copy()
    assert np.array_equal(render(grid, glyph_pool), render(grid, glyph_pool))
    assert grid == before


def test_render_png(glyph_pool):
    grid, _ = Composer().generate([1, 4], 2, glyph_pool, RandomSource(8))
    data = render_png(grid, glyph_pool, cell_pixel_size=16)
    assert data.startswith(b"\x89PNG")
    image = Image.open(io.BytesIO(data))
    assert image.size == (144, 144)
    assert image.mode == "RGBA"
