"""Structural frame — the outer ring painted with corner/edge glyphs.

The ring is rows 0 and 8 plus columns 0 and 8, including the gutter cells
where column 2 crosses the frame rows. Interior layouts never touch it.
"""

from __future__ import annotations

from app.engine.context import GRID_SIZE, LayoutContext, cell_index, take_glyphs
from app.engine.registry import FrameStyle

_LAST = GRID_SIZE - 1
_CORNERS = {(0, 0), (0, _LAST), (_LAST, 0), (_LAST, _LAST)}


def is_frame_cell(row: int, col: int) -> bool:
    return row in (0, _LAST) or col in (0, _LAST)


def frame_cells() -> list[tuple[int, int]]:
    return [(r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE) if is_frame_cell(r, c)]


def frame_glyph_set(ctx: LayoutContext, style: FrameStyle) -> list[int]:
    """Glyph ids the frame may use for a given style."""
    if style is FrameStyle.SIDES:
        return take_glyphs(ctx.edge_glyphs, 4)
    if style is FrameStyle.U:
        return take_glyphs(ctx.edge_glyphs, 2)
    return [ctx.corner_glyph, *ctx.edge_glyphs]


def _side_glyph(row: int, col: int, sides: list[int]) -> int:
    # Precedence: top, right, bottom, left
    if row == 0:
        return sides[0]
    if col == _LAST:
        return sides[1]
    if row == _LAST:
        return sides[2]
    return sides[3]


def _u_glyph(row: int, u: list[int]) -> int:
    return u[0] if row <= 3 else u[1]


def paint_frame(ctx: LayoutContext, style: FrameStyle) -> None:
    """Write frame foreground glyphs for every ring cell."""
    glyphs = frame_glyph_set(ctx, style)

    for row, col in frame_cells():
        if style is FrameStyle.SIDES:
            glyph = _side_glyph(row, col, glyphs)
        elif style is FrameStyle.U:
            glyph = _u_glyph(row, glyphs)
        elif (row, col) in _CORNERS:
            glyph = ctx.corner_glyph
        else:
            glyph = ctx.rng.choice(ctx.edge_glyphs)
        ctx.grid.fg_glyphs[cell_index(row, col)] = glyph
