"""P09 — Word letters in columns 1, 3, 5, 7; one graphic glyph per even column.

The frame uses one glyph per side.
"""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import FrameStyle, PatternKind, pattern

_WORD_COLS = (1, 3, 5, 7)


@pattern(
    kind=PatternKind.WORD_COLUMNS,
    frame=FrameStyle.SIDES,
    description="Word read by row in odd columns, per-column glyphs between",
)
def word_columns(ctx: LayoutContext) -> None:
    ctx.aux.variations = [ctx.variation_a]
    col_glyphs: dict[int, int] = {}

    for row, col in ctx.interior_cells():
        if col in _WORD_COLS:
            ctx.set_fg(row, col, ctx.word_letter(ctx.variation_a, row))
            continue
        if col not in col_glyphs:
            col_glyphs[col] = ctx.random_graphic()
        ctx.set_fg(row, col, col_glyphs[col])
