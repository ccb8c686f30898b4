"""P07 — 4-letter word in one row (cols 1-4); one shared graphic glyph per row elsewhere."""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import PatternKind, pattern


@pattern(kind=PatternKind.SHORT_WORD_ROWS, description="4-letter word row over per-row glyph bands")
def short_word_rows(ctx: LayoutContext) -> None:
    word = ctx.short_word()
    ctx.aux.typo_row = ctx.rng.next_int(7) + 1
    ctx.aux.orientation = "horizontal"
    ctx.aux.variations = [ctx.short_variation]
    row_glyphs: dict[int, int] = {}

    for row, col in ctx.interior_cells():
        if row == ctx.aux.typo_row and 1 <= col <= 4:
            ctx.set_fg(row, col, word[col - 1])
            continue
        if row not in row_glyphs:
            row_glyphs[row] = ctx.random_graphic()
        ctx.set_fg(row, col, row_glyphs[row])
