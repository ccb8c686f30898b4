"""P02 — 7-letter word across one random row; random graphic glyphs elsewhere."""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import PatternKind, pattern


@pattern(kind=PatternKind.WORD_ROW, description="Horizontal 7-letter word at one random row")
def word_row(ctx: LayoutContext) -> None:
    word = ctx.typography.word(ctx.variation_a)
    ctx.aux.typo_row = ctx.rng.next_int(7) + 1
    ctx.aux.variations = [ctx.variation_a]

    for row, col in ctx.interior_cells():
        if row == ctx.aux.typo_row:
            ctx.set_fg(row, col, word[col - 1])
        else:
            ctx.set_fg(row, col, ctx.random_graphic())
