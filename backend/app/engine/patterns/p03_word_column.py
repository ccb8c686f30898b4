"""P03 — 7-letter word down one random column; random graphic glyphs elsewhere."""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import PatternKind, pattern


@pattern(kind=PatternKind.WORD_COLUMN, description="Vertical 7-letter word at one random column")
def word_column(ctx: LayoutContext) -> None:
    ctx.aux.typo_col = ctx.rng.next_int(7) + 1
    ctx.aux.variations = [ctx.variation_a]

    for row, col in ctx.interior_cells():
        if col == ctx.aux.typo_col:
            ctx.set_fg(row, col, ctx.word_letter(ctx.variation_a, row))
        else:
            ctx.set_fg(row, col, ctx.random_graphic())
