"""P08 — Two word rows chosen from {2, 4, 6}.

One row carries the 4-letter word (cols 1-4), another the 7-letter word
(cols 1-7). Everything else shares one graphic glyph per row.
"""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import FrameStyle, PatternKind, pattern

_WORD_ROWS = (2, 4, 6)


@pattern(
    kind=PatternKind.TWO_WORDS,
    frame=FrameStyle.U,
    description="4-letter and 7-letter words on two of rows 2/4/6",
)
def two_words(ctx: LayoutContext) -> None:
    short = ctx.short_word()
    word = ctx.typography.word(ctx.variation_a)

    ctx.aux.typo_row = ctx.rng.choice(_WORD_ROWS)
    ctx.aux.typo_row2 = ctx.rng.choice([r for r in _WORD_ROWS if r != ctx.aux.typo_row])
    ctx.aux.orientation = "horizontal"
    ctx.aux.variations = [ctx.short_variation, ctx.variation_a]
    row_glyphs: dict[int, int] = {}

    for row, col in ctx.interior_cells():
        if row == ctx.aux.typo_row and 1 <= col <= 4:
            ctx.set_fg(row, col, short[col - 1])
        elif row == ctx.aux.typo_row2:
            ctx.set_fg(row, col, word[col - 1])
        else:
            if row not in row_glyphs:
                row_glyphs[row] = ctx.random_graphic()
            ctx.set_fg(row, col, row_glyphs[row])
