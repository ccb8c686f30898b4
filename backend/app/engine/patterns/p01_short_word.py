"""P01 — Short word, random orientation.

The 4-letter word runs horizontally (row 1-7, starting col 1-3) or vertically
(col 1-7, starting row 1-3). Every other interior cell gets an independent
random graphic glyph.
"""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import PatternKind, pattern

_WORD_LEN = 4


@pattern(
    kind=PatternKind.SHORT_WORD,
    description="4-letter word at a random row/column offset, random graphic fill",
)
def short_word(ctx: LayoutContext) -> None:
    word = ctx.short_word()
    vertical = ctx.rng.random() < 0.5

    if vertical:
        word_col = ctx.rng.next_int(7) + 1
        start_row = ctx.rng.next_int(3) + 1
        placed = {(start_row + k, word_col): word[k] for k in range(_WORD_LEN)}
        ctx.aux.typo_col = word_col
        ctx.aux.typo_row = start_row
        ctx.aux.orientation = "vertical"
    else:
        word_row = ctx.rng.next_int(7) + 1
        start_col = ctx.rng.next_int(3) + 1
        placed = {(word_row, start_col + k): word[k] for k in range(_WORD_LEN)}
        ctx.aux.typo_row = word_row
        ctx.aux.typo_col = start_col
        ctx.aux.orientation = "horizontal"

    ctx.aux.variations = [ctx.short_variation]

    for row, col in ctx.interior_cells():
        if (row, col) in placed:
            ctx.set_fg(row, col, placed[(row, col)])
        else:
            ctx.set_fg(row, col, ctx.random_graphic())
