"""P10 — One word letter per row at a per-row random column, over 3×3 glyph blocks."""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import PatternKind, pattern


@pattern(
    kind=PatternKind.SCATTERED_WORDS,
    description="Per-row random word column, remaining cells in 3×3 blocks",
)
def scattered_words(ctx: LayoutContext) -> None:
    ctx.aux.typo_cols = [ctx.rng.next_int(7) + 1 for _ in range(7)]
    ctx.aux.variations = [ctx.variation_a]
    block_glyphs: dict[tuple[int, int], int] = {}

    for row, col in ctx.interior_cells():
        if col == ctx.aux.typo_cols[row - 1]:
            ctx.set_fg(row, col, ctx.word_letter(ctx.variation_a, row))
            continue
        block = ((row - 1) // 3 * 3 + 1, (col - 1) // 3 * 3 + 1)
        if block not in block_glyphs:
            block_glyphs[block] = ctx.random_graphic()
        ctx.set_fg(row, col, block_glyphs[block])
