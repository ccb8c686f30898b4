"""P05 — Vertical word in one random column over 2×2 blocks of shared glyphs."""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import FrameStyle, PatternKind, pattern


@pattern(
    kind=PatternKind.COLUMN_BLOCKS,
    frame=FrameStyle.U,
    description="Vertical word, remaining cells grouped into 2×2 blocks",
)
def column_blocks(ctx: LayoutContext) -> None:
    ctx.aux.typo_col = ctx.rng.next_int(7) + 1
    ctx.aux.variations = [ctx.variation_a]
    block_glyphs: dict[tuple[int, int], int] = {}

    for row, col in ctx.interior_cells():
        if col == ctx.aux.typo_col:
            ctx.set_fg(row, col, ctx.word_letter(ctx.variation_a, row))
            continue
        block = ((row - 1) // 2 * 2 + 1, (col - 1) // 2 * 2 + 1)
        if block not in block_glyphs:
            block_glyphs[block] = ctx.random_graphic()
        ctx.set_fg(row, col, block_glyphs[block])
