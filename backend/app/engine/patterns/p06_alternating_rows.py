"""P06 — Alternating banding of two variations.

Odd interior rows repeat the letter of variation A for that row, even rows the
letter of an independently chosen variation B.
"""

from __future__ import annotations

from app.engine.context import LayoutContext
from app.engine.registry import PatternKind, pattern


@pattern(kind=PatternKind.ALTERNATING_ROWS, description="Odd/even rows from two word variations")
def alternating_rows(ctx: LayoutContext) -> None:
    ctx.aux.variations = [ctx.variation_a, ctx.variation_b]

    for row, col in ctx.interior_cells():
        variation = ctx.variation_a if row % 2 == 1 else ctx.variation_b
        ctx.set_fg(row, col, ctx.word_letter(variation, row))
