"""P04 — Diamond/X of letters over a symmetric block fill.

Cells on the two diagonals of the interior carry the word letter of their
row. The remaining cells take one of four symmetric sub-patterns:
    0  one glyph everywhere
    1  upper-left / lower-left / middle-left / right quadrants
    2  top and bottom rows vs. the middle row
    3  left half vs. right half
"""

from __future__ import annotations

from app.engine.context import LayoutContext, take_glyphs
from app.engine.registry import PatternKind, pattern

DIAMOND_CELLS: frozenset[tuple[int, int]] = frozenset({
    (1, 1), (1, 7),
    (2, 2), (2, 6),
    (3, 3), (3, 5),
    (4, 4),
    (5, 3), (5, 5),
    (6, 2), (6, 6),
    (7, 1), (7, 7),
})

_SUB_PATTERNS = 4


def _fill_glyph(sub_pattern: int, row: int, col: int, glyphs: list[int]) -> int:
    if sub_pattern == 0:
        return glyphs[0]
    if sub_pattern == 1:
        upper, bottom, left, right = glyphs[:4]
        if row <= 3 and col <= 4:
            return upper
        if row >= 5 and col <= 4:
            return bottom
        if col < 4:
            return left
        return right
    if sub_pattern == 2:
        outer, middle = glyphs[:2]
        return outer if row <= 3 or row >= 5 else middle
    left, right = glyphs[:2]
    return left if col <= 4 else right


@pattern(kind=PatternKind.DIAMOND, description="Diamond of letters over a symmetric block fill")
def diamond(ctx: LayoutContext) -> None:
    ctx.aux.variations = [ctx.variation_a]
    sub_pattern = ctx.rng.next_int(_SUB_PATTERNS)
    fill = take_glyphs(ctx.rng.shuffle(ctx.graphic_glyphs), 4)

    for row, col in ctx.interior_cells():
        if (row, col) in DIAMOND_CELLS:
            ctx.set_fg(row, col, ctx.word_letter(ctx.variation_a, row))
        else:
            ctx.set_fg(row, col, _fill_glyph(sub_pattern, row, col, fill))
