"""Engine configuration — grid geometry, glyph id ranges, typographic groupings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Constants shared by the composition engine, editor and rasterizer."""

    # 9×9 grid, row-major
    grid_size: int = 9

    # Selection must hold at least this many colors before generation
    min_colors: int = 2

    # Graphic (decorative) glyph ids, inclusive
    graphic_first_id: int = 1
    graphic_last_id: int = 15

    # Typographic glyphs: `typo_variation_count` runs of `typo_word_length`
    # consecutive ids starting at `typo_first_id` (canonical range 16-78).
    typo_first_id: int = 16
    typo_variation_count: int = 9
    typo_word_length: int = 7

    # Letter positions (within a 7-letter run) spelling the 4-letter word
    short_word_positions: tuple[int, ...] = (0, 1, 6, 5)

    # Upper bound on distinct graphic glyphs drawn per generation
    max_glyph_count: int = 10

    # Remote glyph sets are truncated to ids below this bound
    max_glyph_id: int = 79

    def is_graphic(self, glyph_id: int | None) -> bool:
        if glyph_id is None:
            return False
        return self.graphic_first_id <= glyph_id <= self.graphic_last_id

    def glyph_count(self, complexity: int) -> int:
        """Number of distinct graphic glyphs a layout of this complexity draws from."""
        if complexity == 1:
            return 1
        if complexity == 2:
            return 2
        if complexity == 3:
            return 4
        return min(complexity, self.max_glyph_count)
