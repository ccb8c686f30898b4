"""Composer — runs one pattern layout, paints the frame, then assigns colors."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

from app.engine.color_roles import assign_color_roles
from app.engine.config import EngineConfig
from app.engine.context import GRID_SIZE, AuxState, Grid, LayoutContext, cell_index
from app.engine.errors import InsufficientColors
from app.engine.frame import is_frame_cell, paint_frame
from app.engine.glyphs import BLOCK_GLYPH_ID, GlyphPool, TypographyTable
from app.engine.palette import DEFAULT_PALETTE, color_value
from app.engine.random_source import RandomSource
from app.engine.registry import PatternRegistry, load_builtin_patterns

logger = logging.getLogger(__name__)


def normalize_selection(selected_colors: Sequence[int], palette_size: int = len(DEFAULT_PALETTE)) -> list[int]:
    """Deduplicate palette indices, keeping pick order; reject out-of-range ones."""
    seen: list[int] = []
    for idx in selected_colors:
        if isinstance(idx, bool) or not isinstance(idx, int) or not 0 <= idx < palette_size:
            raise ValueError(f"Palette index out of range: {idx!r}")
        if idx not in seen:
            seen.append(idx)
    return seen


class Composer:
    """Builds a complete grid from a color selection and a complexity level."""

    def __init__(
        self,
        registry: PatternRegistry | None = None,
        config: EngineConfig | None = None,
        typography: TypographyTable | None = None,
    ) -> None:
        self.registry = registry or load_builtin_patterns()
        self.config = config or EngineConfig()
        self.typography = typography or TypographyTable.from_config(self.config)

    def generate(
        self,
        selected_colors: Sequence[int],
        complexity: int,
        glyph_pool: GlyphPool,
        rng: RandomSource | None = None,
    ) -> tuple[Grid, AuxState]:
        start = time.perf_counter()
        selection = normalize_selection(selected_colors)
        if len(selection) < self.config.min_colors:
            raise InsufficientColors(len(selection), self.config.min_colors)

        spec = self.registry.get(complexity)
        rng = rng or RandomSource()
        colors = [color_value(idx) for idx in selection]

        graphic = rng.shuffle(glyph_pool.graphic_ids(self.config))
        graphic = graphic[: self.config.glyph_count(complexity)] or [BLOCK_GLYPH_ID]

        scheme = assign_color_roles(colors, rng, rows=GRID_SIZE)

        count = self.typography.variation_count
        ctx = LayoutContext(
            config=self.config,
            rng=rng,
            typography=self.typography,
            complexity=int(spec.kind),
            graphic_glyphs=graphic,
            variation_a=rng.next_int(count),
            variation_b=rng.next_int(count),
            short_variation=rng.next_int(count),
        )

        spec.fn(ctx)
        paint_frame(ctx, spec.frame)
        self._paint_colors(ctx, scheme)

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Generated complexity %d (%s) with %d colors, %d graphic glyphs in %.1fms",
            int(spec.kind),
            spec.kind.name,
            len(colors),
            len(graphic),
            elapsed,
        )
        return ctx.grid, ctx.aux

    def _paint_colors(self, ctx: LayoutContext, scheme) -> None:
        grid = ctx.grid
        for row in range(GRID_SIZE):
            for col in range(GRID_SIZE):
                i = cell_index(row, col)
                if grid.fg_glyphs[i] is None:
                    # Fill any cell a layout left empty
                    grid.fg_glyphs[i] = ctx.random_graphic()
                bg, fg = scheme.colors_for(
                    row,
                    col,
                    frame=is_frame_cell(row, col),
                    typographic=self.typography.is_typographic(grid.fg_glyphs[i]),
                    rng=ctx.rng,
                )
                grid.bg_glyphs[i] = BLOCK_GLYPH_ID
                grid.bg_colors[i] = bg
                grid.fg_colors[i] = fg


_default_composer: Composer | None = None


def generate(
    selected_colors: Sequence[int],
    complexity: int,
    glyph_pool: GlyphPool,
    rng: RandomSource | None = None,
    config: EngineConfig | None = None,
) -> tuple[Grid, AuxState]:
    """Generate a grid with the built-in patterns."""
    global _default_composer
    if config is not None:
        return Composer(config=config).generate(selected_colors, complexity, glyph_pool, rng)
    if _default_composer is None:
        _default_composer = Composer()
    return _default_composer.generate(selected_colors, complexity, glyph_pool, rng)
