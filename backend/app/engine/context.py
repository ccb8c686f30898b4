"""Grid, AuxState and LayoutContext — the state flowing through generation and editing.

Grid         → four parallel 81-length arrays, row-major (i = row*9 + col)
AuxState     → word placement metadata produced alongside the grid
LayoutContext → the single mutable object a pattern layout writes into
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.engine.config import EngineConfig
from app.engine.glyphs import BLOCK_GLYPH_ID, ERASE_GLYPH_ID, TypographyTable
from app.engine.random_source import RandomSource

GRID_SIZE = 9
CELL_COUNT = GRID_SIZE * GRID_SIZE
INTERIOR_ROWS = range(1, GRID_SIZE - 1)
INTERIOR_COLS = range(1, GRID_SIZE - 1)


def cell_index(row: int, col: int) -> int:
    return row * GRID_SIZE + col


def cell_position(index: int) -> tuple[int, int]:
    return divmod(index, GRID_SIZE)


def _empty() -> list[int | None]:
    return [None] * CELL_COUNT


@dataclass
class Grid:
    """Four parallel arrays describing every cell of the artwork."""

    bg_glyphs: list[int | None] = field(default_factory=_empty)
    fg_glyphs: list[int | None] = field(default_factory=_empty)
    bg_colors: list[int | None] = field(default_factory=_empty)
    fg_colors: list[int | None] = field(default_factory=_empty)

    def copy(self) -> Grid:
        return Grid(
            bg_glyphs=list(self.bg_glyphs),
            fg_glyphs=list(self.fg_glyphs),
            bg_colors=list(self.bg_colors),
            fg_colors=list(self.fg_colors),
        )

    def is_occupied(self, index: int) -> bool:
        return self.bg_glyphs[index] is not None

    @property
    def is_empty(self) -> bool:
        return all(g is None for g in self.bg_glyphs)

    @property
    def is_generated(self) -> bool:
        """Every cell carries a background — the shape a finished artwork has."""
        return all(g is not None and g >= BLOCK_GLYPH_ID for g in self.bg_glyphs)

    def used_colors(self) -> set[int]:
        return {c for c in self.bg_colors + self.fg_colors if c is not None and c > 0}

    def to_dict(self) -> dict[str, list[int | None]]:
        return {
            "bg_glyphs": list(self.bg_glyphs),
            "fg_glyphs": list(self.fg_glyphs),
            "bg_colors": list(self.bg_colors),
            "fg_colors": list(self.fg_colors),
        }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_grid(grid: Grid, palette_size: int = 9) -> list[str]:
    """Return a list of problems; empty means the grid is structurally valid."""
    problems: list[str] = []
    arrays = grid.to_dict()
    for name, values in arrays.items():
        if not isinstance(values, list) or len(values) != CELL_COUNT:
            problems.append(f"{name}: expected {CELL_COUNT} entries")
    if problems:
        return problems

    for i in range(CELL_COUNT):
        bg_g, fg_g = grid.bg_glyphs[i], grid.fg_glyphs[i]
        bg_c, fg_c = grid.bg_colors[i], grid.fg_colors[i]

        if bg_g is not None and (not _is_int(bg_g) or bg_g < BLOCK_GLYPH_ID):
            problems.append(f"cell {i}: invalid background glyph {bg_g!r}")
        if fg_g is not None and (not _is_int(fg_g) or fg_g < ERASE_GLYPH_ID):
            problems.append(f"cell {i}: invalid foreground glyph {fg_g!r}")
        for label, c in (("background", bg_c), ("foreground", fg_c)):
            if c is not None and (not _is_int(c) or not 0 <= c <= palette_size):
                problems.append(f"cell {i}: {label} color {c!r} out of range")

        if bg_g is not None and bg_c is None:
            problems.append(f"cell {i}: background glyph without color")
        if fg_g not in (None, ERASE_GLYPH_ID) and fg_c is None:
            problems.append(f"cell {i}: foreground glyph without color")
        if fg_g is not None and bg_g is None:
            problems.append(f"cell {i}: foreground without background")

    return problems


@dataclass
class AuxState:
    """Word placement metadata; regenerated with every grid."""

    typo_row: int | None = None
    typo_row2: int | None = None
    typo_col: int | None = None
    # One word column per interior row (complexity 10)
    typo_cols: list[int | None] = field(default_factory=lambda: [None] * 7)
    # "horizontal" / "vertical" for the 4-letter word placement
    orientation: str | None = None
    # Variation indices used by the layout
    variations: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "typo_row": self.typo_row,
            "typo_row2": self.typo_row2,
            "typo_col": self.typo_col,
            "typo_cols": list(self.typo_cols),
            "orientation": self.orientation,
            "variations": list(self.variations),
        }


@dataclass
class EditorState:
    """Everything the editor persists between transitions."""

    selected_colors: list[int] = field(default_factory=list)
    complexity: int = 1
    grid: Grid = field(default_factory=Grid)
    aux: AuxState = field(default_factory=AuxState)
    has_generated: bool = False
    armed_glyph: int | None = None
    should_generate: bool = False

    @property
    def color_values(self) -> list[int]:
        """Selected colors as stored grid values (palette index + 1)."""
        return [idx + 1 for idx in self.selected_colors]


@dataclass
class LayoutContext:
    """Shared state a pattern layout reads from and writes into."""

    config: EngineConfig
    rng: RandomSource
    typography: TypographyTable
    complexity: int
    # Graphic glyph ids drawn for this generation (shuffled, never empty)
    graphic_glyphs: list[int]
    # Variation indices chosen for this generation
    variation_a: int = 0
    variation_b: int = 0
    short_variation: int = 0
    grid: Grid = field(default_factory=Grid)
    aux: AuxState = field(default_factory=AuxState)

    @property
    def corner_glyph(self) -> int:
        return self.graphic_glyphs[0]

    @property
    def edge_glyphs(self) -> list[int]:
        if len(self.graphic_glyphs) > 1:
            return self.graphic_glyphs[1:]
        return [self.corner_glyph]

    def random_graphic(self) -> int:
        return self.rng.choice(self.graphic_glyphs)

    def word_letter(self, variation: int, row: int) -> int:
        """Letter of the 7-letter word that belongs to interior ``row``."""
        return self.typography.glyph_at(variation, row - 1)

    def short_word(self) -> list[int]:
        return self.typography.short_word(self.short_variation)

    def set_fg(self, row: int, col: int, glyph_id: int) -> None:
        self.grid.fg_glyphs[cell_index(row, col)] = glyph_id

    def interior_cells(self) -> list[tuple[int, int]]:
        return [(r, c) for r in INTERIOR_ROWS for c in INTERIOR_COLS]


def take_glyphs(glyphs: list[int], n: int) -> list[int]:
    """First ``n`` glyphs, repeating the last available one when short."""
    if not glyphs:
        return [BLOCK_GLYPH_ID] * n
    picked = glyphs[:n]
    while len(picked) < n:
        picked.append(picked[-1])
    return picked
