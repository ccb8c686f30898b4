"""Color role assignment — the number of selected colors picks the scheme.

Roles are drawn once per generation and reused for the whole grid; only the
8-color scheme draws per cell.

    2-3  background / interior / frame
    4    background + word color + top-half and bottom-half glyph colors
    5    four background bands, one shared glyph color
    6    three bands, each with its own background and glyph color
    7    3×3 blocks cycling three (bg, fg) pairs, plus a word color
    8    one structural color, everything else drawn per cell
    9    per-row backgrounds from a shuffled cycle of every color
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Sequence

from app.engine.random_source import RandomSource

logger = logging.getLogger(__name__)


class ColorPicker:
    """Draws colors preferring ones not yet used in this assignment pass."""

    def __init__(self, available: Sequence[int], rng: RandomSource) -> None:
        self.available = list(available)
        self.rng = rng
        self.used: set[int] = set()

    def pick(self, exclude: Sequence[int] = ()) -> int:
        allowed = [c for c in self.available if c not in exclude]
        unused = [c for c in allowed if c not in self.used]
        pool = unused or allowed
        color = self.rng.choice(pool) if pool else self.available[0]
        self.used.add(color)
        return color


class ColorScheme(abc.ABC):
    """Maps a cell to its (background, foreground) color values."""

    name = "base"

    @abc.abstractmethod
    def colors_for(
        self,
        row: int,
        col: int,
        *,
        frame: bool,
        typographic: bool,
        rng: RandomSource,
    ) -> tuple[int, int]:
        ...

    def roles(self) -> dict[str, object]:
        """Role → color mapping, for logging and inspection."""
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}


class SimpleScheme(ColorScheme):
    name = "simple"

    def __init__(self, background: int, interior: int, frame: int) -> None:
        self.background = background
        self.interior = interior
        self.frame = frame

    def colors_for(self, row, col, *, frame, typographic, rng):
        return self.background, self.frame if frame else self.interior


class SplitScheme(ColorScheme):
    name = "split"

    def __init__(self, background: int, typo: int, top: int, bottom: int) -> None:
        self.background = background
        self.typo = typo
        self.top = top
        self.bottom = bottom

    def colors_for(self, row, col, *, frame, typographic, rng):
        if typographic:
            return self.background, self.typo
        return self.background, self.top if row <= 4 else self.bottom


class BandedScheme(ColorScheme):
    name = "banded"

    # Rows 0-1, 2-3, 4-5, 6-8
    _BAND_OF_ROW = (0, 0, 1, 1, 2, 2, 3, 3, 3)

    def __init__(self, glyph: int, bands: list[int]) -> None:
        self.glyph = glyph
        self.bands = bands

    def colors_for(self, row, col, *, frame, typographic, rng):
        return self.bands[self._BAND_OF_ROW[row]], self.glyph


class PairedBandScheme(ColorScheme):
    name = "paired_bands"

    def __init__(self, pairs: list[tuple[int, int]]) -> None:
        self.pairs = pairs

    def colors_for(self, row, col, *, frame, typographic, rng):
        return self.pairs[min(row // 3, 2)]


class BlockScheme(ColorScheme):
    name = "blocks"

    def __init__(self, blocks: list[tuple[int, int]], typo: int) -> None:
        # blocks[block_row * 3 + block_col] = (bg, fg)
        self.blocks = blocks
        self.typo = typo

    def colors_for(self, row, col, *, frame, typographic, rng):
        bg, fg = self.blocks[(row // 3) * 3 + col // 3]
        return bg, self.typo if typographic else fg


class ChaosScheme(ColorScheme):
    name = "chaos"

    def __init__(self, structural: int, others: list[int]) -> None:
        self.structural = structural
        self.others = others

    def colors_for(self, row, col, *, frame, typographic, rng):
        bg = rng.choice(self.others)
        if frame or typographic:
            return bg, self.structural
        fg_pool = [c for c in self.others if c != bg] or self.others
        return bg, rng.choice(fg_pool)


class RowCycleScheme(ColorScheme):
    name = "row_cycle"

    def __init__(self, row_bg: list[int], row_fg: list[int]) -> None:
        self.row_bg = row_bg
        self.row_fg = row_fg

    def colors_for(self, row, col, *, frame, typographic, rng):
        return self.row_bg[row], self.row_fg[row]


def assign_color_roles(colors: Sequence[int], rng: RandomSource, rows: int = 9) -> ColorScheme:
    """Pick the scheme for ``len(colors)`` selected color values and draw its roles."""
    n = len(colors)
    picker = ColorPicker(colors, rng)

    if n == 4:
        bg = picker.pick()
        typo = picker.pick([bg])
        top = picker.pick([bg, typo])
        bottom = picker.pick([bg, typo, top])
        scheme: ColorScheme = SplitScheme(bg, typo, top, bottom)

    elif n == 5:
        glyph = picker.pick()
        bands: list[int] = []
        for _ in range(4):
            bands.append(picker.pick([glyph, *bands]))
        scheme = BandedScheme(glyph, bands)

    elif n == 6:
        bgs: list[int] = []
        for _ in range(3):
            bgs.append(picker.pick(bgs))
        fgs: list[int] = []
        for _ in range(3):
            fgs.append(picker.pick([*bgs, *fgs]))
        scheme = PairedBandScheme(list(zip(bgs, fgs)))

    elif n == 7:
        drawn: list[int] = []
        for _ in range(6):
            drawn.append(picker.pick(drawn))
        typo = picker.pick(drawn)
        pairs = list(zip(drawn[:3], drawn[3:]))
        # Every pair covers exactly 3 of the 9 blocks
        blocks = rng.shuffle(pairs * 3)
        scheme = BlockScheme(blocks, typo)

    elif n == 8:
        structural = picker.pick()
        scheme = ChaosScheme(structural, [c for c in colors if c != structural])

    elif n >= 9:
        shuffled = rng.shuffle(colors)
        row_bg = [shuffled[r % len(shuffled)] for r in range(rows)]
        row_fg = []
        for r in range(rows):
            others = [c for c in shuffled if c != row_bg[r]]
            row_fg.append(rng.choice(others) if others else shuffled[0])
        scheme = RowCycleScheme(row_bg, row_fg)

    else:
        bg = picker.pick()
        interior = picker.pick([bg]) if n >= 2 else bg
        frame = picker.pick([bg, interior]) if n >= 3 else interior
        scheme = SimpleScheme(bg, interior, frame)

    logger.debug("Color scheme %s for %d colors: %s", scheme.name, n, scheme.roles())
    return scheme
