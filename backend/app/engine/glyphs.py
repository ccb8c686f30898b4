"""Glyphs, the glyph pool, and the typographic lookup table.

A glyph is an 8×8 monochrome bitmap packed into a 64-bit integer:
bit ``63 - (y*8 + x)`` set means pixel (x, y) is painted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from app.engine.config import EngineConfig

logger = logging.getLogger(__name__)

ERASE_GLYPH_ID = 0
BLOCK_GLYPH_ID = 1

_BITMAP_MAX = (1 << 64) - 1


def parse_bitmap(value: int | str) -> int:
    """Parse a bitmap given as int, decimal string, or ``0x`` hex string."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid bitmap: {value!r}")
    if isinstance(value, int):
        bitmap = value
    elif isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            bitmap = int(text, 16)
        else:
            bitmap = int(text, 10)
    else:
        raise ValueError(f"Invalid bitmap: {value!r}")

    if not 0 <= bitmap <= _BITMAP_MAX:
        raise ValueError(f"Bitmap out of 64-bit range: {value!r}")
    return bitmap


@dataclass(frozen=True)
class Glyph:
    id: int
    bitmap: int

    def is_set(self, x: int, y: int) -> bool:
        return bool(self.bitmap >> (63 - (y * 8 + x)) & 1)

    def to_record(self) -> dict[str, Any]:
        return {"id": self.id, "bitmap": str(self.bitmap)}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Glyph:
        return cls(id=int(record["id"]), bitmap=parse_bitmap(record["bitmap"]))


BLOCK_GLYPH = Glyph(id=BLOCK_GLYPH_ID, bitmap=_BITMAP_MAX)


class GlyphPool:
    """Glyphs available to the generator, keyed by id."""

    def __init__(self, glyphs: Iterable[Glyph] = ()) -> None:
        self._glyphs: dict[int, Glyph] = {}
        for g in glyphs:
            self._glyphs[g.id] = g

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> GlyphPool:
        glyphs = []
        for record in records:
            try:
                glyphs.append(Glyph.from_record(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed glyph record %r: %s", record, e)
        return cls(glyphs)

    def to_records(self) -> list[dict[str, Any]]:
        return [g.to_record() for g in self]

    def get(self, glyph_id: int | None) -> Glyph | None:
        if glyph_id is None:
            return None
        return self._glyphs.get(glyph_id)

    def __contains__(self, glyph_id: object) -> bool:
        return glyph_id in self._glyphs

    def __iter__(self) -> Iterator[Glyph]:
        return iter(sorted(self._glyphs.values(), key=lambda g: g.id))

    def __len__(self) -> int:
        return len(self._glyphs)

    @property
    def ids(self) -> list[int]:
        return sorted(self._glyphs)

    def graphic_ids(self, config: EngineConfig | None = None) -> list[int]:
        cfg = config or EngineConfig()
        return [gid for gid in self.ids if cfg.is_graphic(gid)]


@dataclass(frozen=True)
class TypoPosition:
    variation: int
    letter: int


class TypographyTable:
    """Lookup ``glyph_id → (variation, letter position)`` and back.

    Built once from the declared groupings; positions are never derived from
    raw id arithmetic after construction.
    """

    def __init__(
        self,
        variations: list[list[int]],
        short_word_positions: tuple[int, ...] = (0, 1, 6, 5),
    ) -> None:
        if not variations:
            raise ValueError("At least one typographic variation is required")
        lengths = {len(v) for v in variations}
        if len(lengths) != 1:
            raise ValueError("All typographic variations must have the same length")

        self.variations = [list(v) for v in variations]
        self.short_word_positions = tuple(short_word_positions)
        self._lookup: dict[int, TypoPosition] = {}
        for v_idx, run in enumerate(self.variations):
            for letter, glyph_id in enumerate(run):
                if glyph_id in self._lookup:
                    raise ValueError(f"Glyph {glyph_id} appears in more than one variation")
                self._lookup[glyph_id] = TypoPosition(variation=v_idx, letter=letter)

    @classmethod
    def from_config(cls, config: EngineConfig | None = None) -> TypographyTable:
        cfg = config or EngineConfig()
        variations = []
        for v in range(cfg.typo_variation_count):
            start = cfg.typo_first_id + v * cfg.typo_word_length
            variations.append(list(range(start, start + cfg.typo_word_length)))
        return cls(variations, cfg.short_word_positions)

    @property
    def variation_count(self) -> int:
        return len(self.variations)

    @property
    def word_length(self) -> int:
        return len(self.variations[0])

    def lookup(self, glyph_id: int | None) -> TypoPosition | None:
        if glyph_id is None:
            return None
        return self._lookup.get(glyph_id)

    def is_typographic(self, glyph_id: int | None) -> bool:
        return self.lookup(glyph_id) is not None

    def word(self, variation: int) -> list[int]:
        """The 7-letter word of a variation."""
        return list(self.variations[variation])

    def short_word(self, variation: int) -> list[int]:
        """The 4-letter word of a variation."""
        run = self.variations[variation]
        return [run[p] for p in self.short_word_positions]

    def glyph_at(self, variation: int, letter: int) -> int:
        return self.variations[variation][letter]
