"""The fixed 9-color palette.

Grid cells store colors as ``palette_index + 1`` (1..9); 0 and None mean
"no color".
"""

from __future__ import annotations

RGB = tuple[int, int, int]

DEFAULT_PALETTE: tuple[RGB, ...] = (
    (36, 17, 10),     # black
    (153, 153, 153),  # grey
    (253, 210, 1),    # yellow
    (255, 95, 17),    # orange
    (255, 0, 0),      # red
    (224, 150, 182),  # pink
    (7, 145, 83),     # green
    (17, 139, 203),   # light blue
    (0, 82, 255),     # base blue
)


def color_value(palette_index: int) -> int:
    """Palette index (0-based) → stored color value (1-based)."""
    return palette_index + 1


def palette_index(value: int) -> int:
    return value - 1


def rgb_for(value: int | None, palette: tuple[RGB, ...] = DEFAULT_PALETTE) -> RGB | None:
    """RGB triple for a stored color value, or None when out of range."""
    if value is None or isinstance(value, bool):
        return None
    if not 1 <= value <= len(palette):
        return None
    return palette[value - 1]
