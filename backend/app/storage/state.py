"""Translate EditorState to and from the LocalStore keys.

Stored arrays that are missing or empty mean "not generated yet". Arrays with
the wrong length or out-of-range values are discarded with a warning and the
editor starts from an empty grid.
"""

from __future__ import annotations

import logging
from typing import Any

from app.engine.context import AuxState, EditorState, Grid, validate_grid
from app.engine.errors import InvalidPersistedState
from app.engine.palette import DEFAULT_PALETTE
from app.storage.local_store import LocalStore

logger = logging.getLogger(__name__)

SELECTED_COLORS = "selectedColors"
BG_GLYPHS = "bgGlyphs"
FG_GLYPHS = "fgGlyphs"
BG_COLORS = "bgColors"
FG_COLORS = "fgColors"
TYPO_ROW = "typoRow"
TYPO_ROW2 = "typoRow2"
TYPO_COL = "typoCol"
TYPO_COLS = "typoCols"
TYPO_VARIATIONS = "typoVariations"
TYPO_ORIENTATION = "typoOrientation"
COMPLEXITY = "complexity"
SHOULD_GENERATE = "shouldGenerateArt"
CACHED_GLYPHS = "cachedGlyphs"

_GRID_KEYS = (BG_GLYPHS, FG_GLYPHS, BG_COLORS, FG_COLORS)
_STATE_KEYS = (
    SELECTED_COLORS,
    *_GRID_KEYS,
    TYPO_ROW,
    TYPO_ROW2,
    TYPO_COL,
    TYPO_COLS,
    TYPO_VARIATIONS,
    TYPO_ORIENTATION,
    COMPLEXITY,
    SHOULD_GENERATE,
)


def save_state(store: LocalStore, state: EditorState) -> None:
    """Write the full editor state in one store write."""
    store.update(
        {
            SELECTED_COLORS: list(state.selected_colors),
            BG_GLYPHS: list(state.grid.bg_glyphs),
            FG_GLYPHS: list(state.grid.fg_glyphs),
            BG_COLORS: list(state.grid.bg_colors),
            FG_COLORS: list(state.grid.fg_colors),
            TYPO_ROW: state.aux.typo_row,
            TYPO_ROW2: state.aux.typo_row2,
            TYPO_COL: state.aux.typo_col,
            TYPO_COLS: list(state.aux.typo_cols),
            TYPO_VARIATIONS: list(state.aux.variations),
            TYPO_ORIENTATION: state.aux.orientation,
            COMPLEXITY: state.complexity,
            SHOULD_GENERATE: state.should_generate,
        }
    )


def clear_state(store: LocalStore) -> None:
    """Drop every editor key; the glyph cache survives."""
    store.remove(*_STATE_KEYS)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _load_selection(raw: Any, palette_size: int) -> list[int]:
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(_is_int(v) and 0 <= v < palette_size for v in raw):
        logger.warning("Discarding invalid stored color selection: %r", raw)
        return []
    return list(dict.fromkeys(raw))


def _load_complexity(raw: Any) -> int:
    if _is_int(raw) and 1 <= raw <= 10:
        return raw
    if raw is not None:
        logger.warning("Discarding invalid stored complexity: %r", raw)
    return 1


def _load_grid(store: LocalStore, palette_size: int) -> Grid:
    arrays = [store.get(key) for key in _GRID_KEYS]
    if all(a is None or a == [] for a in arrays):
        return Grid()

    if not all(isinstance(a, list) for a in arrays):
        raise InvalidPersistedState("Stored grid arrays are missing or not lists")
    grid = Grid(*[list(a) for a in arrays])
    problems = validate_grid(grid, palette_size)
    if problems:
        raise InvalidPersistedState("; ".join(problems[:5]))
    return grid


def _optional_int(raw: Any) -> int | None:
    return raw if _is_int(raw) else None


def _load_aux(store: LocalStore) -> AuxState:
    typo_cols = store.get(TYPO_COLS)
    if not isinstance(typo_cols, list) or len(typo_cols) != 7:
        typo_cols = [None] * 7
    variations = store.get(TYPO_VARIATIONS)
    if not isinstance(variations, list):
        variations = []
    orientation = store.get(TYPO_ORIENTATION)
    return AuxState(
        typo_row=_optional_int(store.get(TYPO_ROW)),
        typo_row2=_optional_int(store.get(TYPO_ROW2)),
        typo_col=_optional_int(store.get(TYPO_COL)),
        typo_cols=[_optional_int(c) for c in typo_cols],
        orientation=orientation if orientation in ("horizontal", "vertical") else None,
        variations=[v for v in variations if _is_int(v)],
    )


def load_state(store: LocalStore, palette_size: int = len(DEFAULT_PALETTE)) -> EditorState:
    """Rebuild an EditorState from the store; never raises on bad data."""
    state = EditorState(
        selected_colors=_load_selection(store.get(SELECTED_COLORS), palette_size),
        complexity=_load_complexity(store.get(COMPLEXITY)),
        should_generate=bool(store.get(SHOULD_GENERATE, False)),
    )

    try:
        state.grid = _load_grid(store, palette_size)
    except InvalidPersistedState as e:
        logger.warning("Discarding persisted grid: %s", e)
        return state

    if not state.grid.is_empty:
        state.aux = _load_aux(store)
    state.has_generated = state.grid.is_generated
    return state
