"""GridEditor — the interactive state machine over a generated grid.

Every transition that changes the grid or the selection writes the full state
back to the store before returning.

Click handling:
    armed glyph, plain click     → place glyph, disarm
    shift-click or double-tap    → cycle the cell's background color
    plain click, no armed glyph  → swap bg/fg (2 colors) or cycle the foreground
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from app.engine.composer import Composer, normalize_selection
from app.engine.config import EngineConfig
from app.engine.context import CELL_COUNT, AuxState, EditorState, Grid
from app.engine.glyphs import ERASE_GLYPH_ID, GlyphPool
from app.engine.palette import DEFAULT_PALETTE, RGB, palette_index
from app.engine.random_source import RandomSource
from app.engine.recolor import generate_color_variation, generate_variation, shuffle_colors
from app.storage.local_store import LocalStore
from app.storage.state import clear_state, load_state, save_state

logger = logging.getLogger(__name__)

# Keys "1".."9" arm glyphs 1-9, "0" arms glyph 10
_KEY_GLYPHS = {str(n): n for n in range(1, 10)} | {"0": 10}


def _next_color(current: int | None, values: Sequence[int], avoid: int | None) -> int | None:
    """Next value after ``current`` in ``values`` that is neither ``current`` nor ``avoid``."""
    if not values:
        return current
    start = values.index(current) if current in values else -1
    for step in range(1, len(values) + 1):
        candidate = values[(start + step) % len(values)]
        if candidate != avoid and candidate != current:
            return candidate
    return current


class GridEditor:
    """Owns one EditorState and applies user transitions to it."""

    def __init__(
        self,
        store: LocalStore,
        glyph_pool: GlyphPool,
        *,
        rng: RandomSource | None = None,
        config: EngineConfig | None = None,
        composer: Composer | None = None,
        palette: tuple[RGB, ...] = DEFAULT_PALETTE,
        double_tap_window_ms: int = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.glyph_pool = glyph_pool
        self.rng = rng or RandomSource()
        self.config = config or EngineConfig()
        self.composer = composer or Composer(config=self.config)
        self.palette = palette
        self.double_tap_window_ms = double_tap_window_ms
        self.clock = clock
        self.state = EditorState()
        # (timestamp in seconds, cell index) of the previous click
        self._last_tap: tuple[float, int] | None = None

    @property
    def typography(self):
        return self.composer.typography

    @property
    def can_edit(self) -> bool:
        return self.state.has_generated and len(self.state.selected_colors) >= self.config.min_colors

    def persist(self) -> None:
        save_state(self.store, self.state)

    # ── Lifecycle ──

    def resume(self) -> EditorState:
        """Load persisted state; generate right away if a generation was pending."""
        self.state = load_state(self.store, len(self.palette))
        self._last_tap = None
        logger.info(
            "Resumed editor: %d colors, complexity %d, generated=%s",
            len(self.state.selected_colors),
            self.state.complexity,
            self.state.has_generated,
        )
        if self.state.should_generate and len(self.state.selected_colors) >= self.config.min_colors:
            self.generate()
        return self.state

    def select_colors(self, indices: Sequence[int]) -> EditorState:
        """Replace the color selection; the grid is cleared until the next generate."""
        self.state.selected_colors = normalize_selection(indices, len(self.palette))
        self._clear_grid()
        self.state.should_generate = True
        self.persist()
        logger.info("Selected colors %s", self.state.selected_colors)
        return self.state

    def generate(self, complexity: int | None = None, rng: RandomSource | None = None) -> EditorState:
        """Compose a fresh grid. Raises InsufficientColors with fewer than 2 colors."""
        level = self.state.complexity if complexity is None else complexity
        if rng is not None:
            self.rng = rng
        grid, aux = self.composer.generate(
            self.state.selected_colors, level, self.glyph_pool, self.rng
        )
        self.state.grid = grid
        self.state.aux = aux
        self.state.complexity = level
        self.state.has_generated = True
        self.state.should_generate = False
        self.state.armed_glyph = None
        self._last_tap = None
        self.persist()
        return self.state

    def reset(self, forget_selection: bool = False) -> EditorState:
        """Back to the pre-generation state, keeping the color selection unless told otherwise."""
        self._clear_grid()
        self.state.should_generate = False
        if forget_selection:
            self.state.selected_colors = []
            clear_state(self.store)
        else:
            self.persist()
        logger.info("Editor reset")
        return self.state

    def _clear_grid(self) -> None:
        self.state.grid = Grid()
        self.state.aux = AuxState()
        self.state.has_generated = False
        self.state.armed_glyph = None
        self._last_tap = None

    # ── Glyph arming ──

    def select_glyph(self, glyph_id: int) -> bool:
        """Arm a glyph for the next click. Returns False when the pool lacks it."""
        if glyph_id != ERASE_GLYPH_ID and glyph_id not in self.glyph_pool:
            logger.warning("Glyph %s is not in the pool", glyph_id)
            return False
        self.state.armed_glyph = glyph_id
        logger.debug("Armed glyph %d", glyph_id)
        return True

    def press_key(self, key: str) -> int | None:
        """Keyboard shortcut for ``select_glyph``. Returns the armed id, if any."""
        glyph_id = _KEY_GLYPHS.get(key)
        if glyph_id is None or not self.select_glyph(glyph_id):
            return None
        return glyph_id

    # ── Cell clicks ──

    def _is_double_tap(self, index: int) -> bool:
        now = self.clock()
        last = self._last_tap
        if last is not None and last[1] == index and (now - last[0]) * 1000 < self.double_tap_window_ms:
            # A third tap starts a new pair
            self._last_tap = None
            return True
        self._last_tap = (now, index)
        return False

    def click(self, index: int, shift: bool = False) -> str:
        """Apply one click to cell ``index``. Returns the action taken."""
        if not 0 <= index < CELL_COUNT:
            raise ValueError(f"Cell index must be 0-{CELL_COUNT - 1}, got {index}")
        if not self.can_edit:
            logger.debug("Ignoring click on cell %d before generation", index)
            return "none"

        background_click = self._is_double_tap(index) or shift
        grid = self.state.grid
        values = self.state.color_values
        armed = self.state.armed_glyph

        if armed is not None and not background_click:
            grid.fg_glyphs[index] = armed
            if grid.fg_colors[index] is None and armed != ERASE_GLYPH_ID:
                choices = [v for v in values if v != grid.bg_colors[index]] or values
                grid.fg_colors[index] = self.rng.choice(choices)
            self.state.armed_glyph = None
            action = "placed"

        elif background_click and grid.bg_colors[index] is not None:
            grid.bg_colors[index] = _next_color(grid.bg_colors[index], values, grid.fg_colors[index])
            action = "background"

        elif grid.fg_glyphs[index] is not None and grid.fg_colors[index] is not None:
            if len(values) == 2:
                grid.bg_colors[index], grid.fg_colors[index] = grid.fg_colors[index], grid.bg_colors[index]
                action = "swap"
            else:
                grid.fg_colors[index] = _next_color(grid.fg_colors[index], values, grid.bg_colors[index])
                action = "foreground"

        else:
            return "none"

        logger.debug("Click on cell %d: %s", index, action)
        self.persist()
        return action

    # ── Whole-grid variations ──

    def shuffle_colors(self) -> bool:
        if not self.can_edit:
            logger.debug("Ignoring color shuffle before generation")
            return False
        self.state.grid = shuffle_colors(self.state.grid, self.rng)
        self.persist()
        return True

    def generate_variation(self) -> int | None:
        """Swap glyphs for new ones; returns the new letter variation."""
        if not self.can_edit:
            logger.debug("Ignoring glyph variation before generation")
            return None
        grid, target = generate_variation(
            self.state.grid, self.glyph_pool, self.typography, self.rng, self.config
        )
        self.state.grid = grid
        self.state.aux.variations = [target]
        self.persist()
        return target

    def generate_color_variation(self) -> dict[int, int] | None:
        """Recolor with unused palette colors; the selection follows the mapping."""
        if not self.can_edit:
            logger.debug("Ignoring color variation before generation")
            return None
        grid, mapping = generate_color_variation(
            self.state.grid,
            self.rng,
            len(self.palette),
            reserved=self.state.color_values,
        )
        self.state.grid = grid
        remapped = [palette_index(mapping.get(v, v)) for v in self.state.color_values]
        self.state.selected_colors = list(dict.fromkeys(remapped))
        self.persist()
        return mapping
