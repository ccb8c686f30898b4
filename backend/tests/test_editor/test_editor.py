"""Tests for the GridEditor state machine."""

import pytest

from app.engine.context import EditorState
from app.engine.editor import GridEditor
from app.engine.errors import InsufficientColors
from app.engine.random_source import RandomSource
from app.storage import state as keys

CELL = 40


# ── Selection and generation ──


def test_select_colors_resets_and_flags(generated_editor, store):
    generated_editor.select_colors([1, 5])
    state = generated_editor.state
    assert state.selected_colors == [1, 5]
    assert state.grid.is_empty
    assert not state.has_generated
    assert state.should_generate
    assert store.get(keys.SHOULD_GENERATE) is True
    assert store.get(keys.SELECTED_COLORS) == [1, 5]


def test_generate_needs_two_colors(editor):
    editor.select_colors([3])
    with pytest.raises(InsufficientColors):
        editor.generate(2)
    assert not editor.state.has_generated


def test_generate_persists(generated_editor, store):
    state = generated_editor.state
    assert state.has_generated
    assert not state.should_generate
    assert state.complexity == 4
    assert store.get(keys.BG_COLORS) == state.grid.bg_colors
    assert store.get(keys.FG_GLYPHS) == state.grid.fg_glyphs
    assert store.get(keys.COMPLEXITY) == 4


def test_generate_defaults_to_current_complexity(generated_editor):
    generated_editor.generate()
    assert generated_editor.state.complexity == 4


# ── Glyph arming ──


def test_select_glyph(generated_editor):
    assert generated_editor.select_glyph(12)
    assert generated_editor.state.armed_glyph == 12
    assert not generated_editor.select_glyph(500)
    assert generated_editor.state.armed_glyph == 12


@pytest.mark.parametrize("key, expected", [("1", 1), ("9", 9), ("0", 10), ("x", None), ("-", None)])
def test_press_key(generated_editor, key, expected):
    assert generated_editor.press_key(key) == expected
    if expected is not None:
        assert generated_editor.state.armed_glyph == expected


# ── Clicks ──


def test_click_before_generation_is_noop(editor):
    editor.select_colors([0, 1, 2])
    assert editor.click(CELL) == "none"


def test_click_rejects_bad_index(generated_editor):
    with pytest.raises(ValueError):
        generated_editor.click(81)


def test_click_places_armed_glyph(generated_editor, store):
    generated_editor.select_glyph(7)
    fg_color = generated_editor.state.grid.fg_colors[CELL]
    assert generated_editor.click(CELL) == "placed"
    grid = generated_editor.state.grid
    assert grid.fg_glyphs[CELL] == 7
    assert grid.fg_colors[CELL] == fg_color
    assert generated_editor.state.armed_glyph is None
    assert store.get(keys.FG_GLYPHS)[CELL] == 7


def test_placement_assigns_color_when_missing(generated_editor):
    grid = generated_editor.state.grid
    grid.fg_glyphs[CELL] = 0
    grid.fg_colors[CELL] = None
    generated_editor.select_glyph(5)
    generated_editor.click(CELL)
    assert grid.fg_colors[CELL] in generated_editor.state.color_values
    assert grid.fg_colors[CELL] != grid.bg_colors[CELL]


def test_click_cycles_foreground(generated_editor):
    grid = generated_editor.state.grid
    old_fg, bg = grid.fg_colors[CELL], grid.bg_colors[CELL]
    assert generated_editor.click(CELL) == "foreground"
    assert grid.fg_colors[CELL] != old_fg
    assert grid.fg_colors[CELL] != bg
    assert grid.fg_colors[CELL] in generated_editor.state.color_values


def test_click_swaps_with_two_colors(editor):
    editor.select_colors([0, 8])
    editor.generate(2)
    grid = editor.state.grid
    bg, fg = grid.bg_colors[CELL], grid.fg_colors[CELL]
    assert editor.click(CELL) == "swap"
    assert (grid.bg_colors[CELL], grid.fg_colors[CELL]) == (fg, bg)


def test_shift_click_cycles_background(generated_editor):
    grid = generated_editor.state.grid
    old_bg, fg = grid.bg_colors[CELL], grid.fg_colors[CELL]
    assert generated_editor.click(CELL, shift=True) == "background"
    assert grid.bg_colors[CELL] != old_bg
    assert grid.bg_colors[CELL] != fg


def test_double_tap_cycles_background(generated_editor, clock):
    grid = generated_editor.state.grid
    bg_before = grid.bg_colors[CELL]

    assert generated_editor.click(CELL) == "foreground"
    clock.advance_ms(150)
    assert generated_editor.click(CELL) == "background"

    assert grid.bg_colors[CELL] != bg_before
    assert grid.bg_colors[CELL] != grid.fg_colors[CELL]


def test_slow_second_tap_is_a_plain_click(generated_editor, clock):
    generated_editor.click(CELL)
    clock.advance_ms(301)
    assert generated_editor.click(CELL) == "foreground"


def test_taps_on_different_cells_are_not_double(generated_editor, clock):
    generated_editor.click(CELL)
    clock.advance_ms(50)
    assert generated_editor.click(CELL + 1) == "foreground"


def test_tap_at_exact_window_is_a_new_tap(generated_editor, clock):
    clock.now = 0.0
    generated_editor.click(CELL)
    clock.advance_ms(300)
    assert generated_editor.click(CELL) == "foreground"


def test_third_quick_tap_starts_a_new_pair(generated_editor, clock):
    generated_editor.click(CELL)
    clock.advance_ms(50)
    assert generated_editor.click(CELL) == "background"
    clock.advance_ms(50)
    assert generated_editor.click(CELL) == "foreground"


def test_double_tap_window_is_configurable(store, glyph_pool, clock):
    editor = GridEditor(store, glyph_pool, rng=RandomSource(1), clock=clock, double_tap_window_ms=500)
    editor.select_colors([0, 1, 2])
    editor.generate(3)
    editor.click(CELL)
    clock.advance_ms(450)
    assert editor.click(CELL) == "background"


def test_shift_click_keeps_glyph_armed(generated_editor):
    generated_editor.select_glyph(3)
    assert generated_editor.click(CELL, shift=True) == "background"
    assert generated_editor.state.armed_glyph == 3


# ── Whole-grid transitions ──


def test_variations_are_noops_before_generation(editor):
    editor.select_colors([0, 1])
    assert editor.shuffle_colors() is False
    assert editor.generate_variation() is None
    assert editor.generate_color_variation() is None


def test_shuffle_colors_persists(generated_editor, store):
    assert generated_editor.shuffle_colors()
    grid = generated_editor.state.grid
    assert store.get(keys.FG_COLORS) == grid.fg_colors
    assert all(fg != bg for fg, bg in zip(grid.fg_colors, grid.bg_colors))


def test_generate_variation_updates_aux(generated_editor, typography):
    target = generated_editor.generate_variation()
    assert generated_editor.state.aux.variations == [target]
    letters = [g for g in generated_editor.state.grid.fg_glyphs if typography.is_typographic(g)]
    assert letters
    assert {typography.lookup(g).variation for g in letters} == {target}


def test_color_variation_keeps_grid_inside_selection(generated_editor):
    mapping = generated_editor.generate_color_variation()
    assert mapping
    state = generated_editor.state
    assert state.grid.used_colors() <= set(state.color_values)
    assert len(state.selected_colors) == len(set(state.selected_colors))


@pytest.mark.parametrize("seed", range(40))
def test_color_variation_keeps_selection_size_when_grid_shows_fewer_colors(generated_editor, seed):
    # Grid shows palette values 1 and 3; selected value 8 is nowhere on it
    grid = generated_editor.state.grid
    grid.bg_colors = [1] * 81
    grid.fg_colors = [3 if c is not None else None for c in grid.fg_colors]
    generated_editor.rng = RandomSource(seed)

    generated_editor.generate_color_variation()

    state = generated_editor.state
    assert len(state.selected_colors) == 3
    assert 7 in state.selected_colors
    assert state.grid.used_colors() <= set(state.color_values)


def test_reset_keeps_selection(generated_editor, store):
    generated_editor.reset()
    state = generated_editor.state
    assert state.grid.is_empty
    assert not state.has_generated
    assert state.selected_colors == [0, 2, 7]
    assert store.get(keys.BG_GLYPHS) == [None] * 81


def test_reset_can_forget_selection(generated_editor, store):
    generated_editor.reset(forget_selection=True)
    assert generated_editor.state.selected_colors == []
    assert keys.SELECTED_COLORS not in store
    assert keys.BG_GLYPHS not in store


# ── Resume ──


def test_resume_restores_grid(generated_editor, store, glyph_pool, clock):
    generated_editor.click(CELL)
    other = GridEditor(store, glyph_pool, rng=RandomSource(0), clock=clock)
    state = other.resume()
    assert state.grid == generated_editor.state.grid
    assert state.aux == generated_editor.state.aux
    assert state.selected_colors == [0, 2, 7]
    assert state.has_generated


def test_resume_generates_pending_art(editor, store, glyph_pool):
    editor.select_colors([2, 4, 6])
    other = GridEditor(store, glyph_pool, rng=RandomSource(0))
    state = other.resume()
    assert state.has_generated
    assert not state.should_generate
    assert state.grid.used_colors() <= {3, 5, 7}


def test_resume_on_empty_store(store, glyph_pool):
    state = GridEditor(store, glyph_pool).resume()
    assert state == EditorState()
