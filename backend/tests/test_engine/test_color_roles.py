"""Tests for color role assignment."""

import pytest

from app.engine.color_roles import (
    BandedScheme,
    BlockScheme,
    ChaosScheme,
    ColorPicker,
    ColorScheme,
    PairedBandScheme,
    RowCycleScheme,
    SimpleScheme,
    SplitScheme,
    assign_color_roles,
)
from app.engine.random_source import RandomSource


def test_picker_prefers_unused_colors():
    picker = ColorPicker([1, 2, 3], RandomSource(0))
    picked = {picker.pick() for _ in range(3)}
    assert picked == {1, 2, 3}


def test_picker_falls_back_when_everything_excluded():
    picker = ColorPicker([4], RandomSource(0))
    assert picker.pick(exclude=[4]) == 4



def test_color_scheme_base_cannot_be_instantiated():
    with pytest.raises(TypeError):
        ColorScheme()


@pytest.mark.parametrize(
    "scheme",
    [SimpleScheme, SplitScheme, BandedScheme, PairedBandScheme, BlockScheme, ChaosScheme, RowCycleScheme],
)
def test_every_scheme_implements_colors_for(scheme):
    assert issubclass(scheme, ColorScheme)
    assert not scheme.__abstractmethods__


@pytest.mark.parametrize(
    "n, scheme_type",
    [
        (2, SimpleScheme),
        (3, SimpleScheme),
        (4, SplitScheme),
        (5, BandedScheme),
        (6, PairedBandScheme),
        (7, BlockScheme),
        (8, ChaosScheme),
        (9, RowCycleScheme),
    ],
)
def test_scheme_by_color_count(n, scheme_type):
    scheme = assign_color_roles(list(range(1, n + 1)), RandomSource(n))
    assert isinstance(scheme, scheme_type)


def test_roles_only_use_given_colors():
    colors = [2, 5, 9, 4]
    scheme = assign_color_roles(colors, RandomSource(3))
    assert set(scheme.roles().values()) <= set(colors)


def test_chaos_scheme_per_cell():
    scheme = ChaosScheme(structural=1, others=[2, 3, 4])
    rng = RandomSource(8)
    for _ in range(50):
        bg, fg = scheme.colors_for(4, 4, frame=False, typographic=False, rng=rng)
        assert bg != fg
        assert 1 not in (bg, fg)
    bg, fg = scheme.colors_for(0, 0, frame=True, typographic=False, rng=rng)
    assert fg == 1
