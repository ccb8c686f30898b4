"""Shared test fixtures."""

from __future__ import annotations

import pytest

from app.engine.config import EngineConfig
from app.engine.editor import GridEditor
from app.engine.glyphs import GlyphPool, TypographyTable
from app.engine.random_source import RandomSource
from app.glyphs.source import load_fallback_glyphs
from app.storage.local_store import LocalStore


class FakeClock:
    """Monotonic clock the tests advance by hand (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def glyph_pool() -> GlyphPool:
    return load_fallback_glyphs()


@pytest.fixture
def typography(config) -> TypographyTable:
    return TypographyTable.from_config(config)


@pytest.fixture
def rng() -> RandomSource:
    return RandomSource(seed=1234)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> LocalStore:
    return LocalStore()


@pytest.fixture
def editor(store, glyph_pool, clock) -> GridEditor:
    return GridEditor(store, glyph_pool, rng=RandomSource(seed=42), clock=clock)


@pytest.fixture
def generated_editor(editor) -> GridEditor:
    """Editor with three colors selected and a complexity-4 grid."""
    editor.select_colors([0, 2, 7])
    editor.generate(4)
    return editor
