"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from app.config import settings
from app.engine.editor import GridEditor
from app.engine.glyphs import GlyphPool
from app.glyphs.source import load_glyph_pool
from app.storage.local_store import LocalStore


def get_settings():
    return settings


@lru_cache
def get_store() -> LocalStore:
    return LocalStore(settings.storage_path or None)


@lru_cache
def get_glyph_pool() -> GlyphPool:
    return load_glyph_pool(settings, get_store())


@lru_cache
def get_editor() -> GridEditor:
    """The single editor session, resumed from the store on first use."""
    editor = GridEditor(
        get_store(),
        get_glyph_pool(),
        double_tap_window_ms=settings.double_tap_window_ms,
    )
    editor.resume()
    return editor
