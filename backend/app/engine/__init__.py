"""GlyphGrid composition engine."""

from app.engine.registry import pattern, PatternKind, get_registry
from app.engine.context import Grid, AuxState
from app.engine.composer import Composer, generate
from app.engine.random_source import RandomSource

__all__ = [
    "pattern",
    "PatternKind",
    "get_registry",
    "Grid",
    "AuxState",
    "Composer",
    "generate",
    "RandomSource",
]
