"""Pattern registry — every complexity level is a standalone layout registered via decorator.

Usage:
    @pattern(kind=PatternKind.WORD_ROW, description="7-letter word across one row")
    def word_row(ctx: LayoutContext) -> None:
        for row, col in ctx.interior_cells():
            ctx.set_fg(row, col, ...)

Adding a new layout = creating one file with the decorator. Nothing else changes.
"""

from __future__ import annotations

import enum
import importlib
import logging
import pkgutil
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from app.engine.context import LayoutContext

logger = logging.getLogger(__name__)


class PatternKind(enum.IntEnum):
    """One variant per complexity level (1-10)."""

    SHORT_WORD = 1
    WORD_ROW = 2
    WORD_COLUMN = 3
    DIAMOND = 4
    COLUMN_BLOCKS = 5
    ALTERNATING_ROWS = 6
    SHORT_WORD_ROWS = 7
    TWO_WORDS = 8
    WORD_COLUMNS = 9
    SCATTERED_WORDS = 10


class FrameStyle(enum.Enum):
    # Corner glyph at the four corners, random edge glyphs elsewhere
    EDGES = "edges"
    # Upper glyph across the top and upper sides, lower glyph below
    U = "u"
    # One glyph per side: top, right, bottom, left
    SIDES = "sides"


@dataclass
class PatternSpec:
    kind: PatternKind
    fn: Callable[["LayoutContext"], None]
    frame: FrameStyle = FrameStyle.EDGES
    description: str = ""


class PatternRegistry:
    """Singleton registry of all layouts."""

    def __init__(self) -> None:
        self._patterns: dict[PatternKind, PatternSpec] = {}

    def register(self, spec: PatternSpec) -> None:
        if spec.kind in self._patterns:
            raise ValueError(f"Duplicate pattern for complexity {int(spec.kind)}")
        self._patterns[spec.kind] = spec
        logger.debug("Registered pattern %d (%s)", int(spec.kind), spec.kind.name)

    def get(self, complexity: int | PatternKind) -> PatternSpec:
        try:
            kind = PatternKind(complexity)
        except ValueError:
            raise ValueError(f"Complexity must be 1-10, got {complexity}") from None
        if kind not in self._patterns:
            raise KeyError(f"No pattern registered for complexity {int(kind)}")
        return self._patterns[kind]

    def all(self) -> list[PatternSpec]:
        return [self._patterns[k] for k in sorted(self._patterns)]

    @property
    def count(self) -> int:
        return len(self._patterns)


# Module-level singleton
_registry = PatternRegistry()


def get_registry() -> PatternRegistry:
    return _registry


def pattern(
    *,
    kind: PatternKind,
    frame: FrameStyle = FrameStyle.EDGES,
    description: str = "",
):
    """Decorator to register a layout function."""

    def decorator(fn: Callable[["LayoutContext"], None]):
        _registry.register(PatternSpec(kind=kind, fn=fn, frame=frame, description=description))
        return fn

    return decorator


def load_builtin_patterns() -> PatternRegistry:
    """Import every module under ``app.engine.patterns`` so @pattern decorators fire."""
    package = importlib.import_module("app.engine.patterns")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"app.engine.patterns.{module_name}")
    return _registry
