"""Error taxonomy for the composition engine and its collaborators."""

from __future__ import annotations


class GlyphGridError(Exception):
    """Base class for engine errors."""


class InsufficientColors(GlyphGridError):
    """Fewer colors selected than generation requires."""

    def __init__(self, count: int, required: int = 2) -> None:
        super().__init__(f"At least {required} colors required, got {count}")
        self.count = count
        self.required = required


class GlyphPoolUnavailable(GlyphGridError):
    """Remote glyph registry could not be reached after all retries."""


class InvalidPersistedState(GlyphGridError):
    """Stored grid arrays have the wrong shape or out-of-range values."""
