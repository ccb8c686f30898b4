"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ColorsRequest(BaseModel):
    colors: list[int] = Field(..., description="Palette indices (0-8) in pick order")


class GenerateRequest(BaseModel):
    complexity: int | None = Field(
        default=None, ge=1, le=10, description="Layout complexity; defaults to the current one"
    )
    seed: int | None = Field(default=None, description="Seed for a reproducible grid")


class SelectGlyphRequest(BaseModel):
    glyph_id: int = Field(..., ge=0, description="Glyph to arm; 0 erases")


class KeyRequest(BaseModel):
    key: str = Field(..., min_length=1, max_length=1, description="Digit key pressed")


class ClickRequest(BaseModel):
    index: int = Field(..., ge=0, le=80, description="Cell index, row * 9 + col")
    shift: bool = Field(default=False, description="Shift held (background click)")


class ResetRequest(BaseModel):
    forget_selection: bool = Field(default=False, description="Also clear the selected colors")
