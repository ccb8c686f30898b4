"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.engine.context import EditorState


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    patterns_registered: int = 0
    glyph_count: int = 0


class PaletteResponse(BaseModel):
    colors: list[list[int]]


class GlyphRecord(BaseModel):
    id: int
    bitmap: str = Field(..., description="64-bit bitmap as a decimal string")


class GlyphsResponse(BaseModel):
    glyphs: list[GlyphRecord] = Field(default_factory=list)


class GridModel(BaseModel):
    bg_glyphs: list[int | None]
    fg_glyphs: list[int | None]
    bg_colors: list[int | None]
    fg_colors: list[int | None]


class AuxModel(BaseModel):
    typo_row: int | None = None
    typo_row2: int | None = None
    typo_col: int | None = None
    typo_cols: list[int | None] = Field(default_factory=list)
    orientation: str | None = None
    variations: list[int] = Field(default_factory=list)


class EditorStateResponse(BaseModel):
    selected_colors: list[int]
    complexity: int
    has_generated: bool
    should_generate: bool
    armed_glyph: int | None = None
    grid: GridModel
    aux: AuxModel

    @classmethod
    def from_state(cls, state: EditorState) -> EditorStateResponse:
        return cls(
            selected_colors=state.selected_colors,
            complexity=state.complexity,
            has_generated=state.has_generated,
            should_generate=state.should_generate,
            armed_glyph=state.armed_glyph,
            grid=GridModel(**state.grid.to_dict()),
            aux=AuxModel(**state.aux.to_dict()),
        )


class ClickResponse(BaseModel):
    action: str
    state: EditorStateResponse


class VariationResponse(BaseModel):
    variation: int | None = None
    state: EditorStateResponse


class ColorVariationResponse(BaseModel):
    mapping: dict[int, int] = Field(default_factory=dict)
    state: EditorStateResponse


class DeployResponse(BaseModel):
    bg_glyphs: list[int]
    fg_glyphs: list[int]
    bg_colors: list[int]
    fg_colors: list[int]
    colors: list[int] = Field(..., description="Flat RGB list, 3 entries per remapped color")
