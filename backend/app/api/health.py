"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_glyph_pool
from app.engine.glyphs import GlyphPool
from app.engine.palette import DEFAULT_PALETTE
from app.engine.registry import get_registry
from app.models.responses import GlyphRecord, GlyphsResponse, HealthResponse, PaletteResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(pool: GlyphPool = Depends(get_glyph_pool)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        patterns_registered=get_registry().count,
        glyph_count=len(pool),
    )


@router.get("/palette", response_model=PaletteResponse)
async def palette() -> PaletteResponse:
    return PaletteResponse(colors=[list(rgb) for rgb in DEFAULT_PALETTE])


@router.get("/glyphs", response_model=GlyphsResponse)
async def glyphs(pool: GlyphPool = Depends(get_glyph_pool)) -> GlyphsResponse:
    return GlyphsResponse(glyphs=[GlyphRecord(**r) for r in pool.to_records()])
