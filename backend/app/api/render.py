"""GET /api/render.png — the current grid as a PNG."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from app.config import Settings
from app.dependencies import get_editor, get_settings
from app.engine.editor import GridEditor
from app.utils.rasterizer import render_png

router = APIRouter()


@router.get("/render.png")
async def render(
    cell_size: int | None = Query(default=None, ge=8, le=256),
    editor: GridEditor = Depends(get_editor),
    settings: Settings = Depends(get_settings),
) -> Response:
    png = render_png(
        editor.state.grid,
        editor.glyph_pool,
        editor.palette,
        cell_size or settings.cell_pixel_size,
    )
    return Response(content=png, media_type="image/png")
