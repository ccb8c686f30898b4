"""POST /api/colors + POST /api/generate — color selection and artwork generation."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_editor
from app.engine.editor import GridEditor
from app.engine.errors import InsufficientColors
from app.engine.random_source import RandomSource
from app.models.requests import ColorsRequest, GenerateRequest
from app.models.responses import EditorStateResponse

router = APIRouter()


@router.post("/colors", response_model=EditorStateResponse)
async def select_colors(
    req: ColorsRequest, editor: GridEditor = Depends(get_editor)
) -> EditorStateResponse:
    try:
        state = editor.select_colors(req.colors)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return EditorStateResponse.from_state(state)


@router.post("/generate", response_model=EditorStateResponse)
async def generate(
    req: GenerateRequest, editor: GridEditor = Depends(get_editor)
) -> EditorStateResponse:
    rng = RandomSource(req.seed) if req.seed is not None else None
    try:
        state = editor.generate(req.complexity, rng=rng)
    except InsufficientColors as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return EditorStateResponse.from_state(state)
