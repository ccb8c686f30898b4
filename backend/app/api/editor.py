"""Editor endpoints — glyph arming, cell clicks, whole-grid variations."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_editor
from app.engine.editor import GridEditor
from app.models.requests import ClickRequest, KeyRequest, ResetRequest, SelectGlyphRequest
from app.models.responses import (
    ClickResponse,
    ColorVariationResponse,
    EditorStateResponse,
    VariationResponse,
)

router = APIRouter(prefix="/editor")


@router.get("", response_model=EditorStateResponse)
async def get_state(editor: GridEditor = Depends(get_editor)) -> EditorStateResponse:
    return EditorStateResponse.from_state(editor.state)


@router.post("/select-glyph", response_model=EditorStateResponse)
async def select_glyph(
    req: SelectGlyphRequest, editor: GridEditor = Depends(get_editor)
) -> EditorStateResponse:
    if not editor.select_glyph(req.glyph_id):
        raise HTTPException(status_code=404, detail=f"Glyph {req.glyph_id} not found")
    return EditorStateResponse.from_state(editor.state)


@router.post("/key", response_model=EditorStateResponse)
async def press_key(req: KeyRequest, editor: GridEditor = Depends(get_editor)) -> EditorStateResponse:
    editor.press_key(req.key)
    return EditorStateResponse.from_state(editor.state)


@router.post("/click", response_model=ClickResponse)
async def click(req: ClickRequest, editor: GridEditor = Depends(get_editor)) -> ClickResponse:
    action = editor.click(req.index, shift=req.shift)
    return ClickResponse(action=action, state=EditorStateResponse.from_state(editor.state))


@router.post("/shuffle-colors", response_model=EditorStateResponse)
async def shuffle_colors(editor: GridEditor = Depends(get_editor)) -> EditorStateResponse:
    editor.shuffle_colors()
    return EditorStateResponse.from_state(editor.state)


@router.post("/variation", response_model=VariationResponse)
async def variation(editor: GridEditor = Depends(get_editor)) -> VariationResponse:
    target = editor.generate_variation()
    return VariationResponse(variation=target, state=EditorStateResponse.from_state(editor.state))


@router.post("/color-variation", response_model=ColorVariationResponse)
async def color_variation(editor: GridEditor = Depends(get_editor)) -> ColorVariationResponse:
    mapping = editor.generate_color_variation() or {}
    return ColorVariationResponse(
        mapping=mapping, state=EditorStateResponse.from_state(editor.state)
    )


@router.post("/reset", response_model=EditorStateResponse)
async def reset(
    req: ResetRequest | None = None, editor: GridEditor = Depends(get_editor)
) -> EditorStateResponse:
    state = editor.reset(forget_selection=req.forget_selection if req else False)
    return EditorStateResponse.from_state(state)
