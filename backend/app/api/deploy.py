"""GET /api/deploy — arrays and color table handed to the deploy step."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.deploy.payload import build_deploy_payload
from app.dependencies import get_editor
from app.engine.editor import GridEditor
from app.models.responses import DeployResponse

router = APIRouter()


@router.get("/deploy", response_model=DeployResponse)
async def deploy(editor: GridEditor = Depends(get_editor)) -> DeployResponse:
    payload = build_deploy_payload(editor.state.grid, editor.palette)
    if payload is None:
        raise HTTPException(status_code=409, detail="No generated artwork to deploy")
    return DeployResponse(**payload.to_dict())
