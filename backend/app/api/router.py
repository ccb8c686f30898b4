"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from app.api import deploy, editor, generate, health, render

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(generate.router)
api_router.include_router(editor.router)
api_router.include_router(render.router)
api_router.include_router(deploy.router)
