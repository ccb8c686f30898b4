"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.glyphgrid_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="GlyphGrid",
        description="Procedural 9×9 glyph artwork generator, grid editor and rasterizer",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all pattern modules to trigger registration
    _register_patterns()

    from app.api.router import api_router

    app.include_router(api_router)

    return app


def _register_patterns() -> None:
    """Import all layout modules so @pattern decorators fire."""
    from app.engine.registry import load_builtin_patterns

    registry = load_builtin_patterns()
    logging.getLogger(__name__).debug("%d patterns registered", registry.count)


app = create_app()
