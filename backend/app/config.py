"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    glyphgrid_env: str = "development"
    glyphgrid_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Glyph registry; off means the bundled glyph set is used directly
    use_remote_glyphs: bool = False
    glyph_registry_url: str = ""
    glyph_fetch_retries: int = 5
    glyph_fetch_delay_ms: int = 2000
    glyph_fetch_timeout_s: float = 10.0

    # Editor persistence (JSON file); empty keeps state in memory only
    storage_path: str = "data/glyphgrid_state.json"

    # Editor input
    double_tap_window_ms: int = 300

    # Rendering
    cell_pixel_size: int = 48

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
