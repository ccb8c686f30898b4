"""Glyph source — where the editor's glyph pool comes from.

Order of preference:
    1. glyphs cached in the local store by an earlier successful fetch
    2. the remote glyph registry (only when ``use_remote_glyphs`` is on)
    3. the bundled fallback set shipped with the package

A remote failure is never fatal; the bundled set is always there.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx

from app.config import Settings
from app.engine.config import EngineConfig
from app.engine.errors import GlyphPoolUnavailable
from app.engine.glyphs import GlyphPool
from app.storage.local_store import LocalStore
from app.storage.state import CACHED_GLYPHS

logger = logging.getLogger(__name__)

FALLBACK_PATH = Path(__file__).parent / "data" / "glyphs_fallback.json"

_TOO_MANY_REQUESTS = 429


def _normalize_records(payload: Any, config: EngineConfig) -> list[dict[str, Any]]:
    """Accept ``[{id, bitmap}, ...]`` or a bare list of bitmaps indexed by id."""
    if isinstance(payload, dict) and "glyphs" in payload:
        payload = payload["glyphs"]
    if not isinstance(payload, list):
        raise ValueError("Glyph payload must be a list")

    records: list[dict[str, Any]] = []
    for i, item in enumerate(payload):
        if isinstance(item, dict):
            records.append(item)
        else:
            records.append({"id": i, "bitmap": item})
    return [
        r
        for r in records
        if isinstance(r.get("id"), int) and 1 <= r["id"] < config.max_glyph_id
    ]


def fetch_remote_glyphs(
    url: str,
    *,
    retries: int = 5,
    delay_ms: int = 2000,
    timeout_s: float = 10.0,
    client: httpx.Client | None = None,
    sleep: Callable[[float], None] = time.sleep,
    config: EngineConfig | None = None,
) -> GlyphPool:
    """GET the glyph set with bounded retries.

    Waits ``delay_ms * attempt`` between attempts, twice that after HTTP 429.
    Raises GlyphPoolUnavailable once every attempt has failed.
    """
    cfg = config or EngineConfig()
    owns_client = client is None
    client = client or httpx.Client(timeout=httpx.Timeout(timeout_s))
    last_error: Exception | None = None

    try:
        for attempt in range(1, retries + 1):
            wait_s = delay_ms * attempt / 1000
            try:
                response = client.get(url)
                response.raise_for_status()
                pool = GlyphPool.from_records(_normalize_records(response.json(), cfg))
                if not len(pool):
                    raise ValueError("Glyph registry returned no usable glyphs")
                logger.info("Fetched %d glyphs from %s (attempt %d)", len(pool), url, attempt)
                return pool
            except httpx.HTTPStatusError as e:
                last_error = e
                if e.response.status_code == _TOO_MANY_REQUESTS:
                    wait_s *= 2
            except (httpx.HTTPError, ValueError) as e:
                last_error = e

            logger.warning("Glyph fetch attempt %d/%d failed: %s", attempt, retries, last_error)
            if attempt < retries:
                sleep(wait_s)
    finally:
        if owns_client:
            client.close()

    raise GlyphPoolUnavailable(f"Glyph registry unreachable after {retries} attempts: {last_error}")


def load_fallback_glyphs(path: Path = FALLBACK_PATH) -> GlyphPool:
    with open(path, encoding="utf-8") as f:
        records = json.load(f)
    pool = GlyphPool.from_records(records)
    logger.debug("Loaded %d bundled glyphs from %s", len(pool), path.name)
    return pool


def load_glyph_pool(
    settings: Settings,
    store: LocalStore | None = None,
    client: httpx.Client | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> GlyphPool:
    """Resolve the glyph pool for an editor session."""
    if store is not None:
        cached = store.get(CACHED_GLYPHS)
        if cached:
            pool = GlyphPool.from_records(cached)
            if len(pool):
                logger.debug("Using %d cached glyphs", len(pool))
                return pool

    if settings.use_remote_glyphs and settings.glyph_registry_url:
        try:
            pool = fetch_remote_glyphs(
                settings.glyph_registry_url,
                retries=settings.glyph_fetch_retries,
                delay_ms=settings.glyph_fetch_delay_ms,
                timeout_s=settings.glyph_fetch_timeout_s,
                client=client,
                sleep=sleep,
            )
        except GlyphPoolUnavailable as e:
            logger.warning("%s; using bundled glyphs", e)
        else:
            if store is not None:
                store.set(CACHED_GLYPHS, pool.to_records())
            return pool

    return load_fallback_glyphs()
