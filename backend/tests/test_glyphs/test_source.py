"""Tests for the glyph source: cache, remote fetch with retries, bundled fallback."""

import httpx
import pytest

from app.config import Settings
from app.engine.errors import GlyphPoolUnavailable
from app.glyphs.source import fetch_remote_glyphs, load_fallback_glyphs, load_glyph_pool
from app.storage.state import CACHED_GLYPHS

URL = "https://glyphs.example/pool"


def _client(responses):
    """httpx client answering with the given (status, json) pairs in order."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        status, body = responses[min(len(calls), len(responses) - 1)]
        calls.append(request)
        return httpx.Response(status, json=body)

    return httpx.Client(transport=httpx.MockTransport(handler)), calls


def _settings(**overrides):
    values = {"use_remote_glyphs": True, "glyph_registry_url": URL, "glyph_fetch_retries": 3}
    values.update(overrides)
    return Settings(**values)


def test_fetch_records():
    client, calls = _client([(200, [{"id": 1, "bitmap": "0xFF"}, {"id": 20, "bitmap": "7"}])])
    pool = fetch_remote_glyphs(URL, client=client, sleep=lambda s: None)
    assert pool.ids == [1, 20]
    assert len(calls) == 1


def test_fetch_bare_bitmap_list_truncates_ids():
    bitmaps = [str(i) for i in range(100)]
    client, _ = _client([(200, bitmaps)])
    pool = fetch_remote_glyphs(URL, client=client, sleep=lambda s: None)
    # Index 0 is dropped, anything from 79 on is ignored
    assert pool.ids == list(range(1, 79))
    assert pool.get(5).bitmap == 5


def test_retry_backoff_doubles_on_rate_limit():
    client, calls = _client([(500, {}), (429, {}), (200, [{"id": 2, "bitmap": "1"}])])
    waits = []
    pool = fetch_remote_glyphs(URL, retries=5, delay_ms=100, client=client, sleep=waits.append)
    assert pool.ids == [2]
    assert len(calls) == 3
    assert waits == [0.1, 0.4]


def test_fetch_gives_up():
    client, calls = _client([(503, {})])
    waits = []
    with pytest.raises(GlyphPoolUnavailable):
        fetch_remote_glyphs(URL, retries=3, delay_ms=10, client=client, sleep=waits.append)
    assert len(calls) == 3
    assert len(waits) == 2


def test_empty_payload_counts_as_failure():
    client, calls = _client([(200, []), (200, [{"id": 3, "bitmap": "9"}])])
    pool = fetch_remote_glyphs(URL, retries=2, client=client, sleep=lambda s: None)
    assert pool.ids == [3]
    assert len(calls) == 2


def test_load_pool_prefers_cache(store):
    store.set(CACHED_GLYPHS, [{"id": 9, "bitmap": "1"}])
    client, calls = _client([(200, [{"id": 1, "bitmap": "1"}])])
    pool = load_glyph_pool(_settings(), store, client=client)
    assert pool.ids == [9]
    assert calls == []


def test_load_pool_caches_remote_result(store):
    client, _ = _client([(200, [{"id": 1, "bitmap": "3"}])])
    pool = load_glyph_pool(_settings(), store, client=client, sleep=lambda s: None)
    assert pool.ids == [1]
    assert store.get(CACHED_GLYPHS) == [{"id": 1, "bitmap": "3"}]


def test_load_pool_falls_back_when_remote_fails(store, caplog):
    client, _ = _client([(500, {})])
    pool = load_glyph_pool(_settings(), store, client=client, sleep=lambda s: None)
    assert len(pool) == len(load_fallback_glyphs())
    assert CACHED_GLYPHS not in store
    assert "using bundled glyphs" in caplog.text


def test_remote_disabled_uses_fallback(store):
    client, calls = _client([(200, [{"id": 1, "bitmap": "1"}])])
    pool = load_glyph_pool(_settings(use_remote_glyphs=False), store, client=client)
    assert len(pool) == 78
    assert calls == []
