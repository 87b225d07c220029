from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


def test_healthz(client: TestClient) -> None:
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert r.headers.get("X-Trace-Id")


def test_readyz_with_api_key(client: TestClient) -> None:
    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.json() == {"status": "ready"}


def test_readyz_without_api_key(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("TRANSITLINK_GOOGLE_MAPS_API_KEY")
    from app.core.settings import get_settings

    get_settings.cache_clear()

    r = client.get("/readyz")
    assert r.status_code == 503
    assert r.json() == {"status": "not_ready"}
