from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient


# Ensure `import app.*` works when pytest chooses an import mode that
# doesn't automatically add the project root to sys.path.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    # Deterministic provider config for tests; no real network calls.
    monkeypatch.setenv("TRANSITLINK_GOOGLE_MAPS_API_KEY", "test-maps-key")
    monkeypatch.setenv("TRANSITLINK_MAPS_BACKOFF_BASE_S", "0")
    monkeypatch.setenv("TRANSITLINK_ROUTE_GEOHASH_PRECISION", "6")
    monkeypatch.setenv("TRANSITLINK_CORS_ALLOW_ORIGIN", "http://localhost:3000")

    from app.core.settings import get_settings

    get_settings.cache_clear()

    from app.main import create_app

    app = create_app()
    yield TestClient(app)

    get_settings.cache_clear()
