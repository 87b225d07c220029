from __future__ import annotations

from fastapi.testclient import TestClient


def test_resolve_route_returns_centroids_and_boxes(client: TestClient) -> None:
    r = client.get("/api/routes/GCPVJ0-u")
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["routeId"] == "gcpvj0-u"
    assert body["origin"]["geohash"] == "gcpvj0"
    assert abs(body["origin"]["latitude"] - 51.5) < 0.05
    assert abs(body["origin"]["longitude"] - (-0.1)) < 0.05
    assert body["destination"]["boundingBox"] == {
        "minLat": 45.0,
        "maxLat": 90.0,
        "minLon": 0.0,
        "maxLon": 45.0,
    }
    assert body["destination"]["latitude"] == 67.5
    assert body["destination"]["longitude"] == 22.5


def test_resolve_route_rejects_malformed_id(client: TestClient) -> None:
    r = client.get("/api/routes/gcpvj0", headers={"X-Trace-Id": "trace-1"})
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "ROUTE_ID_INVALID"
    assert body["trace_id"] == "trace-1"
    assert r.headers["X-Trace-Id"] == "trace-1"


def test_resolve_route_rejects_invalid_symbol(client: TestClient) -> None:
    r = client.get("/api/routes/gcpvj0-gcpvja")
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "GEOHASH_INVALID_SYMBOL"
    assert body["details"] == {"symbol": "a", "index": 5}


def test_resolve_route_rejects_kelvin_sign(client: TestClient) -> None:
    r = client.get("/api/routes/gcpvj0-\u212a")
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "GEOHASH_INVALID_SYMBOL"
    assert body["details"] == {"symbol": "\u212a", "index": 0}
