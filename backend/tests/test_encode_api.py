from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient


GEOCODED = {
    "Trafalgar Square": (51.5074, -0.1278),
    "Stoke Newington Town Hall": (51.56118, -0.082901),
}


def _fake_places_post(calls: list[str]):  # noqa: ANN202
    async def fake_post(self, url: str, json=None, headers=None, timeout=None):  # noqa: ANN001
        req = httpx.Request("POST", url)
        query = json["textQuery"]
        calls.append(query)
        if query not in GEOCODED:
            return httpx.Response(200, json={"places": []}, request=req)
        lat, lng = GEOCODED[query]
        payload = {"places": [{"location": {"latitude": lat, "longitude": lng}}]}
        return httpx.Response(200, json=payload, request=req)

    return fake_post


def test_encode_returns_geohashes_and_route_id(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls: list[str] = []
    monkeypatch.setattr(httpx.AsyncClient, "post", _fake_places_post(calls))

    r = client.get(
        "/api/encode",
        params={
            "commuteFrom": "Trafalgar Square",
            "commuteTo": "Stoke Newington Town Hall",
        },
    )
    assert r.status_code == 200, r.text
    body = r.json()

    assert sorted(calls) == sorted(GEOCODED)
    assert body["commuteFrom"] == {
        "address": "Trafalgar Square",
        "geohash": "gcpvj0",
        "coordinates": {"lat": 51.5074, "lng": -0.1278},
    }
    to_hash = body["commuteTo"]["geohash"]
    assert len(to_hash) == 6
    assert body["routeId"] == f"gcpvj0-{to_hash}"

    resolved = client.get(f"/api/routes/{body['routeId']}")
    assert resolved.status_code == 200, resolved.text


@pytest.mark.parametrize(
    "params,missing",
    [
        ({"commuteTo": "Trafalgar Square"}, "commuteFrom"),
        ({"commuteFrom": "Trafalgar Square"}, "commuteTo"),
        ({"commuteFrom": " ", "commuteTo": "Trafalgar Square"}, "commuteFrom"),
    ],
)
def test_encode_requires_both_places(
    client: TestClient, params: dict[str, str], missing: str
) -> None:
    r = client.get("/api/encode", params=params)
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "MISSING_PARAMETER"
    assert body["details"] == {"parameter": missing}


def test_encode_unknown_place_is_404(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(httpx.AsyncClient, "post", _fake_places_post([]))

    r = client.get(
        "/api/encode",
        params={"commuteFrom": "Trafalgar Square", "commuteTo": "Atlantis"},
    )
    assert r.status_code == 404
    body = r.json()
    assert body["code"] == "PLACE_NOT_FOUND"
    assert body["details"] == {"address": "Atlantis"}


def test_encode_without_api_key_is_500(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("TRANSITLINK_GOOGLE_MAPS_API_KEY")
    from app.core.settings import get_settings

    get_settings.cache_clear()

    r = client.get(
        "/api/encode",
        params={"commuteFrom": "Trafalgar Square", "commuteTo": "Atlantis"},
    )
    assert r.status_code == 500
    assert r.json()["code"] == "MAPS_NOT_CONFIGURED"


def test_encode_provider_rate_limit_is_503(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def fake_post(self, url: str, json=None, headers=None, timeout=None):  # noqa: ANN001
        return httpx.Response(429, request=httpx.Request("POST", url))

    monkeypatch.setattr(httpx.AsyncClient, "post", fake_post)

    r = client.get(
        "/api/encode",
        params={"commuteFrom": "Trafalgar Square", "commuteTo": "Atlantis"},
    )
    assert r.status_code == 503
    assert r.json()["code"] == "MAPS_RATE_LIMITED"
