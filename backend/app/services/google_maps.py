from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

import httpx

from app.core.settings import Settings, get_settings
from app.utils.geohash import GeoPoint


logger = logging.getLogger(__name__)


class MapsProviderError(Exception):
    pass


class MapsRateLimitedError(MapsProviderError):
    pass


class MapsTimeoutError(MapsProviderError):
    pass


class MapsNotConfiguredError(MapsProviderError):
    pass


class PlaceNotFoundError(MapsProviderError):
    def __init__(self, address: str) -> None:
        super().__init__(f"Could not find location: {address}")
        self.address = address


_PLACES_FIELD_MASK = "places.displayName,places.formattedAddress,places.location"
_ROUTES_FIELD_MASK = "routes.legs.steps.transitDetails"


def _lat_lng(point: GeoPoint) -> dict[str, object]:
    return {
        "location": {
            "latLng": {"latitude": point.latitude, "longitude": point.longitude}
        }
    }


class GoogleMapsClient:
    """Places text search + Routes transit directions with 429/5xx backoff."""

    def __init__(
        self,
        *,
        api_key: str,
        places_search_url: str,
        routes_compute_url: str,
        timeout_s: float,
        max_retries: int,
        backoff_base_s: float,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Any] | None = None,
    ) -> None:
        if not api_key:
            raise MapsNotConfiguredError("Google Maps API key is not configured")
        self._api_key = api_key
        self._places_url = places_search_url
        self._routes_url = routes_compute_url
        self._timeout = timeout_s
        self._max_retries = max(1, max_retries)
        self._backoff_base = backoff_base_s
        self._client = http_client
        self._sleep = sleep or asyncio.sleep

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Any] | None = None,
    ) -> GoogleMapsClient:
        settings = settings or get_settings()
        key = settings.google_maps_api_key
        return cls(
            api_key=key.get_secret_value() if key is not None else "",
            places_search_url=settings.places_search_url,
            routes_compute_url=settings.routes_compute_url,
            timeout_s=float(settings.maps_timeout_s),
            max_retries=int(settings.maps_max_retries),
            backoff_base_s=float(settings.maps_backoff_base_s),
            http_client=http_client,
            sleep=sleep,
        )

    async def _post_json(
        self, url: str, *, body: dict[str, Any], field_mask: str
    ) -> dict[str, Any]:
        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self._api_key,
            "X-Goog-FieldMask": field_mask,
        }

        close_client = False
        client = self._client
        if client is None:
            close_client = True
            client = httpx.AsyncClient()

        try:
            for attempt in range(self._max_retries):
                try:
                    resp = await client.post(
                        url,
                        json=body,
                        headers=headers,
                        timeout=self._timeout,
                    )
                except httpx.TimeoutException as e:
                    raise MapsTimeoutError("Google Maps request timed out") from e
                except httpx.HTTPError as e:
                    raise MapsProviderError("Google Maps request failed") from e

                retryable = resp.status_code == 429 or 500 <= resp.status_code < 600
                if retryable:
                    if attempt >= self._max_retries - 1:
                        if resp.status_code == 429:
                            raise MapsRateLimitedError("Google Maps rate limited")
                        raise MapsProviderError(
                            f"Google Maps server error: {resp.status_code}"
                        )
                    delay = self._backoff_base * (2**attempt)
                    logger.warning(
                        "Google Maps %s returned %s; retrying in %.2fs",
                        url,
                        resp.status_code,
                        delay,
                    )
                    await self._sleep(delay)
                    continue

                if resp.status_code >= 400:
                    raise MapsProviderError(
                        f"Google Maps API error: {resp.status_code}"
                    )
                data = resp.json()
                if not isinstance(data, dict):
                    raise MapsProviderError("Google Maps response is not an object")
                return data

            raise MapsProviderError("Google Maps request retries exhausted")
        finally:
            if close_client:
                await client.aclose()

    async def geocode_location(self, address: str) -> GeoPoint:
        data = await self._post_json(
            self._places_url,
            body={"textQuery": address},
            field_mask=_PLACES_FIELD_MASK,
        )

        places = data.get("places")
        if not isinstance(places, list) or not places:
            raise PlaceNotFoundError(address)

        location = places[0].get("location") if isinstance(places[0], dict) else None
        try:
            return GeoPoint(
                latitude=float(location["latitude"]),
                longitude=float(location["longitude"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MapsProviderError("Places response missing location") from e

    async def compute_transit_route(
        self, origin: GeoPoint, destination: GeoPoint
    ) -> dict[str, Any]:
        return await self._post_json(
            self._routes_url,
            body={
                "origin": _lat_lng(origin),
                "destination": _lat_lng(destination),
                "travelMode": "TRANSIT",
            },
            field_mask=_ROUTES_FIELD_MASK,
        )
