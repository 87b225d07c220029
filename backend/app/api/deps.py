from __future__ import annotations

from fastapi import Depends

from app.core.errors import APIError
from app.core.settings import Settings, get_settings
from app.services.google_maps import (
    GoogleMapsClient,
    MapsNotConfiguredError,
    MapsProviderError,
    MapsRateLimitedError,
    MapsTimeoutError,
    PlaceNotFoundError,
)


def maps_api_error(exc: MapsProviderError) -> APIError:
    if isinstance(exc, PlaceNotFoundError):
        return APIError(
            code="PLACE_NOT_FOUND",
            message=str(exc),
            status_code=404,
            details={"address": exc.address},
        )
    if isinstance(exc, MapsNotConfiguredError):
        return APIError(
            code="MAPS_NOT_CONFIGURED",
            message="Google Maps API key not configured",
            status_code=500,
        )
    if isinstance(exc, MapsRateLimitedError):
        return APIError(code="MAPS_RATE_LIMITED", message=str(exc), status_code=503)
    if isinstance(exc, MapsTimeoutError):
        return APIError(code="MAPS_TIMEOUT", message=str(exc), status_code=504)
    return APIError(code="MAPS_PROVIDER_ERROR", message=str(exc), status_code=502)


def get_maps_client(settings: Settings = Depends(get_settings)) -> GoogleMapsClient:
    try:
        return GoogleMapsClient.from_settings(settings)
    except MapsNotConfiguredError as e:
        raise maps_api_error(e) from e


def require_param(name: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise APIError(
            code="MISSING_PARAMETER",
            message=f"Query parameter '{name}' is required",
            status_code=400,
            details={"parameter": name},
        )
    return value.strip()
