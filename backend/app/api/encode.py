from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from app.api.deps import get_maps_client, maps_api_error, require_param
from app.core.errors import geohash_api_error
from app.core.settings import Settings, get_settings
from app.services.google_maps import GoogleMapsClient, MapsProviderError
from app.services.route_link import ROUTE_ID_SEPARATOR, build_route_id
from app.utils.geohash import GeohashError


router = APIRouter(prefix="/api", tags=["encode"])


logger = logging.getLogger(__name__)


class CoordinatesOut(BaseModel):
    lat: float
    lng: float


class EncodedPlaceOut(BaseModel):
    address: str
    geohash: str
    coordinates: CoordinatesOut


class EncodeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    commute_from: EncodedPlaceOut = Field(alias="commuteFrom")
    commute_to: EncodedPlaceOut = Field(alias="commuteTo")
    route_id: str = Field(alias="routeId")


@router.get("/encode", response_model=EncodeResponse)
async def encode_commute(
    commute_from: str | None = Query(default=None, alias="commuteFrom"),
    commute_to: str | None = Query(default=None, alias="commuteTo"),
    maps: GoogleMapsClient = Depends(get_maps_client),
    settings: Settings = Depends(get_settings),
) -> EncodeResponse:
    """Geocode two places and turn them into a shareable route id."""

    origin_address = require_param("commuteFrom", commute_from)
    destination_address = require_param("commuteTo", commute_to)

    try:
        origin, destination = await asyncio.gather(
            maps.geocode_location(origin_address),
            maps.geocode_location(destination_address),
        )
    except MapsProviderError as e:
        logger.warning("Geocoding failed for encode request: %s", e)
        raise maps_api_error(e) from e

    precision = int(settings.route_geohash_precision)
    try:
        route_id = build_route_id(origin, destination, precision=precision)
    except GeohashError as e:
        raise geohash_api_error(e) from e
    from_hash, to_hash = route_id.split(ROUTE_ID_SEPARATOR)

    return EncodeResponse(
        commute_from=EncodedPlaceOut(
            address=origin_address,
            geohash=from_hash,
            coordinates=CoordinatesOut(lat=origin.latitude, lng=origin.longitude),
        ),
        commute_to=EncodedPlaceOut(
            address=destination_address,
            geohash=to_hash,
            coordinates=CoordinatesOut(
                lat=destination.latitude, lng=destination.longitude
            ),
        ),
        route_id=route_id,
    )
