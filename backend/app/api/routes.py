from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from app.core.errors import geohash_api_error
from app.services.route_link import (
    ROUTE_ID_SEPARATOR,
    InvalidRouteId,
    resolve_route_id,
)
from app.utils.geohash import BoundingBox, GeohashError, GeoPoint


router = APIRouter(prefix="/api/routes", tags=["routes"])


class BoundingBoxOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    min_lat: float = Field(alias="minLat")
    max_lat: float = Field(alias="maxLat")
    min_lon: float = Field(alias="minLon")
    max_lon: float = Field(alias="maxLon")


class RouteEndpointOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    geohash: str
    latitude: float
    longitude: float
    bounding_box: BoundingBoxOut = Field(alias="boundingBox")


class RouteResolveResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    route_id: str = Field(alias="routeId")
    origin: RouteEndpointOut
    destination: RouteEndpointOut


def _endpoint_out(geohash: str, point: GeoPoint, box: BoundingBox) -> RouteEndpointOut:
    return RouteEndpointOut(
        geohash=geohash,
        latitude=point.latitude,
        longitude=point.longitude,
        bounding_box=BoundingBoxOut(
            min_lat=box.min_lat,
            max_lat=box.max_lat,
            min_lon=box.min_lon,
            max_lon=box.max_lon,
        ),
    )


@router.get("/{route_id}", response_model=RouteResolveResponse)
async def resolve_route(route_id: str) -> RouteResolveResponse:
    try:
        resolved = resolve_route_id(route_id)
    except InvalidRouteId as e:
        raise geohash_api_error(e, code="ROUTE_ID_INVALID") from e
    except GeohashError as e:
        raise geohash_api_error(e) from e

    return RouteResolveResponse(
        route_id=f"{resolved.origin_hash}{ROUTE_ID_SEPARATOR}{resolved.destination_hash}",
        origin=_endpoint_out(resolved.origin_hash, resolved.origin, resolved.origin_box),
        destination=_endpoint_out(
            resolved.destination_hash, resolved.destination, resolved.destination_box
        ),
    )
