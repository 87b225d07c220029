from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_maps_client, maps_api_error, require_param
from app.core.errors import geohash_api_error
from app.services.google_maps import GoogleMapsClient, MapsProviderError
from app.services.route_link import InvalidRouteId, resolve_route_id
from app.services.transit import parse_transit_route
from app.utils.geohash import GeohashError


router = APIRouter(prefix="/api", tags=["directions"])


logger = logging.getLogger(__name__)


@router.get("/directions")
async def get_directions(
    commute_from: str | None = Query(default=None, alias="commuteFrom"),
    commute_to: str | None = Query(default=None, alias="commuteTo"),
    route_id: str | None = Query(default=None, alias="routeId"),
    maps: GoogleMapsClient = Depends(get_maps_client),
) -> dict[str, list[dict[str, object]]]:
    """Transit stops for the shared route link (A) and the caller's commute (B)."""

    origin_address = require_param("commuteFrom", commute_from)
    destination_address = require_param("commuteTo", commute_to)
    raw_route_id = require_param("routeId", route_id)

    # Reject a bad link before spending any provider calls.
    try:
        shared = resolve_route_id(raw_route_id)
    except InvalidRouteId as e:
        raise geohash_api_error(e, code="ROUTE_ID_INVALID") from e
    except GeohashError as e:
        raise geohash_api_error(e) from e

    try:
        route_a = await maps.compute_transit_route(shared.origin, shared.destination)
        origin_b, destination_b = await asyncio.gather(
            maps.geocode_location(origin_address),
            maps.geocode_location(destination_address),
        )
        route_b = await maps.compute_transit_route(origin_b, destination_b)
    except MapsProviderError as e:
        logger.warning("Directions lookup failed for route %s: %s", raw_route_id, e)
        raise maps_api_error(e) from e

    directions_a = parse_transit_route(route_a)
    directions_b = parse_transit_route(route_b)
    logger.info(
        "Resolved route %s: %d shared stops, %d own stops",
        raw_route_id,
        len(directions_a),
        len(directions_b),
    )
    return {
        "directionsA": [step.to_dict() for step in directions_a],
        "directionsB": [step.to_dict() for step in directions_b],
    }
