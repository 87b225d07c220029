from __future__ import annotations

from dataclasses import dataclass

from app.utils.geohash import (
    BoundingBox,
    GeoPoint,
    InvalidArgument,
    bounding_box,
    encode,
)


ROUTE_ID_SEPARATOR = "-"


class InvalidRouteId(InvalidArgument):
    pass


@dataclass(frozen=True)
class ResolvedRoute:
    origin_hash: str
    destination_hash: str
    origin: GeoPoint
    destination: GeoPoint
    origin_box: BoundingBox
    destination_box: BoundingBox


def build_route_id(origin: GeoPoint, destination: GeoPoint, *, precision: int = 6) -> str:
    from_hash = encode(origin.latitude, origin.longitude, precision)
    to_hash = encode(destination.latitude, destination.longitude, precision)
    return f"{from_hash}{ROUTE_ID_SEPARATOR}{to_hash}"


def _split_route_id(route_id: str) -> tuple[str, str]:
    if not isinstance(route_id, str):
        raise InvalidRouteId("route id must be a string")

    parts = route_id.strip().split(ROUTE_ID_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise InvalidRouteId(
            f"route id must look like '<geohash>{ROUTE_ID_SEPARATOR}<geohash>', got {route_id!r}"
        )
    return parts[0], parts[1]


def resolve_route_id(route_id: str) -> ResolvedRoute:
    """Decode both halves of a route id in a single pass.

    InvalidSymbol from either half propagates unchanged.
    """

    from_hash, to_hash = _split_route_id(route_id)
    origin_box = bounding_box(from_hash)
    destination_box = bounding_box(to_hash)
    return ResolvedRoute(
        origin_hash=from_hash.lower(),
        destination_hash=to_hash.lower(),
        origin=origin_box.center,
        destination=destination_box.center,
        origin_box=origin_box,
        destination_box=destination_box,
    )


def parse_route_id(route_id: str) -> tuple[str, str]:
    """Split a route id into its two validated, lower-cased geohashes."""

    resolved = resolve_route_id(route_id)
    return resolved.origin_hash, resolved.destination_hash
