"""Geohash encode/decode for route-link identifiers.

A geohash is built by bisecting the longitude and latitude ranges in turn,
one bit per halving, longitude first, packed MSB-first into base-32 symbols.
Route links always use 6 symbols (a cell of roughly 1.2km x 0.6km).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType


BASE32 = "0123456789bcdefghjkmnpqrstuvwxyz"
# Upper-case keys are explicit; lookups never go through str.lower().
_DECODE_MAP = MappingProxyType(
    {
        **{c: i for i, c in enumerate(BASE32)},
        **{c.upper(): i for i, c in enumerate(BASE32)},
    }
)

_BITS_PER_SYMBOL = 5
_SYMBOL_MASKS = (16, 8, 4, 2, 1)

MIN_LAT, MAX_LAT = -90.0, 90.0
MIN_LON, MAX_LON = -180.0, 180.0


class GeohashError(ValueError):
    pass


class InvalidArgument(GeohashError):
    """Coordinate out of range, non-positive length or empty geohash."""


class InvalidSymbol(GeohashError):
    def __init__(self, symbol: str, index: int) -> None:
        super().__init__(f"Invalid geohash character {symbol!r} at index {index}")
        self.symbol = symbol
        self.index = index


@dataclass(frozen=True, slots=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(
            latitude=(self.min_lat + self.max_lat) / 2.0,
            longitude=(self.min_lon + self.max_lon) / 2.0,
        )

    def contains(self, latitude: float, longitude: float) -> bool:
        return (
            self.min_lat <= latitude <= self.max_lat
            and self.min_lon <= longitude <= self.max_lon
        )


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_coordinate(name: str, value: object, low: float, high: float) -> None:
    if not _is_number(value):
        raise InvalidArgument(f"{name} must be a number, got {value!r}")
    # NaN fails the comparison; huge ints are never converted to float.
    if not low <= value <= high:
        raise InvalidArgument(f"{name} must be within [{low:g}, {high:g}], got {value!r}")


def _midpoint(interval: list[float]) -> float:
    return (interval[0] + interval[1]) / 2.0


def _narrow(interval: list[float], mid: float, upper: bool) -> None:
    # bit 1 keeps the upper half, bit 0 the lower half
    if upper:
        interval[0] = mid
    else:
        interval[1] = mid


def encode(latitude: float, longitude: float, length: int = 6) -> str:
    """Encode a WGS84 coordinate into a ``length``-symbol geohash.

    A coordinate equal to a bisection midpoint falls into the lower half.
    """

    _check_coordinate("latitude", latitude, MIN_LAT, MAX_LAT)
    _check_coordinate("longitude", longitude, MIN_LON, MAX_LON)
    if not isinstance(length, int) or isinstance(length, bool) or length < 1:
        raise InvalidArgument(f"length must be an integer >= 1, got {length!r}")

    lat = [MIN_LAT, MAX_LAT]
    lon = [MIN_LON, MAX_LON]
    is_lon = True
    out: list[str] = []

    while len(out) < length:
        value = 0
        for _ in range(_BITS_PER_SYMBOL):
            interval, coord = (lon, longitude) if is_lon else (lat, latitude)
            mid = _midpoint(interval)
            bit = coord > mid
            _narrow(interval, mid, bit)
            value = (value << 1) | int(bit)
            is_lon = not is_lon
        out.append(BASE32[value])

    return "".join(out)


def bounding_box(geohash: str) -> BoundingBox:
    """Return the cell a geohash identifies. Lookup is case-insensitive."""

    if not isinstance(geohash, str):
        raise InvalidArgument(f"geohash must be a string, got {type(geohash).__name__}")
    if not geohash:
        raise InvalidArgument("geohash must be non-empty")

    lat = [MIN_LAT, MAX_LAT]
    lon = [MIN_LON, MAX_LON]
    is_lon = True

    for index, c in enumerate(geohash):
        try:
            value = _DECODE_MAP[c]
        except KeyError as e:
            raise InvalidSymbol(c, index) from e

        for mask in _SYMBOL_MASKS:
            interval = lon if is_lon else lat
            _narrow(interval, _midpoint(interval), bool(value & mask))
            is_lon = not is_lon

    return BoundingBox(min_lat=lat[0], max_lat=lat[1], min_lon=lon[0], max_lon=lon[1])


def decode(geohash: str) -> GeoPoint:
    """Return the centroid of the geohash cell."""

    return bounding_box(geohash).center
