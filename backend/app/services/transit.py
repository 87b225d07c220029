from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# Names that always indicate a rail/tube station; the last three are interchanges.
_STATION_MARKERS = (
    "Station",
    "Underground",
    "St. Pancras",
    "King's Cross",
    "Highbury & Islington",
)
_INTERCHANGE_MARKERS = ("King's Cross", "St. Pancras", "Highbury & Islington")


@dataclass(frozen=True)
class TransitStep:
    name: str
    station_types: list[str]
    lines: list[str]
    latitude: float
    longitude: float
    departure_time: str | None = None
    arrival_time: str | None = None

    def to_dict(self) -> dict[str, object]:
        out: dict[str, object] = {
            "name": self.name,
            "stationTypes": list(self.station_types),
            "lines": list(self.lines),
            "location": {"latitude": self.latitude, "longitude": self.longitude},
        }
        if self.departure_time is not None:
            out["departureTime"] = self.departure_time
        if self.arrival_time is not None:
            out["arrivalTime"] = self.arrival_time
        return out


def _vehicle_type(transit_line: Any) -> str | None:
    if not isinstance(transit_line, dict):
        return None
    vehicle = transit_line.get("vehicle")
    if not isinstance(vehicle, dict):
        return None
    vtype = vehicle.get("type")
    return vtype if isinstance(vtype, str) else None


def determine_station_types(station_name: str, transit_line: Any = None) -> list[str]:
    types: list[str] = []
    vtype = _vehicle_type(transit_line)

    if any(marker in station_name for marker in _STATION_MARKERS):
        types.append("Tube Station")
        if any(marker in station_name for marker in _INTERCHANGE_MARKERS):
            types.append("Major Interchange")

    if "Stop" in station_name or ("Station" not in station_name and vtype == "BUS"):
        types.append("Bus Stop")

    if not types:
        if vtype == "BUS":
            types.append("Bus Stop")
        elif vtype == "SUBWAY":
            types.append("Tube Station")

    if not types:
        types.append("Unknown")
    return types


def extract_lines(transit_line: Any) -> list[str]:
    lines: list[str] = []
    if not isinstance(transit_line, dict):
        return lines

    name = transit_line.get("name")
    if isinstance(name, str):
        lines.append(name)
    short = transit_line.get("nameShort")
    if isinstance(short, str) and short != name:
        lines.append(short)
    return lines


def _stop_step(
    stop: Any,
    *,
    transit_line: Any,
    departure_time: str | None = None,
    arrival_time: str | None = None,
) -> TransitStep | None:
    if not isinstance(stop, dict):
        return None
    name = stop.get("name")
    location = stop.get("location")
    lat_lng = location.get("latLng") if isinstance(location, dict) else None
    if not isinstance(name, str) or not isinstance(lat_lng, dict):
        return None
    try:
        latitude = float(lat_lng["latitude"])
        longitude = float(lat_lng["longitude"])
    except (KeyError, TypeError, ValueError):
        return None

    return TransitStep(
        name=name,
        station_types=determine_station_types(name, transit_line),
        lines=extract_lines(transit_line),
        latitude=latitude,
        longitude=longitude,
        departure_time=departure_time if isinstance(departure_time, str) else None,
        arrival_time=arrival_time if isinstance(arrival_time, str) else None,
    )


def parse_transit_route(payload: Any) -> list[TransitStep]:
    """Flatten the first route of a Routes API response into transit stops.

    Departure then arrival stop per transit step, first occurrence of a stop
    name wins. Unexpected shapes are skipped rather than raised.
    """

    steps: list[TransitStep] = []
    seen: set[str] = set()

    if not isinstance(payload, dict):
        return steps
    routes = payload.get("routes")
    if not isinstance(routes, list) or not routes:
        return steps
    legs = routes[0].get("legs") if isinstance(routes[0], dict) else None
    if not isinstance(legs, list):
        return steps

    for leg in legs:
        if not isinstance(leg, dict) or not isinstance(leg.get("steps"), list):
            continue
        for step in leg["steps"]:
            if not isinstance(step, dict) or not step:
                continue
            details = step.get("transitDetails")
            if not isinstance(details, dict):
                continue
            stop_details = details.get("stopDetails")
            if not isinstance(stop_details, dict):
                continue
            transit_line = details.get("transitLine")

            candidates = (
                _stop_step(
                    stop_details.get("departureStop"),
                    transit_line=transit_line,
                    departure_time=stop_details.get("departureTime"),
                ),
                _stop_step(
                    stop_details.get("arrivalStop"),
                    transit_line=transit_line,
                    arrival_time=stop_details.get("arrivalTime"),
                ),
            )
            for candidate in candidates:
                if candidate is None or candidate.name in seen:
                    continue
                seen.add(candidate.name)
                steps.append(candidate)

    return steps
