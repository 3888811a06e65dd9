"""Parsers for OneBusAway JSON responses."""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from .errors import ApiStatusError, ParseError
from .models import Arrival, Station, now_ms

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNKNOWN_HEADSIGN = "Unknown"


def _load_envelope(body: str) -> Dict[str, Any]:
    """Decode the response body and check the envelope status code."""
    try:
        envelope = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    if not isinstance(envelope, dict):
        raise ParseError("Response is not a JSON object")

    code = envelope.get("code")
    if isinstance(code, bool) or not isinstance(code, int):
        raise ParseError(f"Missing or non-integer 'code' in response: {code!r}")
    if code != 200:
        raise ApiStatusError(code, envelope.get("text"))
    return envelope


def _object(parent: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = parent.get(key)
    if not isinstance(value, dict):
        raise ParseError(f"Expected object at '{key}'")
    return value


def _required(obj: Dict[str, Any], key: str, convert: Callable[[Any], T]) -> T:
    value = obj.get(key)
    if value is None:
        raise ParseError(f"Missing required field '{key}'")
    try:
        return convert(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ParseError(f"Invalid value for '{key}': {value!r}") from e


def _optional(obj: Dict[str, Any], key: str, convert: Callable[[Any], T]) -> Optional[T]:
    # Absent and JSON null are both "no value"
    value = obj.get(key)
    if value is None:
        return None
    try:
        return convert(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ParseError(f"Invalid value for '{key}': {value!r}") from e


def parse_station(entry: Dict[str, Any]) -> Station:
    """Build a Station from one stop entry."""
    if not isinstance(entry, dict):
        raise ParseError("Stop entry is not an object")
    return Station(
        id=_required(entry, "id", str),
        name=_required(entry, "name", str),
        code=_optional(entry, "code", str),
        lat=_required(entry, "lat", float),
        lon=_required(entry, "lon", float),
        direction=_optional(entry, "direction", str),
    )


def parse_arrival(entry: Dict[str, Any]) -> Arrival:
    """Build an Arrival from one arrivalsAndDepartures entry."""
    if not isinstance(entry, dict):
        raise ParseError("Arrival entry is not an object")
    headsign = _optional(entry, "tripHeadsign", str)
    return Arrival(
        route_id=_required(entry, "routeId", str),
        route_name=_required(entry, "routeShortName", str),
        trip_headsign=UNKNOWN_HEADSIGN if headsign is None else headsign,
        predicted_arrival_time=_optional(entry, "predictedArrivalTime", int),
        scheduled_arrival_time=_required(entry, "scheduledArrivalTime", int),
        distance_from_stop=_optional(entry, "distanceFromStop", float),
    )


def parse_stop_response(body: str) -> Station:
    """
    Parse a /stop/{id}.json response.

    Args:
        body: Raw response text.

    Returns:
        The Station in ``data.entry``.

    Raises:
        ApiStatusError: Envelope code is not 200.
        ParseError: Malformed body or missing required field.
    """
    envelope = _load_envelope(body)
    entry = _object(_object(envelope, "data"), "entry")
    return parse_station(entry)


def parse_stops_for_location(body: str) -> List[Station]:
    """Parse the list form of stop entries (``data.list``)."""
    envelope = _load_envelope(body)
    data = _object(envelope, "data")
    entries = data.get("list") or []
    if not isinstance(entries, list):
        raise ParseError("Expected array at 'list'")
    return [parse_station(entry) for entry in entries]


def parse_arrivals_response(body: str, current_ms: Optional[int] = None) -> List[Arrival]:
    """
    Parse an arrivals-and-departures-for-stop response.

    Args:
        body: Raw response text.
        current_ms: Reference time for ordering, epoch ms. Defaults to now.

    Returns:
        Arrivals sorted by minutes until arrival. Ties keep response order.

    Raises:
        ApiStatusError: Envelope code is not 200.
        ParseError: Malformed body or an entry missing a required field.
    """
    envelope = _load_envelope(body)
    entry = _object(_object(envelope, "data"), "entry")
    raw = entry.get("arrivalsAndDepartures")
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ParseError("Expected array at 'arrivalsAndDepartures'")

    arrivals = [parse_arrival(item) for item in raw]
    logger.debug(f"Parsed {len(arrivals)} arrivals")
    return sort_arrivals(arrivals, current_ms)


def sort_arrivals(arrivals: List[Arrival], current_ms: Optional[int] = None) -> List[Arrival]:
    """Order arrivals by minutes until arrival; sorted() is stable so ties keep their order."""
    if current_ms is None:
        current_ms = now_ms()
    return sorted(arrivals, key=lambda a: a.minutes_until_arrival(current_ms))
