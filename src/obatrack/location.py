"""Service-area checks for the device location."""

from typing import List, NamedTuple, Optional

from .models import Station


class Location(NamedTuple):
    lat: float
    lon: float


# Puget Sound service area centre (downtown Seattle)
SEATTLE = Location(47.6062, -122.3321)
SERVICE_AREA_SPAN_DEGREES = 0.3


def in_service_area(location: Location, center: Location = SEATTLE) -> bool:
    """
    Check whether a location is close enough to the service area centre.

    The test is a box of +/- 0.3 degrees on both axes, not a true distance.
    """
    return (
        abs(location.lat - center.lat) < SERVICE_AREA_SPAN_DEGREES
        and abs(location.lon - center.lon) < SERVICE_AREA_SPAN_DEGREES
    )


def station_location(station: Station) -> Location:
    return Location(station.lat, station.lon)


def visible_stations(
    stations: List[Station], location: Optional[Location], center: Location = SEATTLE
) -> List[Station]:
    """
    Stations to put on the map.

    Without a device location the map is centred on the service area and
    shows every station; outside the service area it shows none.
    """
    if location is None or in_service_area(location, center):
        return list(stations)
    return []
