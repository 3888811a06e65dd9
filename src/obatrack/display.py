"""Text shown for stations and arrivals on the watch face."""

from typing import Optional

from .models import Arrival, Station

DUE = "due"
SOON = "soon"
LATER = "later"

SOON_THRESHOLD_MINUTES = 5


def arrival_text(arrival: Arrival, current_ms: Optional[int] = None) -> str:
    """'Due now' for buses at or past the stop, else '<n> min'."""
    minutes = arrival.minutes_until_arrival(current_ms)
    if minutes <= 0:
        return "Due now"
    return f"{minutes} min"


def arrival_badge(arrival: Arrival, current_ms: Optional[int] = None) -> str:
    """Short form used in list rows: 'NOW' or '<n> min'."""
    minutes = arrival.minutes_until_arrival(current_ms)
    if minutes <= 0:
        return "NOW"
    return f"{minutes} min"


def urgency(minutes: int) -> str:
    """Bucket used to colour an arrival row."""
    if minutes <= 0:
        return DUE
    if minutes <= SOON_THRESHOLD_MINUTES:
        return SOON
    return LATER


def arrival_summary(arrival: Arrival, current_ms: Optional[int] = None) -> str:
    return f"{arrival.route_name} - {arrival.trip_headsign}: {arrival_text(arrival, current_ms)}"


def station_text(station: Station) -> str:
    return str(station)


def stop_label(station: Station) -> Optional[str]:
    """'Stop #<code>' header line, or None when the stop has no code."""
    if not station.code:
        return None
    return f"Stop #{station.code}"
