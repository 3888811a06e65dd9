"""OBATrack - OneBusAway stop and arrival client for a wristwatch app."""

__version__ = "0.1.0"

from .models import Station, Arrival, StopResult, StationsReport, ArrivalsResult
from .config import ClientConfig, load_config
from .oba_client import OBAClient
from .station_tracker import BusStopTracker, LoadState
from .navigation import Navigator, Screen
from .display import arrival_text, arrival_badge, arrival_summary, station_text, stop_label, urgency

__all__ = [
    "OBAClient",
    "BusStopTracker",
    "LoadState",
    "ClientConfig",
    "load_config",
    "Navigator",
    "Screen",
    "arrival_text",
    "arrival_badge",
    "arrival_summary",
    "station_text",
    "stop_label",
    "urgency",
    "Station",
    "Arrival",
    "StopResult",
    "StationsReport",
    "ArrivalsResult",
]
