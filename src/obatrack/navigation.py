"""Screen navigation for the watch app."""

import logging
from enum import Enum
from typing import Optional

from .models import Station

logger = logging.getLogger(__name__)


class Screen(Enum):
    MAP = "map"
    BUS_STATIONS = "bus_stations"
    BUS_ARRIVALS = "bus_arrivals"


class Navigator:
    """
    Tracks which screen is shown and where "back" leads.

    Map -> station list -> arrivals, or map -> arrivals directly when a
    marker is tapped. Back from arrivals returns to whichever screen opened it.
    """

    def __init__(self):
        self.current = Screen.MAP
        self.previous = Screen.MAP
        self.selected_station: Optional[Station] = None

    def open_station_list(self) -> Screen:
        self.previous = self.current
        self.current = Screen.BUS_STATIONS
        return self.current

    def select_station(self, station: Station) -> Screen:
        """Show arrivals for ``station``, remembering the screen it was picked from."""
        self.previous = self.current
        self.selected_station = station
        self.current = Screen.BUS_ARRIVALS
        return self.current

    def back(self) -> Screen:
        if self.current is Screen.BUS_ARRIVALS:
            self.current = Screen.BUS_STATIONS if self.previous is Screen.BUS_STATIONS else Screen.MAP
        else:
            self.current = Screen.MAP
        logger.debug(f"Navigated back to {self.current.value}")
        return self.current

    def resolve(self) -> Screen:
        """
        Screen to render now.

        Arrivals cannot be shown without a selected station, so that case
        falls back to the map.
        """
        if self.current is Screen.BUS_ARRIVALS and self.selected_station is None:
            self.current = Screen.MAP
        return self.current
