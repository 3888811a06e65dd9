"""Main bus stop tracker used by the watch screens."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, TypeVar

from .errors import RATE_LIMIT_MESSAGE, user_message
from .location import Location, visible_stations
from .models import Arrival, Station
from .oba_client import OBAClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Pause before a user-triggered retry, to let the rate limit reset
RETRY_DELAY_SECONDS = 3.0


@dataclass
class LoadState(Generic[T]):
    """What a screen shows after a load: items, or an error to display."""
    items: List[T] = field(default_factory=list)
    error: Optional[str] = None
    can_retry: bool = False

    @property
    def empty(self) -> bool:
        return self.error is None and not self.items


class BusStopTracker:
    """
    Loads stations and arrivals for the watch screens.

    This class provides methods to:
    - Load the configured stations (cached for five minutes by the client)
    - Load arrivals for a selected station
    - Filter stations for the map by the device location
    """

    def __init__(
        self,
        client: Optional[OBAClient] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the tracker.

        Args:
            client: OneBusAway client. A default-configured one is created if omitted.
            sleep: Used for the pause before a retry.
        """
        self.client = client or OBAClient()
        self._sleep = sleep
        # Set when the last fresh batch loaded nothing because of 429s
        self._stations_rate_limited = False

    def load_stations(self, retry: bool = False) -> LoadState[Station]:
        """
        Load stations for the station list.

        Args:
            retry: True when the user pressed Retry; waits RETRY_DELAY_SECONDS first.

        Returns:
            LoadState with the stations, or an error message when none could
            be loaded. Only the rate-limit error offers a retry.
        """
        try:
            if retry:
                self._sleep(RETRY_DELAY_SECONDS)
            report = self.client.fetch_stations_report()
        except Exception as e:
            logger.error(f"Failed to load stations: {e}")
            return LoadState(error=user_message(e, "stations"))

        if report.from_cache:
            # The empty list left by a rate-limited batch stays cached until expiry
            if not report.stations and self._stations_rate_limited:
                return LoadState(error=RATE_LIMIT_MESSAGE, can_retry=True)
            return LoadState(items=report.stations)

        self._stations_rate_limited = report.rate_limited
        if report.stations or not report.skipped:
            return LoadState(items=report.stations)

        if report.rate_limited:
            return LoadState(error=RATE_LIMIT_MESSAGE, can_retry=True)
        reason = report.skipped[0].reason
        return LoadState(error=f"Failed to load stations: {reason}")

    def load_arrivals(self, station: Station, retry: bool = False) -> LoadState[Arrival]:
        """
        Load arrivals for the arrivals screen.

        Args:
            station: Station selected on the map or in the list.
            retry: True when the user pressed Retry; waits RETRY_DELAY_SECONDS first.

        Returns:
            LoadState with sorted arrivals. An empty, error-free state means
            no bus is due in the next hour.
        """
        try:
            if retry:
                self._sleep(RETRY_DELAY_SECONDS)
            result = self.client.fetch_arrivals_result(station.id)
        except Exception as e:
            logger.error(f"Failed to load arrivals for {station.id}: {e}")
            return LoadState(error=user_message(e, "arrivals"), can_retry=True)

        if result.ok:
            return LoadState(items=result.arrivals)
        if result.rate_limited:
            return LoadState(error=RATE_LIMIT_MESSAGE, can_retry=True)
        return LoadState(error=f"Failed to load arrivals: {result.error}", can_retry=True)

    def stations_in_view(self, location: Optional[Location]) -> List[Station]:
        """
        Stations to mark on the map for the given device location.

        Args:
            location: Device location, or None if it is unknown.

        Returns:
            All loaded stations inside the service area, otherwise an empty list.
        """
        stations = self.load_stations().items
        return visible_stations(stations, location)

    def cleanup(self) -> None:
        """Release the client's HTTP session."""
        self.client.close()
        logger.info("Cleaned up tracker resources")
