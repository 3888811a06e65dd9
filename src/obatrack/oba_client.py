"""OneBusAway REST client: stations and arrival predictions."""

import logging
import time
from typing import Callable, List, Optional

import requests

from .cache import StationCache
from .config import ClientConfig
from .errors import OBAError, is_rate_limited
from .http import get_with_retry, make_session
from .models import Arrival, ArrivalsResult, Station, StationsReport, StopResult
from .parser import parse_arrivals_response, parse_stop_response, parse_stops_for_location

logger = logging.getLogger(__name__)


class OBAClient:
    """Fetches and parses OneBusAway stop and arrival data."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the client.

        Args:
            config: API settings. Defaults to ClientConfig().
            session: requests session to reuse. One is created if omitted.
            clock: Returns the current time in seconds (cache age, arrival ordering).
            sleep: Used for the inter-request delay and retry backoff.
        """
        self.config = config or ClientConfig()
        self._session = session or make_session()
        self._clock = clock
        self._sleep = sleep
        self._cache: StationCache[List[Station]] = StationCache(ttl=self.config.cache_ttl, clock=clock)

    def __enter__(self) -> "OBAClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _get(self, url: str, params: Optional[dict] = None) -> str:
        return get_with_retry(self._session, self.config, url, params=params, sleep=self._sleep)

    def fetch_stations(self) -> List[Station]:
        """
        Get the configured stations, from cache when it is fresh.

        Returns:
            Stations that loaded successfully, in configuration order. Stops
            that failed are left out; the list may be empty.
        """
        return self.fetch_stations_report().stations

    def fetch_stations_report(self) -> StationsReport:
        """
        Like fetch_stations(), but also reports why individual stops were skipped.

        Returns:
            StationsReport with the station list and one StopResult per stop
            requested (no results when served from cache).
        """
        cached = self._cache.get()
        if cached is not None:
            age = self._cache.age() or 0.0
            logger.debug(f"Using cached bus stations data ({age:.0f}s old)")
            return StationsReport(stations=cached, from_cache=True)

        started = self._clock()
        try:
            results: List[StopResult] = []
            for index, stop_id in enumerate(self.config.stop_ids):
                if index > 0:
                    # Fixed pause between stop requests
                    self._sleep(self.config.request_delay)
                results.append(self._fetch_stop(stop_id))

            stations = [r.station for r in results if r.station is not None]
            self._cache.put(stations, timestamp=started)
            logger.info(f"Loaded {len(stations)} of {len(results)} stations")
            return StationsReport(stations=stations, results=results)
        except Exception as e:
            logger.error(f"Error fetching bus stations: {e}", exc_info=True)
            return StationsReport()

    def _fetch_stop(self, stop_id: str) -> StopResult:
        """Fetch one stop; failures become a skipped StopResult."""
        try:
            body = self._get(self.config.stop_url(stop_id))
            station = parse_stop_response(body)
            return StopResult(stop_id=stop_id, station=station)
        except OBAError as e:
            logger.warning(f"Error fetching station {stop_id}: {e}")
            return StopResult(stop_id=stop_id, reason=str(e), rate_limited=is_rate_limited(e))

    def fetch_stations_near(self, lat: float, lon: float, radius: int = 500) -> List[Station]:
        """
        Get stations around a point with the stops-for-location endpoint.

        Not cached. Failures return an empty list.

        Args:
            lat: Latitude in degrees.
            lon: Longitude in degrees.
            radius: Search radius in metres.

        Returns:
            List of Station objects.
        """
        params = {"lat": lat, "lon": lon, "radius": radius}
        try:
            body = self._get(self.config.stops_for_location_url(), params=params)
            return parse_stops_for_location(body)
        except OBAError as e:
            logger.warning(f"Error fetching stations near ({lat}, {lon}): {e}")
            return []

    def fetch_arrivals(self, station_id: str) -> List[Arrival]:
        """
        Get upcoming arrivals for a stop.

        Args:
            station_id: OBA stop ID (e.g., "1_10914").

        Returns:
            Arrivals sorted by minutes until arrival. Empty both when no bus
            is due and when the request failed; use fetch_arrivals_result()
            to tell the two apart.
        """
        return self.fetch_arrivals_result(station_id).arrivals

    def fetch_arrivals_result(self, station_id: str) -> ArrivalsResult:
        """
        Get upcoming arrivals for a stop, keeping failures explicit.

        Args:
            station_id: OBA stop ID.

        Returns:
            ArrivalsResult; ``ok`` is False and ``error`` is set if the fetch failed.
        """
        params = {
            "minutesBefore": 0,
            "minutesAfter": self.config.arrivals_window_minutes,
        }
        try:
            body = self._get(self.config.arrivals_url(station_id), params=params)
            arrivals = parse_arrivals_response(body, current_ms=self._now_ms())
        except OBAError as e:
            logger.warning(f"Error fetching arrivals for station {station_id}: {e}")
            return ArrivalsResult(station_id=station_id, error=str(e), rate_limited=is_rate_limited(e))
        except Exception as e:
            logger.error(f"Unexpected error fetching arrivals for station {station_id}: {e}", exc_info=True)
            return ArrivalsResult(station_id=station_id, error=str(e))

        logger.debug(f"Fetched {len(arrivals)} arrivals for station {station_id}")
        return ArrivalsResult(station_id=station_id, arrivals=arrivals)
