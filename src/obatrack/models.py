"""Data models for the OneBusAway client."""

import time
from dataclasses import dataclass, field
from typing import List, Optional


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Station:
    """Represents a bus stop."""
    id: str  # Agency-scoped stop ID, e.g. "1_10914"
    name: str
    code: Optional[str]  # Short rider-facing stop number
    lat: float
    lon: float
    direction: Optional[str] = None  # Compass heading text, e.g. "N"

    def __str__(self) -> str:
        return f"{self.name} (Code: {self.code or 'N/A'}, Direction: {self.direction or 'N/A'})"


@dataclass(frozen=True)
class Arrival:
    """Represents a predicted or scheduled bus visit to a stop."""
    route_id: str
    route_name: str  # routeShortName, e.g. "45"
    trip_headsign: str  # Destination text
    predicted_arrival_time: Optional[int]  # Epoch ms, None without real-time data
    scheduled_arrival_time: int  # Epoch ms
    distance_from_stop: Optional[float] = None  # Metres

    @property
    def is_predicted(self) -> bool:
        return self.predicted_arrival_time is not None

    @property
    def arrival_time(self) -> int:
        """Predicted time if known, else the scheduled one."""
        if self.predicted_arrival_time is not None:
            return self.predicted_arrival_time
        return self.scheduled_arrival_time

    def minutes_until_arrival(self, current_ms: Optional[int] = None) -> int:
        """
        Whole minutes until the bus arrives, truncated toward zero.

        Args:
            current_ms: Reference time in epoch ms. Defaults to now.

        Returns:
            Minutes until arrival; negative once the bus is overdue.
        """
        if current_ms is None:
            current_ms = now_ms()
        # int() truncates toward zero, floor division would not for negatives
        return int((self.arrival_time - current_ms) / 60000)


@dataclass(frozen=True)
class StopResult:
    """Outcome of fetching one stop: a station, or the reason it was skipped."""
    stop_id: str
    station: Optional[Station] = None
    reason: Optional[str] = None
    rate_limited: bool = False

    @property
    def ok(self) -> bool:
        return self.station is not None


@dataclass
class StationsReport:
    """Result of one station batch, with the per-stop outcomes behind it."""
    stations: List[Station] = field(default_factory=list)
    results: List[StopResult] = field(default_factory=list)  # Empty when served from cache
    from_cache: bool = False

    @property
    def rate_limited(self) -> bool:
        """True when nothing loaded and every stop hit a 429."""
        skipped = self.skipped
        return not self.stations and bool(skipped) and all(r.rate_limited for r in skipped)

    @property
    def skipped(self) -> List[StopResult]:
        return [r for r in self.results if not r.ok]


@dataclass(frozen=True)
class ArrivalsResult:
    """Arrivals for one stop, with failures kept apart from 'no buses'."""
    station_id: str
    arrivals: List[Arrival] = field(default_factory=list)
    error: Optional[str] = None
    rate_limited: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None
