"""Client configuration for the OneBusAway API."""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

# Puget Sound OneBusAway deployment
DEFAULT_BASE_URL = "https://api.pugetsound.onebusaway.org/api/where"
DEFAULT_API_KEY = "TEST"

# Known University District stops, fetched one by one instead of stops-for-location
DEFAULT_STOP_IDS: Tuple[str, ...] = (
    "1_10914",  # 15th Ave NE & NE Campus Pkwy
    "1_11160",  # 15th Ave NE & NE 55th St
    "1_11370",  # 15th Ave NE & NE 45th St
    "1_10346",  # University Way NE & NE 50th St
    "1_10380",  # University Way NE & NE 45th St
)


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    api_key: str = DEFAULT_API_KEY
    stop_ids: Tuple[str, ...] = DEFAULT_STOP_IDS

    connect_timeout: float = 10.0
    read_timeout: float = 10.0

    max_retries: int = 3
    initial_backoff: float = 1.0  # Seconds, doubled on every retry

    request_delay: float = 1.0  # Pause between consecutive stop requests
    cache_ttl: float = 300.0  # Station list validity
    arrivals_window_minutes: int = 60

    def stop_url(self, stop_id: str) -> str:
        return f"{self.base_url}/stop/{stop_id}.json"

    def arrivals_url(self, station_id: str) -> str:
        return f"{self.base_url}/arrivals-and-departures-for-stop/{station_id}.json"

    def stops_for_location_url(self) -> str:
        return f"{self.base_url}/stops-for-location.json"


def _split_ids(value: Optional[str]) -> Optional[Tuple[str, ...]]:
    if not value:
        return None
    ids = tuple(part.strip() for part in value.split(",") if part.strip())
    return ids or None


def load_config() -> ClientConfig:
    """
    Build a ClientConfig from OBA_* environment variables.

    Unset variables keep their defaults.
    """
    defaults = ClientConfig()
    return ClientConfig(
        base_url=os.getenv("OBA_BASE_URL", defaults.base_url).rstrip("/"),
        api_key=os.getenv("OBA_API_KEY", defaults.api_key),
        stop_ids=_split_ids(os.getenv("OBA_STOP_IDS")) or defaults.stop_ids,
        connect_timeout=float(os.getenv("OBA_CONNECT_TIMEOUT_SECONDS", str(defaults.connect_timeout))),
        read_timeout=float(os.getenv("OBA_READ_TIMEOUT_SECONDS", str(defaults.read_timeout))),
        max_retries=int(os.getenv("OBA_MAX_RETRIES", str(defaults.max_retries))),
        initial_backoff=float(os.getenv("OBA_BACKOFF_BASE_SECONDS", str(defaults.initial_backoff))),
        request_delay=float(os.getenv("OBA_REQUEST_DELAY_SECONDS", str(defaults.request_delay))),
        cache_ttl=float(os.getenv("OBA_CACHE_TTL_SECONDS", str(defaults.cache_ttl))),
        arrivals_window_minutes=int(os.getenv("OBA_ARRIVALS_WINDOW_MINUTES", str(defaults.arrivals_window_minutes))),
    )
