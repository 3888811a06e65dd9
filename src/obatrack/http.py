"""HTTP GET with retry and exponential backoff for the OneBusAway API."""

import logging
import re
import time
from typing import Any, Callable, Dict, Optional

import requests

from .config import ClientConfig
from .errors import HttpStatusError, TransportError

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"(key=)[^&]+")


def mask_key(url: str) -> str:
    """Hide the API key in a URL before it is logged."""
    return _KEY_PATTERN.sub(r"\1****", url)


def make_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


def backoff_delay(cfg: ClientConfig, attempt: int) -> float:
    """Seconds to wait before retry number ``attempt + 1`` (1s, 2s, 4s...)."""
    return cfg.initial_backoff * (2 ** attempt)


def _get_once(session: requests.Session, cfg: ClientConfig, url: str, params: Dict[str, Any]) -> str:
    try:
        response = session.get(
            url,
            params=params,
            timeout=(cfg.connect_timeout, cfg.read_timeout),
        )
    except requests.RequestException as e:
        raise TransportError(mask_key(f"Request to {url} failed: {e}")) from e

    if response.status_code != 200:
        raise HttpStatusError(response.status_code, url)
    return response.text


def get_with_retry(
    session: requests.Session,
    cfg: ClientConfig,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> str:
    """
    GET a URL, retrying rate-limit and server errors with exponential backoff.

    Args:
        session: requests session to issue the call on.
        cfg: Client configuration (timeouts, retry budget, backoff base).
        url: Endpoint URL without query string.
        params: Query parameters; the API key is added automatically.
        sleep: Sleep function, injectable for tests.

    Returns:
        The response body.

    Raises:
        HttpStatusError: Non-200 status that is not retryable, or retries exhausted.
        TransportError: Network failure (never retried).
    """
    query = {"key": cfg.api_key}
    if params:
        query.update(params)

    attempt = 0
    while True:
        logger.debug(f"GET {url} (attempt {attempt + 1}/{cfg.max_retries + 1})")
        try:
            return _get_once(session, cfg, url, query)
        except HttpStatusError as e:
            if not e.retryable or attempt >= cfg.max_retries:
                logger.warning(f"GET {url} gave up: {e}")
                raise
            delay = backoff_delay(cfg, attempt)
            if e.rate_limited:
                logger.warning(f"Rate limited ({e}). Retrying in {delay * 1000:.0f}ms...")
            else:
                logger.warning(f"Server error ({e}). Retrying in {delay * 1000:.0f}ms...")
            sleep(delay)
            attempt += 1
