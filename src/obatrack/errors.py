"""Exceptions raised by the OneBusAway client."""

from typing import Optional

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again after a few seconds."


class OBAError(Exception):
    """Base class for all OneBusAway client errors."""


class TransportError(OBAError):
    """Network-level failure (connection refused, timeout, DNS...)."""


class HttpStatusError(OBAError):
    """The server answered with a non-200 HTTP status."""

    def __init__(self, status_code: int, url: str = ""):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error code: {status_code}")

    @property
    def rate_limited(self) -> bool:
        return self.status_code == 429

    @property
    def retryable(self) -> bool:
        """429 and every 5xx are worth retrying."""
        return self.rate_limited or 500 <= self.status_code <= 599


class ApiStatusError(OBAError):
    """HTTP 200, but the envelope ``code`` is not 200."""

    def __init__(self, code: int, text: Optional[str] = None):
        self.code = code
        self.text = text
        message = f"API returned error code: {code}"
        if text:
            message = f"{message} ({text})"
        super().__init__(message)


class ParseError(OBAError):
    """Malformed JSON or a missing/invalid required field."""


def is_rate_limited(exc: BaseException) -> bool:
    """Return True if the error was caused by an HTTP 429."""
    return isinstance(exc, HttpStatusError) and exc.rate_limited


def user_message(exc: BaseException, subject: str) -> str:
    """
    Turn an error into the text shown to the user.

    Args:
        exc: The error that ended the load.
        subject: What was being loaded (e.g. "stations", "arrivals").

    Returns:
        The rate-limit prompt for 429s, a generic failure message otherwise.
    """
    if is_rate_limited(exc):
        return RATE_LIMIT_MESSAGE
    return f"Failed to load {subject}: {exc}"
