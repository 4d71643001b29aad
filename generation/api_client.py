"""Rate-limited HTTP transport for the text-generation endpoint."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

import requests

from .base import ErrorKind, Failure, Outcome, Success
from .config import AssistantConfig
from .request_builder import serialize_payload

logger = logging.getLogger(__name__)

MIN_REQUEST_INTERVAL = 1.0  # seconds between dispatches
CONNECT_TIMEOUT = 10
READ_TIMEOUT = 60

# Response fields holding the generated text, in lookup order
TEXT_FIELDS = ("text", "response")


class RateLimiter:
    """Enforces a minimum spacing between consecutive dispatches.

    The wait and the timestamp update happen under one lock, so callers that
    overlap are serialized to one dispatch per interval in arrival order.
    """

    def __init__(
        self,
        min_interval: float = MIN_REQUEST_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_dispatch: Optional[float] = None

    @property
    def last_dispatch(self) -> Optional[float]:
        return self._last_dispatch

    def acquire(self) -> float:
        """Block until a dispatch is allowed and stamp it.

        Returns:
            Seconds spent waiting.
        """
        with self._lock:
            waited = 0.0
            if self._last_dispatch is not None:
                delta = self._clock() - self._last_dispatch
                if delta < self.min_interval:
                    waited = self.min_interval - delta
                    logger.debug("Rate limit: waiting %.3fs before dispatch", waited)
                    self._sleep(waited)
            self._last_dispatch = self._clock()
            return waited


class CohereTransport:
    """Single outbound channel to the chat endpoint.

    Every call returns an Outcome; network and HTTP problems are classified
    rather than raised. No retries.
    """

    def __init__(
        self,
        rate_limiter: Optional[RateLimiter] = None,
        session: Optional[requests.Session] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
    ):
        """Initialize the transport.

        Args:
            rate_limiter: Shared limiter. If None, a 1 request/second limiter is created.
            session: HTTP session. If None, the transport creates and owns one.
            connect_timeout: Seconds to wait for the connection.
            read_timeout: Seconds to wait for the response.
        """
        self.rate_limiter = rate_limiter or RateLimiter()
        self._owns_session = session is None
        self._session = session or requests.Session()
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def send(self, payload: dict[str, Any], config: AssistantConfig) -> Outcome:
        """Send one payload to the configured endpoint.

        Args:
            payload: Request body (see ``request_builder``).
            config: Configuration with endpoint and credential.

        Returns:
            Success with the trimmed text, or a classified Failure.
        """
        if not config.is_configured():
            return Failure.of(ErrorKind.UNCONFIGURED)

        self.rate_limiter.acquire()

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {config.api_key}",
            "Accept": "application/json",
        }

        logger.debug("POST %s", config.endpoint)
        logger.debug("Request body: %s", serialize_payload(payload).decode("utf-8"))
        try:
            response = self._session.post(
                config.endpoint,
                headers=headers,
                json=payload,
                timeout=(self.connect_timeout, self.read_timeout),
            )
        except requests.Timeout as e:
            logger.warning("Request to %s timed out: %s", config.endpoint, e)
            return Failure.of(ErrorKind.TIMEOUT)
        except requests.ConnectionError as e:
            logger.warning("Could not connect to %s: %s", config.endpoint, e)
            return Failure.of(ErrorKind.CONNECTION_ERROR)
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", config.endpoint, e)
            return Failure.of(ErrorKind.CONNECTION_ERROR, f"Request failed: {e}")

        logger.debug("Response status: %d", response.status_code)
        return self._classify(response)

    def _classify(self, response: requests.Response) -> Outcome:
        status = response.status_code
        if status == 200:
            return self._parse_body(response)
        if status == 429:
            logger.warning("Endpoint rate limited the request")
            return Failure.of(ErrorKind.RATE_LIMITED)
        if status == 401:
            logger.warning("Endpoint rejected the API key")
            return Failure.of(ErrorKind.UNAUTHORIZED)

        logger.warning("Endpoint returned status %d", status)
        return Failure.of(
            ErrorKind.SERVER_ERROR,
            f"API returned status {status}\nResponse: {response.text}",
        )

    def _parse_body(self, response: requests.Response) -> Outcome:
        try:
            data = response.json()
        except ValueError as e:
            return Failure.of(ErrorKind.MALFORMED_RESPONSE, f"Error parsing response: {e}")

        if not isinstance(data, dict):
            return Failure.of(ErrorKind.MALFORMED_RESPONSE)

        for name in TEXT_FIELDS:
            if name in data:
                value = data[name]
                if not isinstance(value, str):
                    return Failure.of(
                        ErrorKind.MALFORMED_RESPONSE,
                        f"Unexpected response format: '{name}' is not a string.",
                    )
                return Success(value.strip())

        return Failure.of(ErrorKind.MALFORMED_RESPONSE)
