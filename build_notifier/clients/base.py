"""Base HTTP client shared by the SMS gateway and URL shortener clients.

Wraps a requests.Session with the notifier's user agent and optional
timeout, and maps transport problems onto the client exception hierarchy.
"""

import logging
from typing import Dict, Optional

import requests

from build_notifier.logging import get_logger

from .exceptions import (
    ClientConfigurationError,
    ClientHTTPError,
    ClientTimeoutError,
)

logger = get_logger(__name__, component="client")

# Only the head of a response body is read
MAX_BODY_BYTES = 1024


class BaseClient:
    """Base class for outbound HTTP clients.

    Attributes:
        endpoint: URL of the remote API
        timeout: Request timeout in seconds, None to wait indefinitely
        user_agent: User-Agent header for HTTP requests
    """

    SERVICE_NAME = "remote service"

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[int] = None,
        user_agent: str = "BuildSmsNotifier/1.0",
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize client.

        Args:
            endpoint: URL of the remote API
            timeout: Request timeout in seconds (None = no timeout)
            user_agent: User-Agent header for requests
            session: Session to use (creates one if None)

        Raises:
            ClientConfigurationError: If endpoint or user_agent is empty or timeout is not positive
        """
        if not endpoint or not endpoint.strip():
            raise ClientConfigurationError(f"{self.SERVICE_NAME} endpoint cannot be empty")
        if timeout is not None and timeout <= 0:
            raise ClientConfigurationError(f"Timeout must be positive, got: {timeout}")
        if not user_agent or not user_agent.strip():
            raise ClientConfigurationError("user_agent cannot be empty")

        self.endpoint = endpoint.strip()
        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    def _get(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        log_url: Optional[str] = None,
    ) -> requests.Response:
        """Issue a GET request and return the response if it is a 200.

        Args:
            url: URL to request
            params: Query parameters (encoded by requests)
            log_url: URL to show in logs instead of url

        Returns:
            The HTTP 200 response

        Raises:
            ClientHTTPError: On connection failure or any non-200 status
            ClientTimeoutError: On request timeout
        """
        shown_url = log_url or url

        try:
            logger.debug(
                f"HTTP GET {shown_url}",
                extra={
                    "event": "client.request",
                    "remote": self.SERVICE_NAME,
                    "url": shown_url,
                    "timeout": self.timeout,
                },
            )
            response = self._session.get(url, params=params, timeout=self.timeout)

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {self.SERVICE_NAME} timed out after {self.timeout} seconds",
                extra={
                    "event": "client.request.error",
                    "error_type": "Timeout",
                    "url": shown_url,
                },
            )
            raise ClientTimeoutError(
                f"Request to {self.SERVICE_NAME} timed out after {self.timeout} seconds",
                url=shown_url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {self.SERVICE_NAME} failed: {type(e).__name__}",
                extra={
                    "event": "client.request.error",
                    "error_type": type(e).__name__,
                    "url": shown_url,
                },
            )
            raise ClientHTTPError(
                f"Request to {self.SERVICE_NAME} failed: {type(e).__name__}",
                status_code=0,
                url=shown_url,
            ) from e

        if response.status_code != 200:
            log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
            logger.log(
                log_level,
                f"HTTP {response.status_code} from {self.SERVICE_NAME}",
                extra={
                    "event": "client.request.error",
                    "status_code": response.status_code,
                    "url": shown_url,
                },
            )
            raise ClientHTTPError(
                f"Non-OK response code back from {self.SERVICE_NAME}: {response.status_code}",
                status_code=response.status_code,
                url=shown_url,
            )

        return response

    @staticmethod
    def _read_body(response: requests.Response, limit: int = MAX_BODY_BYTES) -> str:
        """Decode at most limit bytes of the response body."""
        encoding = response.encoding or "utf-8"
        return response.content[:limit].decode(encoding, errors="replace")

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
