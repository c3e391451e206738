"""tinyurl URL shortener client."""

from __future__ import annotations

import logging

from .base import BaseClient

logger = logging.getLogger(__name__)


class TinyUrlClient(BaseClient):
    """Client for the tinyurl create API.

    API Details:
        Endpoint: http://tinyurl.com/api-create.php?url=<long url>
        Method: GET
        Authentication: None
        Response: the short URL as plain text
    """

    SERVICE_NAME = "tinyurl"
    DEFAULT_ENDPOINT = "http://tinyurl.com/api-create.php"

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT, **kwargs) -> None:
        super().__init__(endpoint, **kwargs)

    def shorten(self, url: str) -> str:
        """Shorten a URL.

        Only spaces in url are escaped (as %20); the rest is passed through
        as-is.

        Args:
            url: Long URL to shorten

        Returns:
            Response body, which is the short URL

        Raises:
            ClientHTTPError: On transport failure or non-200 status
            ClientTimeoutError: On request timeout
        """
        request_url = f"{self.endpoint}?url={url.replace(' ', '%20')}"

        response = self._get(request_url)
        short_url = self._read_body(response)

        logger.debug(
            f"Shortened {url} to {short_url}",
            extra={"event": "client.shortener.success", "long_url": url},
        )
        return short_url
