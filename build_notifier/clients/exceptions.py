"""Custom exceptions for the SMS gateway and URL shortener clients."""

from typing import Optional


class ClientError(Exception):
    """Base exception for all outbound client errors.

    Catching this covers every way a single dispatch can fail; the
    notification service does so per recipient.
    """

    pass


class ClientHTTPError(ClientError):
    """The remote service could not be reached or answered with a non-200 status.

    A status_code of 0 means no HTTP response was received at all.
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ClientTimeoutError(ClientError):
    """The request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class ClientResponseError(ClientError):
    """The response arrived but could not be interpreted."""

    pass


class GatewayRejectedError(ClientError):
    """The SMS gateway accepted the request but reported a non-zero errorCode."""

    def __init__(self, message: str, error_code: int, recipient: Optional[str] = None) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.recipient = recipient


class ClientConfigurationError(ClientError):
    """Invalid client configuration (bad timeout, empty endpoint, ...)."""

    pass
