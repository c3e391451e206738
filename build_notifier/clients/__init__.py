"""Outbound HTTP clients.

- MysmsClient: sends text messages through the mysms gateway
- TinyUrlClient: shortens build links through tinyurl

Exception handling:
    from build_notifier.clients.exceptions import ClientError, ClientHTTPError, GatewayRejectedError
"""

from .base import BaseClient
from .exceptions import (
    ClientConfigurationError,
    ClientError,
    ClientHTTPError,
    ClientResponseError,
    ClientTimeoutError,
    GatewayRejectedError,
)
from .mysms import MysmsClient
from .tinyurl import TinyUrlClient

__all__ = [
    "BaseClient",
    # Clients
    "MysmsClient",
    "TinyUrlClient",
    # Exceptions
    "ClientError",
    "ClientHTTPError",
    "ClientTimeoutError",
    "ClientResponseError",
    "GatewayRejectedError",
    "ClientConfigurationError",
]
