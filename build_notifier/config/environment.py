"""Environment variable loading and validation for gateway settings."""

import os
from typing import Optional

from .exceptions import ConfigurationError


class GatewaySettings:
    """Process-wide gateway credentials and build server location."""

    def __init__(
        self,
        api_key: str,
        sender_id: str,
        password: str,
        base_url: Optional[str] = None,
        log_level: Optional[str] = None,
    ):
        """Initialize gateway settings."""
        self.api_key = api_key
        self.sender_id = sender_id
        self.password = password
        self.base_url = base_url or ""
        self.log_level = log_level

    def build_url(self, relative_url: str) -> str:
        """Make an absolute link to a build from its relative path."""
        return self.base_url + relative_url

    def __repr__(self) -> str:
        # Credentials stay out of reprs and logs
        return (
            f"GatewaySettings(sender_id={self.sender_id!r}, "
            f"base_url={self.base_url!r}, log_level={self.log_level!r})"
        )


def load_gateway_settings() -> GatewaySettings:
    """
    Load and validate gateway settings from environment variables.

    Required environment variables:
    - MYSMS_API_KEY: mysms API key
    - MYSMS_MSISDN: Sender account phone number
    - MYSMS_PASSWORD: Sender account password

    Optional environment variables:
    - BUILD_SERVER_URL: Root URL of the build server, used for build links
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        GatewaySettings with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    api_key = os.getenv("MYSMS_API_KEY")
    sender_id = os.getenv("MYSMS_MSISDN")
    password = os.getenv("MYSMS_PASSWORD")
    base_url = os.getenv("BUILD_SERVER_URL")
    log_level = os.getenv("LOG_LEVEL")

    if not api_key:
        errors.append("Missing required environment variable: MYSMS_API_KEY")
    if not sender_id:
        errors.append("Missing required environment variable: MYSMS_MSISDN")
    if not password:
        errors.append("Missing required environment variable: MYSMS_PASSWORD")

    if base_url:
        if not base_url.startswith(("http://", "https://")):
            errors.append(
                f"Invalid BUILD_SERVER_URL: '{base_url}'. Must start with http:// or https://."
            )
        elif not base_url.endswith("/"):
            base_url = base_url + "/"

    if log_level:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your mysms credentials",
                "Ensure all required environment variables are set",
                "Set BUILD_SERVER_URL to the root URL of your build server",
            ],
        )

    return GatewaySettings(
        api_key=api_key,
        sender_id=sender_id,
        password=password,
        base_url=base_url,
        log_level=log_level,
    )
